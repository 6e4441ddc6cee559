"""Response headers — every response carries the security header set."""

import pytest

from website.core.security_headers import REQUIRED_HEADERS


async def test_root_response_contains_expected_headers(client):
    res = await client.get("/")
    for expected in REQUIRED_HEADERS + (
        "content-security-policy-report-only", "feature-policy", "Referrer-Policy",
    ):
        assert expected in res.headers, f"The '{expected}' response header was not found."


@pytest.mark.parametrize("path", ["/robots.txt", "/assets/css/site.css", "/tools/guid", "/missing"])
async def test_headers_on_static_api_and_error_responses(client, path):
    res = await client.get(path)
    for expected in REQUIRED_HEADERS:
        assert expected in res.headers


async def test_diagnostic_headers_reflect_settings(client, settings):
    res = await client.get("/")
    assert res.headers["X-Datacenter"] == settings.azure_datacenter
    assert res.headers["X-Instance"] == settings.website_instance_id
    assert res.headers["X-Revision"] == settings.git_commit


async def test_request_id_generated_per_request(client):
    first = await client.get("/")
    second = await client.get("/")
    assert first.headers["X-Request-Id"]
    assert first.headers["X-Request-Id"] != second.headers["X-Request-Id"]


async def test_incoming_request_id_reused(client):
    res = await client.get("/", headers={"X-Request-Id": "abc-123"})
    assert res.headers["X-Request-Id"] == "abc-123"


async def test_oversized_request_id_replaced(client):
    res = await client.get("/", headers={"X-Request-Id": "x" * 500})
    assert res.headers["X-Request-Id"] != "x" * 500


async def test_no_upgrade_insecure_requests_in_development(client):
    res = await client.get("/")
    assert "upgrade-insecure-requests" not in res.headers["content-security-policy"]
