"""Integration fixtures — one real HTTP server shared by the session."""

import pytest

from tests.integration.http_server import HttpServerFixture
from website.config import Settings


@pytest.fixture(scope="session")
def http_server():
    settings = Settings(
        _env_file=None,
        environment="Development",
        azure_datacenter="integration",
        website_instance_id="integration-instance",
        git_commit="integration-revision",
        log_format="text",
    )
    with HttpServerFixture(settings) as server:
        yield server


@pytest.fixture
def http_client(http_server):
    with http_server.create_client() as client:
        yield client
