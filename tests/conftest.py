"""Root conftest — shared test configuration.

Invariants:
    - Tests never send telemetry: sink settings are cleared before any
      Settings instance is built
    - Every app fixture gets its own Settings, independent of get_settings()
"""

import os

os.environ.pop("APPLICATIONINSIGHTS_CONNECTION_STRING", None)
os.environ["PAPERTRAIL_HOSTNAME"] = ""
os.environ.setdefault("ENVIRONMENT", "Development")

import pytest
from httpx import ASGITransport, AsyncClient

from website.config import Settings
from website.main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        environment="Development",
        azure_datacenter="uksouth",
        azure_environment="test",
        website_instance_id="test-instance",
        git_commit="0123456789abcdef",
        git_branch="main",
        log_format="text",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    """In-process client; app exceptions surface as error pages, not raises."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
