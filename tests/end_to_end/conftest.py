"""End-to-end fixtures — a client for the deployed site named by WEBSITE_URL."""

import os

import httpx
import pytest


@pytest.fixture(scope="session")
def website_url():
    url = os.environ.get("WEBSITE_URL", "").strip()
    if not url:
        pytest.skip("WEBSITE_URL is not set")
    return url.rstrip("/")


@pytest.fixture
def website_client(website_url):
    with httpx.Client(base_url=website_url, follow_redirects=False, timeout=30) as client:
        yield client
