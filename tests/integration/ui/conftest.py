"""Browser fixtures — a Chrome-backed navigator per test.

Invariants:
    - Tests are skipped, not failed, when Chrome or its driver is unavailable
    - The driver is always quit, even when the test fails
"""

import pytest
from selenium.common.exceptions import WebDriverException

from tests.integration.ui.browser import (
    ApplicationNavigator, create_web_driver, output_logs, take_screenshot,
)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"report_{report.when}", report)


@pytest.fixture
def navigator(http_server, request):
    try:
        driver = create_web_driver()
    except WebDriverException as ex:
        pytest.skip(f"Chrome is not available: {ex.msg}")

    nav = ApplicationNavigator(http_server.server_address, driver)
    try:
        yield nav
    finally:
        report = getattr(request.node, "report_call", None)
        if report is not None and report.failed:
            take_screenshot(driver, request.node.name)
        output_logs(driver)
        nav.close()
