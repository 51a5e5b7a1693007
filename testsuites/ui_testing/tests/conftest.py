"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the live notes-app scenarios, providing
fixtures for browser management, page objects, and failure capture.

Key Features:
- One browser and one isolated context per scenario
- Page Object fixtures for login, register and dashboard
- Screenshot / URL / API-response capture on failure (page-object teardown)
- Logged-in dashboard fixture driven by `auth.*` configuration

================================================================================
"""

from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page
from playwright.async_api import Error as PlaywrightError

from notes_tools.common import get_config
from notes_tools.data_generator import generate_note, generate_user
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import InteractionError
from testsuites.ui_testing.pages.dashboard_page import DashboardPage
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.register_page import RegisterPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Each scenario launches and closes its own browser, so nothing leaks
    between scenarios and the fixture works under any event-loop scope.
    """
    async with BrowserManager() as manager:
        yield manager


@pytest.fixture
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """Isolated browser context (cookies, storage) for one scenario."""
    context = await browser_manager.new_context()
    yield context
    await context.close()


@pytest.fixture
async def page(
    browser_manager: BrowserManager, context: BrowserContext
) -> AsyncGenerator[Page, None]:
    page = await browser_manager.new_page(context)
    yield page
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

async def _capture_if_failed(request, page_object: BasePage) -> None:
    """Attach screenshot, URL, API responses and locator health on failure."""
    report = getattr(request.node, "rep_call", None)
    if report is None or not report.failed:
        return
    try:
        await page_object.capture_failure(request.node.name)
    except PlaywrightError as e:
        logger.warning(f"Failed to capture failure details: {e}")


@pytest.fixture
async def login_page(page: Page, request) -> AsyncGenerator[LoginPage, None]:
    login_page = LoginPage(page)
    yield login_page
    await _capture_if_failed(request, login_page)


@pytest.fixture
async def register_page(page: Page, request) -> AsyncGenerator[RegisterPage, None]:
    register_page = RegisterPage(page)
    yield register_page
    await _capture_if_failed(request, register_page)


@pytest.fixture
async def dashboard_page(page: Page, request) -> AsyncGenerator[DashboardPage, None]:
    dashboard_page = DashboardPage(page)
    yield dashboard_page
    await _capture_if_failed(request, dashboard_page)


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest.fixture
def account() -> dict:
    """
    Configured notes-app account.

    Skips the scenario when `auth.email` / `auth.password` are not set.
    """
    email = get_config("auth.email", "")
    password = get_config("auth.password", "")
    if not email or not password:
        pytest.skip("No notes-app account configured (set AUTH_EMAIL and AUTH_PASSWORD)")
    return {"email": email, "password": password}


@pytest.fixture
async def authenticated_dashboard(
    account: dict,
    login_page: LoginPage,
    dashboard_page: DashboardPage,
) -> AsyncGenerator[DashboardPage, None]:
    """
    DashboardPage after logging in with the configured account.

    Skips when the login does not reach the dashboard, so environment
    problems show up as skips rather than note-feature failures.
    """
    await login_page.open()
    try:
        await login_page.login(account["email"], account["password"])
    except InteractionError as e:
        pytest.skip(f"Login form unavailable: {e}")

    if not await dashboard_page.is_logged_in(get_config("ui.timeouts.navigation", 25000)):
        pytest.skip(f"Dashboard not reachable after login (at {dashboard_page.current_url})")
    yield dashboard_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store each phase report on the item for fixtures to inspect."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Test Data Fixtures
# ================================================================================

@pytest.fixture
def test_data() -> dict:
    """
    Provides common test data for UI scenarios.

    Every call yields a fresh unique user and note.
    """
    user = generate_user()
    return {
        "new_user": user,
        "invalid_credentials": {
            "email": "invalid@test.com",
            "password": "wrongpassword",
        },
        "note": generate_note(),
    }