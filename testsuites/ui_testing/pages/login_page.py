"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login page of the notes application (`/login`).

Design goals:
  - Every element is a LogicalTarget with ordered fallbacks
    (data-testid -> id/name -> type/role -> visible text)
  - `login()` performs email, password, submit in that order and aborts on
    the first failing step
  - `get_error_message()` is a query: absence of an error is None, not a failure

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure

from testsuites.ui_testing.framework.locators import (
    LogicalTarget,
    by_css,
    by_label,
    by_role,
    by_test_id,
    by_text,
    target_table,
)
from testsuites.ui_testing.framework.page_base import BasePage


EMAIL_INPUT = LogicalTarget(
    "email_input",
    by_test_id("login-email"),
    by_css("input#email"),
    by_css("input[name='email']"),
    by_css("input[type='email']"),
    by_label("Email address"),
)
PASSWORD_INPUT = LogicalTarget(
    "password_input",
    by_test_id("login-password"),
    by_css("input#password"),
    by_css("input[name='password']"),
    by_css("input[type='password']"),
)
LOGIN_BUTTON = LogicalTarget(
    "login_button",
    by_test_id("login-submit"),
    by_role("button", name="Login"),
    by_css("button[type='submit']"),
)
FORGOT_PASSWORD_LINK = LogicalTarget(
    "forgot_password_link",
    by_css("a[href*='forgot-password']"),
    by_text("Forgot your password?"),
)
REGISTER_LINK = LogicalTarget(
    "register_link",
    by_css("a[href*='register']"),
    by_text("Create a free account"),
)
GOOGLE_LOGIN_LINK = LogicalTarget(
    "google_login_link",
    by_css("a[href*='google']"),
    by_role("link", name=re.compile(r"login with google", re.I)),
)
LINKEDIN_LOGIN_LINK = LogicalTarget(
    "linkedin_login_link",
    by_css("a[href*='linkedin']"),
    by_role("link", name=re.compile(r"login with linkedin", re.I)),
)
LOGIN_ERROR_MESSAGE = LogicalTarget(
    "login_error_message",
    by_text("Incorrect email address or password"),
    by_text(re.compile(r"required|invalid|incorrect", re.I)),
    by_css("[class*='alert']"),
    by_role("alert"),
)


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_PATH = "/login"
    TARGETS = target_table(
        EMAIL_INPUT,
        PASSWORD_INPUT,
        LOGIN_BUTTON,
        FORGOT_PASSWORD_LINK,
        REGISTER_LINK,
        GOOGLE_LOGIN_LINK,
        LINKEDIN_LOGIN_LINK,
        LOGIN_ERROR_MESSAGE,
    )

    # =========================================================================
    # Steps
    # =========================================================================

    async def enter_email(self, email: str) -> None:
        await self.actions.fill(EMAIL_INPUT, email)

    async def enter_password(self, password: str) -> None:
        await self.actions.fill(PASSWORD_INPUT, password, sensitive=True)

    async def click_login(self) -> None:
        await self.actions.click(LOGIN_BUTTON)

    async def login(self, email: str, password: str, timeout: Optional[int] = None) -> None:
        """
        Fill credentials and submit.

        Does not wait for the outcome; callers check the URL or
        `get_error_message()` afterwards.

        Raises:
            ElementNotFoundError / NotInteractableError: A step failed
            ActionTimeoutError: The whole action exceeded `timeout`
        """
        async def steps() -> None:
            await self.enter_email(email)
            await self.enter_password(password)
            await self.click_login()

        await self.run_action("login", steps(), timeout)

    async def wait_for_dashboard(self, timeout: Optional[int] = None) -> bool:
        """Whether a login redirected to the dashboard in time."""
        return await self.is_on_url("**/dashboard", timeout)

    # =========================================================================
    # Navigation links
    # =========================================================================

    async def click_forgot_password(self) -> None:
        await self.actions.click(FORGOT_PASSWORD_LINK)

    async def click_register_link(self) -> None:
        await self.actions.click(REGISTER_LINK)

    async def click_google_login(self) -> None:
        await self.actions.click(GOOGLE_LOGIN_LINK)

    # =========================================================================
    # Queries
    # =========================================================================

    async def is_email_input_visible(self) -> bool:
        return await self.actions.is_visible(EMAIL_INPUT)

    async def is_password_input_visible(self) -> bool:
        return await self.actions.is_visible(PASSWORD_INPUT)

    async def is_login_button_visible(self) -> bool:
        return await self.actions.is_visible(LOGIN_BUTTON)

    async def is_forgot_password_link_visible(self) -> bool:
        return await self.actions.is_visible(FORGOT_PASSWORD_LINK)

    async def are_social_logins_visible(self) -> bool:
        return (
            await self.actions.is_visible(GOOGLE_LOGIN_LINK)
            and await self.actions.is_visible(LINKEDIN_LOGIN_LINK)
        )

    @allure.step("Verify login form is displayed")
    async def verify_form_displayed(self) -> bool:
        """Email, password and submit are all visible."""
        return (
            await self.is_email_input_visible()
            and await self.is_password_input_visible()
            and await self.is_login_button_visible()
        )

    async def get_error_message(self) -> Optional[str]:
        """
        Login error text, or None when no error is shown.

        Tries the known credential error first, then any
        required/invalid/incorrect text, then alert regions.
        """
        message = await self.actions.read_text(LOGIN_ERROR_MESSAGE, self.timeouts.message)
        return message or None

    async def get_email_value(self) -> Optional[str]:
        return await self.actions.read_value(EMAIL_INPUT)

    async def get_password_value(self) -> Optional[str]:
        return await self.actions.read_value(PASSWORD_INPUT)

    async def assert_login_page_loaded(self) -> None:
        """Hard assertion helper used by tests."""
        assert await self.verify_form_displayed(), "Login form should be visible"


__all__ = [
    "LoginPage",
    "EMAIL_INPUT",
    "PASSWORD_INPUT",
    "LOGIN_BUTTON",
    "LOGIN_ERROR_MESSAGE",
]
