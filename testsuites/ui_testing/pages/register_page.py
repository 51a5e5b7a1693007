"""
================================================================================
Register Page Object (Async / Playwright)
================================================================================

Registration page of the notes application (`/register`).

`register()` fills email, name, password and confirmation in that order and
submits; the confirmation defaults to the password. Error and success
messages are queries that return None when nothing is displayed.

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure

from testsuites.ui_testing.framework.locators import (
    LogicalTarget,
    by_css,
    by_role,
    by_test_id,
    by_text,
    target_table,
)
from testsuites.ui_testing.framework.page_base import BasePage


EMAIL_INPUT = LogicalTarget(
    "register_email_input",
    by_test_id("register-email"),
    by_css("input#email"),
    by_css("input[name='email']"),
    by_css("input[type='email']"),
)
NAME_INPUT = LogicalTarget(
    "register_name_input",
    by_test_id("register-name"),
    by_css("input#name"),
    by_css("input[name='name']"),
)
PASSWORD_INPUT = LogicalTarget(
    "register_password_input",
    by_test_id("register-password"),
    by_css("input#password"),
    by_css("input[name='password']"),
)
CONFIRM_PASSWORD_INPUT = LogicalTarget(
    "register_confirm_password_input",
    by_test_id("register-confirm-password"),
    by_css("input#confirmPassword"),
    by_css("input[name='confirmPassword']"),
)
REGISTER_BUTTON = LogicalTarget(
    "register_button",
    by_test_id("register-submit"),
    by_role("button", name="Register"),
    by_css("button[type='submit']"),
)
LOGIN_LINK = LogicalTarget(
    "login_link",
    by_css("a[href*='login']"),
    by_text("Log in here"),
)
GOOGLE_REGISTER_LINK = LogicalTarget(
    "google_register_link",
    by_css("a[href*='google']"),
    by_role("link", name=re.compile(r"register with google", re.I)),
)
LINKEDIN_REGISTER_LINK = LogicalTarget(
    "linkedin_register_link",
    by_css("a[href*='linkedin']"),
    by_role("link", name=re.compile(r"register with linkedin", re.I)),
)
REGISTER_SUCCESS_MESSAGE = LogicalTarget(
    "register_success_message",
    by_text("User account created successfully"),
    by_css("[class*='alert-success']"),
)
REGISTER_ERROR_MESSAGE = LogicalTarget(
    "register_error_message",
    by_text("Passwords don't match"),
    by_text(re.compile(r"match|required|already|invalid", re.I)),
    by_css("[class*='alert']"),
    by_role("alert"),
)


class RegisterPage(BasePage):
    """Register page object (async)."""

    URL_PATH = "/register"
    TARGETS = target_table(
        EMAIL_INPUT,
        NAME_INPUT,
        PASSWORD_INPUT,
        CONFIRM_PASSWORD_INPUT,
        REGISTER_BUTTON,
        LOGIN_LINK,
        GOOGLE_REGISTER_LINK,
        LINKEDIN_REGISTER_LINK,
        REGISTER_SUCCESS_MESSAGE,
        REGISTER_ERROR_MESSAGE,
    )

    async def enter_email(self, email: str) -> None:
        await self.actions.fill(EMAIL_INPUT, email)

    async def enter_name(self, name: str) -> None:
        await self.actions.fill(NAME_INPUT, name)

    async def enter_password(self, password: str) -> None:
        await self.actions.fill(PASSWORD_INPUT, password, sensitive=True)

    async def enter_confirm_password(self, password: str) -> None:
        await self.actions.fill(CONFIRM_PASSWORD_INPUT, password, sensitive=True)

    async def click_register(self) -> None:
        await self.actions.click(REGISTER_BUTTON)

    async def register(
        self,
        email: str,
        name: str,
        password: str,
        confirm_password: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Fill the registration form and submit.

        Args:
            confirm_password: Defaults to `password` when None
        """
        confirm = password if confirm_password is None else confirm_password

        async def steps() -> None:
            await self.enter_email(email)
            await self.enter_name(name)
            await self.enter_password(password)
            await self.enter_confirm_password(confirm)
            await self.click_register()

        await self.run_action("register", steps(), timeout)

    async def click_login_link(self) -> None:
        await self.actions.click(LOGIN_LINK)

    # =========================================================================
    # Queries
    # =========================================================================

    async def is_email_input_visible(self) -> bool:
        return await self.actions.is_visible(EMAIL_INPUT)

    async def is_name_input_visible(self) -> bool:
        return await self.actions.is_visible(NAME_INPUT)

    async def is_password_input_visible(self) -> bool:
        return await self.actions.is_visible(PASSWORD_INPUT)

    async def is_confirm_password_input_visible(self) -> bool:
        return await self.actions.is_visible(CONFIRM_PASSWORD_INPUT)

    async def is_register_button_visible(self) -> bool:
        return await self.actions.is_visible(REGISTER_BUTTON)

    async def are_social_registers_visible(self) -> bool:
        return (
            await self.actions.is_visible(GOOGLE_REGISTER_LINK)
            and await self.actions.is_visible(LINKEDIN_REGISTER_LINK)
        )

    @allure.step("Verify register form is displayed")
    async def verify_form_displayed(self) -> bool:
        return (
            await self.is_email_input_visible()
            and await self.is_name_input_visible()
            and await self.is_password_input_visible()
            and await self.is_confirm_password_input_visible()
            and await self.is_register_button_visible()
        )

    async def get_error_message(self) -> Optional[str]:
        """Registration error text, or None when no error is shown."""
        message = await self.actions.read_text(REGISTER_ERROR_MESSAGE, self.timeouts.message)
        return message or None

    async def get_success_message(self) -> Optional[str]:
        message = await self.actions.read_text(REGISTER_SUCCESS_MESSAGE, self.timeouts.message)
        return message or None

    async def get_email_value(self) -> Optional[str]:
        return await self.actions.read_value(EMAIL_INPUT)

    async def get_name_value(self) -> Optional[str]:
        return await self.actions.read_value(NAME_INPUT)

    async def clear_email_field(self) -> None:
        await self.actions.clear(EMAIL_INPUT)

    async def clear_name_field(self) -> None:
        await self.actions.clear(NAME_INPUT)

    async def clear_password_field(self) -> None:
        await self.actions.clear(PASSWORD_INPUT)

    async def clear_confirm_password_field(self) -> None:
        await self.actions.clear(CONFIRM_PASSWORD_INPUT)


__all__ = [
    "RegisterPage",
    "REGISTER_ERROR_MESSAGE",
]
