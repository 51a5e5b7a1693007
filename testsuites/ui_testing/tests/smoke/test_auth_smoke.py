"""
================================================================================
Authentication Smoke Scenarios (Async / Playwright)
================================================================================

Critical sign-up and login journeys against the live notes application:
  - Registration with valid, mismatched and empty input
  - Login with valid, unknown, wrong and empty credentials

================================================================================
"""

import allure
import pytest

from notes_tools.common import get_config
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.register_page import RegisterPage


@allure.epic("Notes App")
@allure.feature("Authentication")
@pytest.mark.smoke
@pytest.mark.auth
class TestSignUpSmoke:
    """Registration smoke suite (async)."""

    @allure.story("Sign Up")
    @allure.title("User registration with valid credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    async def test_register_with_valid_credentials(self, register_page: RegisterPage, test_data):
        user = test_data["new_user"]

        with allure.step("Open register page and verify form"):
            await register_page.open()
            assert "/register" in register_page.current_url
            assert await register_page.verify_form_displayed()

        with allure.step("Submit registration"):
            await register_page.register(user.email, user.name, user.password)

        with allure.step("Verify the account was created"):
            redirected = await register_page.is_on_url(
                lambda url: "/login" in url or "/dashboard" in url,
                get_config("ui.timeouts.message", 5000),
            )
            success = await register_page.get_success_message()
            assert redirected or success, "Registration neither redirected nor confirmed"
            if success:
                assert "created successfully" in success

    @allure.story("Sign Up")
    @allure.title("User registration with mismatched passwords")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    async def test_register_with_mismatched_passwords(self, register_page: RegisterPage, test_data):
        user = test_data["new_user"]

        await register_page.open()
        await register_page.enter_email(user.email)
        await register_page.enter_name(user.name)
        await register_page.enter_password(user.password)
        await register_page.enter_confirm_password("DifferentPassword123!@")
        await register_page.click_register()

        error = await register_page.get_error_message()
        assert error, "Mismatched passwords should show an error"
        assert "password" in error.lower()
        assert "/register" in register_page.current_url

    @allure.story("Sign Up")
    @allure.title("User registration with empty fields")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    async def test_register_with_empty_fields(self, register_page: RegisterPage):
        await register_page.open()
        await register_page.click_register()

        assert await register_page.get_error_message(), "Empty form should show validation errors"
        assert "/register" in register_page.current_url


@allure.epic("Notes App")
@allure.feature("Authentication")
@pytest.mark.smoke
@pytest.mark.auth
class TestLoginSmoke:
    """Login smoke suite (async)."""

    @allure.story("Login")
    @allure.title("User login with valid credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    async def test_login_with_valid_credentials(self, login_page: LoginPage, account):
        with allure.step("Open login page and verify form"):
            await login_page.open()
            assert "/login" in login_page.current_url
            await login_page.assert_login_page_loaded()

        with allure.step("Login"):
            await login_page.login(account["email"], account["password"])

        with allure.step("Verify dashboard loaded"):
            reached = await login_page.wait_for_dashboard()
            assert reached, f"Login failed: {await login_page.get_error_message()}"

    @allure.story("Login")
    @allure.title("User login with unknown email")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    async def test_login_with_unknown_email(self, login_page: LoginPage):
        await login_page.open()
        await login_page.login("nonexistent@invalid.com", "AnyPassword123!@")

        error = await login_page.get_error_message()
        assert error, "Unknown account should show an error"
        assert "incorrect" in error.lower()
        assert "/login" in login_page.current_url

    @allure.story("Login")
    @allure.title("User login with incorrect password")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    async def test_login_with_incorrect_password(self, login_page: LoginPage, test_data):
        credentials = test_data["invalid_credentials"]

        await login_page.open()
        await login_page.login(credentials["email"], credentials["password"])

        error = await login_page.get_error_message()
        assert error, "Wrong password should show an error"
        assert "incorrect" in error.lower()
        assert "/login" in login_page.current_url

    @allure.story("Login")
    @allure.title("User login with empty fields")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    async def test_login_with_empty_fields(self, login_page: LoginPage):
        await login_page.open()
        await login_page.click_login()

        assert await login_page.get_error_message(), "Empty form should show validation errors"
        assert "/login" in login_page.current_url
