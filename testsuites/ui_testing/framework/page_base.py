"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Page address and navigation
    - A read-only table of logical targets per page
    - Composed resolver (SmartLocator) and primitives (ElementActions)
    - Composite-action deadline enforcement
    - Screenshot and failure-capture utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Mapping, Optional, TypeVar

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Response

from notes_tools.common import ConfigLoader
from notes_tools.report_tools import attach_json, attach_png, attach_text

from .element_actions import ElementActions, Timeouts, UrlPattern
from .locators import LogicalTarget, by_css, by_role, target_table
from .smart_locator import InteractionError, SmartLocator


T = TypeVar("T")

DEFAULT_BASE_URL = "https://practice.expandtesting.com/notes/app"

# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

# Number of notes-API responses kept for failure reports
MAX_CAPTURED_RESPONSES = 20


class ActionTimeoutError(InteractionError):
    """Raised when a composite action does not finish within its deadline."""
    pass


ALERT_MESSAGE = LogicalTarget(
    "alert_message",
    by_role("alert"),
    by_css("[class*='alert']"),
    by_css("[class*='toast']"),
    by_css("[class*='message']"),
)


class BasePage:
    """
    Base class for all page objects.

    A page fixes its address (`URL_PATH`) and a read-only `TARGETS` table.
    All element work goes through the composed `self.smart` resolver and
    `self.actions` primitives, so concrete pages only declare targets and
    chain primitives into user-level actions.

    Page objects keep no record of earlier actions; sequencing is the
    caller's responsibility.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"
            TARGETS = target_table(EMAIL_INPUT, PASSWORD_INPUT, LOGIN_BUTTON)

            async def login(self, email: str, password: str):
                await self.run_action("login", self._login(email, password))
    """

    # Override in subclasses
    URL_PATH: str = "/"
    TARGETS: Mapping[str, LogicalTarget] = target_table()

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        timeouts: Optional[Timeouts] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Application base URL (defaults to `ui.base_url` config)
            timeouts: Timeout budgets (defaults to `ui.timeouts.*` config)
        """
        self.page = page
        if not base_url:
            base_url = ConfigLoader().get("ui.base_url", DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")
        self.timeouts = timeouts or Timeouts.from_config()
        self.smart = SmartLocator(page, probe_timeout=self.timeouts.probe)
        self.actions = ElementActions(page, self.smart, self.timeouts)

        self._captured_responses: List[Dict[str, Any]] = []
        self.page.on("response", self._capture_response)

    async def _capture_response(self, response: Response) -> None:
        """Keep recent notes-API responses for failure reports."""
        if "/api/" not in response.url:
            return
        try:
            body = await response.text()
        except PlaywrightError:
            body = "<unable to read>"

        self._captured_responses.append({
            "timestamp": datetime.now().isoformat(),
            "url": response.url,
            "status": response.status,
            "body": body[:1000],
        })
        if len(self._captured_responses) > MAX_CAPTURED_RESPONSES:
            self._captured_responses.pop(0)

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def url(self) -> str:
        """Full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.page.url

    def is_current(self) -> bool:
        """Whether the browser is currently on this page's path."""
        return self.URL_PATH in self.page.url

    async def open(self, wait_for: str = "domcontentloaded") -> "BasePage":
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        await self.navigate_to(self.URL_PATH, wait_for=wait_for)
        return self

    async def navigate_to(self, path: str, wait_for: str = "domcontentloaded") -> None:
        """Navigate to a path relative to the base URL."""
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path or '/'}"):
            await self.page.goto(full_url, wait_until=wait_for, timeout=self.timeouts.navigation)
            logger.debug(f"Navigated to: {full_url}")

    # =========================================================================
    # Targets and composite actions
    # =========================================================================

    def target(self, name: str) -> LogicalTarget:
        """
        Look up a logical target of this page.

        Raises:
            KeyError: Unknown target name
        """
        try:
            return self.TARGETS[name]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__} has no target '{name}'. "
                f"Known targets: {', '.join(sorted(self.TARGETS))}"
            ) from None

    async def run_action(
        self,
        name: str,
        action: Awaitable[T],
        timeout: Optional[int] = None,
    ) -> T:
        """
        Run a composite action under an overall deadline.

        The first failing step aborts the action; nothing is retried.

        Raises:
            ActionTimeoutError: The deadline elapsed before completion
        """
        timeout = self.timeouts.navigation if timeout is None else timeout
        with allure.step(f"{type(self).__name__}.{name}"):
            try:
                return await asyncio.wait_for(action, timeout / 1000)
            except asyncio.TimeoutError as e:
                raise ActionTimeoutError(
                    f"Action '{name}' did not complete within {timeout}ms"
                ) from e

    async def get_alert_message(self, timeout: Optional[int] = None) -> Optional[str]:
        """Text of the first visible alert/message/toast region, or None."""
        return await self.actions.read_text(
            ALERT_MESSAGE, self.timeouts.message if timeout is None else timeout
        )

    async def is_on_url(self, pattern: UrlPattern, timeout: Optional[int] = None) -> bool:
        """
        Whether the URL reaches `pattern` in time.

        Query variant of `actions.wait_for_url`: a timeout yields False.
        """
        try:
            await self.actions.wait_for_url(pattern, timeout)
        except InteractionError:
            return False
        return True

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        image = await self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            attach_png(image, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Attach debugging information for a failed scenario.

        Saves:
            - Screenshot
            - Current URL
            - Recent notes-API responses
            - Locator health report
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            attach_text(self.page.url, name="Current URL")
            if self._captured_responses:
                attach_json(self._captured_responses[-10:], name="Recent API Responses")
            attach_text(self.get_locator_health_report(), name="Locator Health")

    def get_locator_health_report(self) -> str:
        """Get smart locator health report."""
        return self.smart.get_health_report()


__all__ = [
    "ALERT_MESSAGE",
    "ActionTimeoutError",
    "BasePage",
    "DEFAULT_BASE_URL",
]
