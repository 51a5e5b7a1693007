# ================================================================================
# Element Actions Module
# ================================================================================
#
# Uniform interaction primitives built on SmartLocator resolution.
#
# Key Features:
#   - One resolution per call; resolved elements are never cached
#   - Separate probe / action / navigation timeout budgets
#   - Typed failures for writes, None/False degradation for reads
#   - Allure step integration and masked logging of secrets
#
# No primitive retries. Writes change the state of the application under
# test, so a failure surfaces immediately instead of being replayed.
#
# ================================================================================

from __future__ import annotations

import asyncio
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Union

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from notes_tools.common import ConfigLoader, mask_secret

from .locators import LogicalTarget, Scope
from .smart_locator import ElementNotFoundError, InteractionError, SmartLocator, first_line


UrlPattern = Union[str, Pattern[str], Callable[[str], bool]]

# Pause between resolver attempts in wait_for_element.
POLL_INTERVAL_SECONDS = 0.25


class NotInteractableError(InteractionError):
    """Raised when an element resolved but cannot accept the action."""
    pass


class NavigationTimeoutError(InteractionError):
    """Raised when the expected URL is not reached in time or the wait fails."""
    pass


@dataclass(frozen=True)
class Timeouts:
    """
    Millisecond budgets for the interaction layer.

    Attributes:
        probe: Checking whether an element exists / is visible
        action: Waiting for an action on a resolved element to complete
        message: Waiting for feedback messages (alerts, toasts) to appear
        navigation: Page loads and URL changes
    """
    probe: int = 2000
    action: int = 10000
    message: int = 5000
    navigation: int = 25000

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "Timeouts":
        """
        Build from `ui.timeouts.*` configuration keys.

        Raises:
            ConfigurationError: A budget is not a non-negative integer
        """
        config = config or ConfigLoader()
        defaults = cls()
        return cls(
            probe=config.get_timeout("ui.timeouts.probe", defaults.probe),
            action=config.get_timeout("ui.timeouts.action", defaults.action),
            message=config.get_timeout("ui.timeouts.message", defaults.message),
            navigation=config.get_timeout("ui.timeouts.navigation", defaults.navigation),
        )


class ElementActions:
    """
    Interaction primitives over logical targets.

    Example:
        actions = ElementActions(page, SmartLocator(page))
        await actions.fill(EMAIL_INPUT, "user@test.com")
        await actions.click(LOGIN_BUTTON)
        message = await actions.read_text(ERROR_MESSAGE)
    """

    def __init__(
        self,
        page: Page,
        resolver: SmartLocator,
        timeouts: Optional[Timeouts] = None,
    ):
        """
        Args:
            page: Playwright Page object
            resolver: SmartLocator bound to the same page
            timeouts: Timeout budgets (defaults to configured values)
        """
        self.page = page
        self.resolver = resolver
        self.timeouts = timeouts or Timeouts.from_config()

    @property
    def current_url(self) -> str:
        return self.page.url

    # =========================================================================
    # Writes (fail loudly)
    # =========================================================================

    async def fill(
        self,
        target: LogicalTarget,
        value: str,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
        sensitive: bool = False,
    ) -> None:
        """
        Clear an input and enter `value`.

        Args:
            target: Input to fill
            value: Text to enter
            timeout: Resolution budget (defaults to action timeout)
            scope: Optional parent to search under
            sensitive: Mask the value in logs and report steps

        Raises:
            ElementNotFoundError: Input could not be resolved
            NotInteractableError: Input is disabled, read-only or refused the text
        """
        shown = mask_secret(value) if sensitive or "password" in target.name else value
        with allure.step(f"Fill {target.name}: {shown}"):
            locator = await self.resolver.locate(target, self._budget(timeout), scope)
            await self._require(locator, target, "editable")

            logger.info(f"Filling {target.name} with '{shown[:50]}'")
            try:
                await locator.clear(timeout=self.timeouts.action)
                await locator.fill(value, timeout=self.timeouts.action)
            except PlaywrightError as e:
                raise NotInteractableError(
                    f"Cannot fill '{target.name}': {first_line(e)}"
                ) from e

    async def click(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> None:
        """
        Click a resolved element.

        Raises:
            ElementNotFoundError: Element could not be resolved
            NotInteractableError: Element is disabled or refused the click
        """
        with allure.step(f"Click {target.name}"):
            locator = await self.resolver.locate(target, self._budget(timeout), scope)
            await self._require(locator, target, "enabled")

            logger.info(f"Clicking {target.name}")
            try:
                await locator.click(timeout=self.timeouts.action)
            except PlaywrightError as e:
                raise NotInteractableError(
                    f"Cannot click '{target.name}': {first_line(e)}"
                ) from e

    async def clear(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> None:
        """Empty an input field."""
        with allure.step(f"Clear {target.name}"):
            locator = await self.resolver.locate(target, self._budget(timeout), scope)
            await self._require(locator, target, "editable")
            try:
                await locator.clear(timeout=self.timeouts.action)
            except PlaywrightError as e:
                raise NotInteractableError(
                    f"Cannot clear '{target.name}': {first_line(e)}"
                ) from e

    async def select_option(
        self,
        target: LogicalTarget,
        value: Optional[str] = None,
        index: Optional[int] = None,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> None:
        """
        Select a dropdown option by label/value or by index.

        Raises:
            ValueError: Neither `value` nor `index` given
        """
        if value is None and index is None:
            raise ValueError("select_option needs a value or an index")

        with allure.step(f"Select {value if value is not None else f'#{index}'} in {target.name}"):
            locator = await self.resolver.locate(target, self._budget(timeout), scope)
            await self._require(locator, target, "enabled")
            try:
                if index is not None:
                    await locator.select_option(index=index, timeout=self.timeouts.action)
                else:
                    await locator.select_option(value, timeout=self.timeouts.action)
            except PlaywrightError as e:
                raise NotInteractableError(
                    f"Cannot select in '{target.name}': {first_line(e)}"
                ) from e

    # =========================================================================
    # Reads (degrade to None / False)
    # =========================================================================

    async def read_text(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> Optional[str]:
        """
        Trimmed text content, or None when the element is absent.

        Args:
            timeout: Resolution budget (defaults to probe timeout)
        """
        locator = await self.resolver.resolve(target, self._probe(timeout), scope)
        if locator is None:
            return None
        try:
            text = await locator.text_content(timeout=self.timeouts.probe)
        except PlaywrightError as e:
            logger.debug(f"Text of '{target.name}' unavailable: {e}")
            return None

        text = (text or "").strip()
        logger.debug(f"Got text from {target.name}: '{text}'")
        return text

    async def read_value(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> Optional[str]:
        """Current value of an input, or None when the input is absent."""
        locator = await self.resolver.resolve(target, self._probe(timeout), scope)
        if locator is None:
            return None
        try:
            return await locator.input_value(timeout=self.timeouts.probe)
        except PlaywrightError as e:
            logger.debug(f"Value of '{target.name}' unavailable: {e}")
            return None

    async def is_visible(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> bool:
        """
        Whether the target is visible within the probe budget. Never raises.
        """
        try:
            locator = await self.resolver.resolve(target, self._probe(timeout), scope)
            return locator is not None and await locator.is_visible()
        except PlaywrightError as e:
            logger.debug(f"Visibility check of '{target.name}' failed: {e}")
            return False

    async def count(self, target: LogicalTarget, scope: Optional[Scope] = None) -> int:
        """Number of nodes matching the target (visible or not)."""
        return await self.resolver.count(target, scope)

    async def count_visible(self, target: LogicalTarget, scope: Optional[Scope] = None) -> int:
        """Number of matching nodes that are currently visible."""
        visible = 0
        for locator in await self.resolver.all_matches(target, scope):
            try:
                if await locator.is_visible():
                    visible += 1
            except PlaywrightError:
                continue
        return visible

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for_url(
        self,
        pattern: UrlPattern,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait until the current URL matches a glob, regex or predicate.

        Raises:
            NavigationTimeoutError: On timeout or when the page is closed or
                the navigation is aborted
        """
        timeout = self.timeouts.navigation if timeout is None else timeout
        shown = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
        with allure.step(f"Wait for URL: {shown}"):
            try:
                await self.page.wait_for_url(pattern, timeout=timeout, wait_until="commit")
            except PlaywrightTimeoutError as e:
                raise NavigationTimeoutError(
                    f"URL did not match {shown} within {timeout}ms "
                    f"(current: {self.page.url})"
                ) from e
            except PlaywrightError as e:
                raise NavigationTimeoutError(
                    f"Waiting for URL {shown} failed: {first_line(e)}"
                ) from e

    async def wait_for_element(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> Locator:
        """
        Poll the resolver until the target appears.

        Raises:
            ElementNotFoundError: On timeout
        """
        timeout = self.timeouts.action if timeout is None else timeout
        deadline = time.monotonic() + timeout / 1000

        with allure.step(f"Wait for element: {target.name}"):
            logger.info(f"Waiting for {target.name} to be visible")
            while True:
                remaining_ms = (deadline - time.monotonic()) * 1000
                locator = await self.resolver.resolve(
                    target, min(self.timeouts.probe, max(remaining_ms, 0)), scope
                )
                if locator is not None:
                    return locator
                if time.monotonic() >= deadline:
                    raise ElementNotFoundError(
                        f"'{target.name}' did not appear within {timeout}ms"
                    )
                await asyncio.sleep(POLL_INTERVAL_SECONDS)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _require(self, locator: Locator, target: LogicalTarget, state: str) -> None:
        """Raise NotInteractableError unless the element is enabled/editable."""
        try:
            if state == "editable":
                ok = await locator.is_editable()
            else:
                ok = await locator.is_enabled()
        except PlaywrightError as e:
            raise NotInteractableError(
                f"'{target.name}' cannot be checked for {state}: {first_line(e)}"
            ) from e
        if not ok:
            raise NotInteractableError(f"'{target.name}' is not {state}")

    def _budget(self, timeout: Optional[int]) -> int:
        return self.timeouts.action if timeout is None else timeout

    def _probe(self, timeout: Optional[int]) -> int:
        return self.timeouts.probe if timeout is None else timeout


__all__ = [
    "ElementActions",
    "NotInteractableError",
    "NavigationTimeoutError",
    "Timeouts",
]
