"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based interaction layer for the notes application suite.

Components:
    - locators: Logical targets and ordered locator candidates
    - smart_locator: Fallback element resolution with health tracking
    - element_actions: Interaction primitives with typed failures
    - page_base: Base page object (navigation, targets, composite actions)
    - browser_manager: Browser lifecycle and isolated contexts

Author: Automation Team
License: MIT
================================================================================
"""

from .locators import (
    LocatorCandidate,
    LocatorStrategy,
    LogicalTarget,
    by_css,
    by_label,
    by_placeholder,
    by_role,
    by_test_id,
    by_text,
    by_xpath,
    target_table,
)
from .smart_locator import ElementNotFoundError, InteractionError, SmartLocator
from .element_actions import ElementActions, NavigationTimeoutError, NotInteractableError, Timeouts
from .page_base import ActionTimeoutError, BasePage
from .browser_manager import BrowserManager

__all__ = [
    "ActionTimeoutError",
    "BasePage",
    "BrowserManager",
    "ElementActions",
    "ElementNotFoundError",
    "InteractionError",
    "LocatorCandidate",
    "LocatorStrategy",
    "LogicalTarget",
    "NavigationTimeoutError",
    "NotInteractableError",
    "SmartLocator",
    "Timeouts",
    "by_css",
    "by_label",
    "by_placeholder",
    "by_role",
    "by_test_id",
    "by_text",
    "by_xpath",
    "target_table",
]
