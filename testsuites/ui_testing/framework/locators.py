"""
================================================================================
Logical Targets and Locator Candidates
================================================================================

Declarative description of the UI elements a page object talks to.

A LogicalTarget names a UI concept ("login_button") and owns an ordered
tuple of LocatorCandidates, most stable first (data-testid), most heuristic
last (visible text, XPath). Targets are immutable and hold no Playwright
state; a candidate is turned into a live Locator only at resolution time.

Usage:
    >>> LOGIN_BUTTON = LogicalTarget(
    ...     "login_button",
    ...     by_test_id("login-submit"),
    ...     by_role("button", name="Login"),
    ...     by_css("button[type='submit']"),
    ... )

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Pattern, Tuple, Union

from playwright.async_api import Locator, Page


TextPattern = Union[str, Pattern[str]]
Scope = Union[Page, Locator]


class LocatorStrategy(Enum):
    """How a candidate pattern is interpreted."""
    TEST_ID = "testid"
    CSS = "css"
    ROLE = "role"
    TEXT = "text"
    PLACEHOLDER = "placeholder"
    LABEL = "label"
    XPATH = "xpath"


def _pattern_repr(pattern: TextPattern) -> str:
    if isinstance(pattern, re.Pattern):
        return f"/{pattern.pattern}/"
    return pattern


@dataclass(frozen=True)
class LocatorCandidate:
    """
    One strategy for finding a LogicalTarget in the DOM.

    Attributes:
        strategy: Interpretation of `pattern`
        pattern: Selector, test id, role, text or compiled regex
        name: Accessible name (ROLE strategy only)
        exact: Exact text/name matching for text-like strategies
        has_text: Narrow matches to nodes containing this text
    """
    strategy: LocatorStrategy
    pattern: TextPattern
    name: Optional[TextPattern] = None
    exact: bool = False
    has_text: Optional[TextPattern] = None

    def build(self, scope: Scope) -> Locator:
        """Create a Playwright Locator for this candidate under `scope`."""
        if self.strategy is LocatorStrategy.TEST_ID:
            locator = scope.get_by_test_id(self.pattern)
        elif self.strategy is LocatorStrategy.CSS:
            locator = scope.locator(self.pattern)
        elif self.strategy is LocatorStrategy.XPATH:
            locator = scope.locator(f"xpath={self.pattern}")
        elif self.strategy is LocatorStrategy.ROLE:
            options: dict[str, Any] = {}
            if self.name is not None:
                options["name"] = self.name
                options["exact"] = self.exact
            locator = scope.get_by_role(self.pattern, **options)
        elif self.strategy is LocatorStrategy.TEXT:
            locator = scope.get_by_text(self.pattern, exact=self.exact)
        elif self.strategy is LocatorStrategy.PLACEHOLDER:
            locator = scope.get_by_placeholder(self.pattern, exact=self.exact)
        elif self.strategy is LocatorStrategy.LABEL:
            locator = scope.get_by_label(self.pattern, exact=self.exact)
        else:
            raise ValueError(f"Unsupported locator strategy: {self.strategy}")

        if self.has_text is not None:
            locator = locator.filter(has_text=self.has_text)
        return locator

    def describe(self) -> str:
        """Human-readable form used in logs and health reports."""
        if self.strategy is LocatorStrategy.CSS:
            text = self.pattern
        elif self.strategy is LocatorStrategy.ROLE and self.name is not None:
            text = f"role={self.pattern}[name={_pattern_repr(self.name)}]"
        else:
            text = f"{self.strategy.value}={_pattern_repr(self.pattern)}"
        if self.has_text is not None:
            text += f" >> has_text={_pattern_repr(self.has_text)}"
        return text


@dataclass(frozen=True)
class LogicalTarget:
    """
    Named UI concept with an ordered, non-empty list of candidates.

    Order encodes preference: the resolver tries candidates first to last
    and the first visible match wins.
    """
    name: str
    candidates: Tuple[LocatorCandidate, ...] = field(default=())

    def __init__(self, name: str, *candidates: LocatorCandidate) -> None:
        if not candidates:
            raise ValueError(f"Logical target '{name}' needs at least one locator candidate")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "candidates", tuple(candidates))

    @property
    def primary(self) -> LocatorCandidate:
        return self.candidates[0]

    def scoped_to_text(self, text: TextPattern, name: Optional[str] = None) -> "LogicalTarget":
        """Copy of this target whose candidates only match nodes containing `text`."""
        narrowed = [
            LocatorCandidate(c.strategy, c.pattern, c.name, c.exact, text)
            for c in self.candidates
        ]
        return LogicalTarget(name or f"{self.name}[{_pattern_repr(text)}]", *narrowed)


# =============================================================================
# Candidate builders
# =============================================================================

def by_test_id(test_id: str) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.TEST_ID, test_id)


def by_css(selector: str, has_text: Optional[TextPattern] = None) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.CSS, selector, has_text=has_text)


def by_role(role: str, name: Optional[TextPattern] = None, exact: bool = False) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.ROLE, role, name=name, exact=exact)


def by_text(text: TextPattern, exact: bool = False) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.TEXT, text, exact=exact)


def by_placeholder(text: TextPattern, exact: bool = False) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.PLACEHOLDER, text, exact=exact)


def by_label(text: TextPattern, exact: bool = False) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.LABEL, text, exact=exact)


def by_xpath(expression: str) -> LocatorCandidate:
    return LocatorCandidate(LocatorStrategy.XPATH, expression)


def target_table(*targets: LogicalTarget) -> Mapping[str, LogicalTarget]:
    """
    Build a read-only name -> target mapping for a page object.

    Raises:
        ValueError: If two targets share a name
    """
    table: dict[str, LogicalTarget] = {}
    for target in targets:
        if target.name in table:
            raise ValueError(f"Duplicate logical target: {target.name}")
        table[target.name] = target
    return MappingProxyType(table)


__all__ = [
    "LocatorStrategy",
    "LocatorCandidate",
    "LogicalTarget",
    "by_test_id",
    "by_css",
    "by_role",
    "by_text",
    "by_placeholder",
    "by_label",
    "by_xpath",
    "target_table",
]
