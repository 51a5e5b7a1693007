"""
================================================================================
Smart Locator with Fallback Element Resolution
================================================================================

Resolves a LogicalTarget to a visible element on the live page:
    - Ordered fallback across locator candidates
    - Per-candidate slice of a bounded probe budget
    - Health tracking of which candidate actually matched

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .locators import LocatorCandidate, LogicalTarget, Scope


# Every candidate is probed at least this long, even when the budget is spent.
MIN_PROBE_SLICE_MS = 100

DEFAULT_PROBE_TIMEOUT_MS = 2000


def first_line(error: BaseException) -> str:
    """First line of an exception message (Playwright errors carry call logs)."""
    lines = str(error).splitlines()
    return lines[0] if lines else type(error).__name__


class InteractionError(Exception):
    """Base class for failures of the interaction layer."""
    pass


class ElementNotFoundError(InteractionError):
    """Raised when all locator candidates fail to find a visible element."""
    pass


@dataclass
class LocatorHealth:
    """
    Records which candidate resolved a target.

    Attributes:
        element_name: Logical target name
        primary_selector: The preferred candidate
        used_fallback: Whether a fallback was used
        fallback_name: Position of the fallback used (if any)
        fallback_selector: The fallback candidate used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Element resolver with ordered fallback strategies.

    Candidates are tried in declared order. Each gets an equal share of
    whatever probe budget is left, so a candidate that fails fast hands its
    unused time to the ones after it. The first candidate whose first match
    (document order) becomes visible wins; there is no scoring.

    A target that resolves nothing is a normal outcome: `resolve()` returns
    None. Callers that need the element use `locate()`, which raises
    ElementNotFoundError instead.

    Usage:
        >>> smart = SmartLocator(page)
        >>> button = await smart.locate(LOGIN_BUTTON)
        >>> maybe_alert = await smart.resolve(ERROR_MESSAGE, timeout=1500)
    """

    def __init__(
        self,
        page: Page,
        probe_timeout: int = DEFAULT_PROBE_TIMEOUT_MS,
    ):
        """
        Args:
            page: Playwright Page object
            probe_timeout: Default overall budget in milliseconds
        """
        self.page = page
        self.probe_timeout = probe_timeout
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    async def resolve(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> Optional[Locator]:
        """
        Resolve target to the first visible match, or None.

        Args:
            target: Logical target to resolve
            timeout: Overall probe budget in milliseconds
            scope: Page or parent Locator to search under (defaults to page)

        Returns:
            Locator bound to a single node, or None if no candidate matched
        """
        locator, _ = await self._probe(target, timeout, scope)
        return locator

    async def locate(
        self,
        target: LogicalTarget,
        timeout: Optional[int] = None,
        scope: Optional[Scope] = None,
    ) -> Locator:
        """
        Resolve target or fail.

        Raises:
            ElementNotFoundError: When every candidate fails
        """
        locator, errors = await self._probe(target, timeout, scope)
        if locator is not None:
            return locator

        error_msg = (
            f"All locators failed for '{target.name}':\n" +
            "\n".join(f"  - {err}" for err in errors)
        )
        logger.error(error_msg)
        raise ElementNotFoundError(error_msg)

    async def _probe(
        self,
        target: LogicalTarget,
        timeout: Optional[int],
        scope: Optional[Scope],
    ) -> Tuple[Optional[Locator], List[str]]:
        budget_ms = self.probe_timeout if timeout is None else timeout
        root = self.page if scope is None else scope
        candidates = target.candidates
        deadline = time.monotonic() + budget_ms / 1000
        errors: List[str] = []

        for index, candidate in enumerate(candidates):
            remaining_ms = (deadline - time.monotonic()) * 1000
            slice_ms = max(remaining_ms / (len(candidates) - index), MIN_PROBE_SLICE_MS)
            try:
                locator = candidate.build(root).first
                await locator.wait_for(state="visible", timeout=slice_ms)
            except PlaywrightError as e:
                errors.append(f"{candidate.describe()} -> {first_line(e)[:80]}")
                continue

            self._record(target, index, candidate)
            return locator, errors

        logger.debug(
            f"Element '{target.name}' not found after {len(candidates)} candidates "
            f"({budget_ms}ms budget)"
        )
        return None, errors

    def _record(self, target: LogicalTarget, index: int, candidate: LocatorCandidate) -> None:
        health = LocatorHealth(
            element_name=target.name,
            primary_selector=target.primary.describe(),
            used_fallback=index > 0,
            fallback_name=f"fallback_{index}" if index > 0 else None,
            fallback_selector=candidate.describe() if index > 0 else None,
        )
        self._health_records.append(health)

        if index > 0:
            logger.warning(
                f"Element '{target.name}' used fallback: "
                f"fallback_{index} -> {candidate.describe()}"
            )
            self._fallback_used[target.name] = health
        else:
            logger.debug(f"Element '{target.name}' found: {candidate.describe()}")

    def _union(self, target: LogicalTarget, root: Scope) -> Locator:
        """One locator matching every node any candidate matches."""
        candidates = iter(target.candidates)
        union = next(candidates).build(root)
        for candidate in candidates:
            union = union.or_(candidate.build(root))
        return union

    async def count(
        self,
        target: LogicalTarget,
        scope: Optional[Scope] = None,
    ) -> int:
        """
        Count nodes matched by any candidate, each node once.

        Does not wait for visibility; returns 0 when nothing matches.
        """
        root = self.page if scope is None else scope
        try:
            return await self._union(target, root).count()
        except PlaywrightError as e:
            logger.debug(f"Count failed for '{target.name}': {first_line(e)}")
            return 0

    async def all_matches(
        self,
        target: LogicalTarget,
        scope: Optional[Scope] = None,
    ) -> List[Locator]:
        """Per-node locators over every candidate's matches, in document order."""
        root = self.page if scope is None else scope
        union = self._union(target, root)
        try:
            matches = await union.count()
        except PlaywrightError as e:
            logger.debug(f"Match listing failed for '{target.name}': {first_line(e)}")
            return []
        return [union.nth(i) for i in range(matches)]

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists targets that needed a fallback candidate; these are the
        maintenance candidates whose primary locator should be refreshed.
        """
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "InteractionError",
    "ElementNotFoundError",
    "LocatorHealth",
    "MIN_PROBE_SLICE_MS",
    "first_line",
]
