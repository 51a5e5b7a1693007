"""
In-memory stand-ins for the Playwright Page / Locator surface used by the
interaction layer.

Nodes are registered under the same selector strings that
`LocatorCandidate.describe()` produces (without `has_text` filters, which
are applied to node text like Playwright does), e.g.:

    page.add("testid=login-email", FakeNode("email"))
    page.add("role=button[name=Login]", FakeNode("login"))
    page.add("[class*='alert']", FakeNode("alert", text="Oops"))

Every mutating call is appended to `page.events` and every visibility wait
to `page.probes`, so tests can assert on order and timeout budgets.
Setting `page.closed` makes URL waits fail the way a closed target does.
"""

from __future__ import annotations

import asyncio
import fnmatch
import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

BASE_URL = "https://notes.test/notes/app"


def pattern_repr(pattern: Any) -> str:
    if isinstance(pattern, re.Pattern):
        return f"/{pattern.pattern}/"
    return pattern


def text_matches(text: str, pattern: Any) -> bool:
    if isinstance(pattern, re.Pattern):
        return pattern.search(text) is not None
    return " ".join(pattern.split()).lower() in " ".join(text.split()).lower()


@dataclass
class FakeNode:
    """
    One DOM element.

    Attributes:
        name: Identifier used in `page.events`
        appears_after: Seconds after page creation before it becomes visible
        detached: Visibility checks raise a Playwright error
        on_click: Callback run after a successful click
    """
    name: str
    text: str = ""
    value: str = ""
    visible: bool = True
    enabled: bool = True
    editable: bool = True
    appears_after: float = 0.0
    detached: bool = False
    options: List[str] = field(default_factory=list)
    children: Dict[str, List["FakeNode"]] = field(default_factory=dict)
    on_click: Optional[Callable[[], None]] = None

    def add(self, key: str, *nodes: "FakeNode") -> "FakeNode":
        self.children.setdefault(key, []).extend(nodes)
        return nodes[0]


class _Queryable:
    """Playwright-style locator factories over a key -> nodes lookup."""

    page: "FakePage"

    def _nodes_for(self, key: str) -> List[FakeNode]:
        raise NotImplementedError

    def _query(self, key: str) -> "FakeLocator":
        return FakeLocator(self.page, key, lambda: self._nodes_for(key))

    def locator(self, selector: str) -> "FakeLocator":
        return self._query(selector)

    def get_by_test_id(self, test_id: str) -> "FakeLocator":
        return self._query(f"testid={test_id}")

    def get_by_role(self, role: str, name: Any = None, exact: bool = False) -> "FakeLocator":
        if name is None:
            return self._query(f"role={role}")
        return self._query(f"role={role}[name={pattern_repr(name)}]")

    def get_by_text(self, text: Any, exact: bool = False) -> "FakeLocator":
        return self._query(f"text={pattern_repr(text)}")

    def get_by_placeholder(self, text: Any, exact: bool = False) -> "FakeLocator":
        return self._query(f"placeholder={pattern_repr(text)}")

    def get_by_label(self, text: Any, exact: bool = False) -> "FakeLocator":
        return self._query(f"label={pattern_repr(text)}")


class FakeLocator(_Queryable):
    """Lazy query; resolves its nodes on every call like a real Locator."""

    def __init__(
        self,
        page: "FakePage",
        key: str,
        source: Callable[[], List[FakeNode]],
        index: Optional[int] = None,
    ):
        self.page = page
        self.key = key
        self._source = source
        self._index = index

    # -- query building ----------------------------------------------------

    def _matches(self) -> List[FakeNode]:
        return self._source()

    def _node(self) -> Optional[FakeNode]:
        matches = self._matches()
        index = self._index or 0
        return matches[index] if index < len(matches) else None

    def _require_node(self) -> FakeNode:
        node = self._node()
        if node is None:
            raise PlaywrightTimeoutError(f"Timeout exceeded waiting for {self.key}")
        return node

    def _nodes_for(self, key: str) -> List[FakeNode]:
        node = self._node()
        return [] if node is None else node.children.get(key, [])

    def filter(self, has_text: Any = None) -> "FakeLocator":
        source = self._source
        return FakeLocator(
            self.page,
            f"{self.key} >> has_text={pattern_repr(has_text)}",
            lambda: [n for n in source() if text_matches(n.text, has_text)],
            self._index,
        )

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        """Nodes matched by either locator, each once."""
        left, right = self._source, other._source

        def union() -> List[FakeNode]:
            nodes: List[FakeNode] = []
            for node in left() + right():
                if not any(node is seen for seen in nodes):
                    nodes.append(node)
            return nodes

        return FakeLocator(self.page, f"{self.key} | {other.key}", union)

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.key, self._source, index)

    # -- queries -----------------------------------------------------------

    async def count(self) -> int:
        return len(self._matches())

    def _visible_now(self, node: FakeNode) -> bool:
        if node.detached:
            raise PlaywrightError("Element is not attached to the DOM")
        return node.visible and self.page.elapsed() >= node.appears_after

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.probes.append((self.key, timeout))
        node = self._node()
        if node is not None and node.visible:
            delay = node.appears_after - self.page.elapsed()
            if delay <= 0:
                return
            if timeout is not None and delay * 1000 <= timeout:
                await asyncio.sleep(delay)
                return
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.key}")

    async def is_visible(self) -> bool:
        node = self._node()
        return node is not None and self._visible_now(node)

    async def is_enabled(self) -> bool:
        return self._require_node().enabled

    async def is_editable(self) -> bool:
        node = self._require_node()
        return node.enabled and node.editable

    async def text_content(self, timeout: Optional[float] = None) -> Optional[str]:
        return self._require_node().text

    async def input_value(self, timeout: Optional[float] = None) -> str:
        return self._require_node().value

    # -- actions -----------------------------------------------------------

    async def fill(self, value: str, timeout: Optional[float] = None) -> None:
        node = self._require_node()
        if not node.editable:
            raise PlaywrightError(f"Element {node.name} is not editable")
        node.value = value
        self.page.events.append(("fill", node.name, value))

    async def clear(self, timeout: Optional[float] = None) -> None:
        node = self._require_node()
        node.value = ""
        self.page.events.append(("clear", node.name, ""))

    async def click(self, timeout: Optional[float] = None) -> None:
        node = self._require_node()
        if not node.enabled:
            raise PlaywrightError(f"Element {node.name} is disabled")
        self.page.events.append(("click", node.name, ""))
        if node.on_click is not None:
            node.on_click()

    async def select_option(
        self,
        value: Optional[str] = None,
        index: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> List[str]:
        node = self._require_node()
        node.value = node.options[index] if index is not None else value
        self.page.events.append(("select", node.name, node.value))
        return [node.value]


class FakePage(_Queryable):
    """Page with a flat selector registry and a settable URL."""

    def __init__(self, url: str = "about:blank"):
        self.page = self
        self.url = url
        self.nodes: Dict[str, List[FakeNode]] = {}
        self.events: List[Tuple[str, str, str]] = []
        self.probes: List[Tuple[str, Optional[float]]] = []
        self.handlers: Dict[str, List[Callable]] = {}
        self.closed = False
        self._created = time.monotonic()

    def elapsed(self) -> float:
        return time.monotonic() - self._created

    def add(self, key: str, *nodes: FakeNode) -> FakeNode:
        """Register nodes under a selector key; returns the first one."""
        self.nodes.setdefault(key, []).extend(nodes)
        return nodes[0]

    def remove(self, key: str, node: FakeNode) -> None:
        self.nodes[key] = [n for n in self.nodes[key] if n is not node]

    def _nodes_for(self, key: str) -> List[FakeNode]:
        return self.nodes.get(key, [])

    def actions(self, *kinds: str) -> List[Tuple[str, str, str]]:
        """Recorded events, optionally restricted to some kinds."""
        return [e for e in self.events if not kinds or e[0] in kinds]

    # -- page API ----------------------------------------------------------

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url
        self.events.append(("goto", url, wait_until or ""))

    async def wait_for_url(self, pattern: Any, timeout: Optional[float] = None, wait_until: Optional[str] = None):
        if self.closed:
            raise PlaywrightError("Target page, context or browser has been closed")
        if isinstance(pattern, re.Pattern):
            matched = pattern.search(self.url) is not None
        elif callable(pattern):
            matched = pattern(self.url)
        else:
            matched = fnmatch.fnmatch(self.url, pattern)
        if not matched:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for URL {pattern}")

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        self.events.append(("screenshot", path or "", ""))
        return b"\x89PNG fake"
