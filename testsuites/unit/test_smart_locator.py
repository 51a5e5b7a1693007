import time

import pytest

from testsuites.ui_testing.framework.locators import LogicalTarget, by_css, by_role, by_test_id
from testsuites.ui_testing.framework.smart_locator import (
    MIN_PROBE_SLICE_MS,
    ElementNotFoundError,
    SmartLocator,
)
from testsuites.unit.fakes import FakeNode

LOGIN_BUTTON = LogicalTarget(
    "login_button",
    by_test_id("login-submit"),
    by_role("button", name="Login"),
    by_css("button[type='submit']"),
)


async def test_primary_candidate_wins(fake_page, smart):
    fake_page.add("testid=login-submit", FakeNode("primary"))
    fake_page.add("button[type='submit']", FakeNode("fallback"))

    locator = await smart.locate(LOGIN_BUTTON)
    await locator.click()

    assert fake_page.actions("click") == [("click", "primary", "")]
    assert not smart.health_records[-1].used_fallback


async def test_first_visible_candidate_in_order_wins(fake_page, smart):
    fake_page.add("testid=login-submit", FakeNode("hidden", visible=False))
    fake_page.add("role=button[name=Login]", FakeNode("by_role"))
    fake_page.add("button[type='submit']", FakeNode("by_css"))

    locator = await smart.resolve(LOGIN_BUTTON)
    await locator.click()

    assert fake_page.actions("click") == [("click", "by_role", "")]
    health = smart.health_records[-1]
    assert health.used_fallback
    assert health.fallback_name == "fallback_1"
    assert health.fallback_selector == "role=button[name=Login]"


async def test_first_match_in_document_order(fake_page, smart):
    fake_page.add("testid=login-submit", FakeNode("first"), FakeNode("second"))

    await (await smart.locate(LOGIN_BUTTON)).click()

    assert fake_page.actions("click") == [("click", "first", "")]


async def test_resolve_returns_none_when_nothing_matches(fake_page, smart):
    assert await smart.resolve(LOGIN_BUTTON) is None
    assert smart.health_records == []


async def test_locate_raises_with_every_failed_candidate(fake_page, smart):
    with pytest.raises(ElementNotFoundError) as excinfo:
        await smart.locate(LOGIN_BUTTON)

    message = str(excinfo.value)
    assert "login_button" in message
    for candidate in LOGIN_BUTTON.candidates:
        assert candidate.describe() in message


async def test_probe_budget_is_shared_between_candidates(fake_page):
    smart = SmartLocator(fake_page, probe_timeout=2000)

    await smart.resolve(LOGIN_BUTTON)

    slices = [timeout for _, timeout in fake_page.probes]
    assert len(slices) == 3
    assert slices[0] == pytest.approx(2000 / 3, abs=50)
    assert all(MIN_PROBE_SLICE_MS <= s <= 2000 for s in slices)


async def test_spent_budget_still_probes_each_candidate_minimally(fake_page, smart):
    await smart.resolve(LOGIN_BUTTON, timeout=0)

    assert [timeout for _, timeout in fake_page.probes] == [MIN_PROBE_SLICE_MS] * 3


async def test_candidate_appearing_within_its_slice_is_found(fake_page, smart):
    fake_page.add("testid=login-submit", FakeNode("late", appears_after=0.05))

    started = time.monotonic()
    locator = await smart.resolve(LOGIN_BUTTON, timeout=600)

    assert locator is not None
    assert time.monotonic() - started < 0.6


async def test_resolution_is_scoped(fake_page, smart):
    dialog = fake_page.add("role=dialog", FakeNode("dialog"))
    dialog.add("role=button[name=Login]", FakeNode("inside"))
    fake_page.add("role=button[name=Login]", FakeNode("outside"))

    scope = await smart.locate(LogicalTarget("dialog", by_role("dialog")))
    await (await smart.locate(LOGIN_BUTTON, scope=scope)).click()

    assert fake_page.actions("click") == [("click", "inside", "")]


async def test_count_includes_hidden_matches(fake_page, smart):
    fake_page.add("button[type='submit']", FakeNode("a"), FakeNode("b", visible=False))

    assert await smart.count(LOGIN_BUTTON) == 2
    assert len(await smart.all_matches(LOGIN_BUTTON)) == 2


async def test_count_is_the_union_of_every_candidate(fake_page, smart):
    shared = FakeNode("shared")
    fake_page.add("testid=login-submit", shared)
    fake_page.add("role=button[name=Login]", shared, FakeNode("by_role"))
    fake_page.add("button[type='submit']", FakeNode("by_css"))

    assert await smart.count(LOGIN_BUTTON) == 3
    for match in await smart.all_matches(LOGIN_BUTTON):
        await match.click()
    assert [name for _, name, _ in fake_page.actions("click")] == ["shared", "by_role", "by_css"]


async def test_health_report_lists_fallbacks(fake_page, smart):
    assert "No maintenance needed" in smart.get_health_report()

    fake_page.add("button[type='submit']", FakeNode("by_css"))
    await smart.locate(LOGIN_BUTTON)

    report = smart.get_health_report()
    assert "[login_button]" in report
    assert "Failed primary: testid=login-submit" in report
    assert "fallback_2 -> button[type='submit']" in report
