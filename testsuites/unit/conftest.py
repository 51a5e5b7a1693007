import pytest
from loguru import logger

from testsuites.ui_testing.framework.element_actions import ElementActions, Timeouts
from testsuites.ui_testing.framework.smart_locator import SmartLocator
from testsuites.unit.fakes import BASE_URL, FakePage

FAST_TIMEOUTS = Timeouts(probe=200, action=300, message=200, navigation=500)


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage(url=f"{BASE_URL}/login")


@pytest.fixture
def timeouts() -> Timeouts:
    return FAST_TIMEOUTS


@pytest.fixture
def smart(fake_page) -> SmartLocator:
    return SmartLocator(fake_page, probe_timeout=FAST_TIMEOUTS.probe)


@pytest.fixture
def actions(fake_page, smart) -> ElementActions:
    return ElementActions(fake_page, smart, FAST_TIMEOUTS)


@pytest.fixture
def caplog_loguru(caplog):
    """caplog that also receives loguru records."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)
