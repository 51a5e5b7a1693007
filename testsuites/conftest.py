"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and gates the live browser scenarios.

================================================================================
"""

import pytest

from notes_tools.common import get_config


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against the live application"
    )
    config.addinivalue_line(
        "markers", "unit: Interaction-layer tests against an in-memory page"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and registration"
    )
    config.addinivalue_line(
        "markers", "notes: Tests related to note management"
    )


def pytest_collection_modifyitems(config, items):
    """
    Add directory-based markers and skip live scenarios unless enabled.

    Live runs are enabled with `--live` or `UI_LIVE=true` (`ui.live`).
    """
    live = config.getoption("--live") or get_config("ui.live", False)
    skip_live = pytest.mark.skip(reason="live e2e run not enabled (use --live or UI_LIVE=true)")

    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)

        if "e2e" in item.keywords and not live:
            item.add_marker(skip_live)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Notes App End-to-End Suite",
        f"Base URL: {get_config('ui.base_url', '')}",
        f"Browser: {get_config('ui.browser', 'chromium')} "
        f"(live={bool(config.getoption('--live') or get_config('ui.live', False))})",
        "=" * 60,
        "",
    ]
