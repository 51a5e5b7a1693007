"""
Repository-level pytest configuration.

Provides:
  - `--live` switch that enables the browser scenarios against the real app
  - `--browser-name` / `--headed` overrides for the configured browser
  - One-time loguru initialization for every test session

Credentials are never stored here; live account scenarios read
`AUTH_EMAIL` / `AUTH_PASSWORD` from the environment (or config/config.yaml).
"""

from __future__ import annotations

import os
from typing import Generator

import pytest

from notes_tools.common import ConfigLoader, init_logger


def pytest_addoption(parser):
    group = parser.getgroup("notes-app", "Notes app end-to-end suite")
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run e2e scenarios against the live notes application",
    )
    group.addoption(
        "--browser-name",
        action="store",
        default=None,
        choices=("chromium", "firefox", "webkit"),
        help="Browser for e2e scenarios (overrides ui.browser)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Show the browser window (overrides ui.headless)",
    )


def pytest_configure(config):
    """Forward command line overrides to the configuration layer."""
    if config.getoption("--live"):
        os.environ["UI_LIVE"] = "true"
    if config.getoption("--browser-name"):
        os.environ["UI_BROWSER"] = config.getoption("--browser-name")
    if config.getoption("--headed"):
        os.environ["UI_HEADLESS"] = "false"



@pytest.fixture(scope="session", autouse=True)
def _session_logging() -> Generator[None, None, None]:
    """Configure loguru once per session from `logging.*` config keys."""
    init_logger()
    yield


@pytest.fixture
def fresh_config() -> Generator[None, None, None]:
    """Drop the cached configuration before and after a test."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
