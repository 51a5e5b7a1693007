"""
================================================================================
Notes Tools
================================================================================

Support utilities for the notes application end-to-end suite.

Modules:
    - common: Configuration loading and loguru logging setup
    - report_tools: Allure attachment helpers
    - data_generator: Unique users and notes for scenarios

Example:
    from notes_tools.common import get_config, init_logger
    from notes_tools.data_generator import generate_user

    init_logger()
    user = generate_user()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
    "data_generator",
]
