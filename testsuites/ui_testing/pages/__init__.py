"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Logical targets with ordered locator fallbacks
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .register_page import RegisterPage
from .dashboard_page import DashboardPage

__all__ = [
    "LoginPage",
    "RegisterPage",
    "DashboardPage",
]

