"""
================================================================================
Notes Application Test Data Generator
================================================================================

Generates unique, disposable test data for the notes application scenarios:
user accounts for registration flows and note payloads for the dashboard.

Unique values combine a millisecond timestamp with a short random suffix so
that scenarios running in parallel workers never collide on the shared SUT.

================================================================================
"""

import random
import string
import time
from dataclasses import dataclass, field
from typing import List

from loguru import logger


DEFAULT_PASSWORD = "TestPassword123!@"

INVALID_EMAILS: List[str] = [
    "notanemail",
    "invalidemail.com",
    "invalid email@test.com",
    "@no_local_part.com",
    "no_domain@",
]

NOTE_CATEGORIES: List[str] = ["Home", "Work", "Personal"]


def unique_suffix() -> str:
    """Millisecond timestamp plus a short random tail."""
    tail = "".join(random.choices(string.ascii_lowercase + string.digits, k=4))
    return f"{int(time.time() * 1000)}{tail}"


def unique_email(prefix: str = "testuser", domain: str = "test.com") -> str:
    """Generate an email address that has never been registered."""
    return f"{prefix}{unique_suffix()}@{domain}"


@dataclass
class UserData:
    """
    Registration payload.

    Attributes:
        email: Account email (unique by default)
        name: Display name
        password: Password
        confirm_password: Confirmation, defaults to `password`
    """
    email: str = field(default_factory=unique_email)
    name: str = field(default_factory=lambda: f"Test User {unique_suffix()}")
    password: str = DEFAULT_PASSWORD
    confirm_password: str = ""

    def __post_init__(self) -> None:
        if not self.confirm_password:
            self.confirm_password = self.password


@dataclass
class NoteData:
    """
    Note payload.

    Attributes:
        title: Note title (unique by default)
        content: Note description body
        category: One of NOTE_CATEGORIES
    """
    title: str = field(default_factory=lambda: f"Test Note {unique_suffix()}")
    content: str = "This is a test note created by the automation suite."
    category: str = "Home"

    def __post_init__(self) -> None:
        if self.category not in NOTE_CATEGORIES:
            raise ValueError(
                f"Unknown category '{self.category}', expected one of {NOTE_CATEGORIES}"
            )


def generate_user(**overrides) -> UserData:
    """Build a UserData with optional field overrides."""
    user = UserData(**overrides)
    logger.debug(f"Generated user: {user.email}")
    return user


def generate_note(**overrides) -> NoteData:
    """Build a NoteData with optional field overrides."""
    note = NoteData(**overrides)
    logger.debug(f"Generated note: {note.title}")
    return note


__all__ = [
    "DEFAULT_PASSWORD",
    "INVALID_EMAILS",
    "NOTE_CATEGORIES",
    "NoteData",
    "UserData",
    "generate_note",
    "generate_user",
    "unique_email",
    "unique_suffix",
]
