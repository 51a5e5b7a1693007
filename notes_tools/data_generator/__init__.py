from .notes_data import (
    DEFAULT_PASSWORD,
    INVALID_EMAILS,
    NOTE_CATEGORIES,
    NoteData,
    UserData,
    generate_note,
    generate_user,
    unique_email,
    unique_suffix,
)

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
