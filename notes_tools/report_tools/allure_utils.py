"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by page objects and fixtures to enrich Allure
reports with debugging context (screenshots, URLs, captured API traffic).

================================================================================
"""

import json
from typing import Any

import allure


def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(image: bytes, name: str = "Screenshot"):
    """
    Attach a PNG image to Allure report.

    Args:
        image: Raw PNG bytes
        name: Attachment name
    """
    allure.attach(
        image,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


__all__ = [
    "attach_json",
    "attach_text",
    "attach_png",
]
