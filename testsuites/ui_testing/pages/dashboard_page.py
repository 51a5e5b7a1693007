"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

Notes dashboard (`/dashboard`): note creation, editing, deletion, search
and category filtering.

Note-specific elements are addressed through `note_card(title)`, which
narrows the generic card target to cards containing the title text; the
result is a per-call target and is never stored on the page.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.locators import (
    LogicalTarget,
    by_css,
    by_placeholder,
    by_role,
    by_test_id,
    target_table,
)
from testsuites.ui_testing.framework.page_base import BasePage


ADD_NOTE_BUTTON = LogicalTarget(
    "add_note_button",
    by_test_id("add-new-note"),
    by_test_id("add-note"),
    by_role("button", name=re.compile(r"^\s*\+?\s*add note", re.I)),
    by_css("button", has_text=re.compile(r"^\s*(add|create|new)\b", re.I)),
)
NOTE_CARD = LogicalTarget(
    "note_card",
    by_test_id("note-card"),
    by_css("[data-testid*='note-card']"),
    by_css("[class*='note-item']"),
)
NOTE_TITLE_INPUT = LogicalTarget(
    "note_title_input",
    by_test_id("note-title"),
    by_css("input[name='title']"),
    by_placeholder(re.compile(r"title", re.I)),
)
NOTE_CONTENT_TEXTAREA = LogicalTarget(
    "note_content_textarea",
    by_test_id("note-description"),
    by_css("textarea[name='description']"),
    by_css("textarea[placeholder*='description' i]"),
    by_css("textarea[placeholder*='content' i]"),
)
NOTE_CATEGORY_SELECT = LogicalTarget(
    "note_category_select",
    by_test_id("note-category"),
    by_css("select[name='category']"),
)
NOTE_COMPLETED_CHECKBOX = LogicalTarget(
    "note_completed_checkbox",
    by_test_id("note-completed"),
    by_test_id("toggle-note-switch"),
    by_css("input[type='checkbox']"),
)
SAVE_NOTE_BUTTON = LogicalTarget(
    "save_note_button",
    by_test_id("note-submit"),
    by_css("[data-testid*='save']"),
    by_css("button", has_text=re.compile(r"^\s*(save|create|update|add)\b", re.I)),
)
DELETE_NOTE_BUTTON = LogicalTarget(
    "delete_note_button",
    by_test_id("note-delete"),
    by_css("[data-testid*='delete']"),
    by_role("button", name=re.compile(r"delete", re.I)),
)
EDIT_NOTE_BUTTON = LogicalTarget(
    "edit_note_button",
    by_test_id("note-edit"),
    by_css("[data-testid*='edit']"),
    by_role("button", name=re.compile(r"edit", re.I)),
)
CONFIRM_DELETE_DIALOG = LogicalTarget(
    "confirm_delete_dialog",
    by_role("dialog"),
    by_css("[class*='modal'][class*='show']"),
    by_css("[class*='dialog']"),
)
CONFIRM_DELETE_BUTTON = LogicalTarget(
    "confirm_delete_button",
    by_test_id("note-delete-confirm"),
    by_role("button", name=re.compile(r"^\s*(confirm|yes|delete)\b", re.I)),
)
CANCEL_BUTTON = LogicalTarget(
    "cancel_button",
    by_test_id("note-delete-cancel"),
    by_role("button", name=re.compile(r"^\s*(cancel|no)\b", re.I)),
)
SEARCH_INPUT = LogicalTarget(
    "search_input",
    by_test_id("search-input"),
    by_css("[data-testid*='search'] input"),
    by_placeholder(re.compile(r"search", re.I)),
)
SEARCH_BUTTON = LogicalTarget(
    "search_button",
    by_test_id("search-btn"),
    by_role("button", name="Search", exact=True),
)
CATEGORY_FILTER_SELECT = LogicalTarget(
    "category_filter_select",
    by_css("select[class*='filter']"),
    by_css("[data-testid*='category'] select"),
)
ALL_CATEGORIES_TAB = LogicalTarget(
    "all_categories_tab",
    by_test_id("category-all"),
    by_role("button", name="All", exact=True),
)
USER_PROFILE_LINK = LogicalTarget(
    "user_profile_link",
    by_test_id("profile"),
    by_css("a[href*='profile']"),
    by_role("button", name="Profile"),
)
LOGOUT_BUTTON = LogicalTarget(
    "logout_button",
    by_test_id("logout"),
    by_role("button", name="Logout"),
    by_role("link", name="Logout"),
)
SUCCESS_MESSAGE = LogicalTarget(
    "success_message",
    by_css("[class*='alert-success']"),
    by_css("[class*='success']"),
    by_role("status"),
)
ERROR_MESSAGE = LogicalTarget(
    "error_message",
    by_css("[class*='alert-danger']"),
    by_css("[class*='error']"),
    by_role("alert"),
)


def category_tab(category: str) -> LogicalTarget:
    """Filter tab for one note category ('Home', 'Work', 'Personal')."""
    return LogicalTarget(
        f"category_tab[{category}]",
        by_test_id(f"category-{category.lower()}"),
        by_role("button", name=category, exact=True),
    )


class DashboardPage(BasePage):
    """Notes dashboard page object (async)."""

    URL_PATH = "/dashboard"
    TARGETS = target_table(
        ADD_NOTE_BUTTON,
        NOTE_CARD,
        NOTE_TITLE_INPUT,
        NOTE_CONTENT_TEXTAREA,
        NOTE_CATEGORY_SELECT,
        NOTE_COMPLETED_CHECKBOX,
        SAVE_NOTE_BUTTON,
        DELETE_NOTE_BUTTON,
        EDIT_NOTE_BUTTON,
        CONFIRM_DELETE_DIALOG,
        CONFIRM_DELETE_BUTTON,
        CANCEL_BUTTON,
        SEARCH_INPUT,
        SEARCH_BUTTON,
        CATEGORY_FILTER_SELECT,
        ALL_CATEGORIES_TAB,
        USER_PROFILE_LINK,
        LOGOUT_BUTTON,
        SUCCESS_MESSAGE,
        ERROR_MESSAGE,
    )

    async def is_logged_in(self, timeout: Optional[int] = None) -> bool:
        """Whether the browser lands on the dashboard within `timeout`."""
        return await self.is_on_url(
            "**/dashboard", self.timeouts.message if timeout is None else timeout
        )

    # =========================================================================
    # Note form
    # =========================================================================

    async def click_add_note(self) -> None:
        await self.actions.click(ADD_NOTE_BUTTON)

    async def enter_note_title(self, title: str) -> None:
        await self.actions.fill(NOTE_TITLE_INPUT, title)

    async def enter_note_content(self, content: str) -> None:
        await self.actions.fill(NOTE_CONTENT_TEXTAREA, content)

    async def select_note_category(self, category: str) -> None:
        await self.actions.select_option(NOTE_CATEGORY_SELECT, category)

    async def click_save_note(self) -> None:
        await self.actions.click(SAVE_NOTE_BUTTON)

    async def create_note(
        self,
        title: str,
        content: str,
        category: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Open the note form, fill it and save.

        Order is fixed: add, title, content, (category), save. The first
        failing step aborts the action; nothing is retried.
        """
        async def steps() -> None:
            await self.click_add_note()
            await self.enter_note_title(title)
            await self.enter_note_content(content)
            if category is not None:
                await self.select_note_category(category)
            await self.click_save_note()

        await self.run_action("create_note", steps(), timeout)

    async def is_note_form_open(self) -> bool:
        return await self.actions.is_visible(NOTE_TITLE_INPUT)

    async def update_note(self, title: str, content: str, timeout: Optional[int] = None) -> None:
        """Overwrite title and content in the open note form and save."""
        async def steps() -> None:
            await self.enter_note_title(title)
            await self.enter_note_content(content)
            await self.click_save_note()

        await self.run_action("update_note", steps(), timeout)

    # =========================================================================
    # Note cards
    # =========================================================================

    def note_card(self, title: str) -> LogicalTarget:
        """Card target narrowed to cards showing `title`."""
        return NOTE_CARD.scoped_to_text(title, name=f"note_card[{title}]")

    async def get_notes_count(self) -> int:
        return await self.actions.count(NOTE_CARD)

    async def get_visible_notes_count(self) -> int:
        """Cards currently visible (after search or filtering)."""
        return await self.actions.count_visible(NOTE_CARD)

    async def note_exists(self, title: str, timeout: Optional[int] = None) -> bool:
        return await self.actions.is_visible(self.note_card(title), timeout)

    async def click_note(self, title: str) -> None:
        await self.actions.click(self.note_card(title))

    async def _card_scope(self, title: Optional[str]) -> Optional[Locator]:
        if title is None:
            return None
        return await self.smart.locate(self.note_card(title), self.timeouts.action)

    async def click_edit_note(self, title: Optional[str] = None) -> None:
        """Open the edit form of the first note, or of the note titled `title`."""
        await self.actions.click(EDIT_NOTE_BUTTON, scope=await self._card_scope(title))

    async def click_delete_note(self, title: Optional[str] = None) -> None:
        """Press delete on the first note, or on `title`, without confirming."""
        await self.actions.click(DELETE_NOTE_BUTTON, scope=await self._card_scope(title))

    async def delete_note(self, title: Optional[str] = None) -> bool:
        """
        Delete a note and confirm the dialog.

        Without `title` the first visible delete button is used. When no
        delete button is visible nothing happens.

        Returns:
            True if a deletion was confirmed
        """
        with allure.step(f"Delete note{f' {title}' if title else ''}"):
            scope = await self._card_scope(title)
            if not await self.actions.is_visible(DELETE_NOTE_BUTTON, scope=scope):
                logger.info("No delete button visible, nothing to delete")
                return False

            await self.actions.click(DELETE_NOTE_BUTTON, scope=scope)
            dialog = await self.actions.wait_for_element(
                CONFIRM_DELETE_DIALOG, self.timeouts.message
            )
            await self.actions.click(CONFIRM_DELETE_BUTTON, scope=dialog)
            return True

    async def cancel_delete(self) -> None:
        await self.actions.click(CANCEL_BUTTON)

    async def toggle_note(self, title: Optional[str] = None) -> None:
        """Flip the completed state of the first note, or of `title`."""
        await self.actions.click(NOTE_COMPLETED_CHECKBOX, scope=await self._card_scope(title))

    # =========================================================================
    # Search and filters
    # =========================================================================

    async def search_notes(self, query: str) -> None:
        """Type `query` into the search box and submit it when a button exists."""
        with allure.step(f"Search notes: {query}"):
            await self.actions.fill(SEARCH_INPUT, query)
            if await self.actions.is_visible(SEARCH_BUTTON):
                await self.actions.click(SEARCH_BUTTON)

    async def clear_search(self) -> None:
        await self.actions.clear(SEARCH_INPUT)
        if await self.actions.is_visible(SEARCH_BUTTON):
            await self.actions.click(SEARCH_BUTTON)

    async def filter_by_category(self, category: str) -> bool:
        """
        Show only notes of `category`.

        Uses the category tab when present, otherwise a filter dropdown.

        Returns:
            False when the dashboard offers no category filter
        """
        tab = category_tab(category)
        if await self.actions.is_visible(tab):
            await self.actions.click(tab)
            return True
        if await self.actions.is_visible(CATEGORY_FILTER_SELECT):
            await self.actions.select_option(CATEGORY_FILTER_SELECT, category)
            return True

        logger.warning(f"No category filter available for '{category}'")
        return False

    async def clear_all_filters(self) -> None:
        """Empty the search box and reset the category filter."""
        await self.clear_search()
        if await self.actions.is_visible(ALL_CATEGORIES_TAB):
            await self.actions.click(ALL_CATEGORIES_TAB)
        elif await self.actions.is_visible(CATEGORY_FILTER_SELECT):
            await self.actions.select_option(CATEGORY_FILTER_SELECT, index=0)

    # =========================================================================
    # Messages and account
    # =========================================================================

    async def get_success_message(self) -> Optional[str]:
        return await self.actions.read_text(SUCCESS_MESSAGE, self.timeouts.message) or None

    async def get_error_message(self) -> Optional[str]:
        return await self.actions.read_text(ERROR_MESSAGE, self.timeouts.message) or None

    async def click_user_profile(self) -> None:
        await self.actions.click(USER_PROFILE_LINK)

    async def logout(self) -> None:
        await self.actions.click(LOGOUT_BUTTON)


__all__ = [
    "DashboardPage",
    "NOTE_CARD",
    "category_tab",
]
