"""
================================================================================
Notes Management Smoke Scenarios (Async / Playwright)
================================================================================

Core note operations on the dashboard of a logged-in account:
create, edit, delete, and create with empty content.

All scenarios need `auth.email` / `auth.password`; without them they skip.

================================================================================
"""

import allure
import pytest

from notes_tools.data_generator import generate_note, unique_suffix
from testsuites.ui_testing.pages.dashboard_page import DashboardPage


@allure.epic("Notes App")
@allure.feature("Notes")
@pytest.mark.smoke
@pytest.mark.notes
class TestNotesSmoke:
    """Notes smoke suite (async)."""

    @allure.story("Create")
    @allure.title("Create a new note")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    async def test_create_note(self, authenticated_dashboard: DashboardPage):
        note = generate_note(content="This is a test note created for smoke testing.")

        await authenticated_dashboard.create_note(note.title, note.content)

        assert await authenticated_dashboard.note_exists(
            note.title, authenticated_dashboard.timeouts.message
        )

    @allure.story("Edit")
    @allure.title("Edit an existing note")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    async def test_edit_note(self, authenticated_dashboard: DashboardPage):
        original = generate_note()
        updated = generate_note(title=f"Updated {original.title}", content="Updated content")
        await authenticated_dashboard.create_note(original.title, original.content)

        await authenticated_dashboard.click_edit_note(original.title)
        await authenticated_dashboard.update_note(updated.title, updated.content)

        assert await authenticated_dashboard.note_exists(
            updated.title, authenticated_dashboard.timeouts.message
        )

    @allure.story("Delete")
    @allure.title("Delete a note")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    async def test_delete_note(self, authenticated_dashboard: DashboardPage):
        note = generate_note()
        await authenticated_dashboard.create_note(note.title, note.content)
        initial_count = await authenticated_dashboard.get_notes_count()

        assert await authenticated_dashboard.delete_note(note.title)

        assert await authenticated_dashboard.get_notes_count() <= initial_count

    @allure.story("Create")
    @allure.title("Create a note with empty content")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    async def test_create_note_with_empty_content(self, authenticated_dashboard: DashboardPage):
        note = generate_note(title=f"Note with Empty Content {unique_suffix()}", content="")

        await authenticated_dashboard.click_add_note()
        await authenticated_dashboard.enter_note_title(note.title)
        await authenticated_dashboard.click_save_note()

        # Empty description is either accepted or rejected with a message
        created = await authenticated_dashboard.note_exists(
            note.title, authenticated_dashboard.timeouts.message
        )
        assert created or await authenticated_dashboard.get_error_message()
