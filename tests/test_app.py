"""Key-driven tests for the Textual app using the built-in pilot."""

from __future__ import annotations

import asyncio

import pytest

from kitchen_tracker.derive import incidents_of
from kitchen_tracker.kitchen_app import KitchenTrackerApp
from kitchen_tracker.models import TaskStatus
from kitchen_tracker.registration_modal import RegistrationModal
from kitchen_tracker.store import KitchenStore


@pytest.fixture(autouse=True)
def debug_log(tmp_path, monkeypatch):
    path = tmp_path / "debug.log"
    monkeypatch.setattr("kitchen_tracker.kitchen_app.DEBUG_LOG_PATH", str(path))
    return path


def run(app, *keys):
    async def drive():
        async with app.run_test() as pilot:
            await pilot.press(*keys)
            await pilot.pause()

    asyncio.run(drive())
    return app


class TestSearch:

    def test_typing_filters_case_insensitively(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "slash", "l", "a", "r", "a")
        assert app.search_query == "lara"
        assert {k.seller for k in app._filtered_kitchens()} == {"Lara"}

    def test_single_character_does_not_filter(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "slash", "x")
        assert len(app._filtered_kitchens()) == len(app.store.kitchens)

    def test_escape_keeps_filter_and_c_clears(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "slash", "r", "u", "escape")
        assert app.input_state == "normal"
        assert app.search_query == "ru"

        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "slash", "r", "u", "escape", "c")
        assert app.search_query == ""


class TestSelection:

    def test_enter_selects_row_under_cursor(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "down", "enter")
        assert app.selected_kitchen_id == "k-002"

    def test_x_clears_selection(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "enter", "x")
        assert app.selected_kitchen_id is None

    def test_history_toggle_is_single_id(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "enter", "e")
        assert app.expanded_incident_id == "i-002"

        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "enter", "e", "n", "e")
        assert app.expanded_incident_id == "i-001"

        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "enter", "e", "e")
        assert app.expanded_incident_id is None


class TestRegistrationModal:

    def test_register_adds_kitchen_and_resets_form(self):
        store = KitchenStore.with_sample_data()
        before = len(store.kitchens)
        app = KitchenTrackerApp(store)

        async def drive():
            async with app.run_test() as pilot:
                await pilot.press("a")
                await pilot.press("l", "d", "a", "p", "1", "tab")
                await pilot.press("8", "0", "1", "tab")
                await pilot.press("j", "u", "a", "n", "enter")
                await pilot.pause()
                assert isinstance(app.screen, RegistrationModal)
                assert app.screen.form.ldap == ""
                assert app.screen.form.seller == "Lara"
                await pilot.press("escape")
                await pilot.pause()
                assert not isinstance(app.screen, RegistrationModal)

        asyncio.run(drive())

        assert len(store.kitchens) == before + 1
        added = store.kitchens[-1]
        assert (added.ldap, added.order_number, added.client_name) == ("ldap1", "801", "juan")
        assert added.seller == "Lara"
        assert added.installer == "Instalador A"

    def test_incomplete_form_shows_error(self):
        store = KitchenStore.with_sample_data()
        before = len(store.kitchens)
        app = KitchenTrackerApp(store)

        async def drive():
            async with app.run_test() as pilot:
                await pilot.press("a", "l", "enter")
                await pilot.pause()
                assert app.screen.error == "Please fill in all fields."
                assert app.screen.form.ldap == "l"

        asyncio.run(drive())
        assert len(store.kitchens) == before


class TestSearchEditing:

    def test_backspace_edits_query_and_stays_in_search(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "slash", "r", "u", "backspace")
        assert app.search_query == "r"
        assert app.input_state == "search"

    def test_enter_selects_filtered_row_and_leaves_search(self):
        app = run(KitchenTrackerApp(KitchenStore.with_sample_data()), "slash", "r", "u", "enter")
        assert app.selected_kitchen_id == "k-003"
        assert app.input_state == "normal"
        assert app.search_query == "ru"


class TestIncidentActions:

    def test_s_advances_focused_incident_status(self):
        store = KitchenStore.with_sample_data()
        app = run(KitchenTrackerApp(store), "enter", "s")
        updated = next(i for i in store.incidents if i.id == "i-002")
        assert updated.status is TaskStatus.COMPLETED
        assert updated.history[-1].status_at_time is TaskStatus.COMPLETED
        assert len(updated.history) == 3
        assert app.selected_kitchen_id == "k-001"

    def test_i_opens_pending_incident_on_selected_kitchen(self):
        store = KitchenStore.with_sample_data()
        before = len(incidents_of(store.incidents, "k-001"))
        run(KitchenTrackerApp(store), "enter", "i")
        own = incidents_of(store.incidents, "k-001")
        assert len(own) == before + 1
        assert own[-1].status is TaskStatus.PENDING

    def test_i_without_selection_does_nothing(self):
        store = KitchenStore.with_sample_data()
        before = len(store.incidents)
        run(KitchenTrackerApp(store), "i")
        assert len(store.incidents) == before


class TestKitchenListWindow:

    @pytest.fixture
    def app(self):
        return KitchenTrackerApp(KitchenStore())

    def rendered_lines(self, total, start, end):
        return (end - start) + (1 if start > 0 else 0) + (1 if end < total else 0)

    @pytest.mark.parametrize("selected", [0, 1, 5, 10, 18, 19])
    def test_window_and_markers_fit_visible_rows(self, app, selected):
        start, end = app._marked_window(20, 6, selected)
        assert start <= selected < end
        assert self.rendered_lines(20, start, end) <= 6

    def test_no_markers_when_everything_fits(self, app):
        assert app._marked_window(5, 6, 4) == (0, 5)
