"""Main Textual app class."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from kitchen_tracker.config import DEBUG_LOG_PATH
from kitchen_tracker.derive import (
    filter_kitchens,
    find_kitchen,
    history_view,
    kitchen_quality,
    next_status,
    selected_incidents,
    toggle_expanded,
)
from kitchen_tracker.models import Incident, IncidentCause, Kitchen, NewKitchen
from kitchen_tracker.registration_modal import RegistrationModal
from kitchen_tracker.rendering import format_history, format_incident_header, format_kitchen_row
from kitchen_tracker.store import KitchenStore

NEW_INCIDENT_DESCRIPTION = "Opened from the quality file."


class KitchenTrackerApp(App):
    """A Textual app for searching kitchen projects and browsing their incidents."""

    TITLE = "Kitchen Tracker"
    SUB_TITLE = "Installations / Quality"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #kitchens-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #detail-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #kitchens-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #detail {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_query = reactive("")
    row_index = reactive(0)
    selected_kitchen_id = reactive(None)
    expanded_incident_id = reactive(None)
    incident_index = reactive(0)

    BINDINGS = [
        ("up", "move_row(-1)", "Previous kitchen"),
        ("down", "move_row(1)", "Next kitchen"),
        ("enter", "select_row", "Open kitchen"),
        ("backspace", "backspace_query", "Delete query char"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: KitchenStore | None = None) -> None:
        super().__init__()
        self.store = store if store is not None else KitchenStore.with_sample_data()
        self.system_status = ""
        self._debug_log_path = Path(DEBUG_LOG_PATH)
        self._log_debug("app_init")

    def _log_debug(self, message: str) -> None:
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self._debug_log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._debug_log_path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except OSError:
            return

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="kitchens-pane"):
                yield Static(id="search-bar")
                yield Static("(no kitchens yet)", id="kitchens-list")
            with Vertical(id="detail-pane"):
                yield Static("Quality File", classes="pane-title")
                yield Static(id="detail")

    def on_mount(self) -> None:
        self.input_state = "normal"
        self.search_query = ""
        self.row_index = 0
        self.selected_kitchen_id = None
        self.expanded_incident_id = None
        self.incident_index = 0
        kitchens, incidents = self.store.snapshot()
        self._log_debug(f"on_mount kitchens={len(kitchens)} incidents={len(incidents)}")
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, RegistrationModal):
            return

        if self.input_state == "search":
            self._handle_search_key(event)
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        if key == "/":
            self.input_state = "search"
            self.system_status = ""
            self._refresh_search_bar()
            event.stop()
            return

        if key == "j":
            self.action_move_row(1)
            event.stop()
            return

        if key == "k":
            self.action_move_row(-1)
            event.stop()
            return

        if key == "x":
            self._clear_selection()
            event.stop()
            return

        if key == "c":
            self._set_query("")
            event.stop()
            return

        if key == "n":
            self._move_incident(1)
            event.stop()
            return

        if key == "p":
            self._move_incident(-1)
            event.stop()
            return

        if key == "e":
            self._toggle_current_history()
            event.stop()
            return

        if key == "a":
            self._open_registration()
            event.stop()
            return

        if key == "i":
            self._open_incident()
            event.stop()
            return

        if key == "s":
            self._advance_current_status()
            event.stop()
            return

    def _handle_search_key(self, event: Key) -> None:
        if event.key == "escape":
            self.input_state = "normal"
            self._refresh_search_bar()
            event.stop()
            return

        if event.is_printable and event.character and len(event.character) == 1:
            self._set_query(self.search_query + event.character)
            event.stop()

    def action_move_row(self, delta: int) -> None:
        if isinstance(self.screen, RegistrationModal):
            return
        rows = self._filtered_kitchens()
        if not rows:
            self.row_index = 0
            self._refresh_kitchens(rows)
            return
        self.row_index = (self.row_index + delta) % len(rows)
        self._refresh_kitchens(rows)

    def action_select_row(self) -> None:
        if isinstance(self.screen, RegistrationModal):
            return
        rows = self._filtered_kitchens()
        if not rows:
            return
        if self.row_index >= len(rows):
            self.row_index = 0
        kitchen = rows[self.row_index]
        self.selected_kitchen_id = kitchen.id
        self.incident_index = 0
        self.input_state = "normal"
        self._log_debug(f"select_kitchen id={kitchen.id} order={kitchen.order_number!r}")
        self._refresh_all()

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, RegistrationModal):
            return
        if self.input_state != "search" or not self.search_query:
            return
        self._set_query(self.search_query[:-1])

    def _set_query(self, value: str) -> None:
        self.search_query = value
        self.row_index = 0
        self._refresh_search_bar()
        self._refresh_kitchens(self._filtered_kitchens())

    def _clear_selection(self) -> None:
        if self.selected_kitchen_id is None:
            return
        self._log_debug(f"clear_selection id={self.selected_kitchen_id}")
        self.selected_kitchen_id = None
        self.incident_index = 0
        self._refresh_all()

    def _move_incident(self, delta: int) -> None:
        incidents = self._detail_incidents()
        if not incidents:
            return
        self.incident_index = (self.incident_index + delta) % len(incidents)
        self._refresh_detail()

    def _current_incident(self) -> Incident | None:
        incidents = self._detail_incidents()
        if not incidents:
            return None
        if self.incident_index >= len(incidents):
            self.incident_index = 0
        return incidents[self.incident_index]

    def _toggle_current_history(self) -> None:
        incident = self._current_incident()
        if incident is None:
            return
        if not history_view(incident, self.expanded_incident_id).can_toggle:
            return
        self.expanded_incident_id = toggle_expanded(self.expanded_incident_id, incident.id)
        self._log_debug(f"toggle_history incident={incident.id} expanded={self.expanded_incident_id!r}")
        self._refresh_detail()

    def _open_incident(self) -> None:
        if self.selected_kitchen_id is None:
            return
        incident = self.store.add_incident(self.selected_kitchen_id, IncidentCause.OTHER, NEW_INCIDENT_DESCRIPTION)
        self.incident_index = 0
        self.system_status = "Opened a new incident"
        self._log_debug(f"open_incident id={incident.id} kitchen={incident.kitchen_id}")
        self._refresh_all()

    def _advance_current_status(self) -> None:
        incident = self._current_incident()
        if incident is None:
            return
        new_status = next_status(incident.status)
        self.store.append_note(incident.id, f"Status changed to {new_status.value}", new_status)
        self._log_debug(f"advance_status incident={incident.id} status={new_status.value!r}")
        self._refresh_all()

    def _open_registration(self) -> None:
        self._log_debug("open_registration")
        self.push_screen(RegistrationModal(on_add_kitchen=self._add_kitchen), callback=self._on_registration_closed)

    def _on_registration_closed(self, _result: None) -> None:
        self._refresh_all()

    def _add_kitchen(self, new_kitchen: NewKitchen) -> Kitchen:
        kitchen = self.store.add_kitchen(new_kitchen)
        self.system_status = f"Registered {kitchen.order_number}"
        self._log_debug(f"add_kitchen id={kitchen.id} order={kitchen.order_number!r}")
        self._refresh_all()
        return kitchen

    def _filtered_kitchens(self) -> list[Kitchen]:
        kitchens, _ = self.store.snapshot()
        return filter_kitchens(kitchens, self.search_query)

    def _detail_incidents(self) -> list[Incident]:
        _, incidents = self.store.snapshot()
        return selected_incidents(incidents, self.selected_kitchen_id)

    def _refresh_all(self) -> None:
        self._refresh_search_bar()
        self._refresh_kitchens(self._filtered_kitchens())
        self._refresh_detail()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _marked_window(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        """Window bounds leaving room for the ⋮ markers above and below."""
        start, end = self._window_bounds(total, rows, selected)
        if start == 0 and end == total:
            return (start, end)
        start, end = self._window_bounds(total, max(1, rows - 1), selected)
        if start > 0 and end < total:
            start, end = self._window_bounds(total, max(1, rows - 2), selected)
        return (start, end)

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        text = Text()
        if self.input_state == "search":
            text.append("/", style="bold #ffffff on #2f6db5")
            text.append(f" {self.search_query}|")
        elif self.search_query:
            text.append(f"Filter: {self.search_query}  (/ edit, c clear)")
        else:
            text.append("/ search by order, client, LDAP or staff. A register kitchen.")
        text.append(f"\n{self.system_status or 'Ready'}", style="dim")
        bar.update(text)

    def _refresh_kitchens(self, rows: list[Kitchen]) -> None:
        try:
            list_widget = self.query_one("#kitchens-list", Static)
        except NoMatches:
            return
        if not rows:
            list_widget.update("No results" if self.store.kitchens else "(no kitchens yet)")
            return

        if self.row_index >= len(rows):
            self.row_index = 0

        _, incidents = self.store.snapshot()
        visible_rows = self._visible_rows(list_widget)
        start, end = self._marked_window(len(rows), visible_rows, self.row_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            kitchen = rows[idx]
            pointer = "➤ " if idx == self.row_index else "  "
            marker = "●" if kitchen.id == self.selected_kitchen_id else " "
            lines.append(f"{pointer}{marker} ")
            lines.append_text(format_kitchen_row(kitchen, kitchen_quality(incidents, kitchen.id)))

        if end < len(rows):
            lines.append("\n⋮", style="dim")

        list_widget.update(lines)

    def _refresh_detail(self) -> None:
        try:
            detail_widget = self.query_one("#detail", Static)
        except NoMatches:
            return

        kitchens, incidents = self.store.snapshot()
        kitchen = find_kitchen(kitchens, self.selected_kitchen_id)
        if kitchen is None:
            detail_widget.update("Select a kitchen with Enter to see its incidents.")
            return

        content = Text()
        content.append("Project: ", style="bold")
        content.append(kitchen.order_number, style="bold #5fbf72")
        content.append(f"\n{kitchen.client_name}  installed {kitchen.installation_date}", style="dim")
        content.append("\n\nIncidents and follow-up notes", style="bold")

        own = selected_incidents(incidents, kitchen.id)
        if not own:
            content.append("\n\nNo incidents recorded.", style="dim italic")
            detail_widget.update(content)
            return

        if self.incident_index >= len(own):
            self.incident_index = 0

        for idx, incident in enumerate(own):
            pointer = "➤ " if idx == self.incident_index else "  "
            content.append(f"\n\n{pointer}")
            content.append_text(format_incident_header(incident))
            content.append(f"\n{incident.description}")
            content.append("\n")
            content.append_text(format_history(history_view(incident, self.expanded_incident_id)))

        content.append("\n\nN/P incident, E history, S status, I new incident, X close", style="dim")
        detail_widget.update(content)
