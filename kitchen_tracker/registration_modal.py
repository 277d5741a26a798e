"""Kitchen registration modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from kitchen_tracker.constant import INSTALLERS, SELLERS
from kitchen_tracker.models import NewKitchen
from kitchen_tracker.registration import (
    FIELD_LABELS,
    RegistrationError,
    RegistrationFields,
    cycle_option,
    register,
)


class RegistrationModal(ModalScreen[None]):
    """Form to register a new kitchen project."""

    CSS = """
    RegistrationModal {
        align: center middle;
        background: $background 60%;
    }

    #registration-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #registration-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #registration-body {
        color: white;
        margin-bottom: 1;
    }

    #registration-status {
        margin-bottom: 1;
    }

    #registration-help {
        color: #dddddd;
    }
    """

    _FIELD_ORDER = ("ldap", "order_number", "client_name", "seller", "installer", "installation_date")
    _CHOICE_FIELDS = {"seller": SELLERS, "installer": INSTALLERS}

    def __init__(self, on_add_kitchen: Callable[[NewKitchen], object]) -> None:
        super().__init__()
        self.on_add_kitchen = on_add_kitchen
        self.form = RegistrationFields.blank()
        self.cursor_index = 0
        self.error = ""
        self.notice = ""

    def compose(self) -> ComposeResult:
        with Container(id="registration-dialog"):
            yield Static("Register New Kitchen", id="registration-title")
            yield Static(id="registration-body")
            yield Static(id="registration-status")
            yield Static(
                "Tab/↑/↓ field, ←/→ option, Enter register, Esc close",
                id="registration-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        field_name = self._FIELD_ORDER[self.cursor_index]

        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._submit()
            event.stop()
            return

        if event.key in {"tab", "down"}:
            self._move_cursor(1)
            event.stop()
            return

        if event.key in {"shift+tab", "up"}:
            self._move_cursor(-1)
            event.stop()
            return

        if field_name in self._CHOICE_FIELDS:
            if event.key in {"left", "right"}:
                delta = 1 if event.key == "right" else -1
                options = self._CHOICE_FIELDS[field_name]
                setattr(self.form, field_name, cycle_option(options, getattr(self.form, field_name), delta))
                self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            current = getattr(self.form, field_name)
            if current:
                setattr(self.form, field_name, current[:-1])
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            setattr(self.form, field_name, getattr(self.form, field_name) + event.character)
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        event.stop()

    def _move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self._FIELD_ORDER)
        self._refresh_content()

    def _submit(self) -> None:
        order_number = self.form.order_number.strip()
        try:
            self.form = register(self.form, self.on_add_kitchen, SELLERS, INSTALLERS)
        except RegistrationError as exc:
            self.error = str(exc)
            self.notice = ""
            self._refresh_content()
            return

        self.error = ""
        self.notice = f"Registered project {order_number}"
        self.cursor_index = 0
        self._refresh_content()

    def _refresh_content(self) -> None:
        body = self.query_one("#registration-body", Static)
        status = self.query_one("#registration-status", Static)

        content = Text(style="white")
        for idx, field_name in enumerate(self._FIELD_ORDER):
            if idx > 0:
                content.append("\n")
            is_current = idx == self.cursor_index
            pointer = "➤ " if is_current else "  "
            value = getattr(self.form, field_name)
            content.append(f"{pointer}{FIELD_LABELS[field_name]}: ", style="bold white" if is_current else "white")
            if field_name in self._CHOICE_FIELDS:
                content.append(f"‹ {value} ›")
            else:
                content.append(value + ("|" if is_current else ""))
        body.update(content)

        if self.error:
            status.update(Text(self.error, style="#ffb3b3"))
        elif self.notice:
            status.update(Text(self.notice, style="#5fbf72"))
        else:
            status.update("")
