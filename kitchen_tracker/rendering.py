"""Rendering helpers for kitchen rows, incident badges and history notes."""

from __future__ import annotations

from rich.text import Text

from kitchen_tracker.config import DATE_DISPLAY_FORMAT, UNKNOWN_DATE_LABEL
from kitchen_tracker.derive import HistoryView, KitchenQuality, parse_timestamp
from kitchen_tracker.models import HistoryEntry, Incident, Kitchen, TaskStatus


def status_badge_style(status: TaskStatus) -> str:
    """Return a consistent badge style for incident status tags."""
    if status is TaskStatus.COMPLETED:
        return "bold #0b1f0f on #5fbf72"
    return "bold #2b1a00 on #f0b429"


def cause_badge_style() -> str:
    return "bold #ffffff on #303030"


def format_entry_date(value: str | None) -> str:
    """Display date for a note; absent and unparsable dates both read as unknown."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNKNOWN_DATE_LABEL
    return parsed.strftime(DATE_DISPLAY_FORMAT)


def format_kitchen_row(kitchen: Kitchen, quality: KitchenQuality) -> Text:
    """Render one table row: order/LDAP, client, seller/installer, quality."""
    text = Text()
    text.append(kitchen.order_number, style="bold #5fbf72")
    text.append(f" {kitchen.ldap}", style="dim")
    text.append(f"  {kitchen.client_name.upper()}")
    text.append(f"  V: {kitchen.seller} I: {kitchen.installer}", style="#aaaaaa")
    text.append("  ")
    text.append_text(format_quality(quality))
    return text


def format_quality(quality: KitchenQuality) -> Text:
    text = Text()
    if quality.needs_attention:
        text.append(f"⚠ {quality.active} open", style="bold #ffffff on #b23a48")
    else:
        text.append("✓ OK", style="bold #5fbf72")
    if quality.total:
        text.append(f" [{quality.total} entr{'y' if quality.total == 1 else 'ies'}]", style="#2f6db5")
    return text


def format_incident_header(incident: Incident) -> Text:
    text = Text()
    text.append(f" {incident.cause.value.upper()} ", style=cause_badge_style())
    text.append(" ")
    text.append(f" {incident.status.value.upper()} ", style=status_badge_style(incident.status))
    return text


def format_history_entry(entry: HistoryEntry) -> Text:
    text = Text()
    text.append(format_entry_date(entry.date), style="dim")
    text.append("  ")
    text.append(entry.status_at_time.value.upper(), style="bold #5fbf72")
    text.append(f"\n{entry.text}", style="italic")
    return text


def format_history(view: HistoryView) -> Text:
    """Render the visible notes plus the expand/collapse hint."""
    text = Text()
    if view.is_empty:
        text.append("No follow-up notes recorded yet.", style="dim italic")
        return text

    for idx, entry in enumerate(view.entries):
        if idx > 0:
            text.append("\n")
        text.append_text(format_history_entry(entry))

    if view.can_toggle:
        text.append("\n")
        if view.expanded:
            text.append("[-] Hide history", style="bold #5fbf72")
        else:
            text.append(f"[+] Show {view.hidden_count} earlier note(s)", style="bold #5fbf72")
    return text
