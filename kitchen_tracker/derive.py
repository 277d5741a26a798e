"""Derived views over the kitchen and incident collections.

Every function here is pure: inputs are read-only snapshots and each call
builds a fresh result, so the app can recompute on every refresh.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Sequence

from kitchen_tracker.config import SEARCH_MIN_CHARS
from kitchen_tracker.constant import TASK_STATUSES
from kitchen_tracker.models import HistoryEntry, Incident, Kitchen, TaskStatus

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class KitchenQuality:
    """Incident counters shown in the quality column of the kitchen table."""

    active: int
    total: int

    @property
    def needs_attention(self) -> bool:
        return self.active > 0


@dataclass(frozen=True)
class HistoryView:
    """Visible slice of an incident's follow-up notes."""

    entries: tuple[HistoryEntry, ...]
    expanded: bool
    hidden_count: int

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def can_toggle(self) -> bool:
        return len(self.entries) + self.hidden_count > 1


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime string; None when absent or malformed."""
    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _matches(kitchen: Kitchen, needle: str) -> bool:
    return any(
        needle in value.lower()
        for value in (
            kitchen.order_number,
            kitchen.client_name,
            kitchen.seller,
            kitchen.installer,
            kitchen.ldap,
        )
    )


def filter_kitchens(kitchens: Sequence[Kitchen], query: str) -> list[Kitchen]:
    """Case-insensitive search over order number, client, seller, installer and LDAP."""
    if len(query.strip()) < SEARCH_MIN_CHARS:
        return list(kitchens)
    needle = query.lower()
    return [kitchen for kitchen in kitchens if _matches(kitchen, needle)]


def find_kitchen(kitchens: Iterable[Kitchen], kitchen_id: str | None) -> Kitchen | None:
    if kitchen_id is None:
        return None
    for kitchen in kitchens:
        if kitchen.id == kitchen_id:
            return kitchen
    return None


def incidents_of(incidents: Iterable[Incident], kitchen_id: str | None) -> list[Incident]:
    """Incidents whose kitchen_id equals the given id, in input order."""
    if kitchen_id is None:
        return []
    return [incident for incident in incidents if incident.kitchen_id == kitchen_id]


def active_incident_count(incidents: Iterable[Incident], kitchen_id: str) -> int:
    return sum(1 for incident in incidents_of(incidents, kitchen_id) if incident.status.is_active)


def kitchen_quality(incidents: Iterable[Incident], kitchen_id: str) -> KitchenQuality:
    own = incidents_of(incidents, kitchen_id)
    active = sum(1 for incident in own if incident.status.is_active)
    return KitchenQuality(active=active, total=len(own))


def sort_incidents_desc(incidents: Iterable[Incident]) -> list[Incident]:
    """
    Sort incidents by created_at, most recent first.

    Ties keep their input order. Incidents whose created_at cannot be parsed
    go last, also in input order.
    """

    def sort_key(incident: Incident) -> tuple[bool, datetime]:
        parsed = parse_timestamp(incident.created_at)
        return (parsed is not None, parsed or _OLDEST)

    return sorted(incidents, key=sort_key, reverse=True)


def selected_incidents(incidents: Iterable[Incident], kitchen_id: str | None) -> list[Incident]:
    """Detail-panel list for the selected kitchen."""
    return sort_incidents_desc(incidents_of(incidents, kitchen_id))


def history_view(incident: Incident, expanded_incident_id: str | None) -> HistoryView:
    """
    Resolve which notes of an incident are visible.

    Only one incident is expanded at a time; every other incident shows just
    its last-appended note.
    """
    history = incident.history
    if not history:
        return HistoryView(entries=(), expanded=False, hidden_count=0)
    if expanded_incident_id == incident.id:
        return HistoryView(entries=tuple(history), expanded=True, hidden_count=0)
    return HistoryView(entries=(history[-1],), expanded=False, hidden_count=len(history) - 1)


def toggle_expanded(expanded_incident_id: str | None, incident_id: str) -> str | None:
    if expanded_incident_id == incident_id:
        return None
    return incident_id


def next_status(status: TaskStatus) -> TaskStatus:
    """Following status in the configured order; a completed incident reopens as the first one."""
    idx = TASK_STATUSES.index(status)
    return TASK_STATUSES[(idx + 1) % len(TASK_STATUSES)]
