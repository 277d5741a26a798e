"""In-memory owner of the kitchen and incident collections."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable
from uuid import uuid4

from kitchen_tracker.constant import INCIDENT_CAUSES, TASK_STATUSES
from kitchen_tracker.data import SAMPLE_INCIDENTS, SAMPLE_KITCHENS
from kitchen_tracker.models import HistoryEntry, Incident, IncidentCause, Kitchen, NewKitchen, TaskStatus


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class KitchenStore:
    """Holds kitchens and incidents and assigns their ids."""

    def __init__(self, kitchens: Iterable[Kitchen] = (), incidents: Iterable[Incident] = ()) -> None:
        self.kitchens: list[Kitchen] = list(kitchens)
        self.incidents: list[Incident] = list(incidents)

    @classmethod
    def with_sample_data(cls) -> KitchenStore:
        return cls(SAMPLE_KITCHENS, SAMPLE_INCIDENTS)

    def snapshot(self) -> tuple[tuple[Kitchen, ...], tuple[Incident, ...]]:
        """Read-only view of both collections for one render pass."""
        return (tuple(self.kitchens), tuple(self.incidents))

    def add_kitchen(self, new_kitchen: NewKitchen) -> Kitchen:
        """Assign an id to a registered kitchen and append it."""
        kitchen = new_kitchen.with_id(uuid4().hex)
        self.kitchens.append(kitchen)
        return kitchen

    def add_incident(
        self,
        kitchen_id: str,
        cause: IncidentCause,
        description: str,
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Incident:
        """Open an incident against an existing kitchen."""
        if not any(kitchen.id == kitchen_id for kitchen in self.kitchens):
            raise KeyError(kitchen_id)
        if cause not in INCIDENT_CAUSES:
            raise ValueError(f"Unknown incident cause: {cause}")
        if status not in TASK_STATUSES:
            raise ValueError(f"Unknown task status: {status}")
        cause = IncidentCause(cause)
        status = TaskStatus(status)

        created_at = _utc_now_iso()
        incident = Incident(
            id=uuid4().hex,
            kitchen_id=kitchen_id,
            cause=cause,
            description=description,
            status=status,
            created_at=created_at,
            history=(HistoryEntry(status_at_time=status, text=description, date=created_at),),
        )
        self.incidents.append(incident)
        return incident

    def append_note(self, incident_id: str, text: str, status: TaskStatus | None = None) -> Incident:
        """Append a follow-up note, optionally moving the incident to a new status."""
        normalized = text.strip()
        if not normalized:
            raise ValueError("Cannot append an empty note")
        if status is not None:
            if status not in TASK_STATUSES:
                raise ValueError(f"Unknown task status: {status}")
            status = TaskStatus(status)

        for idx, incident in enumerate(self.incidents):
            if incident.id != incident_id:
                continue
            new_status = incident.status if status is None else status
            entry = HistoryEntry(status_at_time=new_status, text=normalized, date=_utc_now_iso())
            updated = replace(incident, status=new_status, history=incident.history + (entry,))
            self.incidents[idx] = updated
            return updated

        raise KeyError(incident_id)
