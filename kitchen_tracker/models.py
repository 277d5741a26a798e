"""Domain models for kitchen-tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TaskStatus(str, Enum):
    """Follow-up state of an incident."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @property
    def is_active(self) -> bool:
        return self is not TaskStatus.COMPLETED

    def __str__(self) -> str:
        return self.value


class IncidentCause(str, Enum):
    """Closed set of quality incident causes."""

    MEASUREMENT_ERROR = "Measurement Error"
    DAMAGED_MATERIAL = "Damaged Material"
    MISSING_PARTS = "Missing Parts"
    INSTALLATION_DEFECT = "Installation Defect"
    FACTORY_DEFECT = "Factory Defect"
    DELAY = "Delay"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewKitchen:
    """A kitchen project as registered, before the store assigns an id."""

    ldap: str
    order_number: str
    client_name: str
    seller: str
    installer: str
    installation_date: str

    def with_id(self, kitchen_id: str) -> Kitchen:
        return Kitchen(
            id=kitchen_id,
            ldap=self.ldap,
            order_number=self.order_number,
            client_name=self.client_name,
            seller=self.seller,
            installer=self.installer,
            installation_date=self.installation_date,
        )


@dataclass(frozen=True)
class Kitchen:
    """One installation project."""

    id: str
    ldap: str
    order_number: str
    client_name: str
    seller: str
    installer: str
    installation_date: str


@dataclass(frozen=True)
class HistoryEntry:
    """One follow-up note. `date` is None when the note has no known date."""

    status_at_time: TaskStatus
    text: str
    date: str | None = None


@dataclass(frozen=True)
class Incident:
    """A quality issue opened against exactly one kitchen."""

    id: str
    kitchen_id: str
    cause: IncidentCause
    description: str
    status: TaskStatus
    created_at: str
    history: tuple[HistoryEntry, ...] = field(default_factory=tuple)

    @property
    def latest_note(self) -> HistoryEntry | None:
        if not self.history:
            return None
        return self.history[-1]
