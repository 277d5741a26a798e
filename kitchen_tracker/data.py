"""Sample kitchens and incidents used to seed the in-memory store."""

from __future__ import annotations

from kitchen_tracker.models import HistoryEntry, Incident, IncidentCause, Kitchen, TaskStatus

SAMPLE_KITCHENS: list[Kitchen] = [
    Kitchen(
        id="k-001",
        ldap="LDAP1001",
        order_number="80112233",
        client_name="Juan Perez",
        seller="Lara",
        installer="Instalador A",
        installation_date="2024-01-15",
    ),
    Kitchen(
        id="k-002",
        ldap="LDAP1002",
        order_number="80114455",
        client_name="Maria Lopez",
        seller="Maybeth",
        installer="Instalador B",
        installation_date="2024-02-03",
    ),
    Kitchen(
        id="k-003",
        ldap="LDAP2040",
        order_number="80119876",
        client_name="Carlos Ruiz",
        seller="Raquel",
        installer="Instalador C",
        installation_date="2024-02-20",
    ),
    Kitchen(
        id="k-004",
        ldap="LDAP2041",
        order_number="80120001",
        client_name="Ana Garcia",
        seller="Lara",
        installer="Instalador D",
        installation_date="2024-03-11",
    ),
]

SAMPLE_INCIDENTS: list[Incident] = [
    Incident(
        id="i-001",
        kitchen_id="k-001",
        cause=IncidentCause.DAMAGED_MATERIAL,
        description="Worktop delivered with a chipped corner.",
        status=TaskStatus.COMPLETED,
        created_at="2024-01-18T09:30:00Z",
        history=(
            HistoryEntry(TaskStatus.PENDING, "Client reported chipped worktop.", "2024-01-18T09:30:00Z"),
            HistoryEntry(TaskStatus.IN_PROGRESS, "Replacement ordered from supplier.", "2024-01-19T11:00:00Z"),
            HistoryEntry(TaskStatus.COMPLETED, "Worktop replaced on site.", "2024-01-26T16:45:00Z"),
        ),
    ),
    Incident(
        id="i-002",
        kitchen_id="k-001",
        cause=IncidentCause.MISSING_PARTS,
        description="Two cabinet handles missing.",
        status=TaskStatus.IN_PROGRESS,
        created_at="2024-02-02T10:15:00Z",
        history=(
            HistoryEntry(TaskStatus.PENDING, "Handles not in the delivery.", None),
            HistoryEntry(TaskStatus.IN_PROGRESS, "Waiting for stock.", "2024-02-05T08:00:00Z"),
        ),
    ),
    Incident(
        id="i-003",
        kitchen_id="k-002",
        cause=IncidentCause.MEASUREMENT_ERROR,
        description="Tall unit 2 cm too wide for the recess.",
        status=TaskStatus.PENDING,
        created_at="2024-02-06T12:00:00Z",
        history=(),
    ),
    Incident(
        id="i-004",
        kitchen_id="k-003",
        cause=IncidentCause.INSTALLATION_DEFECT,
        description="Door hinges misaligned.",
        status=TaskStatus.COMPLETED,
        created_at="2024-03-01T15:20:00Z",
        history=(
            HistoryEntry(TaskStatus.COMPLETED, "Installer adjusted hinges.", "not a date"),
        ),
    ),
]
