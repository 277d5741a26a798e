"""Editable static option sets for registration and incident badges."""

from __future__ import annotations

from kitchen_tracker.models import IncidentCause, TaskStatus

SELLERS: list[str] = ["Lara", "Maybeth", "Raquel"]

INSTALLERS: list[str] = ["Instalador A", "Instalador B", "Instalador C", "Instalador D"]

INCIDENT_CAUSES: list[IncidentCause] = list(IncidentCause)

TASK_STATUSES: list[TaskStatus] = list(TaskStatus)
