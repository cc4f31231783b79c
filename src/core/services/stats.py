"""Estadísticas del panel (motor de agregación).

Funciones puras sobre las colecciones actuales; no hay caché: el panel y el
reporte recalculan en cada render.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.domain.models import Activity, ActivityStatus, ActivityType, Client, EventState


STATUS_COLORS: dict[ActivityStatus, str] = {
    ActivityStatus.PENDIENTE: "#FCD34D",
    ActivityStatus.EN_PROCESO: "#60A5FA",
    ActivityStatus.FINALIZADA: "#34D399",
}


@dataclass(frozen=True)
class EventStats:
    total_clients: int
    confirmed_clients: int
    confirmation_rate: int
    total_cost: float
    total_activities: int
    completed_activities: int
    progress: int


@dataclass(frozen=True)
class StatusBucket:
    status: ActivityStatus
    value: int
    color: str

    @property
    def name(self) -> str:
        return self.status.value


@dataclass(frozen=True)
class CostGroup:
    activity_type: ActivityType
    value: float

    @property
    def name(self) -> str:
        return self.activity_type.value


@dataclass(frozen=True)
class Dashboard:
    """Todo lo que el panel y el reporte necesitan, calculado de una vez."""

    stats: EventStats
    status: list[StatusBucket] = field(default_factory=list)
    costs: list[CostGroup] = field(default_factory=list)


def percentage(part: int, total: int) -> int:
    """`round(part / total * 100)` con redondeo half-up; 0 si `total` es 0."""

    if not total:
        return 0
    return math.floor(part / total * 100 + 0.5)


def compute_stats(clients: Sequence[Client], activities: Sequence[Activity]) -> EventStats:
    confirmed = sum(1 for c in clients if c.is_confirmed)
    completed = sum(1 for a in activities if a.status is ActivityStatus.FINALIZADA)
    return EventStats(
        total_clients=len(clients),
        confirmed_clients=confirmed,
        confirmation_rate=percentage(confirmed, len(clients)),
        total_cost=sum((a.cost for a in activities), 0.0),
        total_activities=len(activities),
        completed_activities=completed,
        progress=percentage(completed, len(activities)),
    )


def status_breakdown(activities: Iterable[Activity]) -> list[StatusBucket]:
    """Tres buckets fijos (Pendiente, En Proceso, Finalizada), incluso en 0."""

    counts = {status: 0 for status in ActivityStatus}
    for activity in activities:
        counts[activity.status] += 1
    return [StatusBucket(status=s, value=counts[s], color=STATUS_COLORS[s]) for s in ActivityStatus]


def cost_by_type(activities: Iterable[Activity]) -> list[CostGroup]:
    """Suma de costos por tipo, en orden de primera aparición."""

    totals: dict[ActivityType, float] = {}
    for activity in activities:
        totals[activity.activity_type] = totals.get(activity.activity_type, 0.0) + activity.cost
    return [CostGroup(activity_type=t, value=v) for t, v in totals.items()]


def build_dashboard(state: EventState) -> Dashboard:
    return Dashboard(
        stats=compute_stats(state.clients, state.activities),
        status=status_breakdown(state.activities),
        costs=cost_by_type(state.activities),
    )
