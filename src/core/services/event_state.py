"""Comandos puros sobre el estado del evento.

Cada función recibe un `EventState` y devuelve uno nuevo; nunca persiste.
Quien invoca decide cuándo guardar (ver `EventSession`).

Semántica por colección:
- add: agrega al final (orden de inserción, lo más nuevo al final).
- update: reemplaza por `id` conservando la posición; `id` desconocido -> sin cambios.
- delete: elimina por `id`; `id` desconocido -> sin cambios (idempotente).

Cuando no hay cambios se devuelve el mismo objeto `state`.
"""

from __future__ import annotations

from typing import TypeVar

from core.domain.models import Activity, ActivityStatus, Client, EventState


_E = TypeVar("_E", Client, Activity)


def _append(items: tuple[_E, ...], entity: _E) -> tuple[_E, ...]:
    return (*items, entity)


def _replace(items: tuple[_E, ...], entity: _E) -> tuple[_E, ...]:
    return tuple(entity if item.id == entity.id else item for item in items)


def _remove(items: tuple[_E, ...], entity_id: str) -> tuple[_E, ...]:
    return tuple(item for item in items if item.id != entity_id)


def find_client(state: EventState, client_id: str) -> Client | None:
    return next((c for c in state.clients if c.id == client_id), None)


def find_activity(state: EventState, activity_id: str) -> Activity | None:
    return next((a for a in state.activities if a.id == activity_id), None)


def add_client(state: EventState, client: Client) -> EventState:
    return state.model_copy(update={"clients": _append(state.clients, client)})


def update_client(state: EventState, client: Client) -> EventState:
    if find_client(state, client.id) is None:
        return state
    return state.model_copy(update={"clients": _replace(state.clients, client)})


def delete_client(state: EventState, client_id: str) -> EventState:
    if find_client(state, client_id) is None:
        return state
    return state.model_copy(update={"clients": _remove(state.clients, client_id)})


def toggle_confirmation(state: EventState, client_id: str) -> EventState:
    """Invierte `is_confirmed` del cliente; `id` desconocido -> sin cambios."""

    client = find_client(state, client_id)
    if client is None:
        return state
    return update_client(state, client.model_copy(update={"is_confirmed": not client.is_confirmed}))


def add_activity(state: EventState, activity: Activity) -> EventState:
    return state.model_copy(update={"activities": _append(state.activities, activity)})


def update_activity(state: EventState, activity: Activity) -> EventState:
    if find_activity(state, activity.id) is None:
        return state
    return state.model_copy(update={"activities": _replace(state.activities, activity)})


def delete_activity(state: EventState, activity_id: str) -> EventState:
    if find_activity(state, activity_id) is None:
        return state
    return state.model_copy(update={"activities": _remove(state.activities, activity_id)})


def set_activity_status(state: EventState, activity_id: str, status: ActivityStatus) -> EventState:
    activity = find_activity(state, activity_id)
    if activity is None:
        return state
    return update_activity(state, activity.model_copy(update={"status": status}))
