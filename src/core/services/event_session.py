"""Controlador de la sesión: estado actual + persistencia explícita.

Este módulo concentra el flujo comando -> persistencia que la UI original
hacía de forma implícita. Cada método aplica un comando puro de
`event_state` y a continuación guarda la colección afectada, de modo que el
almacenamiento siempre refleja el estado en memoria.
"""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.repository import (
    build_attachment,
    load_activities,
    load_clients,
    save_activities,
    save_clients,
)
from core.config import MAX_ATTACHMENT_BYTES
from core.domain.errors import DeletionNotConfirmedError
from core.domain.models import Activity, ActivityStatus, ActivityType, Client, EventState
from core.interfaces.storage import KeyValueStorage
from core.services import event_state
from core.services.stats import Dashboard, build_dashboard


logger = logging.getLogger(__name__)


class EventSession:
    """Dueño único del `EventState` durante la ejecución."""

    def __init__(self, storage: KeyValueStorage, state: EventState | None = None) -> None:
        self.storage = storage
        self._state = state or EventState()

    @classmethod
    def open(cls, storage: KeyValueStorage) -> "EventSession":
        """Carga ambas colecciones una sola vez desde el almacenamiento."""

        state = EventState(
            clients=tuple(load_clients(storage)),
            activities=tuple(load_activities(storage)),
        )
        logger.debug("Sesión abierta: %d clientes, %d actividades", len(state.clients), len(state.activities))
        return cls(storage, state)

    @property
    def state(self) -> EventState:
        return self._state

    def dashboard(self) -> Dashboard:
        return build_dashboard(self._state)

    # Un comando sin efecto devuelve el mismo objeto: no se reescribe el almacenamiento.

    def _commit_clients(self, state: EventState) -> EventState:
        if state is self._state:
            return state
        save_clients(self.storage, state.clients)
        self._state = state
        return state

    def _commit_activities(self, state: EventState) -> EventState:
        if state is self._state:
            return state
        save_activities(self.storage, state.activities)
        self._state = state
        return state

    # --- Clientes ---

    def add_client(self, client: Client) -> Client:
        self._commit_clients(event_state.add_client(self._state, client))
        logger.info("Cliente agregado: %s", client.id)
        return client

    def update_client(self, client: Client) -> EventState:
        return self._commit_clients(event_state.update_client(self._state, client))

    def toggle_confirmation(self, client_id: str) -> Client | None:
        self._commit_clients(event_state.toggle_confirmation(self._state, client_id))
        return event_state.find_client(self._state, client_id)

    def delete_client(self, client_id: str, *, confirmed: bool) -> EventState:
        if not confirmed:
            raise DeletionNotConfirmedError("¿Estás seguro de eliminar este cliente? Se requiere confirmación.")
        return self._commit_clients(event_state.delete_client(self._state, client_id))

    # --- Actividades ---

    def add_activity(self, activity: Activity) -> Activity:
        self._commit_activities(event_state.add_activity(self._state, activity))
        logger.info("Actividad agregada: %s", activity.id)
        return activity

    async def create_activity(
        self,
        *,
        name: str,
        date: str = "",
        cost: float | str = 0,
        in_charge: str = "",
        activity_type: ActivityType = ActivityType.LOGISTICA,
        status: ActivityStatus = ActivityStatus.PENDIENTE,
        attachment_path: Path | None = None,
        max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
    ) -> Activity:
        """Construye y agrega una actividad nueva.

        Si hay adjunto, se espera su codificación antes de crear la entidad:
        un archivo demasiado grande o ilegible aborta sin agregar nada.
        """

        attachment = None
        if attachment_path is not None:
            attachment = await build_attachment(attachment_path, max_attachment_bytes)

        activity = Activity(
            name=name,
            date=date,
            cost=cost,
            in_charge=in_charge,
            activity_type=activity_type,
            status=status,
            attachment=attachment,
        )
        return self.add_activity(activity)

    def update_activity(self, activity: Activity) -> EventState:
        return self._commit_activities(event_state.update_activity(self._state, activity))

    def set_activity_status(self, activity_id: str, status: ActivityStatus) -> Activity | None:
        self._commit_activities(event_state.set_activity_status(self._state, activity_id, status))
        return event_state.find_activity(self._state, activity_id)

    def delete_activity(self, activity_id: str, *, confirmed: bool) -> EventState:
        if not confirmed:
            raise DeletionNotConfirmedError("¿Estás seguro de eliminar esta actividad? Se requiere confirmación.")
        return self._commit_activities(event_state.delete_activity(self._state, activity_id))
