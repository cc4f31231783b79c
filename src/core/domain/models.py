"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias camelCase mantienen compatibilidad con los datos ya guardados
  (`isConfirmed`, `inCharge`, ...), mientras el código Python usa snake_case.

Nota:
- Todas las entidades son inmutables: una modificación produce una copia nueva
  (`model_copy(update=...)`).
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def new_entity_id() -> str:
    """Identificador opaco y único para una entidad nueva."""

    return str(uuid.uuid4())


class ActivityType(str, Enum):
    """Categoría de una actividad. Los valores son los literales persistidos."""

    LOGISTICA = "Logística"
    ENTRETENIMIENTO = "Entretenimiento"
    CATERING = "Catering"
    MARKETING = "Marketing"
    OTRO = "Otro"


class ActivityStatus(str, Enum):
    """Estado del ciclo de vida de una actividad, en orden de presentación."""

    PENDIENTE = "Pendiente"
    EN_PROCESO = "En Proceso"
    FINALIZADA = "Finalizada"


_ENTITY_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Attachment(BaseModel):
    """Archivo adjunto embebido como data URL."""

    model_config = _ENTITY_CONFIG

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre original del archivo.",
    )
    mime_type: str = Field(
        default="",
        alias="type",
        description="MIME type del archivo.",
    )
    data: str = Field(
        ...,
        description="Contenido como data URL (`data:<mime>;base64,<payload>`).",
    )


class Client(BaseModel):
    """Invitado/asistente del evento."""

    model_config = _ENTITY_CONFIG

    id: str = Field(default_factory=new_entity_id, min_length=1)
    name: str = Field(..., description="Nombre visible (no vacío).")
    branch: str = Field(default="", description="Sucursal/afiliación (libre).")
    phone: str = Field(default="", description="Teléfono de contacto (libre).")
    is_confirmed: bool = Field(
        default=False,
        alias="isConfirmed",
        description="Asistencia confirmada.",
    )

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        return value


class Activity(BaseModel):
    """Tarea del evento con costo, responsable y estado."""

    model_config = _ENTITY_CONFIG

    id: str = Field(default_factory=new_entity_id, min_length=1)
    name: str = Field(..., description="Nombre visible (no vacío).")
    date: str = Field(default="", description="Fecha (texto, puede estar vacía).")
    cost: float = Field(default=0.0, ge=0, description="Monto no negativo.")
    in_charge: str = Field(default="", alias="inCharge")
    activity_type: ActivityType = Field(default=ActivityType.LOGISTICA, alias="type")
    status: ActivityStatus = Field(default=ActivityStatus.PENDIENTE)
    attachment: Attachment | None = Field(default=None)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        return value

    @field_validator("cost", mode="before")
    @classmethod
    def _coerce_cost(cls, value: Any) -> Any:
        # El formulario entrega texto; vacío equivale a 0.
        if value is None:
            return 0.0
        if isinstance(value, str):
            text = value.strip().replace(",", "")
            return float(text) if text else 0.0
        return value


class EventState(BaseModel):
    """Snapshot inmutable del estado completo de la aplicación."""

    model_config = ConfigDict(frozen=True)

    clients: tuple[Client, ...] = ()
    activities: tuple[Activity, ...] = ()
