"""Exportación JSON del estado.

Por qué JSON:
- Respaldo portable de ambas colecciones fuera del almacenamiento local.
- Usa el mismo formato camelCase de las claves guardadas, así el contenido
  puede volver a cargarse tal cual.
"""

from __future__ import annotations

import json
from pathlib import Path

from adapters.repository import ACTIVITIES_KEY, CLIENTS_KEY
from core.domain.errors import StorageWriteError
from core.domain.models import EventState


def export_state_json(*, state: EventState, output_path: Path) -> Path:
    """Exporta `EventState` a JSON UTF-8 con formato estable."""

    payload = {
        CLIENTS_KEY: [c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in state.clients],
        ACTIVITIES_KEY: [a.model_dump(mode="json", by_alias=True, exclude_none=True) for a in state.activities],
    }
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise StorageWriteError(f"No se pudo escribir el respaldo {output_path}: {exc}") from exc
    return output_path
