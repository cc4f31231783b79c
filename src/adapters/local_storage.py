"""Almacenamiento local clave/valor.

Por qué un archivo JSON:
- Es el equivalente de escritorio de `localStorage`: un mapa plano de claves a
  texto, legible y portable.
- Cada `set_item` reescribe el archivo completo vía archivo temporal + rename,
  de modo que un corte nunca deja el archivo a medio escribir.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from core.domain.errors import StorageWriteError


logger = logging.getLogger(__name__)


class JsonFileStorage:
    """`KeyValueStorage` respaldado por un único archivo JSON UTF-8."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Almacenamiento ilegible en %s, se trata como vacío: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Almacenamiento con forma inesperada en %s, se trata como vacío", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
                    fh.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageWriteError(f"No se pudo escribir el almacenamiento {self.path}: {exc}") from exc

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug("Guardada clave %s (%d caracteres)", key, len(value))

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


class MemoryStorage:
    """`KeyValueStorage` en memoria (tests, ejecuciones sin disco)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
