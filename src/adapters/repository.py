"""Repositorio de clientes y actividades sobre el almacenamiento local.

Formato persistido (compatible con los datos existentes):
- `emmark_clients`    -> array JSON de objetos `Client` (camelCase).
- `emmark_activities` -> array JSON de objetos `Activity`; el adjunto se guarda
  como `{name, type, data}` con `data` = data URL.

Cada `save_*` sobrescribe por completo la clave correspondiente; no hay
transacción entre ambas claves.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
import mimetypes
from pathlib import Path
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from core.config import MAX_ATTACHMENT_BYTES
from core.domain.errors import FileReadError, MalformedDataError, OversizeAttachmentError, StorageWriteError
from core.domain.models import Activity, Attachment, Client
from core.interfaces.storage import KeyValueStorage


logger = logging.getLogger(__name__)

CLIENTS_KEY = "emmark_clients"
ACTIVITIES_KEY = "emmark_activities"

DEFAULT_MIME_TYPE = "application/octet-stream"

_CLIENTS = TypeAdapter(list[Client])
_ACTIVITIES = TypeAdapter(list[Activity])


def parse_clients(text: str) -> list[Client]:
    try:
        return _CLIENTS.validate_json(text)
    except ValidationError as exc:
        raise MalformedDataError(f"Datos de clientes inválidos: {exc.error_count()} error(es)") from exc


def parse_activities(text: str) -> list[Activity]:
    try:
        return _ACTIVITIES.validate_json(text)
    except ValidationError as exc:
        raise MalformedDataError(f"Datos de actividades inválidos: {exc.error_count()} error(es)") from exc


def _dump(items: Sequence[Client] | Sequence[Activity]) -> str:
    payload = [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items]
    return json.dumps(payload, ensure_ascii=False)


def backup_key(key: str) -> str:
    return f"{key}_backup"


def _keep_backup(storage: KeyValueStorage, key: str, raw: str, exc: MalformedDataError) -> None:
    """Copia el contenido ilegible a `<key>_backup` antes de que un guardado lo pise."""

    logger.warning("%s; se usa una lista vacía (copia en %s)", exc, backup_key(key))
    try:
        storage.set_item(backup_key(key), raw)
    except StorageWriteError as write_exc:
        logger.error("No se pudo respaldar %s: %s", key, write_exc)


def load_clients(storage: KeyValueStorage) -> list[Client]:
    """Lee los clientes; clave ausente o contenido corrupto -> lista vacía.

    El contenido corrupto se conserva en `emmark_clients_backup`.
    """

    raw = storage.get_item(CLIENTS_KEY)
    if not raw:
        return []
    try:
        return parse_clients(raw)
    except MalformedDataError as exc:
        _keep_backup(storage, CLIENTS_KEY, raw, exc)
        return []


def save_clients(storage: KeyValueStorage, clients: Sequence[Client]) -> None:
    storage.set_item(CLIENTS_KEY, _dump(clients))


def load_activities(storage: KeyValueStorage) -> list[Activity]:
    """Lee las actividades; clave ausente o contenido corrupto -> lista vacía."""

    raw = storage.get_item(ACTIVITIES_KEY)
    if not raw:
        return []
    try:
        return parse_activities(raw)
    except MalformedDataError as exc:
        _keep_backup(storage, ACTIVITIES_KEY, raw, exc)
        return []


def save_activities(storage: KeyValueStorage, activities: Sequence[Activity]) -> None:
    storage.set_item(ACTIVITIES_KEY, _dump(activities))


# --- Adjuntos ---------------------------------------------------------------


def guess_mime_type(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    return mime or DEFAULT_MIME_TYPE


def check_attachment_size(path: Path, limit: int = MAX_ATTACHMENT_BYTES) -> int:
    """Rechaza archivos mayores a `limit` antes de leerlos. Devuelve el tamaño."""

    try:
        size = path.stat().st_size
    except OSError as exc:
        raise FileReadError(f"Error al procesar el archivo {path}: {exc}") from exc
    if size > limit:
        raise OversizeAttachmentError(path.name, size, limit)
    return size


def to_data_url(content: bytes, mime_type: str) -> str:
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{payload}"


async def encode_file_inline(path: Path) -> str:
    """Lee el archivo completo y lo codifica como data URL.

    La lectura se hace fuera del event loop; no admite cancelación parcial:
    o devuelve el data URL o falla con `FileReadError`.
    """

    try:
        content = await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise FileReadError(f"Error al procesar el archivo {path}: {exc}") from exc
    return to_data_url(content, guess_mime_type(path))


def decode_data_url(data: str) -> tuple[str, bytes]:
    """Inverso de `encode_file_inline`: devuelve `(mime, bytes)`."""

    header, sep, payload = data.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise MalformedDataError("Adjunto con data URL inválido")
    mime = header[len("data:") : -len(";base64")] or DEFAULT_MIME_TYPE
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedDataError(f"Adjunto con base64 inválido: {exc}") from exc
    return mime, content


async def build_attachment(path: Path, limit: int = MAX_ATTACHMENT_BYTES) -> Attachment:
    """Valida tamaño y codifica el archivo como `Attachment`."""

    check_attachment_size(path, limit)
    data = await encode_file_inline(path)
    return Attachment(name=path.name, type=guess_mime_type(path), data=data)


def write_attachment(attachment: Attachment, output_dir: Path) -> Path:
    """Escribe el adjunto decodificado en `output_dir` con su nombre original."""

    _, content = decode_data_url(attachment.data)
    target = output_dir / (Path(attachment.name).name or "adjunto")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as exc:
        raise StorageWriteError(f"No se pudo guardar el adjunto en {target}: {exc}") from exc
    return target
