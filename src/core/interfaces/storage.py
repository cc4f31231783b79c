"""Contrato del almacenamiento clave/valor.

Por qué Protocol:
- Replica la semántica de `localStorage` (claves y valores de texto) sin
  herencia rígida.
- Permite intercambiar el archivo JSON por un dict en memoria en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """Almacenamiento local de texto direccionado por claves fijas.

    Reglas de diseño:
    - `get_item` devuelve None si la clave no existe.
    - `set_item` sobrescribe por completo el valor anterior.
    - Las escrituras fallidas se señalan con `StorageWriteError`.
    """

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
