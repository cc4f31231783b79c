"""Errores del dominio.

Todos heredan de `EmmarkError` para que la CLI los capture en un único punto
y los muestre sin traceback. Los adaptadores traducen errores de bajo nivel
(OSError, JSON, base64, WeasyPrint) a esta jerarquía con `raise ... from`.
"""

from __future__ import annotations


class EmmarkError(Exception):
    """Error base de la aplicación (recuperable, se notifica al usuario)."""


class MalformedDataError(EmmarkError):
    """El contenido guardado no es JSON válido o no tiene la forma esperada."""


class FileReadError(EmmarkError):
    """No se pudo leer el archivo adjunto."""


class OversizeAttachmentError(EmmarkError):
    """El archivo adjunto supera el tamaño máximo permitido."""

    def __init__(self, name: str, size: int, limit: int) -> None:
        super().__init__(
            f"El archivo es demasiado grande (Max {limit // (1024 * 1024)}MB): {name} ({size} bytes)"
        )
        self.name = name
        self.size = size
        self.limit = limit


class StorageWriteError(EmmarkError):
    """Falló la escritura en el almacenamiento local."""


class ReportGenerationError(EmmarkError):
    """Falló la generación del reporte; no se produjo archivo."""


class DeletionNotConfirmedError(EmmarkError):
    """Se intentó eliminar una entidad sin confirmación explícita."""
