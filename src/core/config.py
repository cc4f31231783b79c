"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (almacenamiento/reportes) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "emmark"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "emmark"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "emmark"
    return Path.home() / ".config" / "emmark"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# EMMARK user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="EMMARK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    data_dir: Path = Field(
        default_factory=lambda: get_user_config_dir() / "data",
        description="Directorio donde vive el almacenamiento local.",
    )
    storage_file: Path | None = Field(
        default=None,
        description="Archivo JSON clave/valor. Por defecto <data_dir>/storage.json.",
    )
    reports_dir: Path = Field(
        default=Path("reports"),
        description="Directorio de salida para reportes PDF/HTML.",
    )
    max_attachment_bytes: int = Field(
        default=MAX_ATTACHMENT_BYTES,
        gt=0,
        description="Tamaño máximo de un adjunto de actividad (bytes).",
    )
    event_title: str = Field(
        default="EVENTO EMMARK",
        min_length=1,
        description="Título que encabeza el reporte.",
    )
    currency_symbol: str = Field(
        default="$",
        description="Prefijo monetario para costos.",
    )
    default_language: Language = Field(
        default=Language.default(),
        description="Idioma por defecto para reportes y consola (es/en).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI.",
    )

    def resolved_storage_file(self) -> Path:
        return self.storage_file or (self.data_dir / "storage.json")
