"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
Los adaptadores (proxy HTTP, archivo temporal) leen la config desde aquí.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "moddoc"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "moddoc"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "moddoc"
    return Path.home() / ".config" / "moddoc"


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


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# moddoc user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Un único contrato de configuración para la CLI, el cliente del proxy y el
    servicio de documentación.
    """

    model_config = SettingsConfigDict(
        env_prefix="MODDOC_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    proxy_url: str = Field(
        default="https://proxy.golang.org",
        min_length=8,
        description="Base URL del proxy de módulos (protocolo GOPROXY).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request HTTP (segundos).",
    )
    request_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Deadline total de una llamada a get_doc (segundos).",
    )
    user_agent: str = Field(
        default="moddoc/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones al proxy.",
    )
    download_chunk_size: int = Field(
        default=1024 * 1024,
        ge=1024,
        description="Tamaño del buffer al volcar el zip a disco (bytes).",
    )
    scratch_root: Path | None = Field(
        default=None,
        description="Directorio base para los directorios temporales (None = tempdir del sistema).",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("proxy_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")
