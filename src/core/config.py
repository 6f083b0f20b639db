"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (cliente HTTP de Portainer) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "psu"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "psu"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "psu"
    return Path.home() / ".config" / "psu"


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


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# psu user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="PSU_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    url: str = Field(
        default="http://localhost:9000",
        min_length=1,
        description="URL base del servidor Portainer (sin `/api`).",
    )
    user: str | None = Field(
        default=None,
        description="Usuario para autenticarse contra Portainer.",
    )
    password: str | None = Field(
        default=None,
        description="Password del usuario.",
    )
    auth_token: str | None = Field(
        default=None,
        description="JWT ya emitido; si existe no se llama a `/api/auth`.",
    )
    insecure: bool = Field(
        default=False,
        description="No verificar el certificado TLS del servidor.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="psu/0.1",
        min_length=1,
        description="User-Agent para las peticiones a Portainer.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def api_url(self) -> str:
        return self.url.rstrip("/") + "/api/"
