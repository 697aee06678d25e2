"""Configuration models and loading for plinth.

Resolution order per setting: explicit overrides, environment, the TOML config
file, then defaults.
"""

from __future__ import annotations

import os
import stat
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from plinth import __version__
from plinth.paths import get_plinth_home


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT_SECONDS = 60.0
EXPECTED_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR  # 0o600


class Settings(BaseModel):
    """Resolved client settings."""

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    organization: str | None = None
    project: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = f"plinth/{__version__}"
    log_level: LogLevel = LogLevel.INFO

    @field_validator("api_key", "organization", "project")
    @classmethod
    def _strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped if stripped else None

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return stripped

    @field_validator("timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value


def default_config_path() -> Path:
    return get_plinth_home() / "config.toml"


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    config_path: Path | str | None = None,
) -> Settings:
    env = os.environ if env is None else env
    overrides = overrides or {}
    path = Path(config_path) if config_path else default_config_path()

    config_data: dict[str, Any] = {}
    if path.exists():
        _ensure_permissions(path)
        config_data = _read_toml(path)

    defaults = Settings()

    api_key = _first_value(
        _clean_str(overrides.get("api_key")),
        _clean_str(env.get("OPENAI_API_KEY")),
        _clean_str(_get_config_value(config_data, "auth", "api_key")),
        defaults.api_key,
    )

    base_url = _first_value(
        _clean_str(overrides.get("base_url")),
        _clean_str(env.get("OPENAI_BASE_URL")),
        _clean_str(_get_config_value(config_data, "api", "base_url")),
        defaults.base_url,
    )

    organization = _first_value(
        _clean_str(overrides.get("organization")),
        _clean_str(env.get("OPENAI_ORG_ID")),
        _clean_str(_get_config_value(config_data, "api", "organization")),
    )

    project = _first_value(
        _clean_str(overrides.get("project")),
        _clean_str(env.get("OPENAI_PROJECT_ID")),
        _clean_str(_get_config_value(config_data, "api", "project")),
    )

    timeout = _first_value(
        overrides.get("timeout"),
        _get_config_value(config_data, "api", "timeout"),
        defaults.timeout,
    )

    user_agent = _first_value(
        _clean_str(overrides.get("user_agent")),
        _clean_str(_get_config_value(config_data, "api", "user_agent")),
        defaults.user_agent,
    )

    log_level = _first_value(
        _clean_str(overrides.get("log_level")),
        _clean_str(_get_config_value(config_data, "logging", "log_level")),
    )

    return Settings(
        api_key=api_key,
        base_url=base_url,
        organization=organization,
        project=project,
        timeout=timeout,
        user_agent=user_agent,
        log_level=_coerce_enum(log_level, LogLevel, LogLevel.INFO),
    )


def write_config(settings: Settings, config_path: Path | str | None = None) -> Path:
    path = Path(config_path) if config_path else default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    sections: list[str] = []
    _append_section(sections, "auth", {"api_key": settings.api_key})
    _append_section(
        sections,
        "api",
        {
            "base_url": settings.base_url,
            "organization": settings.organization,
            "project": settings.project,
            "timeout": settings.timeout,
            "user_agent": settings.user_agent,
        },
    )
    _append_section(sections, "logging", {"log_level": settings.log_level})

    content = "\n\n".join(filter(None, sections)) + "\n"
    path.write_text(content, encoding="utf-8")
    path.chmod(EXPECTED_FILE_MODE)
    return path


def _ensure_permissions(path: Path) -> None:
    current_mode = stat.S_IMODE(path.stat().st_mode)
    if current_mode != EXPECTED_FILE_MODE:
        path.chmod(EXPECTED_FILE_MODE)


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_config_value(config: Mapping[str, Any], section: str, key: str) -> Any:
    section_data = config.get(section)
    if not isinstance(section_data, dict):
        return None
    return section_data.get(key)


def _clean_str(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


def _first_value(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _coerce_enum(value: Any, enum_cls: type[LogLevel], default: LogLevel) -> LogLevel:
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.lower())
        except ValueError:
            return default
    return default


def _append_section(parts: list[str], name: str, values: Mapping[str, Any]) -> None:
    filtered = {k: v for k, v in values.items() if v is not None}
    if not filtered:
        return
    lines = [f"[{name}]"]
    for key, val in filtered.items():
        if isinstance(val, Enum):
            lines.append(f'{key} = "{val.value}"')
        elif isinstance(val, str):
            escaped = val.replace("\\", "\\\\").replace('"', '\\"')
            lines.append(f'{key} = "{escaped}"')
        else:
            lines.append(f"{key} = {val}")
    parts.append("\n".join(lines))


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "LogLevel",
    "Settings",
    "default_config_path",
    "load_settings",
    "write_config",
]
