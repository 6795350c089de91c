"""Centralized settings for alis-build-utils.

One validated, cached settings object holds the few knobs the library
exposes: logging defaults and the retry defaults used by
:class:`~alis_utils.execution.retry.RetryableDeferred`.

All fields can be set via ``ALIS_UTILS_*`` environment variables (e.g.
``ALIS_UTILS_RETRY_MAX_ATTEMPTS=5``) or a ``.env`` file.

Examples:
    >>> from alis_utils.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.retry_max_attempts
    3

Tags:
    settings, configuration, pydantic, environment, caching
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from alis_utils.core.errors import ConfigError


class UtilsSettings(BaseSettings):
    """alis-build-utils configuration.

    Fields
    ──────
    service_name        : Service name stamped on every log line
    log_level           : Structlog log level
    log_json            : Force JSON (True) or console (False) rendering;
                          None auto-detects from the TTY
    retry_max_attempts  : Default attempt budget for RetryableDeferred
    retry_delay_seconds : Default delay between failed attempts
    """

    model_config = SettingsConfigDict(
        env_prefix="ALIS_UTILS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    service_name: str = "alis-utils"
    log_level: str = "INFO"
    log_json: bool | None = None

    # ── Retry defaults ───────────────────────────────────────────
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_delay_seconds: float = Field(default=1.0, ge=0.0)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level


_settings_cache: dict[str, UtilsSettings] = {}


def get_settings(*, _force_reload: bool = False) -> UtilsSettings:
    """Return the cached settings, building them on first use.

    Raises:
        ConfigError: If an ``ALIS_UTILS_*`` variable holds an invalid value.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = UtilsSettings()
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid alis-utils settings: {e}", cause=e) from e
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    _settings_cache.clear()


__all__ = [
    "UtilsSettings",
    "get_settings",
    "clear_settings_cache",
]
