"""Process-level settings for automation-standard tooling.

These settings configure the library's own behavior (logging, manifest
format version) and are read from ``STANDARD_``-prefixed environment
variables and an optional ``.env`` file. They are unrelated to the
*parameters* an application declares; those are resolved by the engine.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not mid-run
    - **Environment-driven:** ``STANDARD_LOG_LEVEL=DEBUG standard-validate ...``
    - **Sensible defaults:** Quiet logging, manifest version ``v1.0``

Examples:
    >>> from automation_standard.core.settings import get_settings
    >>> get_settings().manifest_version
    'v1.0'

Tags:
    settings, configuration, pydantic, environment, automation-standard

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StandardSettings(BaseSettings):
    """Settings shared by the CLI and the application runner.

    Fields
    ──────
    log_level        : Structlog log level
    log_json         : Force JSON (True) or console (False) logs; auto when unset
    service_name     : ``service.name`` for log lines; each entry point
                       supplies its own name when unset
    manifest_version : Format version written into generated manifests
    """

    model_config = SettingsConfigDict(
        env_prefix="STANDARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    log_json: bool | None = None
    service_name: str | None = None

    # ── Manifest ─────────────────────────────────────────────────
    manifest_version: str = Field(
        default="v1.0",
        min_length=1,
        description="Format version written into generated manifests",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return normalized


_settings_cache: StandardSettings | None = None


def get_settings(*, _force_reload: bool = False) -> StandardSettings:
    """Load, validate, and cache a :class:`StandardSettings` instance."""
    global _settings_cache
    if _settings_cache is None or _force_reload:
        _settings_cache = StandardSettings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Clear cached settings (for testing)."""
    global _settings_cache
    _settings_cache = None


__all__ = ["StandardSettings", "get_settings", "clear_settings_cache"]
