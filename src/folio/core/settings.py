"""Runtime settings for folio.

Configuration is read from ``FOLIO_*`` environment variables and an optional
``.env`` file through pydantic-settings, and validated once at startup.

Fields
──────
log_level    : structlog level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
json_logs    : force JSON (True) or console (False) logs; None auto-detects
color        : "auto" lets rich detect a terminal, "always"/"never" force it
max_workers  : default thread count for ``run_batch`` (1 runs inline)

Examples:
    >>> from folio.core.settings import get_settings
    >>> get_settings().max_workers
    1
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FolioSettings(BaseSettings):
    """Settings shared by the library, the batch runner and the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="FOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Output ───────────────────────────────────────────────────
    color: Literal["auto", "always", "never"] = "auto"

    # ── Batches ──────────────────────────────────────────────────
    max_workers: int = Field(default=1, ge=1, description="Default worker threads for run_batch")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def force_terminal(self) -> bool | None:
        """Value for rich's ``force_terminal`` (None lets rich decide)."""
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return None


@lru_cache(maxsize=1)
def get_settings() -> FolioSettings:
    """Load and cache settings.

    Raises:
        ConfigError: if an environment value fails validation
    """
    try:
        return FolioSettings()
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"]) or "settings"
        raise ConfigError(key, first.get("input"), f"Invalid setting {key}: {first['msg']}") from e


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["FolioSettings", "get_settings", "reset_settings"]
