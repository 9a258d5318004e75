"""Settings for the course service, read from the environment or ``.env``."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    edits_dir: Optional[str] = Field(default=None, alias="GOLFGPS_EDITS_DIR")

    # Plan-view geometry, in degrees.
    corridor_half_width_deg: float = Field(
        default=0.00012, alias="CORRIDOR_HALF_WIDTH_DEG", gt=0
    )
    label_separation_deg: float = Field(
        default=0.00035, alias="LABEL_SEPARATION_DEG", gt=0
    )
    label_nudge_deg: float = Field(default=0.0004, alias="LABEL_NUDGE_DEG", gt=0)
    label_max_passes: int = Field(default=8, alias="LABEL_MAX_PASSES", ge=0)

    strict_catalog: bool = Field(default=False, alias="STRICT_CATALOG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: str = Field(
        default="http://localhost,http://127.0.0.1", alias="CORS_ALLOW_ORIGINS"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def edits_path(self) -> Optional[Path]:
        return Path(self.edits_dir) if self.edits_dir else None

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""

    get_settings.cache_clear()


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


__all__ = [
    "env_bool",
    "get_settings",
    "reset_settings_cache",
]
