"""Mini README: Centralised configuration models and helpers for Momo Ledger.

Structure:
    * DatePolicy - how a creation instant maps onto a calendar day.
    * LedgerSettings - Pydantic settings model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``MOMO_LEDGER_*`` environment variables
    (or a local ``.env`` file), choose the storage backend, and pick the
    service host and port. Validation runs once per process thanks to the
    cache; tests construct ``LedgerSettings`` directly instead.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatePolicy(str, Enum):
    """Calendar used to derive a transaction's day from its timestamp."""

    UTC = "utc"
    LOCAL = "local"


class LedgerSettings(BaseSettings):
    """Runtime configuration for the ledger service."""

    model_config = SettingsConfigDict(
        env_prefix="MOMO_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding one JSON ledger file per user.",
    )
    store_backend: str = Field(
        "json",
        description="Ledger store backend name registered in the store registry.",
    )
    date_policy: DatePolicy = Field(
        DatePolicy.UTC,
        description="Whether transaction days follow UTC or the host's local clock.",
    )
    log_level: str = Field("INFO", description="Root logging level.")
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[Union[str, Path]]) -> Path:
        """Expand user directories and resolve to an absolute path."""

        return Path(value or "data").expanduser().resolve()

    @field_validator("store_backend")
    @classmethod
    def _normalise_backend(cls, value: str) -> str:
        return value.strip().lower()


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
