"""Mini README: Centralised configuration for Pocket Ledger.

Structure:
    * LedgerSettings - pydantic settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Values are read from ``POCKETLEDGER_*`` environment variables or a local
    ``.env`` file. Call ``get_settings.cache_clear()`` after changing the
    environment (tests do this) to force re-validation.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Runtime configuration for the ledger, its storage and its interface."""

    model_config = SettingsConfigDict(
        env_prefix="POCKETLEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling reload and logging behaviour.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger slot files.",
    )
    storage_slot: str = Field(
        "transactions",
        min_length=1,
        description="Name of the key/value slot the whole ledger is written to.",
    )
    default_category: str = Field(
        "Other",
        min_length=1,
        description="Category assigned to transactions submitted without one.",
    )
    currency_symbol: str = Field("R$", description="Symbol prefixed to formatted amounts.")
    decimal_separator: str = Field(",", min_length=1, max_length=1)
    thousands_separator: str = Field(".", max_length=1)
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web dashboard to bind to.",
    )
    interface_port: int = Field(8000, ge=1, le=65535)

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Union[str, Path]) -> Path:
        """Expand user directories and make sure the data directory exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> LedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return LedgerSettings()
