"""Mini README: Centralised configuration models and helpers for Spendbook.

Structure:
    * SpendbookSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables, locate the
    persisted expense file and choose where spreadsheet exports land. The
    configuration is cached so the cost of validation is incurred only once
    per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class SpendbookSettings(BaseSettings):
    """Runtime configuration for the Spendbook tracker."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_file: Path = Field(
        Path("expenses.db"),
        description="Flat file holding the persisted ledger, one expense per line.",
    )
    export_directory: Path = Field(
        Path("."),
        description="Directory where spreadsheet exports are written by default.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level used by the console front end.",
    )
    autosave_interval_seconds: float = Field(
        0.0,
        description=(
            "Interval for the background saver used by the interactive menu."
            " Zero disables periodic saving; the ledger is still saved on exit."
        ),
        ge=0,
    )

    class Config:
        env_prefix = "SPENDBOOK_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_file", "export_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories."""

        return Path(value).expanduser()

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Store level names upper-cased so logging accepts them."""

        return value.strip().upper()


@lru_cache()
def get_settings() -> SpendbookSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return SpendbookSettings()
