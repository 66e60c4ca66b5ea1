"""
Centralized Configuration for Health Core

This is the ONLY place for runtime configuration in the codebase. Clinical
constants (conversion factors, medical bounds) live in constants.py and are
deliberately not overridable from the environment.

Usage:
    from health_core.config import settings

    level = settings.LOG_LEVEL
    system = settings.DEFAULT_UNIT_SYSTEM

Environment Variables:
    All settings can be overridden via .env file or environment variables.
"""

from typing import Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized configuration for Health Core.

    Only presentation and diagnostics live here. Storage is always in SI
    canonical units regardless of DEFAULT_UNIT_SYSTEM.
    """

    # ========== Display Settings ==========
    DEFAULT_UNIT_SYSTEM: str = Field(
        default="si",
        description="Unit system used when the user has no saved preference (si, conventional)"
    )
    DEFAULT_LOCALE: Optional[str] = Field(
        default=None,
        description="Locale used for unit system detection, e.g. en-US"
    )

    # ========== Logging Settings ==========
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    LOG_FILE_ENABLED: bool = Field(
        default=False,
        description="Enable file logging"
    )

    # ========== Paths ==========
    LOG_DIR: Path = Field(
        default=Path("./output/logs"),
        description="Directory for log files"
    )

    @field_validator("DEFAULT_UNIT_SYSTEM")
    @classmethod
    def check_unit_system(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("si", "conventional"):
            raise ValueError(f"DEFAULT_UNIT_SYSTEM must be 'si' or 'conventional', got {value!r}")
        return value

    # ========== Pydantic Settings Config ==========
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore validation of extra env vars
        case_sensitive=True
    )


# Singleton instance - import this everywhere
settings = Settings()
