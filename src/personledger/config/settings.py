"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
record contract.

Usage:
    from personledger.config import ContractSettings

    # Load from environment variables (PERSONLEDGER_*)
    settings = ContractSettings()

    # Or override with explicit values
    settings = ContractSettings(allow_negative_ids=True)
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ContractSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for PersonContract.

    Attributes:
        logger_name: Name of the logger used when none is injected.
        log_level: Level applied to that default logger.
        allow_negative_ids: Accept negative identity numbers as keys.

    Environment Variables:
        PERSONLEDGER_LOGGER_NAME
        PERSONLEDGER_LOG_LEVEL
        PERSONLEDGER_ALLOW_NEGATIVE_IDS
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSONLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    logger_name: str = "personledger"
    log_level: str = "INFO"
    allow_negative_ids: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level
