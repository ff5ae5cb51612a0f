"""Configuration module using Pydantic Settings.

Usage:
    from personledger.config import ContractSettings

    settings = ContractSettings(log_level="DEBUG")
"""

from personledger.config.settings import ContractSettings

__all__ = [
    "ContractSettings",
]
