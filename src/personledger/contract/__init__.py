"""Record contract: entry points and error types.

Architecture Note:
    contract/ composes core/ (schema, selectors) with a WorldState
    capability passed into each call. It holds configuration and a logger,
    never records.
"""

from personledger.contract.contract import PersonContract
from personledger.contract.errors import (
    EmptyResultError,
    InvalidIdentifierError,
    PersonContractError,
    RecordNotFoundError,
    SerializationError,
    StoreError,
)

__all__ = [
    "PersonContract",
    "PersonContractError",
    "RecordNotFoundError",
    "SerializationError",
    "EmptyResultError",
    "StoreError",
    "InvalidIdentifierError",
]
