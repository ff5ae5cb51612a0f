"""
Error types raised by the record contract.

- PersonContractError: Base exception
- RecordNotFoundError: No record at the requested key
- SerializationError: Record bytes or inputs cannot be (de)serialized
- EmptyResultError: A listing produced no records
- StoreError: The world-state interface itself failed
- InvalidIdentifierError: Identity number rejected before touching state

Invariants:
    - All errors inherit from PersonContractError
    - Messages name the operation and the offending key or value
"""

from __future__ import annotations

from typing import Any


class PersonContractError(Exception):
    """Base exception for all contract errors.

    Attributes:
        message: Error message
        operation: Entry point that failed (e.g. "GetById")
        key: World-state key or query value involved, if any
    """

    code = "CONTRACT_ERROR"

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.key = key

    @property
    def details(self) -> dict[str, Any]:
        return {"code": self.code, "operation": self.operation, "key": self.key}


class RecordNotFoundError(PersonContractError):
    """No record is stored at the key."""

    code = "NOT_FOUND"


class SerializationError(PersonContractError):
    """Stored bytes are malformed, or input values cannot form a record."""

    code = "SERIALIZATION_ERROR"


class EmptyResultError(PersonContractError):
    """A listing or filtered query matched nothing.

    Empty listings are reported as failures, not as empty lists.
    """

    code = "EMPTY_RESULT"


class StoreError(PersonContractError):
    """The world-state interface raised while serving a call."""

    code = "STORE_ERROR"


class InvalidIdentifierError(PersonContractError):
    """Identity number is not a usable key."""

    code = "INVALID_ID"
