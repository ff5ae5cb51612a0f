"""World-state protocol for swappable backends.

The ledger runtime owns the real key-value store; the contract only sees this
transaction-scoped interface, enabling:
- Local in-memory (default, tests)
- Ledger peer state database (supplied by the hosting runtime)

Usage:
    state = LocalWorldState()
    contract.create(state, "Ada", 36, "passport", 7, "Main St")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from personledger.core.query import Selector


@dataclass(frozen=True, slots=True)
class KeyValue:
    """One stored pair returned by a range scan or selector query."""

    key: str
    value: bytes


@runtime_checkable
class StateIterator(Protocol):
    """Cursor over query results. Must be closed on every exit path."""

    def has_next(self) -> bool:
        """Check if another pair is available."""
        ...

    def next(self) -> KeyValue:
        """Return the next pair. Raises when exhausted or closed."""
        ...

    def close(self) -> None:
        """Release the cursor. Idempotent."""
        ...


@runtime_checkable
class WorldState(Protocol):
    """Transaction-scoped key-value interface. Implementations hold the data."""

    def put_state(self, key: str, value: bytes) -> None:
        """Write value at key, replacing any existing value."""
        ...

    def get_state(self, key: str) -> bytes | None:
        """Read value at key. None (or empty bytes) means not found."""
        ...

    def del_state(self, key: str) -> None:
        """Remove key."""
        ...

    def query_by_selector(self, selector: Selector) -> StateIterator:
        """Find pairs whose stored document satisfies selector."""
        ...

    def scan_range(self, start_key: str, end_key: str) -> StateIterator:
        """Iterate pairs with start_key <= key < end_key.

        Empty strings leave the corresponding bound open, so
        ``scan_range("", "")`` covers the entire key space.
        """
        ...
