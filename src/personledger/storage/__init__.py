"""World-state backends."""

from personledger.storage.local import IteratorClosedError, LocalStateIterator, LocalWorldState
from personledger.storage.protocol import KeyValue, StateIterator, WorldState

__all__ = [
    "WorldState",
    "StateIterator",
    "KeyValue",
    "LocalWorldState",
    "LocalStateIterator",
    "IteratorClosedError",
]
