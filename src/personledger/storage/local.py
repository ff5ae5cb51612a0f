"""Local in-memory world state implementation.

Simple dict-based store suitable for single-process use and testing.
Keys are iterated in lexicographic order, matching ledger state databases.
Not thread-safe: one instance models one transaction scope at a time.

Usage:
    state = LocalWorldState()
    state.put_state("7", b'{"name": "Ada", ...}')
    with closing(state.scan_range("", "")) as it:
        while it.has_next():
            kv = it.next()
"""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Iterator

from personledger.core.query import Selector, matching_pairs
from personledger.storage.protocol import KeyValue

logger = logging.getLogger(__name__)


class IteratorClosedError(Exception):
    """Raised when reading from a closed or exhausted iterator."""

    pass


class LocalStateIterator:
    """Iterator over a fixed list of pairs captured at creation.

    Later writes to the store are not visible through an open iterator.

    Args:
        pairs: Pairs to yield, in order.
        owner: Store that issued the iterator, notified on close.
    """

    def __init__(self, pairs: list[KeyValue], owner: LocalWorldState):
        self._pairs = pairs
        self._position = 0
        self._owner = owner
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def has_next(self) -> bool:
        return not self._closed and self._position < len(self._pairs)

    def next(self) -> KeyValue:
        """Return the next pair.

        Raises:
            IteratorClosedError: If closed or no pairs remain.
        """
        if self._closed:
            raise IteratorClosedError("iterator is closed")
        if self._position >= len(self._pairs):
            raise IteratorClosedError("iterator is exhausted")
        kv = self._pairs[self._position]
        self._position += 1
        return kv

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._owner._release(self)


class LocalWorldState:
    """In-memory world state using a plain dict.

    Structure:
        _data[key] = value bytes

    Tracks iterators that have been handed out but not closed, so tests can
    assert that callers release every cursor.
    """

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._open: set[LocalStateIterator] = set()

    def _sorted_pairs(self) -> Iterator[tuple[str, bytes]]:
        for key in sorted(self._data):
            yield key, self._data[key]

    def _issue(self, pairs: list[KeyValue]) -> LocalStateIterator:
        iterator = LocalStateIterator(pairs, owner=self)
        self._open.add(iterator)
        return iterator

    def _release(self, iterator: LocalStateIterator) -> None:
        self._open.discard(iterator)

    @property
    def open_iterators(self) -> int:
        """Number of issued iterators not yet closed."""
        return len(self._open)

    def put_state(self, key: str, value: bytes) -> None:
        """Write value at key, replacing any existing value.

        Raises:
            ValueError: If key is empty.
            TypeError: If value is not bytes.
        """
        if not key:
            raise ValueError("key must not be empty")
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"value must be bytes, got {type(value).__name__}")
        self._data[key] = bytes(value)

    def get_state(self, key: str) -> bytes | None:
        return self._data.get(key)

    def del_state(self, key: str) -> None:
        """Remove key. Deleting an absent key is a no-op, as on a ledger."""
        if not key:
            raise ValueError("key must not be empty")
        self._data.pop(key, None)

    def query_by_selector(self, selector: Selector) -> LocalStateIterator:
        """Evaluate selector over every stored document, in key order."""
        matches = [KeyValue(k, v) for k, v in matching_pairs(selector, self._sorted_pairs())]
        logger.debug(
            "Selector %s matched %d of %d keys", selector.to_json(), len(matches), len(self)
        )
        return self._issue(matches)

    def scan_range(self, start_key: str, end_key: str) -> LocalStateIterator:
        """Iterate keys in [start_key, end_key); empty bounds are open."""
        pairs = [
            KeyValue(k, v)
            for k, v in self._sorted_pairs()
            if (not start_key or k >= start_key) and (not end_key or k < end_key)
        ]
        return self._issue(pairs)

    def keys(self) -> list[str]:
        """All stored keys in iteration order."""
        return sorted(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def snapshot(self) -> bytes:
        """Serialize the entire table (JSON, values base64-encoded)."""
        return json.dumps(
            {k: base64.b64encode(v).decode("ascii") for k, v in self._data.items()},
            sort_keys=True,
        ).encode("utf-8")

    def restore(self, data: bytes) -> None:
        """Replace the table with a previous snapshot().

        Args:
            data: Bytes from a previous snapshot() call.
        """
        table = json.loads(data.decode("utf-8"))
        self._data = {k: base64.b64decode(v) for k, v in table.items()}
