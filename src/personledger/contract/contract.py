"""Person record contract: the entry points invoked by the ledger runtime.

Every entry point takes the transaction-scoped world state as its first
argument and performs a bounded sequence of reads and at most one write.
The contract itself keeps no records between calls.

Usage:
    contract = PersonContract()
    state = LocalWorldState()

    contract.create(state, "Ada", 36, "passport", 7, "Main St")
    contract.update(state, 7, 37, "Elm St", True, False)
    contract.get_by_id(state, 7)
    contract.get_employed(state, True)
    contract.get_people(state)
    contract.delete(state, 7)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from personledger.config import ContractSettings
from personledger.contract.errors import (
    EmptyResultError,
    InvalidIdentifierError,
    PersonContractError,
    RecordNotFoundError,
    SerializationError,
    StoreError,
)
from personledger.core.person import (
    Person,
    QueryResult,
    RecordFormatError,
    build_person,
    decode_person,
    encode_person,
    key_for,
    update_details,
)
from personledger.core.query import employment_selector
from personledger.storage.protocol import StateIterator, WorldState


@contextmanager
def _store_call(operation: str, key: str | None) -> Iterator[None]:
    """Surface any world-state failure as StoreError naming operation and key."""
    try:
        yield
    except PersonContractError:
        raise
    except Exception as e:
        target = f" at key {key}" if key else ""
        raise StoreError(
            f"{operation}: failed to access world state{target}: {e}",
            operation=operation,
            key=key,
        ) from e


class PersonContract:
    """Record facade for Person entries in world state.

    Args:
        settings: Contract configuration. Loaded from the environment if omitted.
        logger: Logger shared by every call. Built from settings if omitted.
    """

    def __init__(
        self,
        settings: ContractSettings | None = None,
        logger: logging.Logger | None = None,
    ):
        self._settings = settings or ContractSettings()
        if logger is None:
            logger = logging.getLogger(self._settings.logger_name)
            logger.setLevel(self._settings.log_level)
        self._logger = logger

    @property
    def settings(self) -> ContractSettings:
        return self._settings

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _check_id(self, operation: str, id_no: int) -> str:
        """Validate an identity number and return its key.

        Raises:
            InvalidIdentifierError: If id_no is not an int, or is negative
                while negative identifiers are disallowed.
        """
        if isinstance(id_no, bool) or not isinstance(id_no, int):
            raise InvalidIdentifierError(
                f"{operation}: identity number must be an integer, got {id_no!r}",
                operation=operation,
                key=None,
            )
        key = key_for(id_no)
        if id_no < 0 and not self._settings.allow_negative_ids:
            raise InvalidIdentifierError(
                f"{operation}: identity number must not be negative, got {id_no}",
                operation=operation,
                key=key,
            )
        return key

    @contextmanager
    def _closing(
        self,
        operation: str,
        key: str | None,
        iterator: StateIterator,
    ) -> Iterator[StateIterator]:
        """Close a query iterator on every exit path.

        A failing close surfaces as StoreError, unless another error is
        already propagating; that error wins and the close failure is logged.
        """
        try:
            yield iterator
        except Exception:
            try:
                iterator.close()
            except Exception:
                self._logger.warning(
                    "%s: failed to close iterator after error", operation, exc_info=True
                )
            raise
        with _store_call(operation, key):
            iterator.close()

    def _decode(self, operation: str, key: str, data: bytes) -> Person:
        try:
            return decode_person(data)
        except RecordFormatError as e:
            raise SerializationError(
                f"{operation}: unable to unmarshal record {key}: {e}",
                operation=operation,
                key=key,
            ) from e

    def _write(self, operation: str, person: Person) -> tuple[str, bytes]:
        try:
            data = encode_person(person)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"{operation}: unable to marshal record {person.key}: {e}",
                operation=operation,
                key=person.key,
            ) from e
        return person.key, data

    def create(
        self,
        state: WorldState,
        name: str,
        age: int,
        id_type: str,
        id_no: int,
        address: str,
    ) -> Person:
        """Create a record with both flags cleared.

        No existence check is made: creating an identity number that is
        already stored replaces the previous record (upsert).

        Args:
            state: Transaction-scoped world state.
            name: Display name.
            age: Age in years.
            id_type: Kind of identity document.
            id_no: Identity number, used as the key.
            address: Postal address.

        Returns:
            The record as written.

        Raises:
            InvalidIdentifierError: If id_no is rejected.
            SerializationError: If the inputs do not form a valid record.
            StoreError: If the write fails.
        """
        operation = "Create"
        self._logger.info("Start: Calling %s function.", operation)
        key = self._check_id(operation, id_no)

        try:
            person = build_person(name, age, id_type, id_no, address)
        except RecordFormatError as e:
            raise SerializationError(
                f"{operation}: unable to marshal record {key}: {e}",
                operation=operation,
                key=key,
            ) from e

        key, data = self._write(operation, person)
        with _store_call(operation, key):
            state.put_state(key, data)

        self._logger.info("End: %s wrote key %s", operation, key)
        return person

    def update(
        self,
        state: WorldState,
        id_no: int,
        age: int,
        address: str,
        is_employed: bool,
        is_married: bool,
    ) -> Person:
        """Replace the mutable attributes of an existing record.

        The full record is rewritten; name, id_type and id_no are kept.

        Returns:
            The record as written.

        Raises:
            RecordNotFoundError: If no record exists (nothing is written).
            SerializationError: If stored bytes or new values are invalid.
            StoreError: If the read or write fails.
        """
        operation = "Update"
        self._logger.info("Start: Calling %s function.", operation)
        current = self.get_by_id(state, id_no)
        key = key_for(id_no)

        try:
            person = update_details(current, age, address, is_employed, is_married)
        except RecordFormatError as e:
            raise SerializationError(
                f"{operation}: unable to marshal record {key}: {e}",
                operation=operation,
                key=key,
            ) from e

        # Same key that was read.
        _, data = self._write(operation, person)
        with _store_call(operation, key):
            state.put_state(key, data)

        self._logger.info("End: %s wrote key %s", operation, key)
        return person

    def get_by_id(self, state: WorldState, id_no: int) -> Person:
        """Read one record by identity number.

        Raises:
            InvalidIdentifierError: If id_no is rejected.
            RecordNotFoundError: If no record is stored at the key.
            SerializationError: If the stored bytes are not a valid record.
            StoreError: If the read fails.
        """
        operation = "GetById"
        self._logger.info("Start: Calling %s function.", operation)
        key = self._check_id(operation, id_no)

        with _store_call(operation, key):
            data = state.get_state(key)
        if not data:
            raise RecordNotFoundError(
                f"{operation}: the person {key} does not exist",
                operation=operation,
                key=key,
            )

        person = self._decode(operation, key, data)
        self._logger.info("End: %s called with key value of: %s", operation, key)
        return person

    def get_employed(self, state: WorldState, is_employed: bool) -> list[Person]:
        """List unmarried records whose employment flag equals is_employed.

        The store filters on the employment flag; married records are then
        dropped here.

        Returns:
            Matching records in store iteration order.

        Raises:
            EmptyResultError: If nothing remains after filtering.
            SerializationError: If a matched value is not a valid record.
            StoreError: If the query or iteration fails.
        """
        operation = "GetEmployed"
        self._logger.info("Start: Calling %s function.", operation)
        selector = employment_selector(is_employed)
        flag = str(is_employed).lower()

        with _store_call(operation, flag):
            iterator = state.query_by_selector(selector)

        people: list[Person] = []
        with self._closing(operation, flag, iterator):
            while True:
                with _store_call(operation, flag):
                    if not iterator.has_next():
                        break
                    kv = iterator.next()
                person = self._decode(operation, kv.key, kv.value)
                if not person.is_married:
                    people.append(person)

        if not people:
            raise EmptyResultError(
                f"{operation}: no unmarried person with isEmployed={flag} exists",
                operation=operation,
                key=flag,
            )

        self._logger.info("End: %s returned %d records", operation, len(people))
        return people

    def get_people(self, state: WorldState) -> list[QueryResult]:
        """List every record in the key space.

        Returns:
            One QueryResult per stored pair, in store iteration order.

        Raises:
            EmptyResultError: If the store holds no records.
            SerializationError: If a stored value is not a valid record.
            StoreError: If the scan or iteration fails.
        """
        operation = "GetPeople"
        self._logger.info("Start: Calling %s function.", operation)

        with _store_call(operation, None):
            iterator = state.scan_range("", "")

        people: list[QueryResult] = []
        with self._closing(operation, None, iterator):
            while True:
                with _store_call(operation, None):
                    if not iterator.has_next():
                        break
                    kv = iterator.next()
                record = self._decode(operation, kv.key, kv.value)
                people.append(QueryResult(key=kv.key, record=record))

        if not people:
            raise EmptyResultError(
                f"{operation}: no records available",
                operation=operation,
            )

        self._logger.info("End: %s returned %d records", operation, len(people))
        return people

    def delete(self, state: WorldState, id_no: int) -> None:
        """Delete an existing record.

        Raises:
            RecordNotFoundError: If no record exists.
            StoreError: If the read or delete fails.
        """
        operation = "Delete"
        self._logger.info("Start: Calling %s function.", operation)
        person = self.get_by_id(state, id_no)

        with _store_call(operation, person.key):
            state.del_state(person.key)

        self._logger.info("End: %s removed key %s", operation, person.key)
