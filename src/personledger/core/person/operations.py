"""Keying and (de)serialization of Person records."""

from __future__ import annotations

import json

from pydantic import ValidationError

from personledger.core.person.models import PERSISTED_FIELDS, Person


class RecordFormatError(ValueError):
    """Stored bytes or input values do not form a valid Person record."""

    pass


def key_for(id_no: int) -> str:
    """Derive the world-state key for an identity number.

    Args:
        id_no: Identity number of the record.

    Returns:
        Base-10 string form of id_no.
    """
    return str(id_no)


def encode_person(person: Person) -> bytes:
    """Serialize a Person to its persisted JSON form (UTF-8)."""
    return person.model_dump_json(by_alias=True).encode("utf-8")


def decode_person(data: bytes) -> Person:
    """Deserialize persisted bytes into a Person.

    The document must hold exactly the persisted attribute names, each with a
    value of the right JSON type.

    Args:
        data: Bytes previously produced by encode_person (or an equivalent writer).

    Returns:
        Decoded Person.

    Raises:
        RecordFormatError: If data is not valid UTF-8 JSON, is not an object,
            has missing or extra attributes, or has mistyped values.
    """
    try:
        document = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecordFormatError(f"not a JSON document: {e}") from e

    if not isinstance(document, dict):
        raise RecordFormatError(f"expected a JSON object, got {type(document).__name__}")

    missing = PERSISTED_FIELDS - document.keys()
    if missing:
        raise RecordFormatError(f"missing attributes: {sorted(missing)}")

    try:
        return Person.model_validate(document)
    except ValidationError as e:
        raise RecordFormatError(str(e)) from e


def build_person(name: str, age: int, id_type: str, id_no: int, address: str) -> Person:
    """Build a freshly created Person with both flags cleared.

    Raises:
        RecordFormatError: If any value has the wrong type.
    """
    try:
        return Person(
            name=name,
            age=age,
            id_type=id_type,
            id_no=id_no,
            address=address,
            is_employed=False,
            is_married=False,
        )
    except ValidationError as e:
        raise RecordFormatError(str(e)) from e


def update_details(
    person: Person,
    age: int,
    address: str,
    is_employed: bool,
    is_married: bool,
) -> Person:
    """Replace the mutable attributes of a record.

    Raises:
        RecordFormatError: If any new value has the wrong type.
    """
    try:
        return person.with_details(age, address, is_employed, is_married)
    except ValidationError as e:
        raise RecordFormatError(str(e)) from e
