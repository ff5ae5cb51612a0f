"""Person record schema: models, keying and serialization."""

from personledger.core.person.models import PERSISTED_FIELDS, Person, PersonField, QueryResult
from personledger.core.person.operations import (
    RecordFormatError,
    build_person,
    decode_person,
    encode_person,
    key_for,
    update_details,
)

__all__ = [
    # Models
    "Person",
    "PersonField",
    "QueryResult",
    "PERSISTED_FIELDS",
    # Operations
    "RecordFormatError",
    "key_for",
    "build_person",
    "update_details",
    "encode_person",
    "decode_person",
]
