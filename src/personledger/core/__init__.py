"""Core functionalities: stateless record schema and query primitives.

Architecture Note:
    core/ contains pure, stateless functionalities. Nothing here touches
    world state; for the store boundary see storage/, for the entry points
    that combine both see contract/.
"""

from personledger.core.person import (
    PERSISTED_FIELDS,
    Person,
    PersonField,
    QueryResult,
    RecordFormatError,
    build_person,
    decode_person,
    encode_person,
    key_for,
    update_details,
)
from personledger.core.query import (
    Condition,
    Operator,
    Selector,
    employment_selector,
    matching_pairs,
)

__all__ = [
    # Person
    "Person",
    "PersonField",
    "QueryResult",
    "PERSISTED_FIELDS",
    "RecordFormatError",
    "key_for",
    "build_person",
    "update_details",
    "encode_person",
    "decode_person",
    # Query
    "Selector",
    "Condition",
    "Operator",
    "employment_selector",
    "matching_pairs",
]
