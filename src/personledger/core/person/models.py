"""Person record models.

Usage:
    person = Person(name="Ada", age=36, id_type="passport", id_no=7, address="Main St")
    person.key  # "7"
    updated = person.with_details(age=37, address="Elm St", is_employed=True, is_married=False)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PersonField(str, Enum):
    """Persisted attribute names of a Person record."""

    NAME = "name"
    AGE = "age"
    ID_TYPE = "idType"
    ID_NO = "idNo"
    ADDRESS = "address"
    IS_EMPLOYED = "isEmployed"
    IS_MARRIED = "isMarried"

    @property
    def value_type(self) -> type:
        """Python type stored under this attribute."""
        return _FIELD_TYPES[self]


_FIELD_TYPES: dict[PersonField, type] = {
    PersonField.NAME: str,
    PersonField.AGE: int,
    PersonField.ID_TYPE: str,
    PersonField.ID_NO: int,
    PersonField.ADDRESS: str,
    PersonField.IS_EMPLOYED: bool,
    PersonField.IS_MARRIED: bool,
}

PERSISTED_FIELDS: frozenset[str] = frozenset(f.value for f in PersonField)


class Person(BaseModel):
    """A single person record as held in world state.

    Strict typing: no coercion between str/int/bool, so a stored ``"age": "36"``
    or ``"isEmployed": 1`` fails validation instead of being silently accepted.

    Attributes:
        name: Display name, fixed at creation.
        age: Age in years.
        id_type: Kind of identity document, fixed at creation.
        id_no: Identity number, also the storage key.
        address: Postal address.
        is_employed: Employment flag, False at creation.
        is_married: Marital flag, False at creation.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )

    name: str
    age: int
    id_type: str = Field(alias=PersonField.ID_TYPE.value)
    id_no: int = Field(alias=PersonField.ID_NO.value)
    address: str
    is_employed: bool = Field(default=False, alias=PersonField.IS_EMPLOYED.value)
    is_married: bool = Field(default=False, alias=PersonField.IS_MARRIED.value)

    @property
    def key(self) -> str:
        """World-state key of this record."""
        return str(self.id_no)

    def with_details(
        self,
        age: int,
        address: str,
        is_employed: bool,
        is_married: bool,
    ) -> Person:
        """Return a copy with the mutable attributes replaced.

        name, id_type and id_no are carried over unchanged. The copy is fully
        re-validated, unlike ``model_copy(update=...)``.

        Args:
            age: New age.
            address: New address.
            is_employed: New employment flag.
            is_married: New marital flag.

        Returns:
            New Person instance.
        """
        return Person(
            name=self.name,
            age=age,
            id_type=self.id_type,
            id_no=self.id_no,
            address=address,
            is_employed=is_employed,
            is_married=is_married,
        )

    def to_document(self) -> dict[str, Any]:
        """Attribute dict keyed by persisted names."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True, slots=True)
class QueryResult:
    """A record paired with the key it was listed under."""

    key: str
    record: Person

    def to_dict(self) -> dict[str, Any]:
        return {"Key": self.key, "Record": self.record.to_document()}
