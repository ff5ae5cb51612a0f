"""Typed selector for filtered world-state queries.

Usage:
    # Attribute equality
    Selector().where(PersonField.IS_EMPLOYED, True)

    # Comparisons, ANDed together
    Selector().where("age", 18, Operator.GTE).where("isMarried", False)

    # Rendered for a CouchDB-backed state database
    selector.to_mango()  # {"selector": {"age": {"$gte": 18}, "isMarried": False}}
"""

from __future__ import annotations

import json
import operator as op
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from personledger.core.person.models import PersonField


class Operator(Enum):
    """Comparison operators, valued by their Mango spelling."""

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"

    @property
    def is_ordering(self) -> bool:
        return self not in (Operator.EQ, Operator.NE)


_COMPARATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: op.eq,
    Operator.NE: op.ne,
    Operator.GT: op.gt,
    Operator.GTE: op.ge,
    Operator.LT: op.lt,
    Operator.LTE: op.le,
}


def _same_kind(value: Any, expected: type) -> bool:
    """isinstance check that keeps bool and int apart."""
    if expected is bool:
        return isinstance(value, bool)
    return isinstance(value, expected) and not isinstance(value, bool)


@dataclass(frozen=True)
class Condition:
    """One (attribute, operator, value) test.

    Validated on construction: the attribute must be a known PersonField, the
    value must have that attribute's type, and ordering operators are not
    allowed on boolean attributes.
    """

    field: PersonField
    operator: Operator
    value: Any

    def __post_init__(self) -> None:
        try:
            field = PersonField(self.field)
        except ValueError as e:
            raise ValueError(f"Unknown attribute for selector: {self.field!r}") from e
        object.__setattr__(self, "field", field)

        if not isinstance(self.operator, Operator):
            raise TypeError(f"Invalid operator: {self.operator!r}")
        if not _same_kind(self.value, field.value_type):
            raise TypeError(
                f"Attribute {field.value!r} expects {field.value_type.__name__}, "
                f"got {type(self.value).__name__}"
            )
        if self.operator.is_ordering and field.value_type is bool:
            raise ValueError(f"Operator {self.operator.value} is not defined for {field.value!r}")

    def matches(self, document: Mapping[str, Any]) -> bool:
        """Check a decoded record against this condition.

        Missing attributes and values of a different type never match.
        """
        if self.field.value not in document:
            return False
        actual = document[self.field.value]
        if not _same_kind(actual, self.field.value_type):
            return False
        return _COMPARATORS[self.operator](actual, self.value)

    def to_mango(self) -> Any:
        if self.operator is Operator.EQ:
            return self.value
        return {self.operator.value: self.value}


@dataclass(frozen=True)
class Selector:
    """Conjunction of conditions over Person attributes.

    Immutable - each method returns a new Selector instance. An empty
    Selector matches every record.
    """

    conditions: tuple[Condition, ...] = ()

    def where(
        self,
        field: PersonField | str,
        value: Any,
        operator: Operator = Operator.EQ,
    ) -> Selector:
        """Add a condition; records must satisfy it as well as all prior ones."""
        condition = Condition(field=field, operator=operator, value=value)  # type: ignore[arg-type]
        return Selector(self.conditions + (condition,))

    def __iter__(self) -> Iterator[Condition]:
        return iter(self.conditions)

    def __len__(self) -> int:
        return len(self.conditions)

    def fields(self) -> frozenset[PersonField]:
        """All attributes this selector tests."""
        return frozenset(c.field for c in self.conditions)

    def matches(self, document: Mapping[str, Any]) -> bool:
        """Check if a decoded record satisfies every condition."""
        return all(c.matches(document) for c in self.conditions)

    def to_mango(self) -> dict[str, Any]:
        """Render as a CouchDB Mango query document.

        Several conditions on one attribute are merged into a single operator
        object; a repeated equality is expressed as ``$eq``.
        """
        rendered: dict[str, Any] = {}
        for c in self.conditions:
            name = c.field.value
            if name not in rendered:
                rendered[name] = c.to_mango()
                continue
            existing = rendered[name]
            if not isinstance(existing, dict):
                existing = {Operator.EQ.value: existing}
            rendered[name] = {**existing, c.operator.value: c.value}
        return {"selector": rendered}

    def to_json(self) -> str:
        return json.dumps(self.to_mango(), sort_keys=True)
