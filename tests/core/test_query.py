"""Tests for the typed selector."""

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from personledger.core.person import Person, PersonField, encode_person
from personledger.core.query import (
    Condition,
    Operator,
    Selector,
    employment_selector,
    matching_pairs,
)


def _doc(**overrides):
    base = {
        "name": "Ada",
        "age": 36,
        "idType": "passport",
        "idNo": 7,
        "address": "Main St",
        "isEmployed": True,
        "isMarried": False,
    }
    base.update(overrides)
    return base


@st.composite
def condition_strategy(draw):
    """Generate random valid conditions for property testing."""
    field = draw(st.sampled_from(list(PersonField)))
    if field.value_type is bool:
        operator = draw(st.sampled_from([Operator.EQ, Operator.NE]))
        return Condition(field, operator, draw(st.booleans()))
    if field.value_type is int:
        value = draw(st.integers(min_value=-5, max_value=50))
    else:
        value = draw(st.sampled_from(["Ada", "Main St", "passport", ""]))
    return Condition(field, draw(st.sampled_from(list(Operator))), value)


# Construction and validation


def test_where_returns_new_selector():
    base = Selector()
    narrowed = base.where(PersonField.IS_EMPLOYED, True)

    assert len(base) == 0
    assert len(narrowed) == 1
    assert narrowed.fields() == frozenset({PersonField.IS_EMPLOYED})


def test_string_attribute_is_coerced_to_field():
    selector = Selector().where("isMarried", False)

    assert next(iter(selector)).field is PersonField.IS_MARRIED


def test_unknown_attribute_rejected():
    with pytest.raises(ValueError, match="Unknown attribute"):
        Selector().where("salary", 10)


@pytest.mark.parametrize(
    ("field", "value"),
    [
        (PersonField.IS_EMPLOYED, 1),
        (PersonField.IS_EMPLOYED, "true"),
        (PersonField.AGE, True),
        (PersonField.AGE, "36"),
        (PersonField.NAME, 5),
    ],
)
def test_mistyped_value_rejected(field, value):
    with pytest.raises(TypeError):
        Selector().where(field, value)


def test_ordering_operator_rejected_on_bool():
    with pytest.raises(ValueError):
        Selector().where(PersonField.IS_MARRIED, True, Operator.GT)


# Matching


def test_employment_selector_matches_flag():
    selector = employment_selector(True)

    assert selector.matches(_doc(isEmployed=True))
    assert not selector.matches(_doc(isEmployed=False))


def test_bool_condition_does_not_match_int_value():
    selector = employment_selector(True)

    assert not selector.matches(_doc(isEmployed=1))


def test_missing_attribute_never_matches():
    doc = _doc()
    del doc["age"]

    assert not Selector().where(PersonField.AGE, 36).matches(doc)
    assert not Selector().where(PersonField.AGE, 36, Operator.NE).matches(doc)


def test_range_conditions_are_anded():
    selector = Selector().where("age", 18, Operator.GTE).where("age", 40, Operator.LT)

    assert selector.matches(_doc(age=18))
    assert selector.matches(_doc(age=39))
    assert not selector.matches(_doc(age=40))
    assert not selector.matches(_doc(age=17))


def test_empty_selector_matches_everything():
    assert Selector().matches(_doc())
    assert Selector().matches({})


@given(conditions=st.lists(condition_strategy(), max_size=4), age=st.integers(-5, 50))
def test_selector_is_conjunction_of_conditions(conditions, age):
    """PROPERTY: a selector matches iff every one of its conditions matches."""
    selector = Selector(tuple(conditions))
    doc = _doc(age=age)

    assert selector.matches(doc) == all(c.matches(doc) for c in conditions)


# Rendering


def test_equality_renders_as_plain_value():
    assert employment_selector(False).to_mango() == {"selector": {"isEmployed": False}}


def test_operators_render_with_mango_names():
    selector = Selector().where("age", 18, Operator.GTE).where("age", 65, Operator.LT)

    assert selector.to_mango() == {"selector": {"age": {"$gte": 18, "$lt": 65}}}


def test_to_json_is_valid_json():
    selector = employment_selector(True).where("isMarried", False)

    assert json.loads(selector.to_json()) == {
        "selector": {"isEmployed": True, "isMarried": False}
    }


# Evaluation over raw pairs


def test_matching_pairs_filters_and_keeps_order():
    employed = Person(name="A", age=1, id_type="x", id_no=1, address="a", is_employed=True)
    idle = Person(name="B", age=2, id_type="x", id_no=2, address="b")
    pairs = [
        ("1", encode_person(employed)),
        ("2", encode_person(idle)),
        ("3", b"garbage"),
        ("4", b"[true]"),
        ("5", encode_person(employed)),
    ]

    result = list(matching_pairs(employment_selector(True), pairs))

    assert [key for key, _ in result] == ["1", "5"]
