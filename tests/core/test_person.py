"""Tests for Person models, keying and serialization."""

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

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


@pytest.fixture
def ada():
    return Person(name="Ada", age=36, id_type="passport", id_no=7, address="Main St")


@st.composite
def person_strategy(draw):
    """Generate arbitrary valid Person records."""
    return Person(
        name=draw(st.text()),
        age=draw(st.integers(min_value=0, max_value=150)),
        id_type=draw(st.text()),
        id_no=draw(st.integers(min_value=0, max_value=10**12)),
        address=draw(st.text()),
        is_employed=draw(st.booleans()),
        is_married=draw(st.booleans()),
    )


# Keying


def test_key_is_decimal_string_of_id():
    assert key_for(7) == "7"
    assert key_for(0) == "0"
    assert key_for(1234567890123) == "1234567890123"


def test_person_key_matches_key_for(ada):
    assert ada.key == key_for(ada.id_no)


# Model behaviour


def test_flags_default_to_false(ada):
    assert ada.is_employed is False
    assert ada.is_married is False


def test_build_person_clears_flags():
    person = build_person("Ada", 36, "passport", 7, "Main St")

    assert person == Person(name="Ada", age=36, id_type="passport", id_no=7, address="Main St")


def test_build_person_rejects_mistyped_input():
    with pytest.raises(RecordFormatError):
        build_person("Ada", "thirty-six", "passport", 7, "Main St")  # type: ignore[arg-type]


def test_person_is_frozen(ada):
    with pytest.raises(ValidationError):
        ada.age = 40  # type: ignore[misc]


def test_with_details_keeps_identity_fields(ada):
    updated = ada.with_details(age=37, address="Elm St", is_employed=True, is_married=True)

    assert (updated.name, updated.id_type, updated.id_no) == ("Ada", "passport", 7)
    assert (updated.age, updated.address) == (37, "Elm St")
    assert updated.is_employed and updated.is_married
    assert ada.age == 36, "the source record must be untouched"


def test_update_details_rejects_non_bool_flag(ada):
    with pytest.raises(RecordFormatError):
        update_details(ada, 37, "Elm St", 1, False)  # type: ignore[arg-type]


def test_query_result_to_dict(ada):
    result = QueryResult(key="7", record=ada)

    assert result.to_dict() == {
        "Key": "7",
        "Record": {
            "name": "Ada",
            "age": 36,
            "idType": "passport",
            "idNo": 7,
            "address": "Main St",
            "isEmployed": False,
            "isMarried": False,
        },
    }


# Serialization


def test_encoded_document_has_exactly_persisted_attributes(ada):
    document = json.loads(encode_person(ada))

    assert set(document) == PERSISTED_FIELDS
    assert set(document) == {f.value for f in PersonField}
    assert document["idNo"] == 7
    assert document["isEmployed"] is False


@given(person=person_strategy())
def test_decode_inverts_encode(person):
    """PROPERTY: decoding an encoded record yields an equal record."""
    assert decode_person(encode_person(person)) == person


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"\xff\xfe",
        b"[1, 2, 3]",
        b'"just a string"',
    ],
)
def test_decode_rejects_non_documents(raw):
    with pytest.raises(RecordFormatError):
        decode_person(raw)


def test_decode_rejects_missing_attribute(ada):
    document = ada.to_document()
    del document["isMarried"]

    with pytest.raises(RecordFormatError, match="isMarried"):
        decode_person(json.dumps(document).encode())


def test_decode_rejects_extra_attribute(ada):
    document = {**ada.to_document(), "salary": 100}

    with pytest.raises(RecordFormatError):
        decode_person(json.dumps(document).encode())


@pytest.mark.parametrize(
    ("attribute", "value"),
    [
        ("age", "36"),
        ("idNo", "7"),
        ("isEmployed", 1),
        ("isMarried", "false"),
        ("name", 42),
    ],
)
def test_decode_rejects_mistyped_values(ada, attribute, value):
    document = {**ada.to_document(), attribute: value}

    with pytest.raises(RecordFormatError):
        decode_person(json.dumps(document).encode())
