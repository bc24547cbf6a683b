"""Tests for decoding positional rows into named records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pytest
from pydantic import AliasChoices, AliasPath, BaseModel, Field

from neorest.rest import ErrorKind, Neo4jRestError, column, decode_rows


@dataclass
class Person:
    name: str = column("n.name")
    age: Optional[int] = column("n.age", default=None)


@dataclass
class Tagged:
    tags: List[str] = field(default_factory=list)
    note: str = ""


class Friend(BaseModel):
    name: str = Field(alias="friend.name")
    rel_type: str = Field(alias="type(r)")


def test_rows_without_record_type_are_keyed_by_column() -> None:
    rows = decode_rows(["a", "b"], [[1, "x"], [2, "y"]])

    assert rows == [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]


def test_column_map_renames_plain_rows() -> None:
    rows = decode_rows(["n.name", "n.age"], [["I", 30]], column_map={"name": "n.name"})

    assert rows == [{"name": "I"}]


def test_dataclass_columns_declared_on_fields() -> None:
    people = decode_rows(["n.name", "n.age"], [["I", 30], ["you", None]], Person)

    assert people == [Person(name="I", age=30), Person(name="you", age=None)]


def test_missing_optional_column_uses_default() -> None:
    people = decode_rows(["n.name"], [["I"]], Person)

    assert people == [Person(name="I", age=None)]


def test_missing_required_column_is_decode_failure() -> None:
    with pytest.raises(Neo4jRestError) as exc_info:
        decode_rows(["n.age"], [[30]], Person)

    assert exc_info.value.kind is ErrorKind.DECODE


def test_model_aliases_match_columns_and_extra_columns_are_ignored() -> None:
    friends = decode_rows(
        ["type(r)", "friend.name", "friend.age"],
        [["knows", "you", 69], ["loves", "you", 69]],
        Friend,
    )

    assert [(f.rel_type, f.name) for f in friends] == [("knows", "you"), ("loves", "you")]


def test_explicit_column_map_overrides_declared_columns() -> None:
    friends = decode_rows(
        ["who", "how"],
        [["you", "knows"]],
        Friend,
        column_map={"name": "who", "rel_type": "how"},
    )

    assert friends[0].name == "you"
    assert friends[0].rel_type == "knows"


def test_column_map_with_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError):
        decode_rows(["a"], [[1]], Person, column_map={"nope": "a"})


def test_list_values_keep_their_order() -> None:
    tagged = decode_rows(["tags"], [[["b", "a", "c"]]], Tagged)

    assert tagged == [Tagged(tags=["b", "a", "c"], note="")]


def test_type_mismatch_is_decode_failure() -> None:
    @dataclass
    class Count:
        total: int = column("n.name")

    with pytest.raises(Neo4jRestError) as exc_info:
        decode_rows(["n.name"], [["ok"]], Count)

    assert exc_info.value.kind is ErrorKind.DECODE


def test_ragged_rows_are_rejected() -> None:
    with pytest.raises(Neo4jRestError) as exc_info:
        decode_rows(["a", "b"], [[1, 2, 3]])

    assert exc_info.value.kind is ErrorKind.DECODE


def test_unsupported_record_type() -> None:
    with pytest.raises(TypeError):
        decode_rows(["a"], [[1]], dict)


class Choice(BaseModel):
    name: str = Field(validation_alias=AliasChoices("n.name", "name"))


class Nested(BaseModel):
    name: str = Field(validation_alias=AliasPath("n", "name"))


def test_alias_choices_read_the_first_column_name() -> None:
    records = decode_rows(["n.name"], [["I"]], Choice)

    assert records == [Choice(name="I")]


def test_alias_choices_can_be_remapped() -> None:
    records = decode_rows(["who"], [["you"]], Choice, column_map={"name": "who"})

    assert records[0].name == "you"


def test_alias_path_is_rejected_before_decoding(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(TypeError):
        decode_rows(["n"], [[{"name": "I"}]], Nested)

    assert "Nested.name" in caplog.text


def test_ragged_rows_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(Neo4jRestError):
        decode_rows(["a", "b"], [[1, 2], [3]])

    assert "Row 1 has 1 values for 2 columns" in caplog.text
