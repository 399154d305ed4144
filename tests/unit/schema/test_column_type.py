"""Tests for the dialect-independent ColumnType machinery, driven by a small kind table."""

from enum import Enum
from typing import ClassVar, Dict, FrozenSet

import pytest

from schema_discovery.common.errors import InternalContractError
from schema_discovery.schema import ColumnType, NumericAttr, StringAttr, TimeAttr, TypeCategory


class ToyKind(str, Enum):
    INT = "int"
    DECIMAL = "decimal"
    VARCHAR = "varchar"
    TIMESTAMPTZ = "timestamp with time zone"
    ENUM = "enum"
    BOOL = "bool"
    UNKNOWN = "unknown"


class ToyType(ColumnType):
    kind: ToyKind

    UNKNOWN_KIND: ClassVar[ToyKind] = ToyKind.UNKNOWN
    NAMES: ClassVar[Dict[str, ToyKind]] = {
        **{k.value: k for k in ToyKind if k != ToyKind.UNKNOWN},
        "integer": ToyKind.INT,
    }
    CATEGORIES: ClassVar[Dict[ToyKind, TypeCategory]] = {
        ToyKind.INT: TypeCategory.NUMERIC,
        ToyKind.DECIMAL: TypeCategory.NUMERIC,
        ToyKind.VARCHAR: TypeCategory.STRING,
        ToyKind.TIMESTAMPTZ: TypeCategory.TIME,
        ToyKind.ENUM: TypeCategory.VALUES,
    }
    NUMERIC_MODIFIERS: ClassVar[FrozenSet[str]] = frozenset({"unsigned", "signed", "zerofill"})
    SUPPORTS_CHARSET: ClassVar[bool] = True


def test_attribute_record_is_created_for_the_kind():
    assert ToyType(kind=ToyKind.INT).numeric == NumericAttr()
    assert ToyType(kind=ToyKind.VARCHAR).string == StringAttr()
    assert ToyType(kind=ToyKind.TIMESTAMPTZ).time == TimeAttr()
    assert ToyType(kind=ToyKind.BOOL).numeric is None
    assert ToyType.parse("int") == ToyType(kind=ToyKind.INT)


def test_parse_numeric_with_modifiers():
    parsed = ToyType.parse("decimal(10,2) unsigned zerofill")
    assert parsed.kind == ToyKind.DECIMAL
    assert parsed.numeric == NumericAttr(precision=10, scale=2, unsigned=True, zero_fill=True)
    assert parsed.render() == "DECIMAL(10,2) UNSIGNED ZEROFILL"


def test_parse_is_case_insensitive_and_resolves_aliases():
    parsed = ToyType.parse("INTEGER SIGNED")
    assert parsed.kind == ToyKind.INT
    assert parsed.numeric.unsigned is False
    assert parsed.render() == "INT SIGNED"


def test_parse_string_with_charset_and_collation():
    parsed = ToyType.parse("varchar(45) character set utf8mb4 collate utf8mb4_bin")
    assert parsed.string == StringAttr(length=45, charset="utf8mb4", collation="utf8mb4_bin")
    assert parsed.render() == "VARCHAR(45) CHARACTER SET utf8mb4 COLLATE utf8mb4_bin"
    assert ToyType.parse("varchar(10) charset latin1").string.charset == "latin1"


def test_multi_word_name_keeps_arguments_before_the_suffix():
    parsed = ToyType.parse("timestamp(3) with time zone")
    assert parsed.kind == ToyKind.TIMESTAMPTZ
    assert parsed.time.fractional == 3
    assert parsed.render() == "TIMESTAMP(3) WITH TIME ZONE"


def test_value_list_round_trips_quotes():
    parsed = ToyType.parse("enum('a','it''s')")
    assert parsed.values == ["a", "it's"]
    assert parsed.render() == "ENUM('a','it''s')"
    assert ToyType.parse(parsed.render()) == parsed


@pytest.mark.parametrize(
    "text, reason",
    [
        ("hstore", "hstore is unknown or unimplemented"),
        ("", "Empty type declaration"),
        ("varchar(45", "Unterminated argument list"),
        ("int(1,2,3)", "int does not take 3 argument(s)"),
        ("bool(1)", "bool does not take 1 argument(s)"),
        ("enum(1,2)", "Value list members must be quoted strings"),
        ("int fancy", "Unsupported modifier 'fancy' for int"),
        ("varchar(4) collate", "Missing value after 'collate'"),
    ],
)
def test_unrecognized_or_malformed_text_degrades_to_unknown(text, reason):
    parsed = ToyType.parse(text)
    assert parsed.is_unknown
    assert parsed.category == TypeCategory.UNKNOWN
    assert parsed.raw == text
    assert parsed.reason == reason
    assert parsed.render() == text


def test_unknown_is_terminal():
    parsed = ToyType.parse("geography(point)")
    assert parsed.is_unknown
    assert parsed.numeric is None and parsed.string is None and parsed.time is None


def test_numeric_back_fill_returns_a_copy():
    parsed = ToyType.parse("decimal")
    merged = parsed.with_numeric_attributes(10, 2)
    assert merged.numeric.precision == 10 and merged.numeric.scale == 2
    assert parsed.numeric.precision is None
    assert merged.render() == "DECIMAL(10,2)"


def test_numeric_back_fill_drops_values_outside_u16():
    merged = ToyType.parse("decimal").with_numeric_attributes(70000, -1)
    assert merged.numeric.precision is None
    assert merged.numeric.scale is None


def test_back_fill_into_wrong_kind_is_an_internal_contract_error():
    with pytest.raises(InternalContractError) as excinfo:
        ToyType.parse("varchar(3)").with_numeric_attributes(10, 2)
    assert excinfo.value.context == {"kind": "varchar"}
    with pytest.raises(InternalContractError):
        ToyType.parse("int").with_string_length(10)
    with pytest.raises(InternalContractError):
        ToyType.parse("int").with_time_precision(3)
    with pytest.raises(InternalContractError):
        ToyType.parse("hstore").with_numeric_attributes(1, 0)


def test_string_and_time_back_fill():
    assert ToyType.parse("varchar").with_string_length(255).render() == "VARCHAR(255)"
    assert (
        ToyType.parse("timestamp with time zone").with_time_precision(6).render()
        == "TIMESTAMP(6) WITH TIME ZONE"
    )
