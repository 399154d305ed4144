"""Tests for MySQL catalog row mapping and consolidation."""

from typing import List

import pytest

from schema_discovery.common.errors import MalformedSentinelError, StructuralViolationError
from schema_discovery.dal.mysql import (
    MysqlType,
    parse_column_extra,
    parse_column_query_result,
    parse_foreign_key_query_results,
    parse_index_query_results,
    parse_version,
)
from schema_discovery.dal.mysql.rows import ColumnQueryResult
from schema_discovery.schema import (
    ColumnExtra,
    ColumnKey,
    ForeignKeyAction,
    IndexInfo,
    IndexOrder,
    IndexType,
)


def _index_row(index_name, column_name, seq=1, **overrides):
    row = {
        "table_name": "film",
        "non_unique": 0,
        "index_name": index_name,
        "seq_in_index": seq,
        "column_name": column_name,
        "expression": None,
        "collation": "A",
        "sub_part": None,
        "nullable": "",
        "index_type": "BTREE",
        "index_comment": "",
    }
    row.update(overrides)
    return row


def test_primary_key_row():
    rows = [
        {
            "non_unique": 0,
            "index_name": "PRIMARY",
            "column_name": "film_id",
            "collation": "A",
            "sub_part": None,
            "nullable": "",
            "index_type": "BTREE",
            "index_comment": "",
        }
    ]
    assert list(parse_index_query_results(rows)) == [
        IndexInfo(
            unique=True,
            name="PRIMARY",
            columns=["film_id"],
            order=IndexOrder.ASCENDING,
            sub_part=None,
            nullable=False,
            idx_type=IndexType.BTREE,
            functional=False,
            comment="",
        )
    ]


def test_multi_column_index_keeps_key_order():
    rows = [
        _index_row("rental_date", "rental_date", 1),
        _index_row("rental_date", "inventory_id", 2),
        _index_row("rental_date", "customer_id", 3),
    ]
    (index,) = parse_index_query_results(rows)
    assert index.unique is True
    assert index.columns == ["rental_date", "inventory_id", "customer_id"]
    assert index.sub_parts == [None, None, None]


def test_functional_spatial_index():
    rows = [
        _index_row(
            "idx_location",
            None,
            non_unique=1,
            expression="lower(location)",
            index_type="SPATIAL",
        )
    ]
    (index,) = parse_index_query_results(rows)
    assert index.functional is True
    assert index.idx_type == IndexType.SPATIAL
    assert index.unique is False
    assert index.columns == ["lower(location)"]


def test_prefix_descending_and_unordered_parts():
    rows = [
        _index_row("idx_title", "title", 1, sub_part=10, collation="D", nullable="YES"),
        _index_row("idx_title", "film_id", 2),
        _index_row("idx_hash", "title", 1, collation=None, index_type="HASH"),
    ]
    title, hashed = parse_index_query_results(rows)
    assert title.order == IndexOrder.DESCENDING
    assert title.sub_part == 10
    assert title.column_orders == [IndexOrder.DESCENDING, IndexOrder.ASCENDING]
    assert title.sub_parts == [10, None]
    assert title.nullable is True
    assert hashed.order == IndexOrder.UNORDERED
    assert hashed.idx_type == IndexType.HASH


@pytest.mark.parametrize("names", [["a"], ["a", "a", "b"], ["a", "b", "b", "c", "c", "c"]])
def test_one_index_per_distinct_name(names):
    seq = {}
    rows = []
    for name in names:
        seq[name] = seq.get(name, 0) + 1
        rows.append(_index_row(name, f"col{seq[name]}", seq[name]))
    indexes = list(parse_index_query_results(rows))
    assert [i.name for i in indexes] == sorted(set(names))
    assert [len(i.columns) for i in indexes] == [names.count(i.name) for i in indexes]


def test_malformed_index_type_does_not_poison_later_rows():
    rows = [
        _index_row("idx_bad", "a", index_type="UNKNOWN_METHOD"),
        _index_row("idx_title", "title"),
    ]
    errors: List = []
    indexes = list(parse_index_query_results(rows, errors))
    assert [i.name for i in indexes] == ["idx_title"]
    assert len(errors) == 1
    error = errors[0]
    assert isinstance(error, MalformedSentinelError)
    assert error.field == "index_type"
    assert error.value == "UNKNOWN_METHOD"
    assert error.context["index"] == "idx_bad"
    assert error.context["row"] == 0


def test_malformed_row_inside_a_group_discards_the_whole_index():
    rows = [
        _index_row("uq_abc", "a", 1),
        _index_row("uq_abc", "b", 2, collation="Z"),
        _index_row("uq_abc", "c", 3),
        _index_row("idx_title", "title"),
    ]
    errors: List = []
    indexes = list(parse_index_query_results(rows, errors))
    assert [i.name for i in indexes] == ["idx_title"]
    assert len(errors) == 1
    assert errors[0].field == "collation"
    assert errors[0].context["row"] == 1


def test_row_without_index_name_discards_the_index_it_follows():
    keyless = _index_row("uq_ab", "b", 2)
    del keyless["index_name"]
    rows = [_index_row("uq_ab", "a", 1), keyless, _index_row("idx_title", "title")]
    errors: List = []
    indexes = list(parse_index_query_results(rows, errors))
    assert [i.name for i in indexes] == ["idx_title"]
    assert errors[0].field == "index_name"


def test_malformed_row_raises_without_error_sink():
    with pytest.raises(MalformedSentinelError):
        list(parse_index_query_results([_index_row("idx", "a", collation="X")]))


@pytest.mark.parametrize(
    "column_name, expression", [(None, None), ("location", "lower(location)")]
)
def test_exactly_one_of_column_or_expression(column_name, expression):
    errors: List = []
    rows = [_index_row("idx", column_name, expression=expression)]
    assert list(parse_index_query_results(rows, errors)) == []
    assert errors[0].field == "column_name"


def test_unsorted_index_rows_are_a_structural_violation():
    rows = [_index_row("a", "x"), _index_row("b", "y"), _index_row("a", "z", 2)]
    with pytest.raises(StructuralViolationError):
        list(parse_index_query_results(rows, []))


@pytest.mark.parametrize(
    "extra, expected",
    [
        ("", ColumnExtra()),
        ("auto_increment", ColumnExtra(auto_increment=True)),
        (
            "DEFAULT_GENERATED on update CURRENT_TIMESTAMP(3)",
            ColumnExtra(default_generated=True, on_update_current_timestamp=True),
        ),
        ("VIRTUAL GENERATED", ColumnExtra(generated=True)),
        ("STORED GENERATED", ColumnExtra(generated=True, stored=True)),
        ("INVISIBLE", ColumnExtra()),
    ],
)
def test_parse_column_extra(extra, expected):
    assert parse_column_extra(extra) == expected


def test_parse_column_query_result():
    row = ColumnQueryResult.model_validate(
        {
            "COLUMN_NAME": "actor_id",
            "COLUMN_TYPE": "smallint unsigned",
            "IS_NULLABLE": "NO",
            "COLUMN_KEY": "PRI",
            "COLUMN_DEFAULT": None,
            "EXTRA": "auto_increment",
            "GENERATION_EXPRESSION": "",
            "COLUMN_COMMENT": "",
        }
    )
    column = parse_column_query_result(row)
    assert column.name == "actor_id"
    assert column.col_type == MysqlType.parse("smallint unsigned")
    assert column.null is False
    assert column.key == ColumnKey.PRIMARY
    assert column.generated is None
    assert column.extra.auto_increment is True


@pytest.mark.parametrize("field, value", [("is_nullable", "MAYBE"), ("column_key", "FOO")])
def test_column_sentinels_are_strict(field, value):
    row = {
        "column_name": "a",
        "column_type": "int",
        "is_nullable": "YES",
        "column_key": "",
    }
    row[field] = value
    with pytest.raises(MalformedSentinelError) as excinfo:
        parse_column_query_result(ColumnQueryResult.model_validate(row))
    assert excinfo.value.field == field
    assert excinfo.value.context == {"column": "a"}


def _fk_row(constraint, column, referenced, position, **overrides):
    row = {
        "table_name": "film_actor",
        "constraint_name": constraint,
        "column_name": column,
        "ordinal_position": position,
        "referenced_table_name": "film_actor_ref",
        "referenced_column_name": referenced,
        "update_rule": "CASCADE",
        "delete_rule": "RESTRICT",
    }
    row.update(overrides)
    return row


def test_composite_foreign_keys_are_consolidated():
    rows = [
        _fk_row("fk_a", "film_id", "film_id", 1),
        _fk_row("fk_a", "actor_id", "actor_id", 2),
        _fk_row("fk_b", "x", "y", 1, update_rule="SET NULL", delete_rule="NO ACTION"),
    ]
    first, second = parse_foreign_key_query_results(rows)
    assert first.name == "fk_a"
    assert first.columns == ["film_id", "actor_id"]
    assert first.referenced_columns == ["film_id", "actor_id"]
    assert first.on_update == ForeignKeyAction.CASCADE
    assert first.on_delete == ForeignKeyAction.RESTRICT
    assert second.on_update == ForeignKeyAction.SET_NULL
    assert second.on_delete == ForeignKeyAction.NO_ACTION


def test_unknown_referential_action_is_reported():
    errors: List = []
    rows = [_fk_row("fk", "a", "b", 1, delete_rule="EXPLODE")]
    assert list(parse_foreign_key_query_results(rows, errors)) == []
    assert errors[0].field == "delete_rule"
    assert errors[0].context["constraint"] == "fk"


def test_parse_version():
    mysql = parse_version("8.0.23-log")
    assert (mysql.system, mysql.version, mysql.version_number) == ("MySQL", "8.0.23", 80023)
    assert mysql.suffix == ["log"]

    mariadb = parse_version("10.5.8-MariaDB-1:10.5.8+maria~focal")
    assert mariadb.system == "MariaDB"
    assert mariadb.version_number == 100508
    assert mariadb.suffix == ["MariaDB", "1:10.5.8+maria~focal"]
