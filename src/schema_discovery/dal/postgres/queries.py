"""Catalog queries, built with sqlglot.

Tables, columns and key constraints come from ``information_schema``. Foreign keys and
checks are read from ``pg_constraint`` by owning relation, since constraint names are
only unique per table. Without a configured schema name every query is scoped to
``current_schema()``.
"""

from typing import Dict, Optional

import sqlglot
from sqlglot import exp


def _col(name: str, table: str) -> exp.Column:
    return exp.column(name, table=table)


def _schema_value(schema_name: Optional[str]) -> exp.Expression:
    if schema_name:
        return exp.Literal.string(schema_name)
    return exp.Anonymous(this="current_schema", expressions=[])


def query_tables(schema_name: Optional[str] = None) -> exp.Select:
    return (
        sqlglot.select(_col("table_name", "t").as_("table_name"))
        .from_("information_schema.tables AS t")
        .where(_col("table_schema", "t").eq(_schema_value(schema_name)))
        .where(_col("table_type", "t").eq(exp.Literal.string("BASE TABLE")))
        .order_by(_col("table_name", "t"))
    )


def query_columns(table: str, schema_name: Optional[str] = None) -> exp.Select:
    fields = [
        "column_name",
        "data_type",
        "column_default",
        "is_nullable",
        "character_maximum_length",
        "numeric_precision",
        "numeric_precision_radix",
        "numeric_scale",
        "datetime_precision",
        "is_generated",
        "generation_expression",
    ]
    return (
        sqlglot.select(*(_col(name, "c").as_(name) for name in fields))
        .from_("information_schema.columns AS c")
        .where(_col("table_schema", "c").eq(_schema_value(schema_name)))
        .where(_col("table_name", "c").eq(exp.Literal.string(table)))
        .order_by(_col("ordinal_position", "c"))
    )


def query_table_constraints(table: str, schema_name: Optional[str] = None) -> exp.Select:
    """Primary key and unique constraint columns."""
    return (
        sqlglot.select(
            _col("table_name", "tc").as_("table_name"),
            _col("constraint_name", "tc").as_("constraint_name"),
            _col("constraint_type", "tc").as_("constraint_type"),
            _col("column_name", "kcu").as_("column_name"),
            _col("ordinal_position", "kcu").as_("ordinal_position"),
        )
        .from_("information_schema.table_constraints AS tc")
        .join(
            "information_schema.key_column_usage AS kcu",
            on=exp.and_(
                _col("constraint_schema", "kcu").eq(_col("constraint_schema", "tc")),
                _col("constraint_name", "kcu").eq(_col("constraint_name", "tc")),
                _col("table_name", "kcu").eq(_col("table_name", "tc")),
            ),
        )
        .where(_col("table_schema", "tc").eq(_schema_value(schema_name)))
        .where(_col("table_name", "tc").eq(exp.Literal.string(table)))
        .where(
            _col("constraint_type", "tc").isin(
                exp.Literal.string("PRIMARY KEY"), exp.Literal.string("UNIQUE")
            )
        )
        .order_by("table_name", "constraint_name", "ordinal_position")
    )


_ACTION_CODES = {
    "a": "NO ACTION",
    "r": "RESTRICT",
    "c": "CASCADE",
    "n": "SET NULL",
    "d": "SET DEFAULT",
}
# spelled as information_schema.referential_constraints.match_option reports them
_MATCH_CODES = {"s": "NONE", "p": "PARTIAL", "f": "FULL"}


def _decode_code(column: exp.Column, codes: Dict[str, str]) -> exp.Case:
    # no ELSE: an unknown code comes back NULL and fails row validation
    case = exp.Case(this=column)
    for code, spelling in codes.items():
        case = case.when(exp.Literal.string(code), exp.Literal.string(spelling))
    return case


def _owned_constraints(contype: str, table: str, schema_name: Optional[str]) -> exp.Select:
    """``pg_constraint`` rows of one kind, joined to the relation that owns them."""
    return (
        sqlglot.select()
        .from_("pg_catalog.pg_constraint AS con")
        .join(
            "pg_catalog.pg_class AS cl",
            on=_col("oid", "cl").eq(_col("conrelid", "con")),
        )
        .join(
            "pg_catalog.pg_namespace AS n",
            on=_col("oid", "n").eq(_col("relnamespace", "cl")),
        )
        .where(_col("contype", "con").eq(exp.Literal.string(contype)))
        .where(_col("nspname", "n").eq(_schema_value(schema_name)))
        .where(_col("relname", "cl").eq(exp.Literal.string(table)))
    )


def query_referential_constraints(table: str, schema_name: Optional[str] = None) -> exp.Select:
    """Foreign key column pairs, paired by position in ``conkey`` / ``confkey``."""
    key_parts = exp.Unnest(
        expressions=[_col("conkey", "con"), _col("confkey", "con")],
        alias=exp.TableAlias(
            this=exp.to_identifier("k"),
            columns=[exp.to_identifier(name) for name in ("attnum", "fattnum", "ord")],
        ),
        offset=True,
    )
    return (
        _owned_constraints("f", table, schema_name)
        .select(
            _col("relname", "cl").as_("table_name"),
            _col("conname", "con").as_("constraint_name"),
            _col("attname", "a").as_("column_name"),
            _col("ord", "k").as_("ordinal_position"),
            _col("relname", "fcl").as_("referenced_table_name"),
            _col("attname", "fa").as_("referenced_column_name"),
            _decode_code(_col("confupdtype", "con"), _ACTION_CODES).as_("update_rule"),
            _decode_code(_col("confdeltype", "con"), _ACTION_CODES).as_("delete_rule"),
            _decode_code(_col("confmatchtype", "con"), _MATCH_CODES).as_("match_option"),
        )
        .join(
            "pg_catalog.pg_class AS fcl",
            on=_col("oid", "fcl").eq(_col("confrelid", "con")),
        )
        .join(key_parts, join_type="cross")
        .join(
            "pg_catalog.pg_attribute AS a",
            on=exp.and_(
                _col("attrelid", "a").eq(_col("conrelid", "con")),
                _col("attnum", "a").eq(_col("attnum", "k")),
            ),
        )
        .join(
            "pg_catalog.pg_attribute AS fa",
            on=exp.and_(
                _col("attrelid", "fa").eq(_col("confrelid", "con")),
                _col("attnum", "fa").eq(_col("fattnum", "k")),
            ),
        )
        .order_by("table_name", "constraint_name", "ordinal_position")
    )


def query_check_constraints(table: str, schema_name: Optional[str] = None) -> exp.Select:
    clause = exp.Anonymous(
        this="pg_get_expr", expressions=[_col("conbin", "con"), _col("conrelid", "con")]
    )
    return (
        _owned_constraints("c", table, schema_name)
        .select(
            _col("conname", "con").as_("constraint_name"),
            clause.as_("check_clause"),
            _col("connoinherit", "con").as_("no_inherit"),
        )
        .order_by("constraint_name")
    )


def query_version() -> exp.Select:
    return sqlglot.select(exp.Anonymous(this="version", expressions=[]).as_("version"))
