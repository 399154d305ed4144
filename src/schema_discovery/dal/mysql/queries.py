"""``information_schema`` queries, built with sqlglot.

Each query carries the sort order the consolidation step relies on. When no schema
name is configured the session's current database (``DATABASE()``) is used.
"""

from typing import Optional

import sqlglot
from sqlglot import exp


def _col(name: str, table: str) -> exp.Column:
    return exp.column(name, table=table)


def _schema_filter(column: exp.Column, schema_name: Optional[str]) -> exp.Expression:
    if schema_name:
        return column.eq(exp.Literal.string(schema_name))
    return column.eq(exp.Anonymous(this="DATABASE", expressions=[]))


def query_tables(schema_name: Optional[str] = None, table: Optional[str] = None) -> exp.Select:
    query = (
        sqlglot.select(
            _col("TABLE_NAME", "t").as_("table_name"),
            _col("ENGINE", "t").as_("engine"),
            _col("AUTO_INCREMENT", "t").as_("auto_increment"),
            _col("CHARACTER_SET_NAME", "c").as_("table_char_set"),
            _col("TABLE_COLLATION", "t").as_("table_collation"),
            _col("TABLE_COMMENT", "t").as_("table_comment"),
        )
        .from_("information_schema.TABLES AS t")
        .join(
            "information_schema.COLLATION_CHARACTER_SET_APPLICABILITY AS c",
            on=_col("COLLATION_NAME", "c").eq(_col("TABLE_COLLATION", "t")),
            join_type="left",
        )
        .where(_schema_filter(_col("TABLE_SCHEMA", "t"), schema_name))
        .where(_col("TABLE_TYPE", "t").eq(exp.Literal.string("BASE TABLE")))
    )
    if table is not None:
        query = query.where(_col("TABLE_NAME", "t").eq(exp.Literal.string(table)))
    return query.order_by("table_name")


def query_columns(table: str, schema_name: Optional[str] = None) -> exp.Select:
    return (
        sqlglot.select(
            _col("COLUMN_NAME", "c").as_("column_name"),
            _col("COLUMN_TYPE", "c").as_("column_type"),
            _col("IS_NULLABLE", "c").as_("is_nullable"),
            _col("COLUMN_KEY", "c").as_("column_key"),
            _col("COLUMN_DEFAULT", "c").as_("column_default"),
            _col("EXTRA", "c").as_("extra"),
            _col("GENERATION_EXPRESSION", "c").as_("generation_expression"),
            _col("COLUMN_COMMENT", "c").as_("column_comment"),
        )
        .from_("information_schema.COLUMNS AS c")
        .where(_schema_filter(_col("TABLE_SCHEMA", "c"), schema_name))
        .where(_col("TABLE_NAME", "c").eq(exp.Literal.string(table)))
        .order_by(_col("ORDINAL_POSITION", "c"))
    )


def query_indexes(table: str, schema_name: Optional[str] = None) -> exp.Select:
    return (
        sqlglot.select(
            _col("TABLE_NAME", "s").as_("table_name"),
            _col("NON_UNIQUE", "s").as_("non_unique"),
            _col("INDEX_NAME", "s").as_("index_name"),
            _col("SEQ_IN_INDEX", "s").as_("seq_in_index"),
            _col("COLUMN_NAME", "s").as_("column_name"),
            _col("EXPRESSION", "s").as_("expression"),
            _col("COLLATION", "s").as_("collation"),
            _col("SUB_PART", "s").as_("sub_part"),
            _col("NULLABLE", "s").as_("nullable"),
            _col("INDEX_TYPE", "s").as_("index_type"),
            _col("INDEX_COMMENT", "s").as_("index_comment"),
        )
        .from_("information_schema.STATISTICS AS s")
        .where(_schema_filter(_col("TABLE_SCHEMA", "s"), schema_name))
        .where(_col("TABLE_NAME", "s").eq(exp.Literal.string(table)))
        .order_by("table_name", "index_name", "seq_in_index")
    )


def query_foreign_keys(table: str, schema_name: Optional[str] = None) -> exp.Select:
    return (
        sqlglot.select(
            _col("TABLE_NAME", "k").as_("table_name"),
            _col("CONSTRAINT_NAME", "k").as_("constraint_name"),
            _col("COLUMN_NAME", "k").as_("column_name"),
            _col("ORDINAL_POSITION", "k").as_("ordinal_position"),
            _col("REFERENCED_TABLE_NAME", "k").as_("referenced_table_name"),
            _col("REFERENCED_COLUMN_NAME", "k").as_("referenced_column_name"),
            _col("UPDATE_RULE", "r").as_("update_rule"),
            _col("DELETE_RULE", "r").as_("delete_rule"),
        )
        .from_("information_schema.KEY_COLUMN_USAGE AS k")
        .join(
            "information_schema.REFERENTIAL_CONSTRAINTS AS r",
            on=exp.and_(
                _col("CONSTRAINT_SCHEMA", "r").eq(_col("CONSTRAINT_SCHEMA", "k")),
                _col("CONSTRAINT_NAME", "r").eq(_col("CONSTRAINT_NAME", "k")),
                _col("TABLE_NAME", "r").eq(_col("TABLE_NAME", "k")),
            ),
        )
        .where(_schema_filter(_col("TABLE_SCHEMA", "k"), schema_name))
        .where(_col("TABLE_NAME", "k").eq(exp.Literal.string(table)))
        .order_by("table_name", "constraint_name", "ordinal_position")
    )


def query_version() -> exp.Select:
    return sqlglot.select(exp.Anonymous(this="VERSION", expressions=[]).as_("version"))
