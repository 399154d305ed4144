"""``sqlite_master`` and table-valued pragma queries, built with sqlglot."""

from typing import Optional

import sqlglot
from sqlglot import exp


def _col(name: str, table: Optional[str] = None) -> exp.Column:
    return exp.column(name, table=table, quoted=True)


def _pragma(name: str, argument: exp.Expression, alias: str) -> exp.Table:
    return exp.Table(
        this=exp.Anonymous(this=name, expressions=[argument]),
        alias=exp.TableAlias(this=exp.to_identifier(alias)),
    )


def query_tables(table: Optional[str] = None) -> exp.Select:
    query = (
        sqlglot.select(_col("name").as_("table_name"), _col("sql").as_("sql"))
        .from_("sqlite_master")
        .where(_col("type").eq(exp.Literal.string("table")))
        .where(exp.not_(_col("name").like(exp.Literal.string("sqlite_%"))))
    )
    if table is not None:
        query = query.where(_col("name").eq(exp.Literal.string(table)))
    return query.order_by(_col("name"))


def query_columns(table: str) -> exp.Select:
    return (
        sqlglot.select(
            *(_col(name, "p") for name in ("cid", "name", "type", "notnull", "dflt_value", "pk"))
        )
        .from_(_pragma("pragma_table_info", exp.Literal.string(table), "p"))
        .order_by(_col("cid", "p"))
    )


def query_indexes(table: str) -> exp.Select:
    return (
        sqlglot.select(
            _col("name", "il").as_("index_name"),
            _col("unique", "il").as_("is_unique"),
            _col("origin", "il").as_("origin"),
            _col("seqno", "ii").as_("seqno"),
            _col("name", "ii").as_("column_name"),
            _col("desc", "ii").as_("is_desc"),
        )
        .from_(_pragma("pragma_index_list", exp.Literal.string(table), "il"))
        .join(_pragma("pragma_index_xinfo", _col("name", "il"), "ii"), join_type="cross")
        .where(_col("key", "ii").eq(exp.Literal.number(1)))
        .order_by("index_name", "seqno")
    )


def query_foreign_keys(table: str) -> exp.Select:
    return (
        sqlglot.select(
            _col("id", "f"),
            _col("seq", "f"),
            _col("table", "f").as_("referenced_table"),
            _col("from", "f").as_("column_name"),
            _col("to", "f").as_("referenced_column_name"),
            _col("on_update", "f"),
            _col("on_delete", "f"),
            _col("match", "f"),
        )
        .from_(_pragma("pragma_foreign_key_list", exp.Literal.string(table), "f"))
        .order_by(_col("id", "f"), _col("seq", "f"))
    )


def query_version() -> exp.Select:
    return sqlglot.select(exp.Anonymous(this="sqlite_version", expressions=[]).as_("version"))
