"""Row-to-entity mappers and consolidation for MySQL's ``information_schema``."""

import logging
import re
from typing import Any, Iterable, Iterator, List, Optional

from schema_discovery.common.errors import DiscoveryError, MalformedSentinelError
from schema_discovery.dal.row_mapping import consolidate, map_fragments
from schema_discovery.dal.sentinels import decode_sentinel, yes_or_no
from schema_discovery.schema import (
    ColumnExtra,
    ColumnInfo,
    ColumnKey,
    ForeignKeyAction,
    ForeignKeyInfo,
    IndexInfo,
    IndexOrder,
    IndexType,
    TableInfo,
)

from .rows import ColumnQueryResult, ForeignKeyQueryResult, IndexQueryResult, TableQueryResult
from .types import MysqlType

logger = logging.getLogger(__name__)

_COLUMN_KEYS = {key.value: key for key in ColumnKey}
_UNIQUE = {0: True, 1: False}
_INDEX_ORDERS = {"A": IndexOrder.ASCENDING, "D": IndexOrder.DESCENDING, None: IndexOrder.UNORDERED}
# PRIMARY and other NOT NULL key parts report ''
_INDEX_NULLABLE = {"YES": True, "NO": False, "": False}
_INDEX_TYPES = {t.value: t for t in IndexType}
_ACTIONS = {a.value: a for a in ForeignKeyAction}

_EXTRA_TOKENS = re.compile(
    r"auto_increment"
    r"|on update current_timestamp(?:\(\d*\))?"
    r"|default_generated"
    r"|virtual generated"
    r"|stored generated"
)


def parse_table_query_result(row: TableQueryResult) -> TableInfo:
    return TableInfo(
        name=row.table_name,
        engine=row.engine,
        char_set=row.table_char_set,
        collation=row.table_collation,
        auto_increment=row.auto_increment,
        comment=row.table_comment or "",
    )


def parse_column_extra(extra: Optional[str]) -> ColumnExtra:
    """Decode the free-text ``EXTRA`` column, e.g. ``DEFAULT_GENERATED on update ...``.

    Unrecognized tokens (e.g. ``INVISIBLE``) are logged and ignored.
    """
    flags = ColumnExtra()
    text = (extra or "").strip().lower()
    for token in _EXTRA_TOKENS.findall(text):
        if token == "auto_increment":
            flags.auto_increment = True
        elif token.startswith("on update"):
            flags.on_update_current_timestamp = True
        elif token == "default_generated":
            flags.default_generated = True
        else:
            flags.generated = True
            flags.stored = token.startswith("stored")
    leftover = _EXTRA_TOKENS.sub("", text).strip()
    if leftover:
        logger.debug("Ignoring column extra %r", leftover)
    return flags


def parse_column_query_result(row: ColumnQueryResult) -> ColumnInfo:
    context = {"column": row.column_name}
    return ColumnInfo(
        name=row.column_name,
        col_type=MysqlType.parse(row.column_type),
        null=yes_or_no(row.is_nullable, "is_nullable", context),
        key=decode_sentinel(row.column_key, _COLUMN_KEYS, "column_key", context),
        default=row.column_default,
        generated=row.generation_expression or None,
        extra=parse_column_extra(row.extra),
        comment=row.column_comment or "",
    )


def parse_index_query_result(row: IndexQueryResult) -> IndexInfo:
    """Map one ``STATISTICS`` row to a single-column ``IndexInfo`` fragment."""
    context = {"index": row.index_name}
    if (row.column_name is None) == (row.expression is None):
        raise MalformedSentinelError(
            "column_name",
            row.column_name,
            context={**context, "expression": row.expression},
        )
    order = decode_sentinel(row.collation, _INDEX_ORDERS, "collation", context)
    return IndexInfo(
        name=row.index_name,
        unique=decode_sentinel(row.non_unique, _UNIQUE, "non_unique", context),
        columns=[row.column_name if row.column_name is not None else row.expression],
        order=order,
        sub_part=row.sub_part,
        nullable=decode_sentinel(row.nullable, _INDEX_NULLABLE, "nullable", context),
        idx_type=decode_sentinel(row.index_type, _INDEX_TYPES, "index_type", context),
        functional=row.expression is not None,
        comment=row.index_comment or "",
    )


def parse_index_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[IndexInfo]:
    """Consolidate key-part rows into one ``IndexInfo`` per index.

    Rows must be sorted by (table_name, index_name, seq_in_index). A malformed row is
    reported through ``errors`` (or raised when ``errors`` is None) and the index it
    belongs to is skipped.
    """
    fragments = map_fragments(
        rows,
        IndexQueryResult,
        ("table_name", "index_name"),
        "seq_in_index",
        parse_index_query_result,
        errors,
    )
    return consolidate(fragments, IndexInfo.add_key_part)


def parse_foreign_key_query_result(row: ForeignKeyQueryResult) -> ForeignKeyInfo:
    context = {"constraint": row.constraint_name}
    return ForeignKeyInfo(
        name=row.constraint_name,
        columns=[row.column_name],
        referenced_table=row.referenced_table_name,
        referenced_columns=[row.referenced_column_name],
        on_update=decode_sentinel(row.update_rule, _ACTIONS, "update_rule", context),
        on_delete=decode_sentinel(row.delete_rule, _ACTIONS, "delete_rule", context),
    )


def parse_foreign_key_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[ForeignKeyInfo]:
    """Consolidate column-pair rows into composite foreign keys."""
    fragments = map_fragments(
        rows,
        ForeignKeyQueryResult,
        ("table_name", "constraint_name"),
        "ordinal_position",
        parse_foreign_key_query_result,
        errors,
    )
    return consolidate(fragments, ForeignKeyInfo.add_column)
