"""Row-to-entity mappers and consolidation for SQLite's pragmas."""

import re
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from schema_discovery.common.errors import DiscoveryError, MalformedSentinelError
from schema_discovery.dal.row_mapping import consolidate, map_fragments
from schema_discovery.dal.sentinels import decode_sentinel
from schema_discovery.schema import (
    ColumnInfo,
    ForeignKeyAction,
    ForeignKeyInfo,
    IndexInfo,
    IndexOrder,
    MatchAction,
    NotNull,
    PrimaryKey,
    Unique,
)

from .rows import ColumnQueryResult, ForeignKeyQueryResult, IndexQueryResult
from .types import SqliteType

_FLAG = {0: False, 1: True}
_INDEX_ORDERS = {0: IndexOrder.ASCENDING, 1: IndexOrder.DESCENDING}
# c: CREATE INDEX, u: UNIQUE constraint, pk: PRIMARY KEY constraint
_ORIGINS = {"c": "c", "u": "u", "pk": "pk"}
_ACTIONS = {a.value: a for a in ForeignKeyAction}
_MATCH = {m.value: m for m in MatchAction}
_AUTOINCREMENT = re.compile(r"\bAUTOINCREMENT\b", re.IGNORECASE)
_AUTOINDEX_PREFIX = "sqlite_autoindex_"

# (pk position, column); position is 0 for columns outside the primary key
KeyedColumn = Tuple[int, ColumnInfo]
# (origin, index)
OriginIndex = Tuple[str, IndexInfo]


def parse_column_query_result(row: ColumnQueryResult) -> KeyedColumn:
    not_null = decode_sentinel(row.notnull, _FLAG, "notnull", {"column": row.name})
    column = ColumnInfo(
        name=row.name,
        col_type=SqliteType.parse(row.type),
        null=not not_null,
        default=row.dflt_value,
        constraints=[NotNull()] if not_null else [],
    )
    return row.pk, column


def assemble_primary_key(
    keyed: Iterable[KeyedColumn], create_sql: Optional[str] = None
) -> Tuple[List[ColumnInfo], Optional[PrimaryKey]]:
    """Split keyed columns into the column list and the table's primary key.

    A single-column key on a table declared with ``AUTOINCREMENT`` marks that column
    auto-increment.
    """
    keyed = list(keyed)
    columns = [column for _, column in keyed]
    key_columns = [column for pk, column in sorted(keyed, key=lambda kc: kc[0]) if pk > 0]
    if not key_columns:
        return columns, None
    if len(key_columns) == 1 and create_sql and _AUTOINCREMENT.search(create_sql):
        key_columns[0].extra.auto_increment = True
    return columns, PrimaryKey(columns=[c.name for c in key_columns])


def parse_index_query_result(row: IndexQueryResult) -> OriginIndex:
    context = {"index": row.index_name}
    origin = decode_sentinel(row.origin, _ORIGINS, "origin", context)
    if row.column_name is None:
        # expression key parts are not exposed by pragma_index_xinfo
        raise MalformedSentinelError("column_name", None, context=context)
    index = IndexInfo(
        name=row.index_name,
        unique=decode_sentinel(row.is_unique, _FLAG, "unique", context),
        columns=[row.column_name],
        order=decode_sentinel(row.is_desc, _INDEX_ORDERS, "desc", context),
    )
    return origin, index


def _merge_index(current: OriginIndex, part: OriginIndex) -> OriginIndex:
    return current[0], current[1].add_key_part(part[1])


def parse_index_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[OriginIndex]:
    """Consolidate key-column rows, sorted by (index_name, seqno), into indexes tagged by origin."""
    fragments = map_fragments(
        rows, IndexQueryResult, ("index_name",), "seqno", parse_index_query_result, errors
    )
    return consolidate(fragments, _merge_index)


def split_indexes(
    tagged: Iterable[OriginIndex],
) -> Tuple[List[IndexInfo], List[Unique]]:
    """Separate ``CREATE INDEX`` indexes from UNIQUE constraints; primary keys are dropped."""
    indexes: List[IndexInfo] = []
    uniques: List[Unique] = []
    for origin, index in tagged:
        if origin == "c":
            indexes.append(index)
        elif origin == "u":
            name = None if index.name.startswith(_AUTOINDEX_PREFIX) else index.name
            uniques.append(Unique(name=name, columns=list(index.columns)))
    return indexes, uniques


def parse_foreign_key_query_result(row: ForeignKeyQueryResult) -> ForeignKeyInfo:
    context = {"foreign_key": row.id}
    if row.referenced_column_name is None:
        # REFERENCES parent without a column list; the parent key is not resolved here
        raise MalformedSentinelError("to", None, context=context)
    return ForeignKeyInfo(
        columns=[row.column_name],
        referenced_table=row.referenced_table,
        referenced_columns=[row.referenced_column_name],
        on_update=decode_sentinel(row.on_update, _ACTIONS, "on_update", context),
        on_delete=decode_sentinel(row.on_delete, _ACTIONS, "on_delete", context),
        match_action=decode_sentinel(row.match, _MATCH, "match", context),
    )


def parse_foreign_key_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[ForeignKeyInfo]:
    fragments = map_fragments(
        rows, ForeignKeyQueryResult, ("id",), "seq", parse_foreign_key_query_result, errors
    )
    return consolidate(fragments, ForeignKeyInfo.add_column)
