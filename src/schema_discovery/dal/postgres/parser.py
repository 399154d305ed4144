"""Row-to-entity mappers and consolidation for PostgreSQL catalog rows."""

from typing import Any, Iterable, Iterator, List, Optional, Union

from schema_discovery.common.errors import DiscoveryError
from schema_discovery.dal.row_mapping import consolidate, map_fragments, map_rows
from schema_discovery.dal.sentinels import decode_sentinel, yes_or_no
from schema_discovery.schema import (
    Check,
    ColumnExtra,
    ColumnInfo,
    ForeignKeyAction,
    MatchAction,
    NotNull,
    PrimaryKey,
    References,
    TypeCategory,
    Unique,
)

from .rows import (
    CheckConstraintQueryResult,
    ColumnQueryResult,
    ReferentialConstraintQueryResult,
    TableConstraintQueryResult,
)
from .types import PostgresType

_GENERATED = {"ALWAYS": True, "NEVER": False}
_KEY_CONSTRAINTS = {"PRIMARY KEY": PrimaryKey, "UNIQUE": Unique}
_ACTIONS = {a.value: a for a in ForeignKeyAction}
# MATCH SIMPLE is reported as NONE, matching information_schema
_MATCH_OPTIONS = {
    "NONE": MatchAction.NONE,
    "PARTIAL": MatchAction.PARTIAL,
    "FULL": MatchAction.FULL,
}


def parse_column_type(row: ColumnQueryResult) -> PostgresType:
    """Parse ``data_type`` and back-fill the attributes PostgreSQL reports in separate columns."""
    col_type = PostgresType.parse(row.data_type)
    category = col_type.category
    if category == TypeCategory.NUMERIC and (
        row.numeric_precision is not None or row.numeric_scale is not None
    ):
        col_type = col_type.with_numeric_attributes(row.numeric_precision, row.numeric_scale)
    elif category == TypeCategory.STRING and row.character_maximum_length is not None:
        col_type = col_type.with_string_length(row.character_maximum_length)
    elif category == TypeCategory.TIME and row.datetime_precision is not None:
        col_type = col_type.with_time_precision(row.datetime_precision)
    return col_type


def parse_column_query_result(row: ColumnQueryResult) -> ColumnInfo:
    context = {"column": row.column_name}
    nullable = yes_or_no(row.is_nullable, "is_nullable", context)
    generated = decode_sentinel(row.is_generated, _GENERATED, "is_generated", context)
    constraints = []
    if not nullable:
        constraints.append(NotNull())
    return ColumnInfo(
        name=row.column_name,
        col_type=parse_column_type(row),
        null=nullable,
        default=row.column_default,
        generated=row.generation_expression if generated else None,
        extra=ColumnExtra(generated=generated, stored=generated),
        constraints=constraints,
    )


def parse_table_constraint_query_result(
    row: TableConstraintQueryResult,
) -> Union[PrimaryKey, Unique]:
    model = decode_sentinel(
        row.constraint_type,
        _KEY_CONSTRAINTS,
        "constraint_type",
        {"constraint": row.constraint_name},
    )
    return model(name=row.constraint_name, columns=[row.column_name])


def parse_table_constraint_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[Union[PrimaryKey, Unique]]:
    """Consolidate key-column rows into composite primary key / unique constraints.

    A row that fails to decode is reported and its whole constraint is skipped.
    """
    fragments = map_fragments(
        rows,
        TableConstraintQueryResult,
        ("table_name", "constraint_name"),
        "ordinal_position",
        parse_table_constraint_query_result,
        errors,
    )
    return consolidate(fragments, lambda current, part: current.add_column(part))


def parse_referential_constraint_query_result(
    row: ReferentialConstraintQueryResult,
) -> References:
    context = {"constraint": row.constraint_name}
    return References(
        name=row.constraint_name,
        columns=[row.column_name],
        referenced_table=row.referenced_table_name,
        referenced_columns=[row.referenced_column_name],
        on_update=decode_sentinel(row.update_rule, _ACTIONS, "update_rule", context),
        on_delete=decode_sentinel(row.delete_rule, _ACTIONS, "delete_rule", context),
        match_action=decode_sentinel(row.match_option, _MATCH_OPTIONS, "match_option", context),
    )


def parse_referential_constraint_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[References]:
    fragments = map_fragments(
        rows,
        ReferentialConstraintQueryResult,
        ("table_name", "constraint_name"),
        "ordinal_position",
        parse_referential_constraint_query_result,
        errors,
    )
    return consolidate(fragments, References.add_column)


def parse_check_constraint_query_result(row: CheckConstraintQueryResult) -> Check:
    return Check(name=row.constraint_name, expr=row.check_clause, no_inherit=row.no_inherit)


def parse_check_constraint_query_results(
    rows: Iterable[Any], errors: Optional[List[DiscoveryError]] = None
) -> Iterator[Check]:
    return map_rows(rows, CheckConstraintQueryResult, parse_check_constraint_query_result, errors)
