from .parser import (
    assemble_primary_key,
    parse_column_query_result,
    parse_foreign_key_query_results,
    parse_index_query_results,
    split_indexes,
)
from .schema_introspector import SqliteSchemaIntrospector
from .system import parse_version
from .types import SqliteType, SqliteTypeKind

__all__ = [
    "SqliteSchemaIntrospector",
    "SqliteType",
    "SqliteTypeKind",
    "assemble_primary_key",
    "parse_column_query_result",
    "parse_foreign_key_query_results",
    "parse_index_query_results",
    "parse_version",
    "split_indexes",
]
