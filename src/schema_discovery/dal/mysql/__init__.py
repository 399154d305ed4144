from .parser import (
    parse_column_extra,
    parse_column_query_result,
    parse_foreign_key_query_results,
    parse_index_query_result,
    parse_index_query_results,
)
from .schema_introspector import MysqlSchemaIntrospector
from .system import parse_version
from .types import MysqlType, MysqlTypeKind

__all__ = [
    "MysqlSchemaIntrospector",
    "MysqlType",
    "MysqlTypeKind",
    "parse_column_extra",
    "parse_column_query_result",
    "parse_foreign_key_query_results",
    "parse_index_query_result",
    "parse_index_query_results",
    "parse_version",
]
