from .parser import (
    parse_column_query_result,
    parse_column_type,
    parse_referential_constraint_query_results,
    parse_table_constraint_query_results,
)
from .schema_introspector import PostgresSchemaIntrospector
from .system import parse_version
from .types import PostgresType, PostgresTypeKind

__all__ = [
    "PostgresSchemaIntrospector",
    "PostgresType",
    "PostgresTypeKind",
    "parse_column_query_result",
    "parse_column_type",
    "parse_referential_constraint_query_results",
    "parse_table_constraint_query_results",
    "parse_version",
]
