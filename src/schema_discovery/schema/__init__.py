"""Canonical, dialect-independent schema model and DDL writer."""

from .attrs import NumericAttr, StringAttr, TimeAttr
from .column_def import ColumnExtra, ColumnInfo, ColumnKey
from .column_type import ColumnType, TypeCategory
from .constraints import Check, Constraint, Exclusion, NotNull, PrimaryKey, References, Unique
from .database import Schema, SystemInfo
from .foreign_key_def import ForeignKeyAction, ForeignKeyInfo, MatchAction
from .index_def import IndexInfo, IndexOrder, IndexType
from .statements import (
    ColumnStatement,
    ForeignKeyCreateStatement,
    IndexCreateStatement,
    Statement,
    TableCreateStatement,
)
from .table_def import TableDef, TableInfo
from .writer import render_statements, write_table

__all__ = [
    "Check",
    "ColumnExtra",
    "ColumnInfo",
    "ColumnKey",
    "ColumnStatement",
    "ColumnType",
    "Constraint",
    "Exclusion",
    "ForeignKeyAction",
    "ForeignKeyCreateStatement",
    "ForeignKeyInfo",
    "IndexCreateStatement",
    "IndexInfo",
    "IndexOrder",
    "IndexType",
    "MatchAction",
    "NotNull",
    "NumericAttr",
    "PrimaryKey",
    "References",
    "Schema",
    "Statement",
    "StringAttr",
    "SystemInfo",
    "TableCreateStatement",
    "TableDef",
    "TableInfo",
    "TimeAttr",
    "TypeCategory",
    "Unique",
    "render_statements",
    "write_table",
]
