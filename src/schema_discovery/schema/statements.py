"""Dialect-tagged DDL statement objects.

The writer produces these; ``to_string()`` renders literal SQL with identifiers and
literals quoted by sqlglot for the statement's dialect. Fragments that live inside a
``CREATE TABLE`` body render through ``to_table_clause()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from schema_discovery.common.sql import Dialect, quote_identifier


def _column_list(columns: List[str], dialect: Dialect) -> str:
    return ", ".join(quote_identifier(c, dialect) for c in columns)


def _constraint_prefix(name: Optional[str], dialect: Dialect) -> str:
    return f"CONSTRAINT {quote_identifier(name, dialect)} " if name else ""


@dataclass
class ColumnStatement:
    """One column definition: name, rendered type and modifiers in emission order."""

    name: str
    type_sql: str
    modifiers: List[str] = field(default_factory=list)

    def to_string(self, dialect: Dialect) -> str:
        parts = [quote_identifier(self.name, dialect)]
        if self.type_sql:
            parts.append(self.type_sql)
        parts.extend(self.modifiers)
        return " ".join(parts)


@dataclass
class IndexColumn:
    """A key part: a column name or, for functional indexes, an expression."""

    name: str
    descending: bool = False
    prefix: Optional[int] = None
    expression: bool = False

    def to_string(self, dialect: Dialect) -> str:
        if self.expression:
            sql = f"({self.name})"
        else:
            sql = quote_identifier(self.name, dialect)
        if self.prefix is not None:
            sql += f"({self.prefix})"
        if self.descending:
            sql += " DESC"
        return sql


@dataclass
class IndexCreateStatement:
    """An index, or a primary key / unique constraint rendered as a key."""

    dialect: Dialect
    table: Optional[str] = None
    name: Optional[str] = None
    columns: List[IndexColumn] = field(default_factory=list)
    primary: bool = False
    unique: bool = False
    # FULLTEXT/SPATIAL prefix keyword (MySQL) and access method for USING.
    prefix: Optional[str] = None
    using: Optional[str] = None

    def _key_parts(self) -> str:
        return ", ".join(c.to_string(self.dialect) for c in self.columns)

    @property
    def is_constraint(self) -> bool:
        return self.primary or (self.unique and self.dialect != Dialect.MYSQL)

    def to_table_clause(self) -> str:
        prefix = _constraint_prefix(self.name, self.dialect)
        if self.primary:
            return f"{prefix}PRIMARY KEY ({self._key_parts()})"
        if self.unique:
            return f"{prefix}UNIQUE ({self._key_parts()})"
        raise ValueError("Only primary keys and unique constraints render inside CREATE TABLE")

    def to_string(self) -> str:
        table = quote_identifier(self.table, self.dialect)
        if self.primary:
            return f"ALTER TABLE {table} ADD {self.to_table_clause()}"
        words = ["CREATE"]
        if self.unique:
            words.append("UNIQUE")
        elif self.prefix:
            words.append(self.prefix)
        words.append("INDEX")
        if self.name:
            words.append(quote_identifier(self.name, self.dialect))
        words.append(f"ON {table}")
        if self.using and self.dialect == Dialect.POSTGRES:
            words.append(f"USING {self.using}")
        words.append(f"({self._key_parts()})")
        if self.using and self.dialect == Dialect.MYSQL:
            words.append(f"USING {self.using}")
        return " ".join(words)


@dataclass
class ForeignKeyCreateStatement:
    """A foreign key, standalone (ALTER TABLE ... ADD) or inline."""

    dialect: Dialect
    table: Optional[str]
    columns: List[str]
    referenced_table: str
    referenced_columns: List[str]
    name: Optional[str] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    match: Optional[str] = None

    def to_table_clause(self) -> str:
        sql = (
            f"{_constraint_prefix(self.name, self.dialect)}"
            f"FOREIGN KEY ({_column_list(self.columns, self.dialect)}) "
            f"REFERENCES {quote_identifier(self.referenced_table, self.dialect)} "
            f"({_column_list(self.referenced_columns, self.dialect)})"
        )
        if self.match:
            sql += f" MATCH {self.match}"
        if self.on_delete:
            sql += f" ON DELETE {self.on_delete}"
        if self.on_update:
            sql += f" ON UPDATE {self.on_update}"
        return sql

    def to_string(self) -> str:
        table = quote_identifier(self.table, self.dialect)
        return f"ALTER TABLE {table} ADD {self.to_table_clause()}"


@dataclass
class CheckClause:
    dialect: Dialect
    expr: str
    name: Optional[str] = None
    no_inherit: bool = False

    def to_table_clause(self) -> str:
        sql = f"{_constraint_prefix(self.name, self.dialect)}CHECK ({self.expr.strip()})"
        if self.no_inherit and self.dialect == Dialect.POSTGRES:
            sql += " NO INHERIT"
        return sql


@dataclass
class ExclusionClause:
    dialect: Dialect
    using: str
    columns: List[str]
    operation: str
    name: Optional[str] = None

    def to_table_clause(self) -> str:
        elements = ", ".join(
            f"{quote_identifier(c, self.dialect)} WITH {self.operation}" for c in self.columns
        )
        prefix = _constraint_prefix(self.name, self.dialect)
        return f"{prefix}EXCLUDE USING {self.using} ({elements})"


TableClause = Union[IndexCreateStatement, ForeignKeyCreateStatement, CheckClause, ExclusionClause]


@dataclass
class TableCreateStatement:
    """``CREATE TABLE`` with column definitions, inline constraints and table options."""

    dialect: Dialect
    table: str
    columns: List[ColumnStatement] = field(default_factory=list)
    clauses: List[TableClause] = field(default_factory=list)
    options: List[Tuple[str, str]] = field(default_factory=list)

    def to_string(self) -> str:
        body = [c.to_string(self.dialect) for c in self.columns]
        body.extend(c.to_table_clause() for c in self.clauses)
        sql = f"CREATE TABLE {quote_identifier(self.table, self.dialect)} ( {', '.join(body)} )"
        if self.options:
            sql += " " + " ".join(f"{key}={value}" for key, value in self.options)
        return sql


Statement = Union[TableCreateStatement, IndexCreateStatement, ForeignKeyCreateStatement]
