"""DDL writer: projects a ``TableDef`` into dialect-tagged statement objects.

Statement order per table:

1. ``CREATE TABLE`` with columns, then inline clauses (primary key, unique / check /
   exclusion constraints, and for SQLite the foreign keys, which it cannot add later),
   then MySQL table options.
2. ``CREATE INDEX`` for each remaining index, in model order.
3. ``ALTER TABLE ... ADD CONSTRAINT ... FOREIGN KEY`` in model order (MySQL, PostgreSQL).

Column modifier order:

- MySQL: type, GENERATED ALWAYS AS (...) VIRTUAL|STORED, NOT NULL, AUTO_INCREMENT,
  DEFAULT, ON UPDATE CURRENT_TIMESTAMP, COMMENT
- PostgreSQL: type, GENERATED ALWAYS AS (...) STORED, NOT NULL, DEFAULT
- SQLite: type, PRIMARY KEY AUTOINCREMENT, GENERATED ALWAYS AS (...) VIRTUAL|STORED,
  NOT NULL, DEFAULT

The writer keeps no state between calls.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List, Optional, Union

from schema_discovery.common.sql import Dialect, normalize_dialect, quote_literal

from .column_def import ColumnInfo
from .constraints import NotNull, PrimaryKey
from .statements import (
    ColumnStatement,
    ForeignKeyCreateStatement,
    IndexCreateStatement,
    Statement,
    TableCreateStatement,
)

if TYPE_CHECKING:
    from .table_def import TableDef

_CURRENT_TIMESTAMP = re.compile(
    r"(?i)^(current_timestamp|now|localtime|localtimestamp)(\(\d*\))?$"
)
_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_BIT_LITERAL = re.compile(r"^[bB]'[01]*'$")


def write_table(table: "TableDef", dialect: Union[str, Dialect]) -> List[Statement]:
    """Return the statements that recreate ``table`` in ``dialect``."""
    dialect = normalize_dialect(dialect)
    create = TableCreateStatement(dialect=dialect, table=table.name)
    indexes: List[Statement] = []
    foreign_keys: List[Statement] = []

    autoincrement_column = None
    if dialect == Dialect.SQLITE:
        autoincrement_column = _sqlite_autoincrement_column(table)

    for column in table.columns:
        create.columns.append(
            _write_column(column, dialect, inline_primary=column.name == autoincrement_column)
        )

    for index in table.indexes:
        statement = index.write(dialect, table.name)
        if statement.primary:
            create.clauses.append(statement)
        else:
            indexes.append(statement)

    for constraint in table.constraints:
        if isinstance(constraint, NotNull):
            continue
        if (
            isinstance(constraint, PrimaryKey)
            and autoincrement_column is not None
            and constraint.columns == [autoincrement_column]
        ):
            continue
        fragment = constraint.write(dialect, table.name)
        if isinstance(fragment, ForeignKeyCreateStatement):
            _place_foreign_key(fragment, create, foreign_keys)
        elif isinstance(fragment, IndexCreateStatement) and not fragment.is_constraint:
            indexes.append(fragment)
        else:
            create.clauses.append(fragment)

    for foreign_key in table.foreign_keys:
        _place_foreign_key(foreign_key.write(dialect, table.name), create, foreign_keys)

    if dialect == Dialect.MYSQL:
        info = table.info
        if info.engine:
            create.options.append(("ENGINE", info.engine))
        if info.char_set:
            create.options.append(("DEFAULT CHARSET", info.char_set))
        if info.collation:
            create.options.append(("COLLATE", info.collation))
        if info.comment:
            create.options.append(("COMMENT", quote_literal(info.comment, dialect)))

    return [create, *indexes, *foreign_keys]


def render_statements(statements: List[Statement]) -> List[str]:
    return [statement.to_string() for statement in statements]


def _place_foreign_key(
    statement: ForeignKeyCreateStatement,
    create: TableCreateStatement,
    trailing: List[Statement],
) -> None:
    # SQLite has no ALTER TABLE ... ADD CONSTRAINT
    if statement.dialect == Dialect.SQLITE:
        create.clauses.append(statement)
    else:
        trailing.append(statement)


def _sqlite_autoincrement_column(table: "TableDef") -> Optional[str]:
    for column in table.columns:
        if column.extra.auto_increment:
            return column.name
    return None


def _write_column(
    column: ColumnInfo, dialect: Dialect, inline_primary: bool = False
) -> ColumnStatement:
    modifiers: List[str] = []
    extra = column.extra

    if inline_primary:
        modifiers.append("PRIMARY KEY AUTOINCREMENT")

    if column.generated:
        storage = "STORED" if extra.stored or dialect == Dialect.POSTGRES else "VIRTUAL"
        modifiers.append(f"GENERATED ALWAYS AS ({column.generated}) {storage}")

    if column.not_null:
        modifiers.append("NOT NULL")

    if dialect == Dialect.MYSQL and extra.auto_increment:
        modifiers.append("AUTO_INCREMENT")

    if column.default is not None and not column.generated:
        modifiers.append(f"DEFAULT {_render_default(column, dialect)}")

    if dialect == Dialect.MYSQL:
        if extra.on_update_current_timestamp:
            fractional = column.col_type.time.fractional if column.col_type.time else None
            precision = f"({fractional})" if fractional else ""
            modifiers.append(f"ON UPDATE CURRENT_TIMESTAMP{precision}")
        if column.comment:
            modifiers.append(f"COMMENT {quote_literal(column.comment, dialect)}")

    return ColumnStatement(
        name=column.name, type_sql=column.col_type.render(), modifiers=modifiers
    )


def _render_default(column: ColumnInfo, dialect: Dialect) -> str:
    expr = column.default
    if dialect != Dialect.MYSQL:
        # PostgreSQL and SQLite report the default as expression text already
        return expr
    if _CURRENT_TIMESTAMP.match(expr) or _NUMBER.match(expr) or _BIT_LITERAL.match(expr):
        return expr
    if column.extra.default_generated:
        return f"({expr})"
    return quote_literal(expr, dialect)
