"""Identifier and literal quoting backed by sqlglot's dialect generators."""

from typing import Union

from sqlglot import exp

from .dialect import Dialect, normalize_sqlglot_dialect


def quote_identifier(name: str, dialect: Union[str, Dialect]) -> str:
    """Quote a table, column, index or constraint name for the given dialect.

    >>> quote_identifier("actor", "mysql")
    '`actor`'
    """
    return exp.to_identifier(name, quoted=True).sql(dialect=normalize_sqlglot_dialect(dialect))


def quote_literal(value: str, dialect: Union[str, Dialect]) -> str:
    """Render a string literal, escaping embedded quotes the dialect's way."""
    return exp.Literal.string(value).sql(dialect=normalize_sqlglot_dialect(dialect))
