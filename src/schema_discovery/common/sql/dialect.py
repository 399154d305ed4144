"""Shared utilities for SQL dialect handling."""

from enum import Enum
from typing import Optional, Union

# Alias mappings: user-friendly names -> canonical dialect ID
DIALECT_ALIASES: dict[str, str] = {
    # PostgreSQL aliases
    "postgresql": "postgres",
    "postgres": "postgres",
    "pg": "postgres",
    # SQLite aliases
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
    # MySQL aliases
    "mysql": "mysql",
    "mariadb": "mysql",
}


class Dialect(str, Enum):
    """Database engines whose catalogs can be discovered and written back."""

    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"


def normalize_dialect(value: Union[str, Dialect]) -> Dialect:
    """Resolve a dialect name or alias (e.g. 'PostgreSQL', 'pg', 'MariaDB').

    Raises:
        ValueError: If the value does not name a supported engine.
    """
    if isinstance(value, Dialect):
        return value
    cleaned = value.strip().lower()
    canonical = DIALECT_ALIASES.get(cleaned, cleaned)
    try:
        return Dialect(canonical)
    except ValueError:
        allowed = ", ".join(d.value for d in Dialect)
        raise ValueError(f"Unsupported dialect '{value}'. Allowed values: {allowed}")


def normalize_sqlglot_dialect(dialect: Optional[Union[str, Dialect]]) -> str:
    """Normalize a dialect name for use with sqlglot.

    Args:
        dialect: The dialect name to normalize (e.g., 'PostgreSQL', 'sqlite3').

    Returns:
        A normalized lowercase string compatible with sqlglot.
    """
    if not dialect:
        return "postgres"
    return normalize_dialect(dialect).value
