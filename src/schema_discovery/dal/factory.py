"""Introspector factory with environment-driven provider selection.

Environment Variables:
    SCHEMA_DISCOVERY_PROVIDER: Engine whose catalog is read (default: "postgres")

Canonical Provider IDs:
    - "mysql": MySQL / MariaDB ``information_schema``
    - "postgres": PostgreSQL ``information_schema``
    - "sqlite": SQLite ``sqlite_master`` and table-valued pragmas

Example:
    >>> introspector = get_schema_introspector(conn, provider="pg")
    >>> result = await introspector.discover()
"""

import logging
from typing import Dict, Optional, Type

from schema_discovery.common.config import DiscoverySettings, get_env_str
from schema_discovery.common.config.settings import PROVIDER_ENV
from schema_discovery.common.sql import normalize_dialect

from .schema_introspector import CatalogConnection, SchemaIntrospector

logger = logging.getLogger(__name__)

SCHEMA_INTROSPECTOR_PROVIDERS: Dict[str, Type[SchemaIntrospector]] = {}


def _register_defaults() -> None:
    if SCHEMA_INTROSPECTOR_PROVIDERS:
        return
    from .mysql import MysqlSchemaIntrospector
    from .postgres import PostgresSchemaIntrospector
    from .sqlite import SqliteSchemaIntrospector

    SCHEMA_INTROSPECTOR_PROVIDERS["mysql"] = MysqlSchemaIntrospector
    SCHEMA_INTROSPECTOR_PROVIDERS["postgres"] = PostgresSchemaIntrospector
    SCHEMA_INTROSPECTOR_PROVIDERS["sqlite"] = SqliteSchemaIntrospector


def get_schema_introspector(
    connection: CatalogConnection,
    provider: Optional[str] = None,
    settings: Optional[DiscoverySettings] = None,
) -> SchemaIntrospector:
    """Build the introspector for ``provider`` over a host connection.

    Args:
        connection: Object exposing ``async fetch(sql)``.
        provider: Engine name or alias; SCHEMA_DISCOVERY_PROVIDER when omitted.
        settings: Explicit settings; read from the environment when omitted.

    Raises:
        ValueError: If the provider is not a supported engine.
    """
    _register_defaults()
    raw = provider or get_env_str(PROVIDER_ENV, default="postgres")
    dialect = normalize_dialect(raw)
    if dialect.value not in SCHEMA_INTROSPECTOR_PROVIDERS:
        allowed = ", ".join(sorted(SCHEMA_INTROSPECTOR_PROVIDERS))
        raise ValueError(f"Invalid provider '{raw}'. Allowed values: {allowed}")
    logger.info("Initializing SchemaIntrospector with provider: %s", dialect.value)
    return SCHEMA_INTROSPECTOR_PROVIDERS[dialect.value](connection, settings)
