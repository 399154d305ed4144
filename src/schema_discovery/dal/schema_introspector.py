import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Mapping, Optional, Protocol, Union, runtime_checkable

from pydantic import ValidationError
from sqlglot import exp

from schema_discovery.common.config import DiscoverySettings
from schema_discovery.common.errors import DiscoveryError, StructuralViolationError
from schema_discovery.common.sql import Dialect
from schema_discovery.schema import Schema, SystemInfo, TableDef

logger = logging.getLogger(__name__)


@runtime_checkable
class CatalogConnection(Protocol):
    """Host-provided connection; runs one catalog query and returns its rows."""

    async def fetch(self, sql: str) -> List[Mapping[str, Any]]:
        ...


@dataclass
class DiscoveryResult:
    """A discovered schema plus every catalog decode error that was tolerated."""

    schema: Schema
    errors: List[DiscoveryError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class SchemaIntrospector(ABC):
    """Reads one engine's catalog and assembles the canonical ``Schema``.

    Catalog errors for a single row are collected into ``errors`` (and the row
    skipped) unless ``settings.strict`` is set, in which case they propagate.
    """

    dialect: ClassVar[Dialect]

    def __init__(
        self, connection: CatalogConnection, settings: Optional[DiscoverySettings] = None
    ):
        self.connection = connection
        self.settings = settings or DiscoverySettings.from_env()

    async def fetch(self, query: Union[str, exp.Expression]) -> List[Mapping[str, Any]]:
        sql = query if isinstance(query, str) else query.sql(dialect=self.dialect.value)
        logger.debug("Catalog query (%s): %s", self.dialect.value, sql)
        return list(await self.connection.fetch(sql))

    def assemble_table(self, **parts: Any) -> TableDef:
        """Build a ``TableDef``, reporting duplicate names as a structural violation."""
        try:
            return TableDef(**parts)
        except ValidationError as exc:
            raise StructuralViolationError(
                str(exc.errors()[0].get("msg", exc)), {"table": parts["info"].name}
            ) from exc

    @abstractmethod
    async def list_table_names(self) -> List[str]:
        """List base table names in the configured schema, sorted by name."""

    @abstractmethod
    async def get_system_info(self) -> SystemInfo:
        """Identify the engine and its version."""

    @abstractmethod
    async def get_table_def(
        self, table_name: str, errors: Optional[List[DiscoveryError]] = None
    ) -> TableDef:
        """Get the full definition of a table (columns, indexes, constraints, FKs)."""

    async def discover(self) -> DiscoveryResult:
        """Discover every table not excluded by settings."""
        system = await self.get_system_info()
        excluded = set(self.settings.exclude_tables)
        names = [n for n in await self.list_table_names() if n not in excluded]
        logger.info(
            "Discovering %d table(s) on %s %s", len(names), system.system, system.version
        )

        errors: List[DiscoveryError] = []
        sink = None if self.settings.strict else errors
        tables: List[TableDef] = []
        for name in names:
            try:
                tables.append(await self.get_table_def(name, sink))
            except DiscoveryError as exc:
                exc.with_context(table=name)
                if self.settings.strict:
                    raise
                logger.warning("Skipping table %s: %s", name, exc)
                errors.append(exc)

        if errors:
            logger.warning("Discovery finished with %d catalog error(s)", len(errors))
        schema = Schema(schema_name=self.settings.schema_name, system=system, tables=tables)
        return DiscoveryResult(schema=schema, errors=errors)
