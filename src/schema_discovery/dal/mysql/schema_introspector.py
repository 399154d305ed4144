import logging
from typing import List, Optional

from schema_discovery.common.errors import DiscoveryError, StructuralViolationError
from schema_discovery.common.sql import Dialect
from schema_discovery.dal.row_mapping import map_rows, validate_row
from schema_discovery.dal.schema_introspector import SchemaIntrospector
from schema_discovery.schema import SystemInfo, TableDef

from . import queries
from .parser import (
    parse_column_query_result,
    parse_foreign_key_query_results,
    parse_index_query_results,
    parse_table_query_result,
)
from .rows import ColumnQueryResult, TableQueryResult, VersionQueryResult
from .system import parse_version

logger = logging.getLogger(__name__)


class MysqlSchemaIntrospector(SchemaIntrospector):
    """MySQL / MariaDB implementation of SchemaIntrospector using information_schema."""

    dialect = Dialect.MYSQL

    async def list_table_names(self) -> List[str]:
        rows = await self.fetch(queries.query_tables(self.settings.schema_name))
        return [validate_row(row, TableQueryResult).table_name for row in rows]

    async def get_system_info(self) -> SystemInfo:
        rows = await self.fetch(queries.query_version())
        if not rows:
            raise StructuralViolationError("VERSION() returned no rows")
        return parse_version(validate_row(rows[0], VersionQueryResult).version)

    async def get_table_def(
        self, table_name: str, errors: Optional[List[DiscoveryError]] = None
    ) -> TableDef:
        schema_name = self.settings.schema_name
        table_rows = await self.fetch(queries.query_tables(schema_name, table_name))
        if not table_rows:
            raise StructuralViolationError("Table not found", {"table": table_name})
        info = parse_table_query_result(validate_row(table_rows[0], TableQueryResult))

        column_rows = await self.fetch(queries.query_columns(table_name, schema_name))
        index_rows = await self.fetch(queries.query_indexes(table_name, schema_name))
        fk_rows = await self.fetch(queries.query_foreign_keys(table_name, schema_name))

        columns = list(
            map_rows(column_rows, ColumnQueryResult, parse_column_query_result, errors)
        )
        indexes = list(parse_index_query_results(index_rows, errors))
        foreign_keys = list(parse_foreign_key_query_results(fk_rows, errors))
        logger.debug(
            "Table %s: %d column(s), %d index(es), %d foreign key(s)",
            table_name,
            len(columns),
            len(indexes),
            len(foreign_keys),
        )
        return self.assemble_table(
            info=info, columns=columns, indexes=indexes, foreign_keys=foreign_keys
        )
