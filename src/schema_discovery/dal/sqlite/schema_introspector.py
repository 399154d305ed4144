import logging
from typing import List, Optional

from schema_discovery.common.errors import DiscoveryError, StructuralViolationError
from schema_discovery.common.sql import Dialect
from schema_discovery.dal.row_mapping import map_rows, validate_row
from schema_discovery.dal.schema_introspector import SchemaIntrospector
from schema_discovery.schema import SystemInfo, TableDef, TableInfo

from . import queries
from .parser import (
    assemble_primary_key,
    parse_column_query_result,
    parse_foreign_key_query_results,
    parse_index_query_results,
    split_indexes,
)
from .rows import ColumnQueryResult, TableQueryResult, VersionQueryResult
from .system import parse_version

logger = logging.getLogger(__name__)


class SqliteSchemaIntrospector(SchemaIntrospector):
    """SQLite implementation of SchemaIntrospector using sqlite_master and pragmas.

    The configured schema name is ignored; the connection's main database is read.
    """

    dialect = Dialect.SQLITE

    async def list_table_names(self) -> List[str]:
        rows = await self.fetch(queries.query_tables())
        return [validate_row(row, TableQueryResult).table_name for row in rows]

    async def get_system_info(self) -> SystemInfo:
        rows = await self.fetch(queries.query_version())
        if not rows:
            raise StructuralViolationError("sqlite_version() returned no rows")
        return parse_version(validate_row(rows[0], VersionQueryResult).version)

    async def get_table_def(
        self, table_name: str, errors: Optional[List[DiscoveryError]] = None
    ) -> TableDef:
        table_rows = await self.fetch(queries.query_tables(table_name))
        if not table_rows:
            raise StructuralViolationError("Table not found", {"table": table_name})
        create_sql = validate_row(table_rows[0], TableQueryResult).sql

        column_rows = await self.fetch(queries.query_columns(table_name))
        index_rows = await self.fetch(queries.query_indexes(table_name))
        fk_rows = await self.fetch(queries.query_foreign_keys(table_name))

        columns, primary_key = assemble_primary_key(
            map_rows(column_rows, ColumnQueryResult, parse_column_query_result, errors),
            create_sql,
        )
        indexes, uniques = split_indexes(parse_index_query_results(index_rows, errors))
        foreign_keys = list(parse_foreign_key_query_results(fk_rows, errors))

        constraints = [primary_key] if primary_key is not None else []
        constraints.extend(uniques)
        logger.debug(
            "Table %s: %d column(s), %d index(es), %d constraint(s), %d foreign key(s)",
            table_name,
            len(columns),
            len(indexes),
            len(constraints),
            len(foreign_keys),
        )
        return self.assemble_table(
            info=TableInfo(name=table_name),
            columns=columns,
            indexes=indexes,
            foreign_keys=foreign_keys,
            constraints=constraints,
        )
