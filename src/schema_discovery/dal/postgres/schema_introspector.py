import logging
from typing import List, Optional

from schema_discovery.common.errors import DiscoveryError, StructuralViolationError
from schema_discovery.common.sql import Dialect
from schema_discovery.dal.row_mapping import map_rows, validate_row
from schema_discovery.dal.schema_introspector import SchemaIntrospector
from schema_discovery.schema import SystemInfo, TableDef, TableInfo

from . import queries
from .parser import (
    parse_check_constraint_query_results,
    parse_column_query_result,
    parse_referential_constraint_query_results,
    parse_table_constraint_query_results,
)
from .rows import ColumnQueryResult, TableQueryResult, VersionQueryResult
from .system import parse_version

logger = logging.getLogger(__name__)


class PostgresSchemaIntrospector(SchemaIntrospector):
    """PostgreSQL implementation of SchemaIntrospector over information_schema and pg_constraint.

    Keys and checks are modelled as table constraints; indexes that do not back a
    constraint are not exposed by information_schema and are not discovered.
    """

    dialect = Dialect.POSTGRES

    async def list_table_names(self) -> List[str]:
        rows = await self.fetch(queries.query_tables(self.settings.schema_name))
        return [validate_row(row, TableQueryResult).table_name for row in rows]

    async def get_system_info(self) -> SystemInfo:
        rows = await self.fetch(queries.query_version())
        if not rows:
            raise StructuralViolationError("version() returned no rows")
        return parse_version(validate_row(rows[0], VersionQueryResult).version)

    async def get_table_def(
        self, table_name: str, errors: Optional[List[DiscoveryError]] = None
    ) -> TableDef:
        schema_name = self.settings.schema_name
        column_rows = await self.fetch(queries.query_columns(table_name, schema_name))
        if not column_rows:
            raise StructuralViolationError("Table not found", {"table": table_name})
        key_rows = await self.fetch(queries.query_table_constraints(table_name, schema_name))
        fk_rows = await self.fetch(
            queries.query_referential_constraints(table_name, schema_name)
        )
        check_rows = await self.fetch(queries.query_check_constraints(table_name, schema_name))

        columns = list(
            map_rows(column_rows, ColumnQueryResult, parse_column_query_result, errors)
        )
        constraints = [
            *parse_table_constraint_query_results(key_rows, errors),
            *parse_check_constraint_query_results(check_rows, errors),
            *parse_referential_constraint_query_results(fk_rows, errors),
        ]
        logger.debug(
            "Table %s: %d column(s), %d constraint(s)", table_name, len(columns), len(constraints)
        )
        return self.assemble_table(
            info=TableInfo(name=table_name), columns=columns, constraints=constraints
        )
