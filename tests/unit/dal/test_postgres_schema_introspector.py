import re

import pytest

from schema_discovery.common.config import DiscoverySettings
from schema_discovery.common.errors import StructuralViolationError
from schema_discovery.dal.postgres import PostgresSchemaIntrospector, PostgresTypeKind
from schema_discovery.schema import (
    Check,
    ForeignKeyAction,
    MatchAction,
    NotNull,
    PrimaryKey,
    References,
    Unique,
    render_statements,
)

_TABLE_FILTER = re.compile(r"table_name = '([^']*)'", re.IGNORECASE)
_RELATION_FILTER = re.compile(r"cl\.relname = '([^']*)'", re.IGNORECASE)


def _column(name, data_type, nullable="YES", **extra):
    return {"column_name": name, "data_type": data_type, "is_nullable": nullable, **extra}


def _catalog():
    return {
        "film": {
            "columns": [
                _column("film_id", "integer", "NO", column_default="nextval('film_seq')"),
                _column("title", "character varying", "NO", character_maximum_length=255),
                _column(
                    "rental_rate",
                    "numeric",
                    "NO",
                    numeric_precision=4,
                    numeric_scale=2,
                    numeric_precision_radix=10,
                ),
                _column("last_update", "timestamp without time zone", datetime_precision=6),
                _column("fulltext", "tsvector"),
            ],
            "keys": [
                {
                    "table_name": "film",
                    "constraint_name": "film_pkey",
                    "constraint_type": "PRIMARY KEY",
                    "column_name": "film_id",
                    "ordinal_position": 1,
                },
                {
                    "table_name": "film",
                    "constraint_name": "film_title_key",
                    "constraint_type": "UNIQUE",
                    "column_name": "title",
                    "ordinal_position": 1,
                },
            ],
            "references": [
                {
                    "table_name": "film",
                    "constraint_name": "film_language_id_fkey",
                    "column_name": "language_id",
                    "ordinal_position": 1,
                    "referenced_table_name": "language",
                    "referenced_column_name": "language_id",
                    "update_rule": "CASCADE",
                    "delete_rule": "RESTRICT",
                    "match_option": "NONE",
                }
            ],
            "checks": [
                {"constraint_name": "film_rate_check", "check_clause": "(rental_rate >= 0)"},
            ],
        },
        "language": {
            "columns": [_column("language_id", "integer", "NO")],
            "keys": [],
            "references": [],
            "checks": [],
        },
    }


class _FakeConn:
    """Routes catalog queries to canned rows.

    ``pg_constraint`` queries only see the rows of the relation named in their
    ``cl.relname`` filter; without one they see every table's rows, as the catalog would.
    """

    def __init__(self, catalog):
        self._catalog = catalog
        self.queries = []

    def _owned(self, sql, part):
        match = _RELATION_FILTER.search(sql)
        if match:
            return self._catalog.get(match.group(1), {}).get(part, [])
        return [row for table in self._catalog.values() for row in table.get(part, [])]

    async def fetch(self, sql, *params):
        self.queries.append(sql)
        lowered = sql.lower()
        if "version()" in lowered:
            return [{"version": "PostgreSQL 13.2 on x86_64-pc-linux-gnu"}]
        if "pg_get_expr" in lowered:
            return self._owned(sql, "checks")
        if "confkey" in lowered:
            return self._owned(sql, "references")
        match = _TABLE_FILTER.search(sql)
        table = match.group(1) if match else None
        for marker, part in (
            ("information_schema.table_constraints", "keys"),
            ("information_schema.columns", "columns"),
        ):
            if marker in lowered:
                return self._catalog.get(table, {}).get(part, [])
        if "information_schema.tables" in lowered:
            return [{"table_name": name} for name in sorted(self._catalog)]
        raise AssertionError(f"Unexpected SQL: {sql}")


def _introspector(catalog=None, **settings):
    conn = _FakeConn(catalog or _catalog())
    return conn, PostgresSchemaIntrospector(conn, DiscoverySettings(**settings))


@pytest.mark.asyncio
async def test_list_table_names_defaults_to_current_schema():
    conn, introspector = _introspector()
    assert await introspector.list_table_names() == ["film", "language"]
    assert "current_schema()" in conn.queries[0].lower()


@pytest.mark.asyncio
async def test_get_table_def_models_keys_checks_and_references_as_constraints():
    _, introspector = _introspector()
    table = await introspector.get_table_def("film")

    assert table.info.name == "film"
    assert table.indexes == []
    assert table.foreign_keys == []
    assert [c.name for c in table.columns] == [
        "film_id",
        "title",
        "rental_rate",
        "last_update",
        "fulltext",
    ]
    assert table.column("film_id").constraints == [NotNull()]
    assert table.column("title").col_type.render() == "VARCHAR(255)"
    assert table.column("rental_rate").col_type.render() == "NUMERIC(4,2)"
    assert table.column("last_update").col_type.kind == PostgresTypeKind.TIMESTAMP
    assert table.column("last_update").col_type.time.fractional == 6
    assert table.column("fulltext").col_type.is_unknown

    keys = [c for c in table.constraints if isinstance(c, (PrimaryKey, Unique))]
    assert keys == [
        PrimaryKey(name="film_pkey", columns=["film_id"]),
        Unique(name="film_title_key", columns=["title"]),
    ]
    checks = [c for c in table.constraints if isinstance(c, Check)]
    assert checks == [Check(name="film_rate_check", expr="(rental_rate >= 0)")]
    (reference,) = [c for c in table.constraints if isinstance(c, References)]
    assert reference.referenced_table == "language"


@pytest.mark.asyncio
async def test_table_without_columns_is_not_found():
    _, introspector = _introspector()
    with pytest.raises(StructuralViolationError) as excinfo:
        await introspector.get_table_def("missing")
    assert excinfo.value.context == {"table": "missing"}


@pytest.mark.asyncio
async def test_discover_reports_unexpected_constraint_rows():
    catalog = _catalog()
    catalog["film"]["references"][0]["delete_rule"] = "EXPLODE"
    _, introspector = _introspector(catalog)

    result = await introspector.discover()

    assert result.schema.system.version_number == 130002
    assert [t.name for t in result.schema.tables] == ["film", "language"]
    assert not any(isinstance(c, References) for c in result.schema.table("film").constraints)
    (error,) = result.errors
    assert error.field == "delete_rule"
    assert error.context["constraint"] == "film_language_id_fkey"


@pytest.mark.asyncio
async def test_written_ddl_keeps_constraints_inside_create_table():
    _, introspector = _introspector()
    table = await introspector.get_table_def("film")
    statements = render_statements(table.write("postgres"))
    sql = statements[0]
    assert sql.startswith('CREATE TABLE "film" (')
    assert 'CONSTRAINT "film_rate_check" CHECK (rental_rate >= 0)' in sql
    assert 'CONSTRAINT "film_pkey" PRIMARY KEY ("film_id")' in sql
    assert len(statements) == 2
    assert statements[1].startswith("ALTER TABLE")


def _tenant_reference(table, column, referenced_table):
    return {
        "table_name": table,
        "constraint_name": "fk_tenant",
        "column_name": column,
        "ordinal_position": 1,
        "referenced_table_name": referenced_table,
        "referenced_column_name": "id",
        "update_rule": "NO ACTION",
        "delete_rule": "CASCADE",
        "match_option": "NONE",
    }


def _catalog_with_shared_constraint_names():
    catalog = _catalog()
    catalog["film"]["references"].append(_tenant_reference("film", "tenant_id", "tenant"))
    catalog["film"]["checks"].append(
        {"constraint_name": "ck_positive", "check_clause": "(length > 0)"}
    )
    catalog["inventory"] = {
        "columns": [_column("inventory_id", "integer", "NO")],
        "keys": [],
        "references": [_tenant_reference("inventory", "owner_id", "account")],
        "checks": [
            {"constraint_name": "ck_positive", "check_clause": "(quantity > 0)", "no_inherit": True}
        ],
    }
    return catalog


@pytest.mark.asyncio
async def test_same_named_constraints_on_other_tables_do_not_leak_in():
    conn, introspector = _introspector(_catalog_with_shared_constraint_names())
    table = await introspector.get_table_def("film")

    references = [c for c in table.constraints if isinstance(c, References)]
    assert [r.name for r in references] == ["film_language_id_fkey", "fk_tenant"]
    tenant = references[1]
    assert tenant.columns == ["tenant_id"]
    assert tenant.referenced_table == "tenant"
    checks = [c for c in table.constraints if isinstance(c, Check)]
    assert Check(name="ck_positive", expr="(length > 0)") in checks
    assert len(checks) == 2

    constraint_queries = [q for q in conn.queries if "pg_constraint" in q.lower()]
    assert len(constraint_queries) == 2
    for sql in constraint_queries:
        assert "conrelid" in sql.lower()
        assert _RELATION_FILTER.search(sql).group(1) == "film"


@pytest.mark.asyncio
async def test_check_no_inherit_is_discovered():
    _, introspector = _introspector(_catalog_with_shared_constraint_names())
    table = await introspector.get_table_def("inventory")
    assert table.constraints == [
        Check(name="ck_positive", expr="(quantity > 0)", no_inherit=True),
        References(
            name="fk_tenant",
            columns=["owner_id"],
            referenced_table="account",
            referenced_columns=["id"],
            on_update=ForeignKeyAction.NO_ACTION,
            on_delete=ForeignKeyAction.CASCADE,
            match_action=MatchAction.NONE,
        ),
    ]


@pytest.mark.asyncio
async def test_discover_keeps_tables_that_share_constraint_names():
    _, introspector = _introspector(_catalog_with_shared_constraint_names())
    result = await introspector.discover()
    assert result.errors == []
    assert [t.name for t in result.schema.tables] == ["film", "inventory", "language"]
