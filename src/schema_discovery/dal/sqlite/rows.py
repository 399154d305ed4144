"""Row shapes returned by ``sqlite_master`` and the table-valued pragmas."""

from typing import Optional

from schema_discovery.dal.row_mapping import CatalogRow


class TableQueryResult(CatalogRow):
    table_name: str
    sql: Optional[str] = None


class ColumnQueryResult(CatalogRow):
    """``pragma_table_info``: ``pk`` is the 1-based position in the primary key, 0 otherwise."""

    cid: int
    name: str
    type: str = ""
    notnull: int
    dflt_value: Optional[str] = None
    pk: int = 0


class IndexQueryResult(CatalogRow):
    """``pragma_index_list`` joined with ``pragma_index_xinfo`` (key columns only)."""

    index_name: str
    is_unique: int
    origin: str
    seqno: int
    column_name: Optional[str] = None
    is_desc: int = 0


class ForeignKeyQueryResult(CatalogRow):
    id: int
    seq: int
    referenced_table: str
    column_name: str
    referenced_column_name: Optional[str] = None
    on_update: str
    on_delete: str
    match: str = "NONE"


class VersionQueryResult(CatalogRow):
    version: str
