"""Row shapes returned by the MySQL ``information_schema`` queries."""

from typing import Optional

from schema_discovery.dal.row_mapping import CatalogRow


class TableQueryResult(CatalogRow):
    table_name: str
    engine: Optional[str] = None
    auto_increment: Optional[int] = None
    table_char_set: Optional[str] = None
    table_collation: Optional[str] = None
    table_comment: Optional[str] = ""


class ColumnQueryResult(CatalogRow):
    column_name: str
    column_type: str
    is_nullable: str
    column_key: str = ""
    column_default: Optional[str] = None
    extra: Optional[str] = ""
    generation_expression: Optional[str] = None
    column_comment: Optional[str] = ""


class IndexQueryResult(CatalogRow):
    """One key part of an index; sorted by (table_name, index_name, seq_in_index)."""

    table_name: str = ""
    non_unique: int
    index_name: str
    seq_in_index: Optional[int] = None
    column_name: Optional[str] = None
    # functional key part (MySQL 8.0.13+)
    expression: Optional[str] = None
    collation: Optional[str] = None
    sub_part: Optional[int] = None
    nullable: str = ""
    index_type: str
    index_comment: Optional[str] = ""


class ForeignKeyQueryResult(CatalogRow):
    """One column pair of a foreign key.

    Sorted by (table_name, constraint_name, ordinal_position).
    """

    table_name: str = ""
    constraint_name: str
    column_name: str
    ordinal_position: Optional[int] = None
    referenced_table_name: str
    referenced_column_name: str
    update_rule: str
    delete_rule: str


class VersionQueryResult(CatalogRow):
    version: str
