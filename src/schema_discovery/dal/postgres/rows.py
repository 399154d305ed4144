"""Row shapes returned by the PostgreSQL catalog queries."""

from typing import Optional

from schema_discovery.dal.row_mapping import CatalogRow


class TableQueryResult(CatalogRow):
    table_name: str


class ColumnQueryResult(CatalogRow):
    column_name: str
    data_type: str
    column_default: Optional[str] = None
    is_nullable: str
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    numeric_precision_radix: Optional[int] = None
    numeric_scale: Optional[int] = None
    datetime_precision: Optional[int] = None
    is_generated: str = "NEVER"
    generation_expression: Optional[str] = None


class TableConstraintQueryResult(CatalogRow):
    """One column of a primary key or unique constraint."""

    table_name: str = ""
    constraint_name: str
    constraint_type: str
    column_name: str
    ordinal_position: Optional[int] = None


class ReferentialConstraintQueryResult(CatalogRow):
    """One column pair of a foreign key, paired by position in the constraint's key arrays."""

    table_name: str = ""
    constraint_name: str
    column_name: str
    ordinal_position: Optional[int] = None
    referenced_table_name: str
    referenced_column_name: str
    update_rule: str
    delete_rule: str
    match_option: str = "NONE"


class CheckConstraintQueryResult(CatalogRow):
    constraint_name: str
    check_clause: str
    no_inherit: bool = False


class VersionQueryResult(CatalogRow):
    version: str
