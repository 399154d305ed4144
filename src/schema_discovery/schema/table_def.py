from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from schema_discovery.common.sql import Dialect

from .column_def import ColumnInfo
from .constraints import Constraint
from .foreign_key_def import ForeignKeyInfo
from .index_def import IndexInfo
from .statements import Statement
from .writer import write_table


class TableInfo(BaseModel):
    """Table-level options."""

    name: str
    engine: Optional[str] = None
    char_set: Optional[str] = None
    collation: Optional[str] = None
    auto_increment: Optional[int] = None
    comment: str = ""

    model_config = {"frozen": False}


class TableDef(BaseModel):
    """Canonical representation of a database table definition.

    Column order is the physical order and is reproduced verbatim by the writer, as is
    the declaration order of indexes, foreign keys and table-level constraints.
    """

    info: TableInfo
    columns: List[ColumnInfo] = Field(default_factory=list)
    indexes: List[IndexInfo] = Field(default_factory=list)
    foreign_keys: List[ForeignKeyInfo] = Field(default_factory=list)
    constraints: List[Constraint] = Field(default_factory=list)

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _check_unique_names(self) -> "TableDef":
        for label, names in (
            ("column", [c.name for c in self.columns]),
            ("index", [i.name for i in self.indexes]),
        ):
            seen = set()
            for name in names:
                if name in seen:
                    raise ValueError(f"Duplicate {label} name {name!r} in table {self.name!r}")
                seen.add(name)
        return self

    @property
    def name(self) -> str:
        return self.info.name

    def column(self, name: str) -> Optional[ColumnInfo]:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def write(self, dialect: Union[str, Dialect]) -> List[Statement]:
        """Project this table into dialect-tagged DDL statements."""
        return write_table(self, dialect)
