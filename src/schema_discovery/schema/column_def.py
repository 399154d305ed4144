from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .column_type import ColumnType
from .constraints import Constraint, NotNull


class ColumnKey(str, Enum):
    """Key classification for dialects that expose it per column."""

    NOT_KEY = ""
    # part of the primary key
    PRIMARY = "PRI"
    # first column of a unique key
    UNIQUE = "UNI"
    # first column of a non-unique key
    MULTIPLE = "MUL"


class ColumnExtra(BaseModel):
    auto_increment: bool = False
    # only applies to timestamp or datetime
    on_update_current_timestamp: bool = False
    generated: bool = False
    # generated column is materialized (STORED) rather than VIRTUAL
    stored: bool = False
    # the default value is an expression
    default_generated: bool = False

    model_config = {"frozen": False}


class ColumnInfo(BaseModel):
    """Canonical representation of a table column.

    ``default`` and ``generated`` hold raw expression text exactly as the catalog
    reports it; they are never evaluated. ``constraints`` lists the constraint objects
    a constraint-modelling dialect (PostgreSQL, SQLite) attaches to the column.
    """

    name: str
    col_type: ColumnType
    null: bool = True
    key: ColumnKey = ColumnKey.NOT_KEY
    default: Optional[str] = None
    generated: Optional[str] = None
    extra: ColumnExtra = Field(default_factory=ColumnExtra)
    comment: str = ""
    constraints: List[Constraint] = Field(default_factory=list)

    model_config = {"frozen": False}

    @property
    def not_null(self) -> bool:
        return not self.null or any(isinstance(c, NotNull) for c in self.constraints)
