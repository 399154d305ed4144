from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from schema_discovery.common.sql import Dialect

from .statements import ForeignKeyCreateStatement


class ForeignKeyAction(str, Enum):
    """Referential action, valued by the catalog spelling."""

    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    CASCADE = "CASCADE"


class MatchAction(str, Enum):
    """SQLite ``MATCH`` clause of a foreign key."""

    SIMPLE = "SIMPLE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"
    NONE = "NONE"


class ForeignKeyInfo(BaseModel):
    """Canonical representation of a (possibly composite) foreign key constraint."""

    name: Optional[str] = None
    columns: List[str] = Field(default_factory=list)
    referenced_table: str
    referenced_columns: List[str] = Field(default_factory=list)
    on_update: Optional[ForeignKeyAction] = None
    on_delete: Optional[ForeignKeyAction] = None
    match_action: Optional[MatchAction] = None

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _check_arity(self) -> "ForeignKeyInfo":
        if len(self.columns) != len(self.referenced_columns):
            raise ValueError(
                f"Foreign key {self.name!r} has {len(self.columns)} column(s) but "
                f"references {len(self.referenced_columns)}"
            )
        return self

    def add_column(self, other: "ForeignKeyInfo") -> "ForeignKeyInfo":
        """Append the column pair carried by a one-column fragment."""
        self.columns.extend(other.columns)
        self.referenced_columns.extend(other.referenced_columns)
        return self

    def write(self, dialect: Dialect, table: Optional[str] = None) -> ForeignKeyCreateStatement:
        match = None
        if self.match_action is not None and self.match_action != MatchAction.NONE:
            match = self.match_action.value
        return ForeignKeyCreateStatement(
            dialect=dialect,
            table=table,
            name=self.name,
            columns=list(self.columns),
            referenced_table=self.referenced_table,
            referenced_columns=list(self.referenced_columns),
            on_delete=self.on_delete.value if self.on_delete else None,
            on_update=self.on_update.value if self.on_update else None,
            match=match,
        )
