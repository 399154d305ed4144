"""Constraint family for dialects that model constraints separately from columns.

``Constraint`` is a tagged union on ``kind``. Every variant renders itself through
``write()``; the table writer only decides where the fragment goes.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from schema_discovery.common.sql import Dialect

from .foreign_key_def import ForeignKeyInfo
from .statements import (
    CheckClause,
    ExclusionClause,
    IndexColumn,
    IndexCreateStatement,
)


class Check(BaseModel):
    """A value must satisfy the boolean expression ``expr``."""

    kind: Literal["check"] = "check"
    name: Optional[str] = None
    expr: str
    # NO INHERIT: the constraint does not propagate to child tables
    no_inherit: bool = False

    def write(self, dialect: Dialect, table: Optional[str] = None) -> CheckClause:
        return CheckClause(
            dialect=dialect, expr=self.expr, name=self.name, no_inherit=self.no_inherit
        )


class NotNull(BaseModel):
    """Marks a column NOT NULL; the writer renders it through ``ColumnInfo.not_null``."""

    kind: Literal["not_null"] = "not_null"


class Unique(BaseModel):
    """Each set of values for ``columns`` is unique across the table."""

    kind: Literal["unique"] = "unique"
    name: Optional[str] = None
    columns: List[str] = Field(default_factory=list)

    def add_column(self, other: "Unique") -> "Unique":
        self.columns.extend(other.columns)
        return self

    def write(self, dialect: Dialect, table: Optional[str] = None) -> IndexCreateStatement:
        return IndexCreateStatement(
            dialect=dialect,
            table=table,
            name=self.name,
            columns=[IndexColumn(name=c) for c in self.columns],
            unique=True,
        )


class PrimaryKey(BaseModel):
    """``columns`` together identify a row; implies not null and unique."""

    kind: Literal["primary_key"] = "primary_key"
    name: Optional[str] = None
    columns: List[str] = Field(default_factory=list)

    def add_column(self, other: "PrimaryKey") -> "PrimaryKey":
        self.columns.extend(other.columns)
        return self

    def write(self, dialect: Dialect, table: Optional[str] = None) -> IndexCreateStatement:
        return IndexCreateStatement(
            dialect=dialect,
            table=table,
            name=self.name,
            columns=[IndexColumn(name=c) for c in self.columns],
            primary=True,
        )


class References(ForeignKeyInfo):
    """The column set references a unique key of ``referenced_table``."""

    kind: Literal["references"] = "references"


class Exclusion(BaseModel):
    """Any two rows compared on ``columns`` with ``operation`` must not all match."""

    kind: Literal["exclusion"] = "exclusion"
    name: Optional[str] = None
    using: str
    columns: List[str] = Field(default_factory=list)
    operation: str

    def write(self, dialect: Dialect, table: Optional[str] = None) -> ExclusionClause:
        return ExclusionClause(
            dialect=dialect,
            using=self.using,
            columns=list(self.columns),
            operation=self.operation,
            name=self.name,
        )


Constraint = Annotated[
    Union[Check, NotNull, Unique, PrimaryKey, References, Exclusion],
    Field(discriminator="kind"),
]
