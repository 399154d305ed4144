import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from schema_discovery.common.sql import Dialect

from .statements import IndexColumn, IndexCreateStatement

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_$]*")


class IndexOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    UNORDERED = "unordered"


class IndexType(str, Enum):
    BTREE = "BTREE"
    FULLTEXT = "FULLTEXT"
    HASH = "HASH"
    RTREE = "RTREE"
    SPATIAL = "SPATIAL"


class IndexInfo(BaseModel):
    """Canonical representation of a (possibly multi-column) index.

    ``columns`` is in key order, not insertion order. ``order`` and ``sub_part`` describe
    the leading key part; ``column_orders`` and ``sub_parts`` hold one entry per column.
    For functional indexes the column entry is the indexed expression.
    """

    name: str
    unique: bool = False
    columns: List[str] = Field(default_factory=list)
    order: IndexOrder = IndexOrder.ASCENDING
    sub_part: Optional[int] = None
    column_orders: List[IndexOrder] = Field(default_factory=list)
    sub_parts: List[Optional[int]] = Field(default_factory=list)
    nullable: bool = False
    idx_type: IndexType = IndexType.BTREE
    functional: bool = False
    comment: str = ""

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _align_key_parts(self) -> "IndexInfo":
        if not self.columns:
            raise ValueError(f"Index {self.name!r} has no columns")
        if not self.column_orders:
            self.column_orders = [self.order] * len(self.columns)
        if not self.sub_parts:
            self.sub_parts = [self.sub_part] + [None] * (len(self.columns) - 1)
        if len(self.column_orders) != len(self.columns) or len(self.sub_parts) != len(
            self.columns
        ):
            raise ValueError(f"Index {self.name!r} key parts do not match its column count")
        return self

    def add_key_part(self, part: "IndexInfo") -> "IndexInfo":
        """Append the single key part carried by ``part`` (a one-column fragment)."""
        self.columns.extend(part.columns)
        self.column_orders.extend(part.column_orders)
        self.sub_parts.extend(part.sub_parts)
        self.functional = self.functional or part.functional
        self.nullable = self.nullable or part.nullable
        return self

    @property
    def is_primary(self) -> bool:
        return self.name == "PRIMARY"

    def write(self, dialect: Dialect, table: Optional[str] = None) -> IndexCreateStatement:
        parts = [
            IndexColumn(
                name=column,
                descending=order == IndexOrder.DESCENDING,
                prefix=sub_part,
                expression=self.functional and not _IDENTIFIER.fullmatch(column),
            )
            for column, order, sub_part in zip(self.columns, self.column_orders, self.sub_parts)
        ]
        prefix = None
        if self.idx_type in (IndexType.FULLTEXT, IndexType.SPATIAL):
            prefix = self.idx_type.value
        return IndexCreateStatement(
            dialect=dialect,
            table=table,
            name=None if self.is_primary else self.name,
            columns=parts,
            primary=self.is_primary,
            unique=self.unique and not self.is_primary,
            prefix=prefix,
            using="HASH" if self.idx_type == IndexType.HASH else None,
        )
