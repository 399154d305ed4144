"""Schema root: system identity plus the ordered table list."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .table_def import TableDef


class SystemInfo(BaseModel):
    """Engine identity as reported by the server's version function."""

    system: str
    version: str = ""
    # e.g. 8.0.23 -> 80023, 13.2 -> 130002
    version_number: int = 0
    suffix: List[str] = Field(default_factory=list)

    model_config = {"frozen": False}

    def is_at_least(self, major: int, minor: int = 0, patch: int = 0) -> bool:
        return self.version_number >= major * 10000 + minor * 100 + patch


class Schema(BaseModel):
    """Canonical representation of a discovered schema."""

    schema_name: Optional[str] = None
    system: SystemInfo
    tables: List[TableDef] = Field(default_factory=list)

    model_config = {"frozen": False}

    def table(self, name: str) -> Optional[TableDef]:
        for table in self.tables:
            if table.name == name:
                return table
        return None
