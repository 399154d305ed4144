"""Discovery settings resolved from the environment.

Environment Variables:
    SCHEMA_DISCOVERY_PROVIDER: Dialect used by the introspector factory (default: "postgres")
    SCHEMA_DISCOVERY_STRICT: Raise on the first catalog decode error instead of collecting it
    SCHEMA_DISCOVERY_SCHEMA: Schema (database) to introspect; engine default when unset
    SCHEMA_DISCOVERY_EXCLUDE_TABLES: Comma-separated table names to skip
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .env import get_env_bool, get_env_list, get_env_str

PROVIDER_ENV = "SCHEMA_DISCOVERY_PROVIDER"
STRICT_ENV = "SCHEMA_DISCOVERY_STRICT"
SCHEMA_ENV = "SCHEMA_DISCOVERY_SCHEMA"
EXCLUDE_TABLES_ENV = "SCHEMA_DISCOVERY_EXCLUDE_TABLES"


@dataclass(frozen=True)
class DiscoverySettings:
    """Knobs shared by every dialect introspector."""

    strict: bool = False
    schema_name: Optional[str] = None
    exclude_tables: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "DiscoverySettings":
        """Build settings from SCHEMA_DISCOVERY_* environment variables."""
        return cls(
            strict=bool(get_env_bool(STRICT_ENV, default=False)),
            schema_name=get_env_str(SCHEMA_ENV) or None,
            exclude_tables=get_env_list(EXCLUDE_TABLES_ENV, default=[]) or [],
        )
