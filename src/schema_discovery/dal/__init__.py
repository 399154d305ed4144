"""Per-engine catalog access: queries, row models, mappers and introspectors."""

from .factory import get_schema_introspector
from .schema_introspector import CatalogConnection, DiscoveryResult, SchemaIntrospector

__all__ = [
    "CatalogConnection",
    "DiscoveryResult",
    "SchemaIntrospector",
    "get_schema_introspector",
]
