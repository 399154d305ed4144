from .dialect import Dialect, normalize_dialect, normalize_sqlglot_dialect
from .quoting import quote_identifier, quote_literal

__all__ = [
    "Dialect",
    "normalize_dialect",
    "normalize_sqlglot_dialect",
    "quote_identifier",
    "quote_literal",
]
