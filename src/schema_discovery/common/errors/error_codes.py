"""Canonical error-code taxonomy for catalog discovery."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Bounded error codes surfaced by parsing, consolidation and writing."""

    TYPE_DECODE = "TYPE_DECODE"
    MALFORMED_SENTINEL = "MALFORMED_SENTINEL"
    STRUCTURAL_VIOLATION = "STRUCTURAL_VIOLATION"
    INTERNAL_CONTRACT = "INTERNAL_CONTRACT"


_CODE_GROUPS: dict[ErrorCode, str] = {
    ErrorCode.TYPE_DECODE: "DATA_QUALITY",
    ErrorCode.MALFORMED_SENTINEL: "DATA_QUALITY",
    ErrorCode.STRUCTURAL_VIOLATION: "DATA_QUALITY",
    ErrorCode.INTERNAL_CONTRACT: "BUG",
}


def parse_error_code(
    value: Any,
    *,
    fallback: ErrorCode = ErrorCode.INTERNAL_CONTRACT,
) -> ErrorCode:
    """Parse string-like values to `ErrorCode` with safe fallback."""
    if isinstance(value, ErrorCode):
        return value
    if value is None:
        return fallback
    try:
        return ErrorCode(str(value).strip())
    except ValueError:
        return fallback


def error_code_group(value: Any) -> str:
    """Return a coarse grouping: catalog data drift vs. a bug at the call site."""
    parsed = parse_error_code(value)
    return _CODE_GROUPS.get(parsed, "BUG")
