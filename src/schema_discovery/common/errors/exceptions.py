"""Typed exceptions raised while decoding catalog rows.

None of these terminate discovery on their own: introspectors either collect them
per row or re-raise them to the host, depending on ``DiscoverySettings.strict``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .error_codes import ErrorCode


class DiscoveryError(Exception):
    """Base class for every error surfaced by schema discovery."""

    code: ErrorCode = ErrorCode.INTERNAL_CONTRACT

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def with_context(self, **context: Any) -> "DiscoveryError":
        """Attach identifying row context (table, index, constraint...) and return self."""
        for key, value in context.items():
            self.context.setdefault(key, value)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "context": dict(self.context)}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"{self.message} ({details})"


class TypeDecodeError(DiscoveryError):
    """A type declaration could not be decoded; callers degrade to the unknown type."""

    code = ErrorCode.TYPE_DECODE


class MalformedSentinelError(DiscoveryError):
    """An enumerated catalog value fell outside its closed set."""

    code = ErrorCode.MALFORMED_SENTINEL

    def __init__(
        self,
        field: str,
        value: Any,
        allowed: Iterable[Any] = (),
        context: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        message = f"Unexpected value {value!r} for catalog field '{field}'"
        if self.allowed:
            message += f"; expected one of {', '.join(repr(a) for a in self.allowed)}"
        super().__init__(message, context)


class StructuralViolationError(DiscoveryError):
    """Catalog rows broke the ordering/grouping contract of the consolidation engine."""

    code = ErrorCode.STRUCTURAL_VIOLATION


class InternalContractError(DiscoveryError):
    """A programming error at the call site, e.g. back-filling the wrong type kind."""

    code = ErrorCode.INTERNAL_CONTRACT
