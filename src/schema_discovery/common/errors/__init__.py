"""Discovery error taxonomy."""

from .error_codes import ErrorCode, error_code_group, parse_error_code
from .exceptions import (
    DiscoveryError,
    InternalContractError,
    MalformedSentinelError,
    StructuralViolationError,
    TypeDecodeError,
)

__all__ = [
    "DiscoveryError",
    "ErrorCode",
    "InternalContractError",
    "MalformedSentinelError",
    "StructuralViolationError",
    "TypeDecodeError",
    "error_code_group",
    "parse_error_code",
]
