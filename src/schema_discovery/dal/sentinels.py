"""Total decoders for enumerated catalog values.

Every decoder maps an in-set spelling to its enum member and raises
``MalformedSentinelError`` for anything else, so one drifting row never aborts a scan.
"""

from typing import Any, Dict, Mapping, Optional, TypeVar

from schema_discovery.common.errors import MalformedSentinelError

E = TypeVar("E")

YES_NO: Dict[str, bool] = {"YES": True, "NO": False}


def decode_sentinel(
    value: Any,
    mapping: Mapping[Any, E],
    field: str,
    context: Optional[Dict[str, Any]] = None,
) -> E:
    """Look ``value`` up in ``mapping`` or raise ``MalformedSentinelError``."""
    try:
        return mapping[value]
    except (KeyError, TypeError):
        raise MalformedSentinelError(field, value, allowed=mapping.keys(), context=context)


def yes_or_no(value: Any, field: str, context: Optional[Dict[str, Any]] = None) -> bool:
    return decode_sentinel(value, YES_NO, field, context)
