"""Dialect-independent machinery for attributed column types.

Each dialect declares its own closed set of type kinds and subclasses ``ColumnType``
with the tables that drive parsing and rendering:

- ``NAMES``: lower-case declaration name (possibly several words) -> kind
- ``CATEGORIES``: kind -> which attribute record the kind carries
- ``KEYWORDS``: kind -> canonical render keyword (default: the upper-cased kind value)
- ``NUMERIC_MODIFIERS``/``SUPPORTS_CHARSET``: trailing modifiers the dialect accepts
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator

from schema_discovery.common.errors import InternalContractError, TypeDecodeError

from .attrs import NumericAttr, StringAttr, TimeAttr
from .type_grammar import split_declaration

logger = logging.getLogger(__name__)

_U16_MAX = 65535


class TypeCategory(str, Enum):
    """Which attribute record a type kind carries."""

    PLAIN = "plain"
    NUMERIC = "numeric"
    STRING = "string"
    TIME = "time"
    VALUES = "values"
    UNKNOWN = "unknown"


class ColumnType(BaseModel):
    """A parsed column type: a kind tag plus the attribute record that kind carries."""

    kind: Any
    numeric: Optional[NumericAttr] = None
    string: Optional[StringAttr] = None
    time: Optional[TimeAttr] = None
    values: List[str] = Field(default_factory=list)
    raw: Optional[str] = None
    reason: Optional[str] = None

    model_config = {"frozen": False}

    UNKNOWN_KIND: ClassVar[Any] = None
    NAMES: ClassVar[Dict[str, Any]] = {}
    CATEGORIES: ClassVar[Dict[Any, TypeCategory]] = {}
    KEYWORDS: ClassVar[Dict[Any, str]] = {}
    NUMERIC_MODIFIERS: ClassVar[FrozenSet[str]] = frozenset()
    SUPPORTS_CHARSET: ClassVar[bool] = False
    # Attribute states that render identically to another state and so do not survive
    # render -> parse.
    ROUND_TRIP_EXCLUSIONS: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _ensure_attribute_record(self) -> "ColumnType":
        category = self.category
        if category == TypeCategory.NUMERIC and self.numeric is None:
            self.numeric = NumericAttr()
        elif category in (TypeCategory.STRING, TypeCategory.VALUES) and self.string is None:
            self.string = StringAttr()
        elif category == TypeCategory.TIME and self.time is None:
            self.time = TimeAttr()
        return self

    @property
    def category(self) -> TypeCategory:
        if self.UNKNOWN_KIND is not None and self.kind == self.UNKNOWN_KIND:
            return TypeCategory.UNKNOWN
        return self.CATEGORIES.get(self.kind, TypeCategory.PLAIN)

    @property
    def is_unknown(self) -> bool:
        return self.category == TypeCategory.UNKNOWN

    def has_numeric_attr(self) -> bool:
        return self.category == TypeCategory.NUMERIC

    # -- parsing -------------------------------------------------------------------

    @classmethod
    def unknown(cls, raw: str, reason: str) -> "ColumnType":
        return cls(kind=cls.UNKNOWN_KIND, raw=raw, reason=reason)

    @classmethod
    def parse(cls, text: Optional[str]) -> "ColumnType":
        """Decode a free-text declaration; never raises on bad input.

        Unrecognized names and malformed argument lists degrade to the unknown kind,
        keeping the original text and the reason.
        """
        source = text or ""
        try:
            return cls._decode(source)
        except TypeDecodeError as exc:
            logger.debug("Type %r degraded to unknown: %s", source, exc.message)
            return cls.unknown(source, exc.message)

    @classmethod
    def _decode(cls, text: str) -> "ColumnType":
        decl = split_declaration(text)
        names = decl.names
        kind = None
        consumed = 0
        for n in range(len(names), 0, -1):
            kind = cls.NAMES.get(" ".join(names[:n]))
            if kind is not None:
                consumed = n
                break
        if kind is None:
            raise TypeDecodeError(f"{decl.words[0]} is unknown or unimplemented")

        parsed = cls(kind=kind)
        parsed._apply_args(decl.args)
        parsed._apply_modifiers(decl.words[consumed:])
        return parsed

    def _apply_args(self, args: Optional[List[Union[str, int]]]) -> None:
        if not args:
            return
        category = self.category
        if category == TypeCategory.VALUES:
            if not all(isinstance(a, str) for a in args):
                raise TypeDecodeError("Value list members must be quoted strings")
            self.values = list(args)
            return
        if not all(isinstance(a, int) for a in args):
            raise TypeDecodeError("Type arguments must be integers")
        if category == TypeCategory.NUMERIC and len(args) <= 2:
            self.numeric.precision = args[0]
            if len(args) == 2:
                self.numeric.scale = args[1]
        elif category == TypeCategory.STRING and len(args) == 1:
            self.string.length = args[0]
        elif category == TypeCategory.TIME and len(args) == 1:
            self.time.fractional = args[0]
        else:
            raise TypeDecodeError(
                f"{_kind_name(self.kind)} does not take {len(args)} argument(s)"
            )

    def _apply_modifiers(self, words: List[str]) -> None:
        category = self.category
        takes_charset = self.SUPPORTS_CHARSET and category in (
            TypeCategory.STRING,
            TypeCategory.VALUES,
        )
        i = 0
        while i < len(words):
            word = words[i].lower()
            if category == TypeCategory.NUMERIC and word in self.NUMERIC_MODIFIERS:
                if word == "unsigned":
                    self.numeric.unsigned = True
                elif word == "signed":
                    self.numeric.unsigned = False
                elif word == "zerofill":
                    self.numeric.zero_fill = True
                i += 1
            elif takes_charset and word == "character" and _next(words, i) == "set":
                self.string.charset = _value_after(words, i + 1)
                i += 3
            elif takes_charset and word == "charset":
                self.string.charset = _value_after(words, i)
                i += 2
            elif takes_charset and word == "collate":
                self.string.collation = _value_after(words, i)
                i += 2
            else:
                raise TypeDecodeError(
                    f"Unsupported modifier '{words[i]}' for {_kind_name(self.kind)}"
                )

    # -- out-of-band attribute back-fill --------------------------------------------

    def with_numeric_attributes(
        self, precision: Optional[int], scale: Optional[int]
    ) -> "ColumnType":
        """Return a copy with precision/scale supplied by separate catalog columns.

        Raises:
            InternalContractError: If this kind carries no numeric attributes.
        """
        if not self.has_numeric_attr():
            raise InternalContractError(
                "Numeric attributes back-filled into a non-numeric type",
                {"kind": _kind_name(self.kind)},
            )
        merged = self.model_copy(deep=True)
        merged.numeric.precision = _as_u16(precision)
        merged.numeric.scale = _as_u16(scale)
        return merged

    def with_string_length(self, length: Optional[int]) -> "ColumnType":
        if self.category != TypeCategory.STRING:
            raise InternalContractError(
                "String length back-filled into a non-string type",
                {"kind": _kind_name(self.kind)},
            )
        merged = self.model_copy(deep=True)
        merged.string.length = length
        return merged

    def with_time_precision(self, fractional: Optional[int]) -> "ColumnType":
        if self.category != TypeCategory.TIME:
            raise InternalContractError(
                "Fractional precision back-filled into a non-temporal type",
                {"kind": _kind_name(self.kind)},
            )
        merged = self.model_copy(deep=True)
        merged.time.fractional = fractional
        return merged

    # -- rendering -------------------------------------------------------------------

    def keyword(self) -> str:
        return self.KEYWORDS.get(self.kind) or _kind_name(self.kind).upper()

    def render(self) -> str:
        """Render the canonical declaration; unknown types pass their source text through."""
        if self.is_unknown:
            return self.raw or ""

        head, sep, tail = self.keyword().partition(" WITH ")
        category = self.category
        args = ""
        suffix: List[str] = []

        if category == TypeCategory.NUMERIC:
            attr = self.numeric
            if attr.precision is not None:
                args = f"({attr.precision})"
                if attr.scale is not None:
                    args = f"({attr.precision},{attr.scale})"
            if attr.unsigned is True:
                suffix.append("UNSIGNED")
            elif attr.unsigned is False:
                suffix.append("SIGNED")
            if attr.zero_fill:
                suffix.append("ZEROFILL")
        elif category == TypeCategory.STRING:
            if self.string.length is not None:
                args = f"({self.string.length})"
        elif category == TypeCategory.TIME:
            if self.time.fractional is not None:
                args = f"({self.time.fractional})"
        elif category == TypeCategory.VALUES:
            quoted = ",".join("'" + v.replace("'", "''") + "'" for v in self.values)
            args = f"({quoted})"

        if category in (TypeCategory.STRING, TypeCategory.VALUES):
            if self.string.charset:
                suffix.append(f"CHARACTER SET {self.string.charset}")
            if self.string.collation:
                suffix.append(f"COLLATE {self.string.collation}")

        rendered = head + args
        if sep:
            rendered += sep + tail
        if suffix:
            rendered += " " + " ".join(suffix)
        return rendered


def _kind_name(kind: Any) -> str:
    return kind.value if isinstance(kind, Enum) else str(kind)


def _next(words: List[str], i: int) -> Optional[str]:
    return words[i + 1].lower() if i + 1 < len(words) else None


def _value_after(words: List[str], i: int) -> str:
    if i + 1 >= len(words):
        raise TypeDecodeError(f"Missing value after '{words[i]}'")
    return words[i + 1]


def _as_u16(value: Optional[int]) -> Optional[int]:
    if value is None or value < 0 or value > _U16_MAX:
        return None
    return value
