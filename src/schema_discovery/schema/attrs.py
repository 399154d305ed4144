"""Attribute records attached to the type kinds that need them."""

from typing import Optional

from pydantic import BaseModel


class NumericAttr(BaseModel):
    """Precision/scale and MySQL's sign and padding modifiers."""

    precision: Optional[int] = None
    scale: Optional[int] = None
    unsigned: Optional[bool] = None
    zero_fill: Optional[bool] = None

    model_config = {"frozen": False}


class StringAttr(BaseModel):
    """Length plus column-level character set and collation."""

    length: Optional[int] = None
    charset: Optional[str] = None
    collation: Optional[str] = None

    model_config = {"frozen": False}


class TimeAttr(BaseModel):
    """Fractional seconds precision."""

    fractional: Optional[int] = None

    model_config = {"frozen": False}
