"""PostgreSQL column type kinds, valued by their ``columns.data_type`` spelling."""

from enum import Enum
from typing import ClassVar, Dict, Tuple

from schema_discovery.schema import ColumnType, TypeCategory


class PostgresTypeKind(str, Enum):
    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    NUMERIC = "numeric"
    REAL = "real"
    DOUBLE_PRECISION = "double precision"
    SMALLSERIAL = "smallserial"
    SERIAL = "serial"
    BIGSERIAL = "bigserial"
    MONEY = "money"
    VARCHAR = "character varying"
    CHAR = "character"
    TEXT = "text"
    BYTEA = "bytea"
    TIMESTAMP = "timestamp without time zone"
    TIMESTAMP_WITH_TIME_ZONE = "timestamp with time zone"
    DATE = "date"
    TIME = "time without time zone"
    TIME_WITH_TIME_ZONE = "time with time zone"
    INTERVAL = "interval"
    BOOLEAN = "boolean"
    POINT = "point"
    LINE = "line"
    LSEG = "lseg"
    BOX = "box"
    PATH = "path"
    POLYGON = "polygon"
    CIRCLE = "circle"
    CIDR = "cidr"
    INET = "inet"
    MACADDR = "macaddr"
    BIT = "bit"
    VARBIT = "bit varying"
    UUID = "uuid"
    XML = "xml"
    JSON = "json"
    JSON_BINARY = "jsonb"
    UNKNOWN = "unknown"


_CATEGORIES: Dict[PostgresTypeKind, TypeCategory] = {
    PostgresTypeKind.DECIMAL: TypeCategory.NUMERIC,
    PostgresTypeKind.NUMERIC: TypeCategory.NUMERIC,
    PostgresTypeKind.VARCHAR: TypeCategory.STRING,
    PostgresTypeKind.CHAR: TypeCategory.STRING,
    PostgresTypeKind.BIT: TypeCategory.STRING,
    PostgresTypeKind.VARBIT: TypeCategory.STRING,
    PostgresTypeKind.TIMESTAMP: TypeCategory.TIME,
    PostgresTypeKind.TIMESTAMP_WITH_TIME_ZONE: TypeCategory.TIME,
    PostgresTypeKind.TIME: TypeCategory.TIME,
    PostgresTypeKind.TIME_WITH_TIME_ZONE: TypeCategory.TIME,
    PostgresTypeKind.INTERVAL: TypeCategory.TIME,
}

_NAMES: Dict[str, PostgresTypeKind] = {
    **{kind.value: kind for kind in PostgresTypeKind if kind != PostgresTypeKind.UNKNOWN},
    "int2": PostgresTypeKind.SMALLINT,
    "int": PostgresTypeKind.INTEGER,
    "int4": PostgresTypeKind.INTEGER,
    "int8": PostgresTypeKind.BIGINT,
    "float4": PostgresTypeKind.REAL,
    "double": PostgresTypeKind.DOUBLE_PRECISION,
    "float8": PostgresTypeKind.DOUBLE_PRECISION,
    "serial2": PostgresTypeKind.SMALLSERIAL,
    "serial4": PostgresTypeKind.SERIAL,
    "serial8": PostgresTypeKind.BIGSERIAL,
    "varchar": PostgresTypeKind.VARCHAR,
    "char": PostgresTypeKind.CHAR,
    "bpchar": PostgresTypeKind.CHAR,
    "timestamp": PostgresTypeKind.TIMESTAMP,
    "timestamptz": PostgresTypeKind.TIMESTAMP_WITH_TIME_ZONE,
    "time": PostgresTypeKind.TIME,
    "timetz": PostgresTypeKind.TIME_WITH_TIME_ZONE,
    "bool": PostgresTypeKind.BOOLEAN,
    "varbit": PostgresTypeKind.VARBIT,
}

_KEYWORDS: Dict[PostgresTypeKind, str] = {
    PostgresTypeKind.VARCHAR: "VARCHAR",
    PostgresTypeKind.CHAR: "CHAR",
    PostgresTypeKind.TIMESTAMP: "TIMESTAMP",
    PostgresTypeKind.TIMESTAMP_WITH_TIME_ZONE: "TIMESTAMP WITH TIME ZONE",
    PostgresTypeKind.TIME: "TIME",
    PostgresTypeKind.TIME_WITH_TIME_ZONE: "TIME WITH TIME ZONE",
}


class PostgresType(ColumnType):
    """A PostgreSQL ``data_type``; attributes are back-filled from separate catalog columns."""

    kind: PostgresTypeKind

    UNKNOWN_KIND: ClassVar[PostgresTypeKind] = PostgresTypeKind.UNKNOWN
    NAMES: ClassVar[Dict[str, PostgresTypeKind]] = _NAMES
    CATEGORIES: ClassVar[Dict[PostgresTypeKind, TypeCategory]] = _CATEGORIES
    KEYWORDS: ClassVar[Dict[PostgresTypeKind, str]] = _KEYWORDS
    ROUND_TRIP_EXCLUSIONS: ClassVar[Tuple[str, ...]] = (
        "numeric_precision_radix is not stored",
        "user-defined and array types (USER-DEFINED, ARRAY) stay unknown",
    )
