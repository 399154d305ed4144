"""MySQL column type kinds and the tables that drive parsing and rendering."""

from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Tuple

from schema_discovery.schema import ColumnType, TypeCategory


class MysqlTypeKind(str, Enum):
    SERIAL = "serial"
    BIT = "bit"
    TINYINT = "tinyint"
    BOOL = "bool"
    SMALLINT = "smallint"
    MEDIUMINT = "mediumint"
    INT = "int"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    FLOAT = "float"
    DOUBLE = "double"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    YEAR = "year"
    CHAR = "char"
    NCHAR = "nchar"
    VARCHAR = "varchar"
    NVARCHAR = "nvarchar"
    BINARY = "binary"
    VARBINARY = "varbinary"
    TEXT = "text"
    TINYTEXT = "tinytext"
    MEDIUMTEXT = "mediumtext"
    LONGTEXT = "longtext"
    BLOB = "blob"
    TINYBLOB = "tinyblob"
    MEDIUMBLOB = "mediumblob"
    LONGBLOB = "longblob"
    ENUM = "enum"
    SET = "set"
    GEOMETRY = "geometry"
    POINT = "point"
    LINESTRING = "linestring"
    POLYGON = "polygon"
    MULTIPOINT = "multipoint"
    MULTILINESTRING = "multilinestring"
    MULTIPOLYGON = "multipolygon"
    GEOMETRYCOLLECTION = "geometrycollection"
    JSON = "json"
    UNKNOWN = "unknown"


_NUMERIC = (
    MysqlTypeKind.BIT,
    MysqlTypeKind.TINYINT,
    MysqlTypeKind.SMALLINT,
    MysqlTypeKind.MEDIUMINT,
    MysqlTypeKind.INT,
    MysqlTypeKind.BIGINT,
    MysqlTypeKind.DECIMAL,
    MysqlTypeKind.FLOAT,
    MysqlTypeKind.DOUBLE,
    MysqlTypeKind.YEAR,
)
_STRING = (
    MysqlTypeKind.CHAR,
    MysqlTypeKind.NCHAR,
    MysqlTypeKind.VARCHAR,
    MysqlTypeKind.NVARCHAR,
    MysqlTypeKind.BINARY,
    MysqlTypeKind.VARBINARY,
    MysqlTypeKind.TEXT,
    MysqlTypeKind.TINYTEXT,
    MysqlTypeKind.MEDIUMTEXT,
    MysqlTypeKind.LONGTEXT,
    MysqlTypeKind.BLOB,
    MysqlTypeKind.TINYBLOB,
    MysqlTypeKind.MEDIUMBLOB,
    MysqlTypeKind.LONGBLOB,
)
_TIME = (MysqlTypeKind.TIME, MysqlTypeKind.DATETIME, MysqlTypeKind.TIMESTAMP)

_CATEGORIES: Dict[MysqlTypeKind, TypeCategory] = {
    **{kind: TypeCategory.NUMERIC for kind in _NUMERIC},
    **{kind: TypeCategory.STRING for kind in _STRING},
    **{kind: TypeCategory.TIME for kind in _TIME},
    MysqlTypeKind.ENUM: TypeCategory.VALUES,
    MysqlTypeKind.SET: TypeCategory.VALUES,
}

_NAMES: Dict[str, MysqlTypeKind] = {
    **{kind.value: kind for kind in MysqlTypeKind if kind != MysqlTypeKind.UNKNOWN},
    "integer": MysqlTypeKind.INT,
    "boolean": MysqlTypeKind.BOOL,
    "dec": MysqlTypeKind.DECIMAL,
    "numeric": MysqlTypeKind.DECIMAL,
    "fixed": MysqlTypeKind.DECIMAL,
    "real": MysqlTypeKind.DOUBLE,
    "double precision": MysqlTypeKind.DOUBLE,
    "character": MysqlTypeKind.CHAR,
    "character varying": MysqlTypeKind.VARCHAR,
    "national char": MysqlTypeKind.NCHAR,
    "national character": MysqlTypeKind.NCHAR,
    "national varchar": MysqlTypeKind.NVARCHAR,
    "geomcollection": MysqlTypeKind.GEOMETRYCOLLECTION,
}


class MysqlType(ColumnType):
    """A MySQL ``COLUMN_TYPE`` such as ``decimal(10,2) unsigned zerofill``."""

    kind: MysqlTypeKind

    UNKNOWN_KIND: ClassVar[MysqlTypeKind] = MysqlTypeKind.UNKNOWN
    NAMES: ClassVar[Dict[str, MysqlTypeKind]] = _NAMES
    CATEGORIES: ClassVar[Dict[MysqlTypeKind, TypeCategory]] = _CATEGORIES
    KEYWORDS: ClassVar[Dict[MysqlTypeKind, str]] = {}
    NUMERIC_MODIFIERS: ClassVar[FrozenSet[str]] = frozenset({"unsigned", "signed", "zerofill"})
    SUPPORTS_CHARSET: ClassVar[bool] = True
    ROUND_TRIP_EXCLUSIONS: ClassVar[Tuple[str, ...]] = (
        "numeric.zero_fill=False renders the same as zero_fill=None",
        "aliases (integer, numeric, real, ...) re-parse as their canonical kind",
    )
