"""SQLite declared-type kinds.

SQLite stores whatever type text the ``CREATE TABLE`` used; only the spellings below
are decoded, everything else stays unknown and is written back verbatim.
"""

from enum import Enum
from typing import ClassVar, Dict, Tuple

from schema_discovery.schema import ColumnType, TypeCategory


class SqliteTypeKind(str, Enum):
    INTEGER = "integer"
    INT = "int"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    MEDIUMINT = "mediumint"
    BIGINT = "bigint"
    UNSIGNED_BIG_INT = "unsigned big int"
    INT2 = "int2"
    INT8 = "int8"
    CHARACTER = "character"
    VARCHAR = "varchar"
    VARYING_CHARACTER = "varying character"
    NCHAR = "nchar"
    NATIVE_CHARACTER = "native character"
    NVARCHAR = "nvarchar"
    TEXT = "text"
    CLOB = "clob"
    BLOB = "blob"
    REAL = "real"
    DOUBLE = "double"
    DOUBLE_PRECISION = "double precision"
    FLOAT = "float"
    NUMERIC = "numeric"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    UNKNOWN = "unknown"


_NUMERIC = (
    SqliteTypeKind.INTEGER,
    SqliteTypeKind.INT,
    SqliteTypeKind.TINYINT,
    SqliteTypeKind.SMALLINT,
    SqliteTypeKind.MEDIUMINT,
    SqliteTypeKind.BIGINT,
    SqliteTypeKind.UNSIGNED_BIG_INT,
    SqliteTypeKind.INT2,
    SqliteTypeKind.INT8,
    SqliteTypeKind.REAL,
    SqliteTypeKind.DOUBLE,
    SqliteTypeKind.DOUBLE_PRECISION,
    SqliteTypeKind.FLOAT,
    SqliteTypeKind.NUMERIC,
    SqliteTypeKind.DECIMAL,
)
_STRING = (
    SqliteTypeKind.CHARACTER,
    SqliteTypeKind.VARCHAR,
    SqliteTypeKind.VARYING_CHARACTER,
    SqliteTypeKind.NCHAR,
    SqliteTypeKind.NATIVE_CHARACTER,
    SqliteTypeKind.NVARCHAR,
)


class SqliteType(ColumnType):
    kind: SqliteTypeKind

    UNKNOWN_KIND: ClassVar[SqliteTypeKind] = SqliteTypeKind.UNKNOWN
    NAMES: ClassVar[Dict[str, SqliteTypeKind]] = {
        kind.value: kind for kind in SqliteTypeKind if kind != SqliteTypeKind.UNKNOWN
    }
    CATEGORIES: ClassVar[Dict[SqliteTypeKind, TypeCategory]] = {
        **{kind: TypeCategory.NUMERIC for kind in _NUMERIC},
        **{kind: TypeCategory.STRING for kind in _STRING},
    }
    ROUND_TRIP_EXCLUSIONS: ClassVar[Tuple[str, ...]] = (
        "the declared spelling's case is not kept (integer re-renders as INTEGER)",
    )
