"""Validate raw catalog rows and map them to partial entities, one row at a time."""

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from pydantic import BaseModel, ValidationError, model_validator

from schema_discovery.common.errors import DiscoveryError, MalformedSentinelError
from schema_discovery.common.utils import group_sorted

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)
T = TypeVar("T")


class CatalogRow(BaseModel):
    """Base for catalog row models.

    Column labels are matched case-insensitively (MySQL reports ``TABLE_NAME``,
    PostgreSQL ``table_name``) and unrequested columns are ignored.
    """

    model_config = {"extra": "ignore", "frozen": False}

    @model_validator(mode="before")
    @classmethod
    def _lower_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {str(k).lower(): v for k, v in data.items()}
        return data


@dataclass
class Fragment(Generic[T]):
    """A partial entity tagged with its grouping key and in-group ordinal.

    A ``failed`` fragment stands in for a row that could not be decoded; it carries no
    entity and makes ``consolidate`` discard the whole group it belongs to.
    """

    key: Hashable
    seq: Optional[int]
    entity: Optional[T]
    failed: bool = False


def validate_row(row: Any, row_model: Type[R]) -> R:
    """Decode a raw row (mapping of column name to value) into its row model.

    Raises:
        MalformedSentinelError: Naming the first field that failed validation.
    """
    if isinstance(row, row_model):
        return row
    try:
        return row_model.model_validate(row)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or row_model.__name__
        raise MalformedSentinelError(
            field, first.get("input"), context={"row_model": row_model.__name__}
        ) from exc


def map_rows(
    rows: Iterable[Any],
    row_model: Type[R],
    mapper: Callable[[R], T],
    errors: Optional[List[DiscoveryError]] = None,
) -> Iterator[T]:
    """Lazily validate and map each row.

    When ``errors`` is a list, a row that fails is recorded there and skipped; the rows
    after it are still processed. When ``errors`` is None the first failure propagates.
    """
    for position, row in enumerate(rows):
        try:
            yield mapper(validate_row(row, row_model))
        except DiscoveryError as exc:
            exc.with_context(row=position)
            if errors is None:
                raise
            logger.warning("Skipping catalog row: %s", exc)
            errors.append(exc)


def _raw_key(row: Any, row_model: Type[R], key_fields: Sequence[str]) -> Optional[tuple]:
    """Read the grouping key straight from a raw row that failed validation.

    Returns None when a required key field is missing, since the row cannot be placed
    in a group.
    """
    if isinstance(row, BaseModel):
        data = row.model_dump()
    elif isinstance(row, Mapping):
        data = {str(k).lower(): v for k, v in row.items()}
    else:
        return None
    parts = []
    for name in key_fields:
        field = row_model.model_fields[name]
        value = data.get(name, None if field.is_required() else field.default)
        if value is None and field.is_required():
            return None
        parts.append(value)
    return tuple(parts)


def map_fragments(
    rows: Iterable[Any],
    row_model: Type[R],
    key_fields: Sequence[str],
    seq_field: Optional[str],
    mapper: Callable[[R], T],
    errors: Optional[List[DiscoveryError]] = None,
) -> Iterator[Fragment[T]]:
    """Lazily map each row to a ``Fragment`` keyed by ``key_fields``.

    Like ``map_rows``, but a row that fails in collecting mode still yields a failed
    fragment under its group key, so ``consolidate`` drops the entity it was part of
    rather than producing it with a key part missing. A failed row whose key cannot be
    read poisons the group of the row before it.
    """
    last_key: Optional[tuple] = None
    for position, row in enumerate(rows):
        try:
            decoded = validate_row(row, row_model)
            key = tuple(getattr(decoded, name) for name in key_fields)
            seq = getattr(decoded, seq_field) if seq_field else None
            fragment = Fragment(key, seq, mapper(decoded))
        except DiscoveryError as exc:
            exc.with_context(row=position)
            if errors is None:
                raise
            errors.append(exc)
            key = _raw_key(row, row_model, key_fields) or last_key
            if key is None:
                logger.warning("Skipping catalog row: %s", exc)
                continue
            logger.warning("Discarding group %s: %s", key, exc)
            fragment = Fragment(key, None, None, failed=True)
        last_key = key
        yield fragment


def consolidate(fragments: Iterable[Fragment[T]], merge: Callable[[T, T], T]) -> Iterator[T]:
    """Group keyed fragments with ``group_sorted`` and unwrap the aggregates.

    A group holding any failed fragment is discarded as a whole.
    """

    def _merge(current: Fragment[T], part: Fragment[T]) -> Fragment[T]:
        if current.failed or part.failed:
            return Fragment(current.key, part.seq, None, failed=True)
        return Fragment(current.key, part.seq, merge(current.entity, part.entity))

    for grouped in group_sorted(
        fragments, key=lambda f: f.key, merge=_merge, sequence=lambda f: f.seq
    ):
        if not grouped.failed:
            yield grouped.entity
