"""Streaming group-by over a pre-sorted sequence.

Catalog views enumerate composite objects (multi-column indexes, composite keys) one
row per participating column. ``group_sorted`` folds consecutive fragments that share
a grouping key into a single aggregate, lazily, in one pass.

The input must already be sorted by ``(key, sequence)``; the engine never sorts. A
key that reappears after a different key was seen, or a sequence number that does
not increase inside a group, raises ``StructuralViolationError`` instead of yielding
a wrong grouping.
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterable, Iterator, Optional, Set, TypeVar

from schema_discovery.common.errors import StructuralViolationError

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group_sorted(
    fragments: Iterable[T],
    key: Callable[[T], K],
    merge: Callable[[T, T], T],
    sequence: Optional[Callable[[T], Optional[int]]] = None,
) -> Iterator[T]:
    """Yield one aggregate per run of fragments sharing ``key``.

    Args:
        fragments: Partial entities, sorted by (key, sequence).
        key: Extracts the grouping key of a fragment.
        merge: Folds the next fragment into the current aggregate and returns the aggregate.
        sequence: Optional extractor of the in-group ordinal, checked to be increasing.

    Yields:
        Finalized aggregates, in input order. A group still open when the consumer stops
        iterating is discarded, never partially yielded.
    """
    finished: Set[K] = set()
    current: Optional[T] = None
    current_key: Optional[K] = None
    last_seq: Optional[int] = None

    for fragment in fragments:
        fragment_key = key(fragment)
        seq = sequence(fragment) if sequence is not None else None

        if current is not None and fragment_key == current_key:
            if seq is not None and last_seq is not None and seq <= last_seq:
                raise StructuralViolationError(
                    f"Sequence {seq} follows {last_seq} within one group; input is not sorted",
                    {"group": current_key},
                )
            current = merge(current, fragment)
            last_seq = seq if seq is not None else last_seq
            continue

        if fragment_key in finished:
            raise StructuralViolationError(
                "Grouping key reappeared after a different key; input is not sorted",
                {"group": fragment_key},
            )

        if current is not None:
            finished.add(current_key)
            previous = current
            current, current_key, last_seq = fragment, fragment_key, seq
            yield previous
        else:
            current, current_key, last_seq = fragment, fragment_key, seq

    if current is not None:
        yield current


class SortedGroups(Generic[T]):
    """Re-iterable view of ``group_sorted``.

    Each ``iter()`` restarts from the beginning of ``source``; it is restartable only
    when the source itself is (a list, a tuple, a re-iterable view). There is no
    mid-stream resume.
    """

    def __init__(
        self,
        source: Iterable[T],
        key: Callable[[T], K],
        merge: Callable[[T, T], T],
        sequence: Optional[Callable[[T], Optional[int]]] = None,
    ):
        self._source = source
        self._key = key
        self._merge = merge
        self._sequence = sequence

    def __iter__(self) -> Iterator[T]:
        return group_sorted(self._source, self._key, self._merge, self._sequence)
