"""Tests for the sorted-stream group-by."""

import pytest

from schema_discovery.common.errors import StructuralViolationError
from schema_discovery.common.utils import SortedGroups, group_sorted


def _key(fragment):
    return fragment[0]


def _seq(fragment):
    return fragment[1]


def _merge(current, part):
    return (current[0], part[1], current[2] + part[2])


def test_groups_consecutive_fragments_in_order():
    fragments = [("a", 1, ["x"]), ("a", 2, ["y"]), ("b", 1, ["z"])]
    assert list(group_sorted(fragments, _key, _merge, _seq)) == [
        ("a", 2, ["x", "y"]),
        ("b", 1, ["z"]),
    ]


def test_empty_input_yields_nothing():
    assert list(group_sorted([], _key, _merge)) == []


def test_group_count_matches_distinct_keys():
    fragments = [(k, i, [i]) for k in "abcd" for i in range(1, 4)]
    grouped = list(group_sorted(fragments, _key, _merge, _seq))
    assert [g[0] for g in grouped] == ["a", "b", "c", "d"]
    assert all(g[2] == [1, 2, 3] for g in grouped)


def test_reappearing_key_is_a_structural_violation():
    fragments = [("a", 1, []), ("b", 1, []), ("a", 2, [])]
    with pytest.raises(StructuralViolationError) as excinfo:
        list(group_sorted(fragments, _key, _merge, _seq))
    assert excinfo.value.context == {"group": "a"}


def test_non_increasing_sequence_is_a_structural_violation():
    fragments = [("a", 2, []), ("a", 1, [])]
    with pytest.raises(StructuralViolationError, match="not sorted"):
        list(group_sorted(fragments, _key, _merge, _seq))


def test_early_stop_discards_open_group():
    merged = []

    def tracking_merge(current, part):
        merged.append(part)
        return _merge(current, part)

    fragments = [("a", 1, [1]), ("b", 1, [2]), ("b", 2, [3])]
    results = []
    for group in group_sorted(fragments, _key, tracking_merge, _seq):
        results.append(group)
        break
    assert results == [("a", 1, [1])]
    # the second "b" fragment was never consumed
    assert merged == []


def test_lazy_consumption():
    def source():
        yield ("a", 1, [1])
        yield ("b", 1, [2])
        raise AssertionError("consumed past the first finished group")

    first = next(group_sorted(source(), _key, _merge, _seq))
    assert first == ("a", 1, [1])


def test_sorted_groups_restarts_from_scratch():
    fragments = [("a", 1, [1]), ("a", 2, [2])]
    groups = SortedGroups(fragments, _key, lambda c, p: (c[0], p[1], c[2] + p[2]), _seq)
    assert list(groups) == list(groups) == [("a", 2, [1, 2])]
