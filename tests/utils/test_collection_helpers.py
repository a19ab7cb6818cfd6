"""Tests for the generic collection helpers."""

from __future__ import annotations

import pytest

from dtvisual.utils.collections import contains, sorted_keys


class TestContains:
    """Tests for contains()."""

    @pytest.mark.parametrize(
        "sequence,value,expected",
        [
            ([1, 2, 3], 1, True),
            ([1, 2, 3], 2, True),
            ([1, 2, 3], 3, True),
            ([1, 2, 3], 0, False),
            ([], 0, False),
            (["", "Category - Fast"], "", True),
            (["Category - Fast"], "Category - Slow", False),
        ],
    )
    def test_contains(self, sequence: list, value, expected: bool) -> None:
        """contains() reports whether an equal element is present."""
        assert contains(sequence, value) is expected

    def test_contains_accepts_iterables(self):
        """Any iterable can be scanned."""
        assert contains((n * 2 for n in range(5)), 6) is True


class TestSortedKeys:
    """Tests for sorted_keys()."""

    def test_sorted_keys(self):
        """Keys come back in ascending order."""
        mapping = {5: True, 4: False, 3: True, 2: False, 1: True}

        assert sorted_keys(mapping) == [1, 2, 3, 4, 5]

    def test_sorted_keys_strings(self):
        """String keys sort lexicographically."""
        assert sorted_keys({"b": 1, "a": 2, "c": 3}) == ["a", "b", "c"]

    def test_sorted_keys_empty(self):
        """An empty mapping has no keys."""
        assert sorted_keys({}) == []
