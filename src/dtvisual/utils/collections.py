"""Generic helpers for sequences and mappings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

T = TypeVar("T")


def contains(sequence: Iterable[T], value: T) -> bool:
    """Check whether sequence holds an element equal to value.

    A plain linear scan; callers that need insertion-ordered uniqueness
    check with this before appending.
    """
    return any(item == value for item in sequence)


def sorted_keys(mapping: Mapping[Any, Any]) -> list[Any]:
    """Return the keys of mapping in ascending order."""
    return sorted(mapping)
