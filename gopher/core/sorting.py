"""Comparator selection and pinned re-ordering of snapshots."""

from dataclasses import dataclass
from functools import cmp_to_key

from .actions import SortKey


def _sign(left, right):
    return (left > right) - (left < right)


def compare_names(a, b):
    """Case-insensitive name order; a strict prefix sorts first."""
    return _sign(a.name.lower(), b.name.lower())


def compare_sizes(a, b):
    return _sign(a.size_bytes, b.size_bytes)


def compare_dates(a, b):
    return _sign(a.modified_at, b.modified_at)


_ASCENDING = {
    SortKey.NAME: compare_names,
    SortKey.SIZE: compare_sizes,
    SortKey.DATE: compare_dates,
}


@dataclass(frozen=True)
class Comparator:
    """Active sort key plus direction."""

    key: SortKey = SortKey.NAME
    descending: bool = False

    def compare(self, a, b):
        result = _ASCENDING[self.key](a, b)
        return -result if self.descending else result

    def select(self, key):
        """Return the comparator after the user picks ``key``.

        Picking the active key flips the direction, any other key starts
        ascending.
        """
        key = SortKey(key)
        if key is self.key:
            return Comparator(key, not self.descending)
        return Comparator(key, False)

    @property
    def label(self):
        return f"{self.key.value} {'desc' if self.descending else 'asc'}"


def sort_snapshot(snapshot, comparator):
    """Stable in-place sort of everything after index 0."""
    entries = snapshot.entries
    if len(entries) < 3:
        return snapshot
    entries[1:] = sorted(entries[1:], key=cmp_to_key(comparator.compare))
    return snapshot
