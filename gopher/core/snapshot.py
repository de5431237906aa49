"""
Ordered directory listings with the parent entry pinned at index 0.
"""
import logging
import os

from .entry import PARENT_NAME, SELF_NAME, Entry, column_width
from .errors import SnapshotError

LOGGER = logging.getLogger(__name__)


def read_dir_names(path):
    """Return raw entry names the way readdir reports them, dot entries included."""
    return [SELF_NAME, PARENT_NAME] + os.listdir(path)


def place_entries(entries):
    """Move the parent entry to slot 0 and keep everything else in scan order.

    Entries seen before ``..`` shift down one slot, entries after it keep
    appending. Without a ``..`` the scan order is returned as is and slot 0
    holds whatever came first.
    """
    placed = []
    parent = None
    for entry in entries:
        if parent is None and entry.name == PARENT_NAME:
            parent = entry
            continue
        placed.append(entry)
    if parent is not None:
        placed.insert(0, parent)
    return placed


class DirectorySnapshot:
    """Complete ordered list of entries for one directory at one point in time."""

    __slots__ = ('path', 'entries', 'column_width')

    def __init__(self, path, entries, column_width):
        self.path = path
        self.entries = list(entries)
        self.column_width = column_width

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    def __iter__(self):
        return iter(self.entries)

    def __repr__(self):
        return f'DirectorySnapshot({self.path!r}, {len(self.entries)} entries)'

    def names(self):
        return [entry.name for entry in self.entries]

    def index_of(self, name):
        """Return the index of the entry called ``name`` or -1."""
        for index, entry in enumerate(self.entries):
            if entry.name == name:
                return index
        return -1

    def __contains__(self, name):
        return self.index_of(name) >= 0

    @property
    def has_parent(self):
        return bool(self.entries) and self.entries[0].name == PARENT_NAME


def build_snapshot(path, menu_width, list_names=read_dir_names, stat_entry=os.stat):
    """Scan ``path`` and return a fresh DirectorySnapshot.

    Every entry is stat'ed following symlinks; any enumeration or stat
    failure aborts the whole build with SnapshotError.
    """
    width = column_width(menu_width)
    try:
        names = list_names(path)
    except OSError as exc:
        LOGGER.warning("Can't open directory %s: %s", path, exc)
        raise SnapshotError(path, exc) from exc

    entries = []
    for name in names:
        if name == SELF_NAME:
            continue
        try:
            st = stat_entry(os.path.join(path, name))
        except OSError as exc:
            LOGGER.warning('stat failed for %s in %s: %s', name, path, exc)
            raise SnapshotError(os.path.join(path, name), exc) from exc
        entries.append(Entry.from_stat(name, st, width))

    LOGGER.debug('Built snapshot of %s with %d entries', path, len(entries))
    return DirectorySnapshot(path, place_entries(entries), width)
