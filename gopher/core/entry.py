"""
Core data structures for directory entries.
"""
import stat
import time
from dataclasses import dataclass
from enum import Enum

from ..constants import DESCRIPTION_RESERVE, SHORT_WIDTH_MIN, SIZE_COLUMN

PARENT_NAME = '..'
SELF_NAME = '.'
ELLIPSIS = '...'


class EntryKind(str, Enum):
    """Coarse file type derived from the stat mode."""

    FILE = 'FILE'
    DIR = 'DIR'
    OTHER = 'OTHER'

    @classmethod
    def from_mode(cls, mode):
        if stat.S_ISREG(mode):
            return cls.FILE
        if stat.S_ISDIR(mode):
            return cls.DIR
        return cls.OTHER

    @property
    def label(self):
        """Four-column label used in the description line."""
        return _KIND_LABELS[self]


_KIND_LABELS = {
    EntryKind.FILE: 'FILE',
    EntryKind.DIR: ' DIR',
    EntryKind.OTHER: '    ',
}


def column_width(menu_width):
    """Return the display-name column width for a list window width."""
    return max(menu_width - DESCRIPTION_RESERVE, SHORT_WIDTH_MIN)


def elide_name(name, width):
    """Shorten ``name`` to at most ``width`` characters.

    Names longer than ``width - 1`` keep their head and end in ``...``;
    when the name looks like it has a three-letter extension the extension
    survives after the ellipsis.
    """
    if len(name) <= width - 1:
        return name
    if len(name) >= 4 and name[-4] == '.':
        return name[:width - 6] + ELLIPSIS + name[-3:]
    return name[:width - 3] + ELLIPSIS


def format_size(size_bytes):
    return f'{size_bytes / 1024:.1f}kb'


def format_mtime(timestamp):
    return time.ctime(timestamp).rstrip('\n')


def describe(kind, size_label, modified_label):
    return f'   {kind.label}{size_label:>{SIZE_COLUMN}}   {modified_label}'


@dataclass(frozen=True)
class Entry:
    """One filesystem object within a listed directory."""

    name: str
    display_name: str
    kind: EntryKind
    mode: int
    size_bytes: int
    size_label: str
    modified_at: int
    modified_label: str
    description_line: str

    @classmethod
    def from_stat(cls, name, st, width):
        """Build an entry from an ``os.stat_result``."""
        kind = EntryKind.from_mode(st.st_mode)
        size_bytes = max(0, int(st.st_size))
        modified_at = int(st.st_mtime)
        size_label = format_size(size_bytes)
        modified_label = format_mtime(modified_at)
        return cls(
            name=name,
            display_name=elide_name(name, width),
            kind=kind,
            mode=st.st_mode,
            size_bytes=size_bytes,
            size_label=size_label,
            modified_at=modified_at,
            modified_label=modified_label,
            description_line=describe(kind, size_label, modified_label),
        )

    @property
    def is_dir(self):
        return self.kind is EntryKind.DIR

    @property
    def is_parent(self):
        return self.name == PARENT_NAME
