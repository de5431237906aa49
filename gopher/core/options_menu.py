"""
Options sub-menu: contextual action list for the selected entry.
"""
import curses

from ..constants import (
    EXIT_KEYS, KEY_DELETE, KEY_ENTER, KEY_ESCAPE, KEY_TAR, KEY_UNTAR,
    KEY_UNZIP, KEY_ZIP, NO_ACTION,
)
from .cursor import next_lettered_index, wrap_down, wrap_up

SEPARATOR = '------------'
COMPRESS_LABEL = 'compress as:'
BACK = 'BACK'
OPEN = 'OPEN'

_LEADING_ITEMS = (
    OPEN, 'COPY', 'MOVE', 'DELETE', 'RENAME',
    SEPARATOR,
    'PASTE', 'NEW FILE', 'MAKE DIR', 'TERMINAL',
    SEPARATOR,
)

# Options that re-enter the main key switch as if the key had been pressed.
REDISPATCH = {
    'COPY': ord('C'),
    'MOVE': ord('X'),
    'DELETE': KEY_DELETE,
    'RENAME': ord('R'),
    'PASTE': ord('V'),
    'NEW FILE': ord('N'),
    'MAKE DIR': ord('M'),
    'TERMINAL': ord('T'),
    'ZIP': KEY_ZIP,
    'TAR.GZ': KEY_TAR,
    'UNZIP HERE': KEY_UNZIP,
    'EXTRACT HERE': KEY_UNTAR,
}


def option_items(name):
    """Return the ordered option labels offered for an entry called ``name``."""
    if '.tar.gz' in name:
        archive_group = ('EXTRACT HERE',)
    elif '.zip' in name:
        archive_group = ('UNZIP HERE',)
    else:
        archive_group = (COMPRESS_LABEL, 'ZIP', 'TAR.GZ')
    return _LEADING_ITEMS + archive_group + (SEPARATOR, BACK)


class OptionsMenu:
    """Modal action list; keys go here until it closes.

    ``handle_key`` returns None while the menu stays open. Once it closes
    it returns either ``NO_ACTION`` or the key code the navigator should
    dispatch next.
    """

    def __init__(self, entry, on_open_with=None):
        self.entry = entry
        self.items = option_items(entry.name)
        self.selected = 0
        self.closed = False
        self.on_open_with = on_open_with

    def __len__(self):
        return len(self.items)

    @property
    def current_label(self):
        return self.items[self.selected]

    def _close(self, code):
        self.closed = True
        return code

    def handle_key(self, key):
        if self.closed:
            return NO_ACTION
        if isinstance(key, int) and ord('a') <= key <= ord('z'):
            self.selected = next_lettered_index(self.items, self.selected, chr(key))
            return None
        if key in (curses.KEY_LEFT, KEY_ESCAPE):
            return self._close(NO_ACTION)
        if key in EXIT_KEYS:
            return self._close(key)
        if key == curses.KEY_DOWN:
            self.selected = wrap_down(self.selected, len(self.items))
            return None
        if key == curses.KEY_UP:
            self.selected = wrap_up(self.selected, len(self.items))
            return None
        if key in (KEY_ENTER, 13, curses.KEY_ENTER):
            return self._activate()
        return None

    def _activate(self):
        label = self.current_label
        if label == BACK:
            return self._close(NO_ACTION)
        if label == OPEN:
            if self.entry.is_dir:
                return self._close(curses.KEY_RIGHT)
            self._close(NO_ACTION)
            if self.on_open_with is not None:
                self.on_open_with(self.entry)
            return NO_ACTION
        code = REDISPATCH.get(label)
        if code is None:
            # Separators and the group label do nothing.
            return None
        return self._close(code)
