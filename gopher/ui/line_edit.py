"""Single-line text editor used by the status-box prompts."""
import curses

from ..constants import KEY_ENTER, KEY_ESCAPE
from ..utils import normalize_key_code

ACCEPT = 'accept'
CANCEL = 'cancel'


class LineEditor:
    """Editable buffer with a cursor.

    ``handle_key`` returns ``ACCEPT`` or ``CANCEL`` when editing ends and
    None while it goes on.
    """

    def __init__(self, initial_value=''):
        self.value = initial_value
        self.cursor_pos = len(initial_value)

    def _insert(self, text):
        self.value = self.value[:self.cursor_pos] + text + self.value[self.cursor_pos:]
        self.cursor_pos += 1

    def visible(self, width):
        """Return (text, cursor column) for a field ``width`` cells wide."""
        if width <= 1:
            return '', 0
        start = max(0, self.cursor_pos - (width - 1))
        return self.value[start:start + width], self.cursor_pos - start

    def handle_key(self, key):
        key_code = normalize_key_code(key)

        if key_code in (curses.KEY_ENTER, KEY_ENTER, 13):
            return ACCEPT
        if key_code == KEY_ESCAPE:
            return CANCEL

        if key_code in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor_pos > 0:
                self.value = self.value[:self.cursor_pos - 1] + self.value[self.cursor_pos:]
                self.cursor_pos -= 1
        elif key_code == curses.KEY_DC:
            if self.cursor_pos < len(self.value):
                self.value = self.value[:self.cursor_pos] + self.value[self.cursor_pos + 1:]
        elif key_code == curses.KEY_LEFT:
            if self.cursor_pos > 0:
                self.cursor_pos -= 1
        elif key_code == curses.KEY_RIGHT:
            if self.cursor_pos < len(self.value):
                self.cursor_pos += 1
        elif key_code == curses.KEY_HOME:
            self.cursor_pos = 0
        elif key_code == curses.KEY_END:
            self.cursor_pos = len(self.value)
        elif isinstance(key, str) and key.isprintable():
            self._insert(key)
        elif isinstance(key, int) and 32 <= key <= 126:
            self._insert(chr(key))

        return None
