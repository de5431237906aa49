"""
Curses rendering and modal prompts for Gopher.
"""
import contextlib
import curses
import logging
import os
import sys
import termios
import tty

from ..constants import (
    KEY_ESCAPE, MENU_MARK, OPTIONS_COLUMN, OPTIONS_HEIGHT, OPTIONS_WIDTH,
    TITLE, X_OFFSET, Y_OFFSET,
)
from ..utils import (
    check_unicode_support, clip_message, draw_box, normalize_key_code,
    safe_addstr, theme_attr,
)
from .line_edit import ACCEPT, CANCEL, LineEditor

LOGGER = logging.getLogger(__name__)

STATUS_HEIGHT = 3
STATUS_INDENT = 2


class Screen:
    """Draws a NavigationState and answers the navigator's modal questions."""

    def __init__(self, stdscr, on_resize=None):
        self.stdscr = stdscr
        self.on_resize = on_resize
        self.scroll = 0
        self.ascii_only = not check_unicode_support()
        self._state = None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def size(self):
        """Return (lines, cols) of the terminal."""
        return self.stdscr.getmaxyx()

    def _status_origin(self, state):
        return Y_OFFSET + state.menu_height, X_OFFSET + STATUS_INDENT

    def _status_width(self, state):
        return max(STATUS_INDENT + 1, state.menu_width - 4)

    def _follow_selection(self, state):
        rows = state.page_rows
        if state.selected < self.scroll:
            self.scroll = state.selected
        elif state.selected >= self.scroll + rows:
            self.scroll = state.selected - rows + 1
        self.scroll = max(0, min(self.scroll, max(0, state.count - rows)))

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, state):
        """Render a full frame for ``state``."""
        self._state = state
        self.stdscr.erase()
        self._draw_list(state)
        self._draw_status(state)
        if state.options is not None:
            self._draw_options(state.options)
        self.stdscr.noutrefresh()
        curses.doupdate()

    def _draw_list(self, state):
        y, x = Y_OFFSET, X_OFFSET
        width = state.menu_width
        frame = theme_attr('frame')
        draw_box(self.stdscr, y, x, state.menu_height, width, frame, ascii_only=self.ascii_only)

        title = f' {TITLE} '
        safe_addstr(self.stdscr, y, x + max(1, (width - len(title)) // 2), title, theme_attr('title') | curses.A_BOLD)
        safe_addstr(self.stdscr, y + 1, x + 2, clip_message(state.path, width - 4), theme_attr('title'))

        snapshot = state.snapshot
        if snapshot is None:
            return
        self._follow_selection(state)
        inner = width - 2
        mark_width = len(MENU_MARK)
        for row in range(state.page_rows):
            index = self.scroll + row
            if index >= len(snapshot):
                break
            entry = snapshot[index]
            selected = index == state.selected
            if selected:
                attr = theme_attr('selected') | curses.A_BOLD
            elif entry.is_dir:
                attr = theme_attr('directory')
            else:
                attr = theme_attr('list')
            mark = MENU_MARK if selected else ' ' * mark_width
            line = f'{entry.display_name.ljust(snapshot.column_width)} {entry.description_line}'
            safe_addstr(self.stdscr, y + 2 + row, x + 1, mark, theme_attr('list'))
            safe_addstr(self.stdscr, y + 2 + row, x + 1 + mark_width, line[:max(0, inner - mark_width)], attr)

        footer = f' {state.count - 1 if snapshot.has_parent else state.count} items | sort: {state.comparator.label} '
        if not state.clipboard.is_empty():
            footer += f'| {state.clipboard.mode.value}: {state.clipboard.base_name} '
        safe_addstr(self.stdscr, y + state.menu_height - 1, x + 2, clip_message(footer, width - 4), frame)

    def _draw_status(self, state, message=None, warning=None):
        y, x = self._status_origin(state)
        width = self._status_width(state)
        draw_box(self.stdscr, y, x, STATUS_HEIGHT, width, theme_attr('frame'), ascii_only=self.ascii_only)
        text = state.status if message is None else message
        is_warning = state.status_warning if warning is None else warning
        attr = theme_attr('warning') | curses.A_BOLD if is_warning else theme_attr('status')
        safe_addstr(self.stdscr, y + 1, x + 1, ' ' * (width - 2))
        safe_addstr(self.stdscr, y + 1, x + 1, clip_message(text, width - 2), attr)

    def _draw_options(self, menu):
        y, x = Y_OFFSET + 2, X_OFFSET + OPTIONS_COLUMN
        draw_box(self.stdscr, y, x, OPTIONS_HEIGHT, OPTIONS_WIDTH, theme_attr('options_frame'), ascii_only=self.ascii_only)
        rows = OPTIONS_HEIGHT - 2
        top = max(0, menu.selected - rows + 1)
        for row, label in enumerate(menu.items[top:top + rows]):
            index = top + row
            if index == menu.selected:
                attr = theme_attr('options_selected') | curses.A_REVERSE
            else:
                attr = theme_attr('options_frame')
            safe_addstr(self.stdscr, y + 1 + row, x + 1, label.ljust(OPTIONS_WIDTH - 2)[:OPTIONS_WIDTH - 2], attr)

    def show_status(self, message, warning=False):
        """Paint ``message`` into the status box right away."""
        if self._state is None:
            return
        self._draw_status(self._state, message, warning)
        self.stdscr.refresh()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def read_key(self):
        """Read one key from curses, returning None on timeout/no input."""
        try:
            return self.stdscr.get_wch()
        except curses.error:
            return None

    def _read_modal_key(self):
        key = self.read_key()
        if key == curses.KEY_RESIZE:
            lines, cols = self.size()
            LOGGER.debug('resize during prompt: %sx%s', cols, lines)
            if self.on_resize is not None:
                self.on_resize(lines, cols)
            return None
        return key

    def prompt(self, message):
        """Edit one line in the status box; None when cancelled."""
        editor = LineEditor()
        try:
            curses.curs_set(1)
        except curses.error:
            pass
        try:
            while True:
                self._draw_prompt(message, editor)
                key = self._read_modal_key()
                if key is None:
                    continue
                outcome = editor.handle_key(key)
                if outcome == ACCEPT:
                    return editor.value
                if outcome == CANCEL:
                    return None
        finally:
            try:
                curses.curs_set(0)
            except curses.error:
                pass

    def _draw_prompt(self, message, editor):
        state = self._state
        if state is None:
            return
        y, x = self._status_origin(state)
        width = self._status_width(state)
        self._draw_status(state, '')
        field_x = x + 1 + len(message)
        text, cursor = editor.visible(max(1, width - 2 - len(message)))
        safe_addstr(self.stdscr, y + 1, x + 1, message, theme_attr('prompt') | curses.A_BOLD)
        safe_addstr(self.stdscr, y + 1, field_x, text, theme_attr('prompt'))
        try:
            self.stdscr.move(y + 1, field_x + cursor)
        except curses.error:
            pass
        self.stdscr.refresh()

    def choose(self, message, choices):
        """Wait for one of ``choices``; Escape gives None."""
        while True:
            self.show_status(message, warning=True)
            key = self._read_modal_key()
            code = normalize_key_code(key)
            if code is None:
                continue
            if code == KEY_ESCAPE:
                return None
            if 0 <= code < 0x110000 and chr(code) in choices:
                return chr(code)

    def confirm(self, message):
        """Yes/no question; only 'y' and 'n' answer it."""
        return self.choose(message, 'yn') == 'y'

    # ------------------------------------------------------------------
    # External programs
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def suspended(self):
        """Leave curses mode while a child owns the terminal."""
        curses.def_prog_mode()
        curses.endwin()
        try:
            yield
        finally:
            try:
                curses.reset_prog_mode()
                self.stdscr.refresh()
            except curses.error:
                pass

    def banner(self, lines):
        """Print plain lines on the suspended terminal."""
        for line in lines:
            print(line)
        sys.stdout.flush()

    def wait_for_key(self):
        """Block until one byte arrives on stdin."""
        stdin_fd = sys.stdin.fileno()
        try:
            saved = termios.tcgetattr(stdin_fd)
        except termios.error:
            LOGGER.debug('stdin is not a terminal; not waiting for a key')
            return
        try:
            tty.setcbreak(stdin_fd, termios.TCSAFLUSH)
            os.read(stdin_fd, 1)
        finally:
            termios.tcsetattr(stdin_fd, termios.TCSAFLUSH, saved)
