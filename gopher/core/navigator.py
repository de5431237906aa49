"""
Navigation state machine: turns key events into snapshot, sort, clipboard
and file-operation changes.
"""
import contextlib
import curses
import logging
import os

from ..constants import (
    EXIT_KEYS, KEY_DELETE, KEY_ENTER, KEY_TAR, KEY_UNTAR, KEY_UNZIP, KEY_ZIP,
    MENU_HEIGHT_MAX, MENU_WIDTH_MAX, NO_ACTION, SCREEN_MARGIN,
)
from ..utils import normalize_key_code
from . import file_operations
from .actions import ActionResult, ActionType, SortKey
from .clipboard import ClipMode, mirror_to_system
from .config import AppConfig
from .cursor import next_lettered_index, page_down, page_up, wrap_down, wrap_up
from .errors import NameCollision, NameTooLong, SnapshotError, UnbalancedQuotes
from .options_menu import OptionsMenu
from .process import run_command
from .snapshot import build_snapshot
from .sorting import Comparator, sort_snapshot
from .state import Mode, NavigationState
from .tokenizer import tokenize

LOGGER = logging.getLogger(__name__)

NOTHING = ActionResult(ActionType.NONE)

CONFLICT_PROMPT = 'Filename already exists. (r)ename, (o)verwrite, or (a)bort...'
DELETE_PROMPT = 'Are you SURE you wish to delete this file? (y/n)'


class Navigator:
    """Single-writer controller for one browsing session.

    ``ui`` is the rendering collaborator. It must provide ``prompt``,
    ``confirm``, ``choose``, ``show_status``, ``banner``, ``wait_for_key``
    and a ``suspended()`` context manager.
    """

    def __init__(self, ui, path, config=None, runner=run_command,
                 snapshot_builder=build_snapshot, clipboard_mirror=mirror_to_system):
        self.ui = ui
        self.config = config or AppConfig()
        self.runner = runner
        self.snapshot_builder = snapshot_builder
        self.clipboard_mirror = clipboard_mirror
        self.state = NavigationState(
            path=os.path.realpath(path),
            comparator=Comparator(self.config.default_sort, self.config.default_descending),
            menu_width=self.config.max_menu_width,
            menu_height=self.config.max_menu_height,
        )
        self._pending_geometry = None
        self._commands = {
            curses.KEY_DOWN: self.move_down,
            curses.KEY_UP: self.move_up,
            curses.KEY_NPAGE: self.page_down,
            curses.KEY_PPAGE: self.page_up,
            curses.KEY_HOME: self.move_first,
            curses.KEY_END: self.move_last,
            KEY_ENTER: self.activate,
            13: self.activate,
            curses.KEY_ENTER: self.activate,
            curses.KEY_RIGHT: self.descend,
            curses.KEY_LEFT: self.ascend,
            ord('A'): lambda: self.select_sort(SortKey.NAME),
            ord('S'): lambda: self.select_sort(SortKey.SIZE),
            ord('D'): lambda: self.select_sort(SortKey.DATE),
            ord('C'): lambda: self.hold_selected(ClipMode.COPY),
            ord('X'): lambda: self.hold_selected(ClipMode.MOVE),
            ord('V'): self.paste,
            KEY_DELETE: self.delete_selected,
            ord('R'): self.rename_selected,
            ord('M'): self.make_directory,
            ord('N'): self.new_file,
            ord('T'): self.open_terminal,
            ord('E'): self.execute_command,
            ord('O'): self.open_options,
            KEY_ZIP: lambda: self._archive(file_operations.zip_entry),
            KEY_TAR: lambda: self._archive(file_operations.tar_entry),
            KEY_UNZIP: lambda: self._archive(file_operations.unzip_entry),
            KEY_UNTAR: lambda: self._archive(file_operations.untar_entry),
        }

    # ------------------------------------------------------------------
    # Geometry and snapshot upkeep
    # ------------------------------------------------------------------

    def set_geometry(self, lines, cols):
        """Derive list window size from the terminal; True when the width changed."""
        state = self.state
        width = min(cols - SCREEN_MARGIN, self.config.max_menu_width or MENU_WIDTH_MAX)
        height = min(lines - SCREEN_MARGIN, self.config.max_menu_height or MENU_HEIGHT_MAX)
        changed = width != state.menu_width
        state.menu_width = max(1, width)
        state.menu_height = max(1, height)
        return changed

    def refresh(self, select=None):
        """Rebuild and re-sort the snapshot of the current directory.

        The selection follows ``select`` (or the previously selected name)
        when present, otherwise the old index is clamped. On failure the
        stale snapshot stays in place and False is returned.
        """
        state = self.state
        previous = state.selected_entry()
        old_index = state.selected
        try:
            snapshot = self.snapshot_builder(state.path, state.menu_width)
        except SnapshotError as exc:
            LOGGER.warning('refresh of %s skipped: %s', state.path, exc)
            state.post(f"Can't open directory: {exc}", warning=True)
            return False

        sort_snapshot(snapshot, state.comparator)
        state.snapshot = snapshot
        name = select or (previous.name if previous is not None else None)
        index = snapshot.index_of(name) if name else -1
        state.selected = index if index >= 0 else min(old_index, max(0, len(snapshot) - 1))
        return True

    def change_directory(self, name):
        state = self.state
        target = os.path.realpath(os.path.join(state.path, name))
        try:
            snapshot = self.snapshot_builder(target, state.menu_width)
        except SnapshotError as exc:
            LOGGER.warning("Can't open directory %s: %s", target, exc)
            return ActionResult(ActionType.ERROR, f"Can't open directory: {exc}")

        came_from = os.path.basename(state.path)
        sort_snapshot(snapshot, state.comparator)
        state.path = target
        state.snapshot = snapshot
        state.selected = 0
        if name == '..':
            index = snapshot.index_of(came_from)
            if index > 0:
                state.selected = index
        state.directory_changed = True
        state.post('')
        LOGGER.debug('changed directory to %s', target)
        return ActionResult(ActionType.CHDIR, target)

    def request_resize(self, lines, cols):
        """Record a terminal resize; acted upon later by ``service_resize``."""
        self._pending_geometry = (lines, cols)
        self.state.resize_pending = True

    def service_resize(self):
        """Apply a pending resize unless an uninterruptible section is running."""
        state = self.state
        if not state.resize_pending:
            return False
        if not state.interruptible:
            LOGGER.debug('resize deferred: session not interruptible')
            return False
        state.resize_pending = False
        if self._pending_geometry is not None:
            self.set_geometry(*self._pending_geometry)
            self._pending_geometry = None
        self.refresh()
        return True

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def handle_key(self, key):
        key = normalize_key_code(key)
        if key is None:
            return NOTHING
        state = self.state

        if state.mode is Mode.OPTIONS_MENU and state.options is not None:
            outcome = state.options.handle_key(key)
            if state.options.closed:
                state.options = None
                state.mode = Mode.BROWSING
            if outcome is None or outcome == NO_ACTION:
                return NOTHING
            return self.handle_key(outcome)

        if key in EXIT_KEYS:
            state.mode = Mode.EXITING
            return ActionResult(ActionType.EXIT)

        if ord('a') <= key <= ord('z'):
            return self.jump_to_letter(chr(key))

        command = self._commands.get(key)
        if command is None:
            return NOTHING
        result = command()
        if result.type is ActionType.ERROR:
            state.post(result.payload, warning=True)
        return result

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    def _announce_selection(self):
        entry = self.state.selected_entry()
        if entry is not None:
            self.state.post(entry.name)
        return NOTHING

    def move_down(self):
        state = self.state
        state.selected = wrap_down(state.selected, state.count)
        return self._announce_selection()

    def move_up(self):
        state = self.state
        state.selected = wrap_up(state.selected, state.count)
        return self._announce_selection()

    def page_down(self):
        state = self.state
        state.selected = page_down(state.selected, state.count, state.page_rows)
        return NOTHING

    def page_up(self):
        state = self.state
        state.selected = page_up(state.selected, state.count, state.page_rows)
        return NOTHING

    def move_first(self):
        self.state.selected = 0
        return NOTHING

    def move_last(self):
        self.state.selected = max(0, self.state.count - 1)
        return NOTHING

    def jump_to_letter(self, letter):
        state = self.state
        if state.snapshot is None:
            return NOTHING
        labels = [entry.display_name for entry in state.snapshot]
        state.selected = next_lettered_index(labels, state.selected, letter)
        return NOTHING

    # ------------------------------------------------------------------
    # Directory traversal
    # ------------------------------------------------------------------

    def activate(self):
        state = self.state
        entry = state.selected_entry()
        if entry is None:
            return NOTHING
        if entry.is_dir:
            return self.change_directory(entry.name)
        if state.selected == 0:
            return NOTHING
        return self.open_options()

    def descend(self):
        entry = self.state.selected_entry()
        if entry is None or not entry.is_dir:
            return NOTHING
        return self.change_directory(entry.name)

    def ascend(self):
        state = self.state
        if not state.count:
            return NOTHING
        entry = state.snapshot[0]
        if not entry.is_dir:
            return NOTHING
        return self.change_directory(entry.name)

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def select_sort(self, key):
        state = self.state
        state.comparator = state.comparator.select(key)
        if state.snapshot is not None:
            current = state.selected_entry()
            sort_snapshot(state.snapshot, state.comparator)
            if current is not None:
                state.selected = max(0, state.snapshot.index_of(current.name))
        state.post(f'Sorted by {state.comparator.label}')
        return NOTHING

    # ------------------------------------------------------------------
    # Modal helpers
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def _modal(self, mode, interruptible=True):
        state = self.state
        previous_mode = state.mode
        previous_interruptible = state.interruptible
        state.mode = mode
        state.interruptible = previous_interruptible and interruptible
        try:
            yield
        finally:
            state.mode = previous_mode
            state.interruptible = previous_interruptible

    @contextlib.contextmanager
    def _uninterruptible(self):
        state = self.state
        previous = state.interruptible
        state.interruptible = False
        try:
            yield
        finally:
            state.interruptible = previous

    @contextlib.contextmanager
    def _external(self):
        """Hand the terminal to a child process."""
        with self._uninterruptible(), self.ui.suspended():
            yield

    def _prompt(self, message):
        with self._modal(Mode.PROMPTING_INPUT):
            return self.ui.prompt(message)

    def _finish(self, result, select=None):
        """Rebuild after a file operation and post its outcome.

        A failed rebuild wins over the operation's own message so a stale
        listing never reads as fresh.
        """
        if not self.refresh(select=select if result.ok else None):
            return ActionResult(ActionType.ERROR, self.state.status)
        self.state.post(result.payload or '', warning=not result.ok)
        return result

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------

    def hold_selected(self, mode):
        state = self.state
        if state.selected == 0:
            return NOTHING
        entry = state.selected_entry()
        if entry is None:
            return NOTHING
        verb = 'copy' if mode is ClipMode.COPY else 'move'
        try:
            path = file_operations.clipboard_path(state.path, entry.name)
        except NameTooLong as exc:
            LOGGER.info('clipboard path rejected: %s', exc)
            state.clipboard.clear()
            return ActionResult(ActionType.ERROR, f'Unable to {verb} file...')

        state.clipboard.hold(path, mode)
        if self.config.sync_system_clipboard:
            self.clipboard_mirror(path)
        label = 'Copied' if mode is ClipMode.COPY else 'Moved'
        state.post(f'{label} to Clipboard: {path}')
        return NOTHING

    def _resolve_paste_conflict(self, name, verb):
        """Ask how to handle an existing ``name``; returns a destination or None."""
        state = self.state
        choice = self.ui.choose(CONFLICT_PROMPT, 'roa')
        if choice == 'o':
            return state.path
        if choice == 'r':
            new_name = self._prompt('New Name: ')
            if not new_name:
                state.post(f'Whoops! Did not {verb} file', warning=True)
                return None
            try:
                file_operations.ensure_available(state.snapshot, new_name)
            except NameCollision:
                state.post('That name already exists. Failed to write file', warning=True)
                return None
            return new_name
        state.post(f'Did not {verb} file')
        return None

    def paste(self):
        state = self.state
        clipboard = state.clipboard
        if clipboard.is_empty():
            state.post('Clipboard is empty')
            return NOTHING

        name = clipboard.base_name
        copying = clipboard.mode is ClipMode.COPY
        verb = 'copy' if copying else 'move'
        LOGGER.debug('name to %s is: %s', verb, name)

        with self._uninterruptible():
            destination = state.path
            if state.snapshot is not None and name in state.snapshot:
                destination = self._resolve_paste_conflict(name, verb)
                if destination is None:
                    return NOTHING

            self.ui.show_status('Copying...' if copying else 'Moving...')
            result = file_operations.paste(self.runner, clipboard, state.path, destination)

        if not result.ok:
            return self._finish(result)
        if not copying:
            clipboard.clear()
        return self._finish(ActionResult(ActionType.REFRESH, 'File copied' if copying else 'File moved'))

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------

    def delete_selected(self):
        state = self.state
        entry = state.selected_entry()
        if entry is None:
            return NOTHING
        if entry.is_parent:
            return ActionResult(ActionType.ERROR, 'Cannot delete parent directory!')

        with self._modal(Mode.CONFIRMING_DESTRUCTIVE, interruptible=False):
            confirmed = self.ui.confirm(DELETE_PROMPT)
        if not confirmed:
            state.post('')
            return NOTHING

        index = state.selected
        result = file_operations.delete_entry(self.runner, state.path, entry.name)
        if not self.refresh():
            return ActionResult(ActionType.ERROR, state.status)
        state.selected = min(index, max(0, state.count - 1))
        state.post(result.payload or '', warning=not result.ok)
        return result

    def rename_selected(self):
        state = self.state
        entry = state.selected_entry()
        if entry is None:
            return NOTHING
        if entry.is_parent:
            return ActionResult(ActionType.ERROR, 'Cannot rename parent directory!')
        new_name = self._prompt('New Name: ')
        if not new_name:
            return NOTHING
        result = file_operations.rename_entry(self.runner, state.path, state.snapshot, entry.name, new_name)
        return self._finish(result, select=new_name)

    def make_directory(self):
        name = self._prompt('Directory Name: ')
        if not name:
            return NOTHING
        result = file_operations.make_directory(self.state.path, name)
        return self._finish(result, select=name)

    def new_file(self):
        name = self._prompt('Touch: ')
        if not name:
            return NOTHING
        result = file_operations.touch_entry(self.runner, self.state.path, name)
        return self._finish(result, select=name)

    def _archive(self, operation):
        state = self.state
        entry = state.selected_entry()
        if entry is None or entry.is_parent:
            return ActionResult(ActionType.ERROR, 'Select a file first')
        result = operation(self.runner, state.path, entry.name)
        return self._finish(result)

    # ------------------------------------------------------------------
    # External programs
    # ------------------------------------------------------------------

    def open_terminal(self):
        state = self.state
        with self._external():
            self.ui.banner([
                '',
                '=================================================',
                f' {os.path.basename(self.config.shell)} session - {state.path}',
                " Type 'exit' to return to gopher",
                '=================================================',
            ])
            result = self.runner([self.config.shell], cwd=state.path, interactive=True)
        return self._finish(ActionResult(ActionType.REFRESH if result.ok else ActionType.ERROR, result.message))

    def _parse_command(self, line):
        try:
            return tokenize(line)
        except UnbalancedQuotes:
            LOGGER.info('ignoring command with unbalanced quotes: %r', line)
            self.state.post('Unbalanced quotes: command ignored', warning=True)
            return None

    def execute_command(self):
        state = self.state
        line = self._prompt('Execute Command: ')
        if line is None:
            return ActionResult(ActionType.ERROR, 'Whoops! Try again.')
        argv = self._parse_command(line)
        if not argv:
            return NOTHING

        with self._external():
            self.ui.banner(['', '==========================', '|| Executing Command... ||', '=========================='])
            result = self.runner(argv, cwd=state.path, interactive=True)
            self.ui.banner([
                '=================================================',
                '|| Finished. Press any key to return to gopher ||',
                '=================================================',
            ])
            self.ui.wait_for_key()
        return self._finish(ActionResult(ActionType.REFRESH if result.ok else ActionType.ERROR, result.message))

    def open_with(self, entry):
        """Prompt for a program and run it with ``entry`` as the last argument."""
        state = self.state
        line = self._prompt('Open with: ')
        if line is None:
            return NOTHING
        argv = self._parse_command(line)
        if not argv:
            return NOTHING
        argv.append(entry.name)
        with self._external():
            result = self.runner(argv, cwd=state.path, interactive=True)
        return self._finish(ActionResult(ActionType.REFRESH if result.ok else ActionType.ERROR, result.message))

    # ------------------------------------------------------------------
    # Options menu
    # ------------------------------------------------------------------

    def open_options(self):
        state = self.state
        entry = state.selected_entry()
        if entry is None or state.selected == 0:
            return NOTHING
        state.options = OptionsMenu(entry, on_open_with=self.open_with)
        state.mode = Mode.OPTIONS_MENU
        return NOTHING
