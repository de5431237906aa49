"""
Gopher application wiring.
"""
import curses
import logging
import os

from ..utils import init_colors
from .config import load_config
from .event_loop import run_app_loop
from .navigator import Navigator
from ..ui.screen import Screen

APP_VERSION = '0.1.0'

LOGGER = logging.getLogger(__name__)


class GopherApp:
    """Owns the screen, the navigator and the run flag."""

    def __init__(self, stdscr, config=None, start_path=None):
        self.stdscr = stdscr
        self.config = config or load_config()
        self.running = True
        self._setup_terminal()
        self.screen = Screen(stdscr)
        self.navigator = Navigator(self.screen, start_path or os.getcwd(), config=self.config)
        self.screen.on_resize = self.navigator.request_resize
        LOGGER.info('gopher %s started in %s', APP_VERSION, self.navigator.state.path)

    def _setup_terminal(self):
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.keypad(True)
        curses.noecho()
        curses.cbreak()
        if curses.has_colors():
            init_colors(self.config.theme)

    def cleanup(self):
        LOGGER.info('gopher exiting')

    def run(self):
        run_app_loop(self)
