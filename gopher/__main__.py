"""
Entry point for Gopher.
"""
import curses
import locale
import logging
import os
import traceback

from .core.app import GopherApp
from .core.config import load_config

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Ensure UTF-8
try:
    locale.setlocale(locale.LC_ALL, '')
except locale.Error:
    pass


def configure_logging(config):
    """Send diagnostics to the append-only log file; the terminal stays clean."""
    level = logging.DEBUG if os.environ.get('GOPHER_DEBUG') else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    try:
        handler = logging.FileHandler(config.log_path, mode='a', encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler


def main(stdscr, config=None):
    app = GopherApp(stdscr, config=config)
    app.run()


def run():
    """Run Gopher and return process exit code."""
    config = load_config()
    configure_logging(config)
    try:
        curses.wrapper(main, config)
        return 0
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        # Top-level crash guard is intentionally broad to restore terminal state.
        try:
            curses.endwin()
        except curses.error:
            pass
        logging.getLogger(__name__).exception('gopher crashed')
        print(f'\nError: {e}')
        traceback.print_exc()
        return 1


def main_cli():
    """Console script entrypoint."""
    return run()


if __name__ == '__main__':
    raise SystemExit(main_cli())
