"""Main loop helpers for Gopher."""

import curses
import logging

from .actions import ActionType

LOGGER = logging.getLogger(__name__)


def prepare_directory(app):
    """Outer loop step: recompute geometry and rebuild when needed."""
    navigator = app.navigator
    lines, cols = app.screen.size()
    width_changed = navigator.set_geometry(lines, cols)
    if width_changed or navigator.state.snapshot is None:
        navigator.refresh()
    navigator.state.directory_changed = False


def dispatch_input(app, key):
    """Dispatch one input event; returns the navigator's ActionResult or None."""
    if key is None:
        return None
    if isinstance(key, int) and key == curses.KEY_RESIZE:
        lines, cols = app.screen.size()
        app.navigator.request_resize(lines, cols)
        return None
    return app.navigator.handle_key(key)


def browse_directory(app):
    """Inner loop for one directory; True once the session should end."""
    navigator = app.navigator
    while True:
        navigator.service_resize()
        app.screen.draw(navigator.state)
        key = app.screen.read_key()
        result = dispatch_input(app, key)
        if result is not None and result.type is ActionType.EXIT:
            return True
        if navigator.state.directory_changed:
            return False


def run_app_loop(app):
    """Run the two-level draw/input loop with terminal cleanup on exit."""
    try:
        while app.running:
            prepare_directory(app)
            if browse_directory(app):
                app.running = False
    finally:
        app.cleanup()
