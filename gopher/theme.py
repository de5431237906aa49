"""Colour roles used by the Gopher screen."""

from dataclasses import dataclass
import curses

from .constants import (
    C_DIRECTORY,
    C_FRAME,
    C_LIST,
    C_OPTIONS_FRAME,
    C_OPTIONS_SELECTED,
    C_PROMPT,
    C_SELECTED,
    C_STATUS,
    C_TITLE,
    C_WARNING,
)

DEFAULT_THEME = "terminal"

# -1 keeps the terminal's own background (requires use_default_colors).
TERMINAL_BG = -1

ROLE_TO_PAIR_ID = {
    "frame": C_FRAME,
    "title": C_TITLE,
    "list": C_LIST,
    "selected": C_SELECTED,
    "directory": C_DIRECTORY,
    "status": C_STATUS,
    "warning": C_WARNING,
    "options_frame": C_OPTIONS_FRAME,
    "options_selected": C_OPTIONS_SELECTED,
    "prompt": C_PROMPT,
}


@dataclass(frozen=True)
class Theme:
    """Semantic role to (fg, bg) mapping."""

    key: str
    pairs: dict[str, tuple[int, int]]


THEMES = {
    "terminal": Theme(
        key="terminal",
        pairs={
            "frame": (curses.COLOR_WHITE, TERMINAL_BG),
            "title": (curses.COLOR_YELLOW, TERMINAL_BG),
            "list": (curses.COLOR_WHITE, TERMINAL_BG),
            "selected": (curses.COLOR_BLACK, curses.COLOR_WHITE),
            "directory": (curses.COLOR_BLUE, TERMINAL_BG),
            "status": (curses.COLOR_GREEN, TERMINAL_BG),
            "warning": (curses.COLOR_RED, curses.COLOR_BLACK),
            "options_frame": (curses.COLOR_CYAN, TERMINAL_BG),
            "options_selected": (curses.COLOR_MAGENTA, TERMINAL_BG),
            "prompt": (curses.COLOR_WHITE, TERMINAL_BG),
        },
    ),
    "mono": Theme(
        key="mono",
        pairs={role: (curses.COLOR_WHITE, curses.COLOR_BLACK) for role in ROLE_TO_PAIR_ID},
    ),
}


def get_theme(theme_key):
    """Resolve theme by key with fallback to default."""
    if not theme_key:
        return THEMES[DEFAULT_THEME]
    return THEMES.get(theme_key, THEMES[DEFAULT_THEME])
