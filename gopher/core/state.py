"""Session state owned by the main loop."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..constants import MENU_CHROME_ROWS, MENU_HEIGHT_MAX, MENU_WIDTH_MAX
from .clipboard import ClipboardState
from .sorting import Comparator


class Mode(str, Enum):
    BROWSING = "browsing"
    OPTIONS_MENU = "options_menu"
    PROMPTING_INPUT = "prompting_input"
    CONFIRMING_DESTRUCTIVE = "confirming_destructive"
    EXITING = "exiting"


@dataclass
class NavigationState:
    """Everything one session mutates: path, listing, cursor, clipboard, status.

    Only the main loop and its synchronous callees write to it.
    """

    path: str
    snapshot: object = None
    selected: int = 0
    comparator: Comparator = field(default_factory=Comparator)
    clipboard: ClipboardState = field(default_factory=ClipboardState)
    status: str = ""
    status_warning: bool = False
    mode: Mode = Mode.BROWSING
    options: object = None
    menu_width: int = MENU_WIDTH_MAX
    menu_height: int = MENU_HEIGHT_MAX
    interruptible: bool = True
    resize_pending: bool = False
    directory_changed: bool = False

    @property
    def count(self) -> int:
        return len(self.snapshot) if self.snapshot is not None else 0

    @property
    def page_rows(self) -> int:
        return max(1, self.menu_height - MENU_CHROME_ROWS)

    def selected_entry(self):
        if self.snapshot is None or not 0 <= self.selected < len(self.snapshot):
            return None
        return self.snapshot[self.selected]

    def post(self, message: str, warning: bool = False) -> None:
        self.status = message or ""
        self.status_warning = warning
