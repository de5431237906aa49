"""
Typed action contract shared by the navigator, its helpers and the main loop.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any


class ActionType(str, Enum):
    """Outcome kinds reported back to the navigator and the event loop."""

    REFRESH = "refresh"
    ERROR = "error"
    CHDIR = "chdir"
    EXIT = "exit"
    NONE = "none"


class SyntheticKey(IntEnum):
    """Event codes that stand in for key presses with no printable key."""

    ZIP = 2000
    UNZIP = 2001
    TAR = 2002
    UNTAR = 2003


class SortKey(str, Enum):
    """Comparator families selectable from the keyboard."""

    NAME = "name"
    SIZE = "size"
    DATE = "date"


@dataclass(frozen=True)
class ActionResult:
    """Action message emitted by operations and the navigator."""

    type: ActionType
    payload: Any = None

    @property
    def ok(self):
        return self.type is not ActionType.ERROR
