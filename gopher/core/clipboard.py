"""
In-memory clipboard holding one pending copy or move source.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import pyperclip

LOGGER = logging.getLogger(__name__)


class ClipMode(str, Enum):
    COPY = "copy"
    MOVE = "move"


_ARGV_TEMPLATES = {
    ClipMode.COPY: ("cp", "-rf"),
    ClipMode.MOVE: ("mv", "-f"),
}


@dataclass
class ClipboardState:
    """Pending source path, operation mode and the command it will run."""

    path: str | None = None
    mode: ClipMode | None = None

    def is_empty(self) -> bool:
        return not self.path

    def hold(self, path: str, mode: ClipMode) -> None:
        self.path = path
        self.mode = ClipMode(mode)

    def clear(self) -> None:
        self.path = None
        self.mode = None

    @property
    def base_name(self) -> str:
        """Name after the last path separator of the held source."""
        if not self.path:
            return ""
        return self.path.rsplit("/", 1)[-1]

    @property
    def argv_template(self) -> tuple:
        if self.mode is None:
            return ()
        return _ARGV_TEMPLATES[self.mode] + (self.path,)

    def argv(self, destination: str) -> list[str]:
        """Full command that pastes the held source onto ``destination``."""
        return list(self.argv_template) + [destination]


def mirror_to_system(text: str) -> bool:
    """Copy ``text`` to the desktop clipboard; False when no backend is usable."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        LOGGER.debug("system clipboard unavailable: %s", exc)
        return False
    return True
