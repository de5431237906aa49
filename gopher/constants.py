"""Constants and layout limits for Gopher."""

import curses

from .core.actions import SyntheticKey

# Single-line box characters.
SB_TL = "┌"
SB_TR = "┐"
SB_BL = "└"
SB_BR = "┘"
SB_H = "─"
SB_V = "│"

# Window geometry.
MENU_WIDTH_MAX = 120
MENU_HEIGHT_MAX = 40
X_OFFSET = 4
Y_OFFSET = 1
MENU_CHROME_ROWS = 4
SCREEN_MARGIN = 6
MENU_MARK = "-> "
TITLE = "Gopher"

# Entry columns.
DESCRIPTION_RESERVE = 55
SHORT_WIDTH_MIN = 8
SIZE_COLUMN = 14

# Fixed length limits for clipboard paths and archive names.
CLIPBOARD_PATH_MAX = 800
ARCHIVE_NAME_MAX = 200

# Options popup geometry.
OPTIONS_WIDTH = 14
OPTIONS_HEIGHT = 10
OPTIONS_COLUMN = 33

# Keys.
KEY_ENTER = 10
KEY_ESCAPE = 27
KEY_CTRL_Q = 17
KEY_EXIT = curses.KEY_F1
KEY_DELETE = curses.KEY_DC
EXIT_KEYS = (KEY_EXIT, KEY_CTRL_Q)
NO_ACTION = -1

# Synthetic event codes re-dispatched from the options menu.
KEY_ZIP = int(SyntheticKey.ZIP)
KEY_UNZIP = int(SyntheticKey.UNZIP)
KEY_TAR = int(SyntheticKey.TAR)
KEY_UNTAR = int(SyntheticKey.UNTAR)

DEFAULT_SHELL = "/bin/bash"
LOG_FILE_NAME = ".gopherlog"

# Colour pair ids.
C_FRAME = 1
C_TITLE = 2
C_LIST = 3
C_SELECTED = 4
C_DIRECTORY = 5
C_STATUS = 6
C_WARNING = 7
C_OPTIONS_FRAME = 8
C_OPTIONS_SELECTED = 9
C_PROMPT = 10
