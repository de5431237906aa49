"""Start-up configuration loader for Gopher."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import DEFAULT_SHELL, LOG_FILE_NAME, MENU_HEIGHT_MAX, MENU_WIDTH_MAX
from .actions import SortKey

LOGGER = logging.getLogger(__name__)


def _default_shell() -> str:
    return os.environ.get("SHELL") or DEFAULT_SHELL


def default_log_path() -> Path:
    """Return the diagnostic log path (~/.gopherlog)."""
    return Path.home() / LOG_FILE_NAME


@dataclass(frozen=True)
class AppConfig:
    """User-facing settings read once at start-up."""

    shell: str = field(default_factory=_default_shell)
    log_path: Path = field(default_factory=default_log_path)
    max_menu_width: int = MENU_WIDTH_MAX
    max_menu_height: int = MENU_HEIGHT_MAX
    default_sort: SortKey = SortKey.NAME
    default_descending: bool = False
    sync_system_clipboard: bool = True
    theme: str = "terminal"


def default_config_path() -> Path:
    """Return default config path (~/.config/gopher/config.toml)."""
    return Path.home() / ".config" / "gopher" / "config.toml"


def _coerce_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in ("1", "true", "yes", "on"):
            return True
        if lower in ("0", "false", "no", "off"):
            return False
    return default


def _coerce_int(value, default, minimum):
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(minimum, number)


def _parse_toml(text: str) -> dict:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        LOGGER.warning("ignoring invalid config: %s", exc)
        return {}


def _normalize_config(raw: dict) -> AppConfig:
    section = raw.get("gopher", raw)
    if not isinstance(section, dict):
        section = {}
    defaults = AppConfig()

    shell = str(section.get("shell") or "").strip() or defaults.shell
    log_path = section.get("log_path")
    log_path = Path(os.path.expanduser(str(log_path))) if log_path else defaults.log_path

    try:
        default_sort = SortKey(str(section.get("default_sort", defaults.default_sort.value)).strip().lower())
    except ValueError:
        default_sort = defaults.default_sort

    return AppConfig(
        shell=shell,
        log_path=log_path,
        max_menu_width=_coerce_int(section.get("max_menu_width"), defaults.max_menu_width, 20),
        max_menu_height=_coerce_int(section.get("max_menu_height"), defaults.max_menu_height, 8),
        default_sort=default_sort,
        default_descending=_coerce_bool(section.get("default_descending"), default=False),
        sync_system_clipboard=_coerce_bool(section.get("sync_system_clipboard"), default=True),
        theme=str(section.get("theme") or defaults.theme).strip().lower(),
    )


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from TOML file; return defaults when missing/invalid."""
    cfg_path = Path(path) if path is not None else default_config_path()
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError:
        return AppConfig()
    return _normalize_config(_parse_toml(text))
