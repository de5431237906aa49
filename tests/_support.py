"""Shared test helpers.

These helpers avoid writing outside the repo and provide scripted stand-ins
for the screen and the process runner.
"""

from __future__ import annotations

import contextlib
import shutil
import stat
import types
import uuid
from pathlib import Path

from gopher.core.entry import Entry
from gopher.core.process import ExecResult
from gopher.core.snapshot import DirectorySnapshot, place_entries


class RepoTemporaryDirectory:
    """Minimal TemporaryDirectory-like helper that stays inside the repo."""

    def __init__(self, path: Path):
        self._path = path
        self.name = str(path)

    def cleanup(self) -> None:
        shutil.rmtree(self._path, ignore_errors=True)

    def __enter__(self) -> str:
        return self.name

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False


def make_repo_tmpdir(prefix: str = "_tmp_") -> RepoTemporaryDirectory:
    """Create a temp directory under tests/ (ignored by git)."""

    tests_dir = Path(__file__).resolve().parent
    for _ in range(100):
        path = tests_dir / f"{prefix}{uuid.uuid4().hex[:12]}"
        try:
            path.mkdir()
        except FileExistsError:
            continue
        return RepoTemporaryDirectory(path)

    raise RuntimeError("failed to create a repo temp directory")


def fake_stat(kind="file", size=0, mtime=0):
    """Return an object shaped like ``os.stat_result`` for Entry.from_stat."""
    mode = {
        "file": stat.S_IFREG | 0o644,
        "dir": stat.S_IFDIR | 0o755,
        "fifo": stat.S_IFIFO | 0o644,
    }[kind]
    return types.SimpleNamespace(st_mode=mode, st_size=size, st_mtime=mtime)


def make_entry(name, kind="file", size=0, mtime=0, width=65):
    return Entry.from_stat(name, fake_stat(kind, size, mtime), width)


def make_snapshot(path, rows, width=65):
    """Build a snapshot from ``(name, kind, size, mtime)`` tuples in scan order."""
    entries = [make_entry(name, kind, size, mtime, width) for name, kind, size, mtime in rows]
    return DirectorySnapshot(path, place_entries(entries), width)


class FakeTree:
    """In-memory directory tree usable as a snapshot builder's listing source.

    ``dirs`` maps a path to ``{name: (kind, size, mtime)}``.
    """

    def __init__(self, dirs):
        self.dirs = {path: dict(children) for path, children in dirs.items()}
        self.failing = set()

    def list_names(self, path):
        if path in self.failing or path not in self.dirs:
            raise FileNotFoundError(2, "No such file or directory", path)
        return [".", ".."] + list(self.dirs[path])

    def stat_entry(self, full_path):
        parent, _, name = full_path.rpartition("/")
        parent = parent or "/"
        if name in (".", ".."):
            return fake_stat("dir")
        try:
            kind, size, mtime = self.dirs[parent][name]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", full_path) from None
        return fake_stat(kind, size, mtime)


class RecordingRunner:
    """Process runner double that records every call."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result or ExecResult(True, "Success")
        self.on_call = None

    def __call__(self, argv, cwd=None, interactive=False):
        self.calls.append({"argv": list(argv), "cwd": cwd, "interactive": interactive})
        if self.on_call is not None:
            self.on_call(argv, cwd)
        return self.result

    @property
    def argvs(self):
        return [call["argv"] for call in self.calls]


class FakeUI:
    """Scripted replacement for the curses screen.

    ``answers`` feeds ``prompt``; ``choices`` feeds ``choose`` and
    ``confirm``. Every question asked is recorded in ``asked``.
    """

    def __init__(self, answers=(), choices=()):
        self.answers = list(answers)
        self.choices = list(choices)
        self.asked = []
        self.statuses = []
        self.banners = []
        self.keys_waited = 0
        self.suspend_depth = 0
        self.observer = None

    def _observe(self):
        if self.observer is not None:
            self.observer()

    def prompt(self, message):
        self.asked.append(message)
        self._observe()
        return self.answers.pop(0) if self.answers else None

    def choose(self, message, choices):
        self.asked.append(message)
        self._observe()
        return self.choices.pop(0) if self.choices else None

    def confirm(self, message):
        return self.choose(message, "yn") == "y"

    def show_status(self, message, warning=False):
        self.statuses.append(message)

    def banner(self, lines):
        self.banners.append(list(lines))

    def wait_for_key(self):
        self.keys_waited += 1

    @contextlib.contextmanager
    def suspended(self):
        self.suspend_depth += 1
        try:
            yield
        finally:
            self.suspend_depth -= 1
