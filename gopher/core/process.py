"""Synchronous child-process execution for file operations."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)

SUCCESS = 'Success'


@dataclass(frozen=True)
class ExecResult:
    """Outcome of one child process: clean exit flag and a status message."""

    ok: bool
    message: str = ''


def _failure_message(argv, returncode, stderr=None):
    lines = [line.strip() for line in (stderr or '').splitlines() if line.strip()]
    if lines:
        return lines[-1]
    return f'{argv[0]}: exit status {returncode}'


def run_command(argv, cwd=None, interactive=False) -> ExecResult:
    """Run ``argv`` to completion and report how it went.

    Non-interactive children get no stdin and have their output captured;
    the last stderr line becomes the failure message. Interactive children
    inherit the terminal, so the caller must release the screen first.
    There is no timeout.
    """
    argv = [str(arg) for arg in argv]
    if not argv:
        return ExecResult(False, 'No command given')

    LOGGER.debug('exec %r (cwd=%s, interactive=%s)', argv, cwd, interactive)
    try:
        if interactive:
            completed = subprocess.run(argv, cwd=cwd, check=False)
        else:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors='replace',
                check=False,
            )
    except OSError as exc:
        message = exc.strerror or str(exc)
        LOGGER.warning('failed to start %s: %s', argv[0], message)
        return ExecResult(False, message)

    if completed.returncode == 0:
        return ExecResult(True, SUCCESS)

    message = _failure_message(argv, completed.returncode, None if interactive else completed.stderr)
    LOGGER.warning('%s exited with status %s: %s', argv[0], completed.returncode, message)
    return ExecResult(False, message)
