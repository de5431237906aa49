"""
File operations run against the current directory.

Each helper returns an ActionResult: REFRESH with a status message on
success, ERROR with the reason otherwise. Commands run with ``cwd`` as
their working directory and take bare entry names.
"""
import logging
import os

from ..constants import ARCHIVE_NAME_MAX, CLIPBOARD_PATH_MAX
from .actions import ActionResult, ActionType
from .errors import NameCollision, NameTooLong
from .process import SUCCESS

LOGGER = logging.getLogger(__name__)

DIR_MODE = 0o755


def _run(runner, argv, cwd, interactive=False):
    result = runner(argv, cwd=cwd, interactive=interactive)
    if not result.ok:
        return ActionResult(ActionType.ERROR, result.message)
    return ActionResult(ActionType.REFRESH, result.message or SUCCESS)


def ensure_available(snapshot, name):
    """Raise NameCollision when ``name`` is already listed in ``snapshot``."""
    if snapshot is not None and name in snapshot:
        raise NameCollision(name)


def clipboard_path(directory, name):
    """Absolute source path stored on the clipboard."""
    path = f"{directory.rstrip('/')}/{name}"
    if len(path) >= CLIPBOARD_PATH_MAX:
        raise NameTooLong(path, CLIPBOARD_PATH_MAX)
    return path


def archive_name(name, suffix):
    archive = f'{name}{suffix}'
    if len(archive) >= ARCHIVE_NAME_MAX:
        raise NameTooLong(archive, ARCHIVE_NAME_MAX)
    return archive


def _compress(runner, cwd, name, suffix, flags):
    try:
        archive = archive_name(name, suffix)
    except NameTooLong as exc:
        LOGGER.info('archive name rejected: %s', exc)
        return ActionResult(ActionType.ERROR, 'Filename too long')
    return _run(runner, [flags[0], flags[1], archive, name], cwd)


def zip_entry(runner, cwd, name):
    return _compress(runner, cwd, name, '.zip', ('zip', '-r'))


def tar_entry(runner, cwd, name):
    return _compress(runner, cwd, name, '.tar.gz', ('tar', '-czvf'))


def unzip_entry(runner, cwd, name):
    return _run(runner, ['unzip', '-u', name], cwd)


def untar_entry(runner, cwd, name):
    return _run(runner, ['tar', '-xzvf', name], cwd)


def delete_entry(runner, cwd, name):
    return _run(runner, ['rm', '-rf', name], cwd)


def touch_entry(runner, cwd, name):
    return _run(runner, ['touch', name], cwd)


def rename_entry(runner, cwd, snapshot, old_name, new_name):
    """Rename through ``mv -f``, refusing names that already exist."""
    try:
        ensure_available(snapshot, new_name)
    except NameCollision:
        return ActionResult(ActionType.ERROR, 'That name already exists. Did not rename file')
    return _run(runner, ['mv', '-f', old_name, new_name], cwd)


def make_directory(cwd, name):
    """Create ``name`` inside ``cwd`` with mode 0755."""
    try:
        os.mkdir(os.path.join(cwd, name), DIR_MODE)
    except OSError as exc:
        return ActionResult(ActionType.ERROR, exc.strerror or str(exc))
    return ActionResult(ActionType.REFRESH, SUCCESS)


def paste(runner, clipboard, cwd, destination):
    """Run the clipboard's copy/move command onto ``destination``."""
    return _run(runner, clipboard.argv(destination), cwd)
