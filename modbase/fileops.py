"""Recursive copy, move and removal of files and directories."""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Callable

__all__ = [
    "FileOperationError",
    "copy_dir",
    "copy_file_recursive",
    "delete_quiet",
    "move_file_recursive",
    "remove_dir",
    "remove_old_files",
]

logger = logging.getLogger(__name__)

_FILE_ATTRIBUTE_HIDDEN = 0x2

PathLike = str | os.PathLike


class FileOperationError(OSError):
    """A file or directory operation could not be completed."""


def _clear_read_only(path: PathLike) -> None:
    if os.path.islink(path):
        return
    try:
        mode = os.stat(path).st_mode
        os.chmod(path, mode | stat.S_IWRITE)
    except OSError:
        pass


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _is_hidden(path: Path) -> bool:
    if path.name.startswith("."):
        return True
    try:
        attributes = getattr(os.stat(path, follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & _FILE_ATTRIBUTE_HIDDEN)


def remove_dir(dir_name: PathLike) -> None:
    """Remove a directory with everything in it, read-only files included."""
    root = Path(dir_name)
    if not root.is_dir():
        raise FileOperationError(f'"{os.fspath(dir_name)}" doesn\'t exist (remove)')

    # directories first, like a listing sorted with directories on top
    entries = sorted(root.iterdir(), key=lambda entry: not _is_real_dir(entry))
    for entry in entries:
        if _is_real_dir(entry):
            remove_dir(entry)
            continue
        _clear_read_only(entry)
        try:
            entry.unlink()
        except OSError as exc:
            raise FileOperationError(
                f'removal of "{entry.absolute()}" failed: {exc.strerror}'
            ) from exc

    try:
        root.rmdir()
    except OSError as exc:
        raise FileOperationError(f'removal of "{root.absolute()}" failed') from exc


def copy_dir(
    source_name: PathLike, destination_name: PathLike, merge: bool = False
) -> None:
    """Copy a directory tree.

    With ``merge`` the destination may already exist; files already present
    there are left alone. Hidden entries and symbolic links to directories
    are not copied, the latter to avoid endless recursion.
    """
    source = Path(source_name)
    destination = Path(destination_name)
    if not source.is_dir():
        raise FileOperationError(f'"{os.fspath(source_name)}" doesn\'t exist')

    if destination.is_dir():
        if not merge:
            raise FileOperationError(
                f'"{os.fspath(destination_name)}" already exists'
            )
    else:
        try:
            destination.mkdir()
        except OSError as exc:
            raise FileOperationError(
                f'failed to create directory "{destination}"'
            ) from exc

    entries = sorted(entry for entry in source.iterdir() if not _is_hidden(entry))

    for entry in entries:
        if not entry.is_file():
            continue
        target = destination / entry.name
        if target.exists():
            continue
        try:
            shutil.copy2(entry, target)
        except OSError as exc:
            logger.warning("failed to copy '%s' to '%s': %s", entry, target, exc)

    for entry in entries:
        if not _is_real_dir(entry):
            continue
        try:
            copy_dir(entry, destination / entry.name, merge)
        except FileOperationError as exc:
            logger.warning("failed to copy directory '%s': %s", entry, exc)


def _prepare_destination(base_dir: PathLike, destination: str) -> str:
    """Create the directories leading to ``destination`` under ``base_dir``."""
    base = os.fspath(base_dir)
    path = base
    for component in destination.split("/")[:-1]:
        path = f"{path}/{component}"
        if os.path.isdir(path):
            continue
        try:
            os.mkdir(path)
        except OSError as exc:
            raise FileOperationError(f'failed to create directory "{path}"') from exc
    return f"{base}/{destination}"


def move_file_recursive(
    source: PathLike, base_dir: PathLike, destination: str
) -> None:
    """Move a file to ``base_dir/destination``, creating directories as needed.

    ``destination`` uses ``/`` as separator. An existing target is never
    overwritten.
    """
    target = _prepare_destination(base_dir, destination)
    failure = f'failed to copy "{os.fspath(source)}" to "{target}"'
    if os.path.exists(target):
        raise FileOperationError(failure)
    try:
        os.rename(source, target)
        return
    except OSError:
        pass
    # rename failed, e.g. across devices: copy and delete instead
    try:
        shutil.copy2(source, target)
    except OSError as exc:
        raise FileOperationError(failure) from exc
    try:
        os.remove(source)
    except OSError as exc:
        logger.warning("failed to remove '%s' after copying: %s", source, exc)


def copy_file_recursive(
    source: PathLike, base_dir: PathLike, destination: str
) -> None:
    """Copy a file to ``base_dir/destination``, creating directories as needed.

    ``destination`` uses ``/`` as separator. An existing target is never
    overwritten.
    """
    target = _prepare_destination(base_dir, destination)
    failure = f'failed to copy "{os.fspath(source)}" to "{target}"'
    if os.path.exists(target):
        raise FileOperationError(failure)
    try:
        shutil.copy2(source, target)
    except OSError as exc:
        raise FileOperationError(failure) from exc


def _modification_time(path: Path) -> float:
    return path.stat().st_mtime


def remove_old_files(
    path: PathLike,
    pattern: str,
    num_to_keep: int,
    sort_key: Callable[[Path], object] | None = None,
) -> list[Path]:
    """Delete files matching ``pattern`` so that only ``num_to_keep`` remain.

    Files are ordered by ``sort_key`` (modification time by default) and the
    last ``num_to_keep`` in that order are kept. Returns the removed paths;
    failures are logged, not raised.
    """
    directory = Path(path)
    try:
        candidates = [
            entry
            for entry in directory.iterdir()
            if entry.is_file() and fnmatch.fnmatch(entry.name, pattern)
        ]
    except OSError:
        return []

    files = sorted(candidates, key=sort_key or _modification_time)
    excess = len(files) - num_to_keep
    if excess <= 0:
        return []

    removed = []
    for entry in files[:excess]:
        try:
            entry.unlink()
        except OSError as exc:
            logger.warning("failed to remove log files: %s", exc)
            continue
        removed.append(entry)
    return removed


def delete_quiet(file_name: PathLike) -> None:
    """Delete a file, clearing its read-only flag if a plain delete fails."""
    try:
        os.remove(file_name)
        return
    except OSError:
        pass
    _clear_read_only(file_name)
    try:
        os.remove(file_name)
    except OSError as exc:
        raise FileOperationError(
            f'removal of "{os.fspath(file_name)}" failed: {exc.strerror}'
        ) from exc