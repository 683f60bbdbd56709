"""Locate the Steam installation and games installed in its libraries."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable

__all__ = ["find_steam", "find_steam_game", "parse_library_folders"]

# library lines look like:  "1"   "Path\\to\\library"
_LIBRARY_RE = re.compile(r'^\s*"(?P<idx>[0-9]+)"\s*"(?P<path>.*)"')


def parse_library_folders(lines: Iterable[str]) -> list[str]:
    """Library folders listed in the lines of a ``libraryfolders.vdf`` file."""
    folders = []
    for line in lines:
        match = _LIBRARY_RE.match(line.rstrip("\r\n"))
        if match:
            folder = match.group("path").replace("/", "\\").replace("\\\\", "\\")
            folders.append(folder)
    return folders


def find_steam() -> str:
    """The Steam installation path from the registry, or an empty string."""
    try:
        import winreg
    except ImportError:
        return ""
    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Software\Valve\Steam") as key:
            value, _ = winreg.QueryValueEx(key, "SteamPath")
    except OSError:
        return ""
    return str(value)


def _local_path(folder: str) -> str:
    if os.sep != "\\":
        return folder.replace("\\", os.sep)
    return folder


def find_steam_game(
    app_name: str,
    valid_file: str = "",
    steam_path: str | os.PathLike[str] | None = None,
) -> str:
    """The installation directory of ``app_name`` in any Steam library, or "".

    When ``valid_file`` is given it must exist inside the directory for the
    game to count as found.
    """
    root = find_steam() if steam_path is None else os.fspath(steam_path)
    if not root or not os.path.isdir(root):
        return ""

    libraries = [os.path.abspath(root)]
    vdf = Path(root) / "steamapps" / "libraryfolders.vdf"
    try:
        with open(vdf, encoding="utf-8", errors="replace") as handle:
            libraries.extend(parse_library_folders(handle))
    except OSError:
        pass

    for library in libraries:
        candidate = Path(_local_path(library)) / "steamapps" / "common" / app_name
        if not candidate.is_dir():
            continue
        if not valid_file or (candidate / valid_file).exists():
            return os.path.abspath(candidate)
    return ""