"""Shared helpers for mod managers: versions, safe writes, files, progress, Steam and remembered answers."""

__version__ = "0.1.0"

__all__ = [
    "fileops",
    "progress",
    "questionbox",
    "safewritefile",
    "steam",
    "versioninfo",
]