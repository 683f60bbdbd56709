"""Write a file through a temporary copy so the target is replaced only on commit."""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
from typing import BinaryIO

__all__ = ["SafeWriteFile"]

logger = logging.getLogger(__name__)


class SafeWriteFile:
    """A temporary file that replaces ``file_name`` only when committed."""

    def __init__(self, file_name: str | os.PathLike[str]) -> None:
        self._file_name = os.fspath(file_name)
        directory = os.path.dirname(os.path.abspath(self._file_name))
        try:
            fd, self._temp_path = tempfile.mkstemp(
                prefix=".", suffix=".tmp", dir=directory
            )
        except OSError as exc:
            self._log_failure(exc)
            raise OSError(
                exc.errno,
                f"Failed to save '{self._file_name}', could not create a "
                f"temporary file: {exc.strerror} (error {exc.errno})",
            ) from exc
        self._file: BinaryIO = os.fdopen(fd, "w+b")
        self._committed = False

    def _log_failure(self, exc: OSError) -> None:
        temp_dir = tempfile.gettempdir()
        try:
            available = shutil.disk_usage(temp_dir).free / 1024 / 1024 / 1024
        except OSError:
            available = 0.0
        logger.error(
            "failed to create temporary file for '%s', error %s ('%s'), "
            "temp path is '%s', %.3fGB available",
            self._file_name,
            exc.errno,
            exc.strerror,
            temp_dir,
            available,
        )

    @property
    def file(self) -> BinaryIO:
        """The open temporary file."""
        return self._file

    @property
    def file_name(self) -> str:
        """The path that is replaced on commit."""
        return self._file_name

    def write(self, data: bytes | str) -> int:
        """Write bytes, or text as UTF-8, to the temporary file."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self._file.write(data)

    def hash(self) -> bytes:
        """MD5 digest of everything written so far."""
        position = self._file.tell()
        self._file.flush()
        self._file.seek(0)
        data = self._file.read()
        self._file.seek(position)
        return hashlib.md5(data).digest()

    def commit(self) -> None:
        """Replace the target with the written content."""
        if self._file.closed:
            raise ValueError("file is already closed")
        self._file.flush()
        self._file.close()
        os.replace(self._temp_path, self._file_name)
        self._committed = True

    def commit_if_different(self, known_hash: bytes | None) -> bytes | None:
        """Commit unless the content matches ``known_hash`` and the target exists.

        Returns the new hash if the file was written, None otherwise.
        """
        new_hash = self.hash()
        if new_hash != known_hash or not os.path.exists(self._file_name):
            self.commit()
            return new_hash
        return None

    def close(self) -> None:
        """Discard the temporary file unless it was committed."""
        if not self._file.closed:
            self._file.close()
        if not self._committed:
            try:
                os.remove(self._temp_path)
            except FileNotFoundError:
                pass

    def __enter__(self) -> SafeWriteFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()