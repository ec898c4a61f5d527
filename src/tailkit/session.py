"""
session.py: Random-access reader over one input file.

A FileSession owns a single binary file handle and its cursor. The locator
moves the cursor; the emitter drains the file from the cursor to the end.
Every OSError is re-raised as TailIOError tagged with the file path.
"""

import os
from pathlib import Path
from typing import Iterator

from .errors import TailIOError

CHUNK_SIZE = 8192


class FileSession:
    """
    One input file opened for seek + read.

    Usage:
        with FileSession.open(path) as session:
            session.seek(offset)
            for chunk in session.iter_chunks():
                ...
    """

    def __init__(self, path, handle):
        self.path = Path(path)
        self._handle = handle
        try:
            self.size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            raise TailIOError(self.path, e) from e

    @classmethod
    def open(cls, path) -> "FileSession":
        """Open path for binary random access."""
        try:
            handle = open(path, 'rb')
        except OSError as e:
            raise TailIOError(path, e) from e
        try:
            return cls(path, handle)
        except TailIOError:
            handle.close()
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self):
        self._handle.close()

    def seek(self, offset: int) -> int:
        """Move the cursor to an absolute offset."""
        try:
            return self._handle.seek(offset, os.SEEK_SET)
        except OSError as e:
            raise TailIOError(self.path, e) from e

    def tell(self) -> int:
        try:
            return self._handle.tell()
        except OSError as e:
            raise TailIOError(self.path, e) from e

    def read(self, size: int = -1) -> bytes:
        """Read from the cursor; advances it."""
        try:
            return self._handle.read(size)
        except OSError as e:
            raise TailIOError(self.path, e) from e

    def read_at(self, offset: int, size: int) -> bytes:
        """Read up to size bytes starting at offset; the cursor ends after them."""
        self.seek(offset)
        return self.read(size)

    def iter_chunks(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the bytes from the cursor to end of file."""
        while True:
            chunk = self.read(chunk_size)
            if not chunk:
                return
            yield chunk

    def __repr__(self):
        state = "closed" if self.closed else f"at {self._handle.tell()}"
        return f"<FileSession {str(self.path)!r} size={self.size} {state}>"
