"""File persistence boundary used by the document and the save flow."""

from __future__ import annotations

import errno
import os
from typing import IO, Iterator, Protocol

from jate.errors import describe_cause

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


class FileStoreError(RuntimeError):
    """Raised when a file cannot be read or written."""

    def __init__(self, filename: str, cause: BaseException | str) -> None:
        self.filename = filename
        self.cause = cause
        self.reason = describe_cause(cause)
        super().__init__(f"{filename}: {self.reason}")


class FileStore(Protocol):
    """Protocol describing how documents reach the disk."""

    def read_lines(self, filename: str) -> Iterator[str]:
        """Open ``filename`` and iterate its lines, line endings included."""
        ...

    def write(self, filename: str, data: bytes) -> int:
        """Replace the contents of ``filename`` with ``data`` exactly."""
        ...


class DiskFileStore:
    """FileStore on the local filesystem."""

    def __init__(self, *, mode: int = 0o644) -> None:
        self.mode = mode

    def read_lines(self, filename: str) -> Iterator[str]:
        try:
            handle = open(
                filename, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n"
            )
        except OSError as exc:
            raise FileStoreError(filename, exc) from exc
        return self._iter_lines(filename, handle)

    @staticmethod
    def _iter_lines(filename: str, handle: IO[str]) -> Iterator[str]:
        with handle:
            try:
                yield from handle
            except OSError as exc:
                raise FileStoreError(filename, exc) from exc

    def write(self, filename: str, data: bytes) -> int:
        try:
            fd = os.open(filename, os.O_RDWR | os.O_CREAT, self.mode)
        except OSError as exc:
            raise FileStoreError(filename, exc) from exc
        try:
            # Truncate to the final length first so a shorter save drops stale bytes.
            os.ftruncate(fd, len(data))
            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                if written == 0:
                    raise OSError(errno.EIO, os.strerror(errno.EIO))
                view = view[written:]
        except OSError as exc:
            raise FileStoreError(filename, exc) from exc
        finally:
            os.close(fd)
        return len(data)


__all__ = [
    "FileStore",
    "DiskFileStore",
    "FileStoreError",
    "ENCODING",
    "ENCODING_ERRORS",
]
