"""File payloads sent with upload calls."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, replace
from typing import IO

from ..errors import ValidationError


class FileWindow(io.RawIOBase):
    """Seekable read-only view over a byte range of a file on disk.

    Positions are relative to the start of the window, so a multipart encoder
    that rewinds to 0 and measures the stream sees only the window. The
    underlying file is opened on first read.
    """

    def __init__(self, path: str, start: int = 0, length: int | None = None) -> None:
        super().__init__()
        self._path = path
        self._start = start
        available = max(0, os.path.getsize(path) - start)
        self._length = available if length is None else max(0, min(length, available))
        self._pos = 0
        self._handle: IO[bytes] | None = None

    @property
    def name(self) -> str:
        return self._path

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._pos + offset
        elif whence == io.SEEK_END:
            position = self._length + offset
        else:
            raise ValueError(f"invalid whence ({whence!r})")
        self._pos = max(0, position)
        return self._pos

    def read(self, size: int | None = -1) -> bytes:
        remaining = self._length - self._pos
        if remaining <= 0:
            return b""
        if size is None or size < 0 or size > remaining:
            size = remaining
        if self._handle is None:
            self._handle = open(self._path, "rb")
        self._handle.seek(self._start + self._pos)
        data = self._handle.read(size)
        self._pos += len(data)
        return data

    def readall(self) -> bytes:
        return self.read(-1)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        super().close()


@dataclass(frozen=True, slots=True)
class BoxFile:
    """Reference to a local file, optionally narrowed to a byte window.

    ``max_length`` of -1 reads to the end of the file and ``offset`` of -1
    starts at the beginning.
    """

    file_path: str
    max_length: int = -1
    offset: int = -1

    @property
    def name(self) -> str:
        return os.path.basename(self.file_path)

    @property
    def size(self) -> int:
        return os.path.getsize(self.file_path)

    def with_window(self, max_length: int = -1, offset: int = -1) -> BoxFile:
        return replace(self, max_length=int(max_length), offset=int(offset))

    def open(self) -> FileWindow:
        start = self.offset if self.offset >= 0 else 0
        length = self.max_length if self.max_length >= 0 else None
        return FileWindow(self.file_path, start, length)

    def read(self) -> bytes:
        with self.open() as stream:
            return stream.read()


def make_box_file(
    box_file: BoxFile | str | os.PathLike[str],
    max_length: int = -1,
    offset: int = -1,
) -> BoxFile:
    """Build a BoxFile from a path, or re-window an existing one."""
    if not isinstance(box_file, BoxFile):
        path = os.fspath(box_file)
        if not os.path.isfile(path):
            raise ValidationError(f"File '{path}' is invalid.")
        box_file = BoxFile(path)
    return box_file.with_window(max_length, offset)


__all__ = ["BoxFile", "FileWindow", "make_box_file"]
