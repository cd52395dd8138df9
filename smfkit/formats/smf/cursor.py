"""
Byte sources consumed by the SMF codec.

The codec only ever needs three capabilities from its input: how many bytes
are left, read exactly n bytes, and look at the next n bytes without
consuming them. ``ByteCursor`` provides them over an in-memory buffer,
``FileSource`` over a seekable binary file object.
"""

import io
import os
from typing import BinaryIO, Optional, Protocol, Union

from smfkit.errors import UnexpectedEof


class ByteSource(Protocol):
    """Narrow read capability used by every decoder."""

    def remaining(self) -> int:
        ...

    def read_exact(self, n: int) -> bytes:
        ...

    def peek(self, n: int) -> bytes:
        ...


class ByteCursor:
    """
    Read cursor over an in-memory buffer.

    A cursor can be limited to a window of the buffer; reads never go past
    ``end`` even if the underlying buffer is longer.

    Example:
        cursor = ByteCursor(b"MThd\\x00\\x00\\x00\\x06")
        tag = cursor.read_exact(4)
    """

    def __init__(
        self,
        data: Union[bytes, bytearray, memoryview],
        start: int = 0,
        end: Optional[int] = None,
    ):
        self._data = bytes(data)
        self._end = len(self._data) if end is None else min(end, len(self._data))
        self.position = start

    def __len__(self) -> int:
        return self.remaining()

    def remaining(self) -> int:
        return max(0, self._end - self.position)

    def read_exact(self, n: int) -> bytes:
        """Consume and return exactly ``n`` bytes."""
        if n > self.remaining():
            raise UnexpectedEof(
                f"Needed {n} bytes, only {self.remaining()} remain", self.position
            )
        chunk = self._data[self.position : self.position + n]
        self.position += n
        return chunk

    def peek(self, n: int) -> bytes:
        """Return the next ``n`` bytes without consuming them."""
        if n > self.remaining():
            raise UnexpectedEof(
                f"Needed {n} bytes, only {self.remaining()} remain", self.position
            )
        return self._data[self.position : self.position + n]

    def window(self, n: int) -> "ByteCursor":
        """Consume ``n`` bytes and return a cursor limited to them."""
        if n > self.remaining():
            raise UnexpectedEof(
                f"Needed {n} bytes, only {self.remaining()} remain", self.position
            )
        sub = ByteCursor(self._data, self.position, self.position + n)
        self.position += n
        return sub

    def rest(self) -> bytes:
        """Consume and return everything left in the window."""
        return self.read_exact(self.remaining())


class FileSource:
    """
    Streaming byte source over a seekable binary file object.

    Only the bytes that are actually requested are read, so large files can
    be walked chunk by chunk without loading them into memory.
    """

    def __init__(self, fileobj: BinaryIO):
        self._file = fileobj
        start = fileobj.tell()
        fileobj.seek(0, io.SEEK_END)
        self._size = fileobj.tell()
        fileobj.seek(start, io.SEEK_SET)

    @classmethod
    def open(cls, filepath: Union[str, os.PathLike]) -> "FileSource":
        return cls(open(filepath, "rb"))

    @property
    def position(self) -> int:
        return self._file.tell()

    def remaining(self) -> int:
        return max(0, self._size - self._file.tell())

    def read_exact(self, n: int) -> bytes:
        start = self._file.tell()
        if n > self.remaining():
            raise UnexpectedEof(f"Needed {n} bytes, only {self.remaining()} remain", start)
        data = self._file.read(n)
        if len(data) != n:
            raise UnexpectedEof(f"Needed {n} bytes, read {len(data)}", start)
        return data

    def peek(self, n: int) -> bytes:
        start = self._file.tell()
        data = self.read_exact(n)
        self._file.seek(start, io.SEEK_SET)
        return data

    def window(self, n: int) -> ByteCursor:
        """Read ``n`` bytes into memory and return a cursor over them."""
        return ByteCursor(self.read_exact(n))

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "FileSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
