from __future__ import annotations
import struct
from contextlib import contextmanager
from typing import Iterator

from .errors import DecodeError, TruncatedInputError

class Cursor:
    """Read position over an immutable byte buffer.

    All multi-byte reads are little-endian unless the method name says
    otherwise. A failed read never moves the cursor.
    """

    __slots__ = ("buf", "pos", "_data", "_base")

    def __init__(self, data: bytes | bytearray | memoryview, pos: int = 0):
        # snapshot: later changes to a caller's bytearray must not show through
        self._data = bytes(data)
        self._base = 0
        self.buf = memoryview(self._data)
        if not (0 <= pos <= len(self.buf)):
            raise DecodeError("open", pos, f"start outside buffer of {len(self.buf)} bytes")
        self.pos = pos

    def __len__(self) -> int: return len(self.buf)
    def remaining(self) -> int: return len(self.buf) - self.pos
    def tell(self) -> int: return self.pos
    def at_end(self) -> bool: return self.pos == len(self.buf)

    def seek(self, pos: int) -> None:
        if not (0 <= pos <= len(self.buf)):
            raise DecodeError("seek", self.pos, f"target {pos} outside [0, {len(self.buf)}]")
        self.pos = pos

    def require(self, n: int, op: str = "read") -> None:
        if n < 0:
            raise DecodeError(op, self.pos, f"negative length {n}")
        if n > self.remaining():
            raise TruncatedInputError(op, self.pos, n, self.remaining())

    def skip(self, n: int) -> None:
        self.require(n, "skip")
        self.pos += n

    def take(self, n: int, op: str = "take") -> bytes:
        self.require(n, op)
        end = self.pos + n
        out = self.buf[self.pos:end].tobytes()
        self.pos = end
        return out

    def peek(self, n: int) -> bytes:
        self.require(n, "peek")
        return self.buf[self.pos:self.pos + n].tobytes()

    def sub(self, n: int) -> "Cursor":
        """Bounded cursor over the next n bytes; this cursor moves past them."""
        self.require(n, "sub")
        child = Cursor.__new__(Cursor)
        child._data = self._data
        child._base = self._base + self.pos
        child.buf = self.buf[self.pos:self.pos + n]
        child.pos = 0
        self.pos += n
        return child

    def find(self, sub: bytes) -> int:
        """Position of the next `sub` at or after the cursor, or -1."""
        i = self._data.find(sub, self._base + self.pos, self._base + len(self.buf))
        return i - self._base if i >= 0 else -1

    @contextmanager
    def rollback(self) -> Iterator["Cursor"]:
        """Restore the position if the enclosed reads raise."""
        start = self.pos
        try:
            yield self
        except BaseException:
            self.pos = start
            raise

    # byte-aligned reads
    def _unpack(self, fmt: str, n: int, op: str):
        return struct.unpack(fmt, self.take(n, op))[0]
    def u8(self) -> int:  return self._unpack("<B", 1, "u8")
    def s8(self) -> int:  return self._unpack("<b", 1, "s8")
    def u16(self) -> int: return self._unpack("<H", 2, "u16")
    def s16(self) -> int: return self._unpack("<h", 2, "s16")
    def u32(self) -> int: return self._unpack("<I", 4, "u32")
    def s32(self) -> int: return self._unpack("<i", 4, "s32")
    def u64(self) -> int: return self._unpack("<Q", 8, "u64")
    def s64(self) -> int: return self._unpack("<q", 8, "s64")
    def f32(self) -> float: return self._unpack("<f", 4, "f32")
    def f64(self) -> float: return self._unpack("<d", 8, "f64")

    # explicit big-endian
    def u16_be(self) -> int: return self._unpack(">H", 2, "u16_be")
    def u32_be(self) -> int: return self._unpack(">I", 4, "u32_be")

    def u24(self) -> int:
        """Unsigned 24-bit, least significant byte first."""
        b = self.take(3, "u24")
        return b[0] | (b[1] << 8) | (b[2] << 16)
