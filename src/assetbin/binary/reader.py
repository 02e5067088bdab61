from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from .cursor import Cursor
from .errors import TrailingDataError

BytesLike = Union[str, Path, bytes, bytearray, memoryview]
T = TypeVar("T")

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers
# -----------------------------

def load_bytes(inp: BytesLike) -> bytes:
    """Bytes-like input is used as-is; anything else is treated as a file path."""
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def open_cursor(data: BytesLike, offset: int = 0, length: Optional[int] = None) -> Cursor:
    """
    Cursor over `data`, optionally restricted to the sub-range
    [offset, offset + length). Positions are relative to the sub-range.
    """
    raw = load_bytes(data)
    if length is None:
        return Cursor(raw, offset)
    cur = Cursor(raw, offset)
    return cur.sub(length)


# -----------------------------
# Decode session
# -----------------------------

def decode(
    data: BytesLike,
    decoder: Callable[[Cursor], T],
    *,
    offset: int = 0,
    exhaust: bool = False,
) -> T:
    """
    Run `decoder` on a fresh cursor starting at `offset` and return its value.
    With exhaust=True any bytes left after the decoder are a TrailingDataError.
    Decode failures propagate unchanged.
    """
    cur = open_cursor(data, offset)
    name = getattr(decoder, "__name__", repr(decoder))
    logger.debug("decode %s: %d bytes from offset %d", name, len(cur), offset)

    value = decoder(cur)

    if exhaust and not cur.at_end():
        raise TrailingDataError(name, cur.tell(), cur.remaining())
    logger.debug("decode %s: consumed %d bytes", name, cur.tell() - offset)
    return value
