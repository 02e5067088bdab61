from __future__ import annotations
from typing import Optional

from ..cursor import Cursor
from ..errors import MalformedDataError, MissingTerminatorError
from ...config import get_settings

# Lengths in the u16-prefixed forms count characters, not bytes.

def _codec(encoding: Optional[str], errors: Optional[str], *, wide: bool = False) -> tuple[str, str]:
    s = get_settings()
    if encoding is None:
        encoding = s.wide_encoding if wide else s.text_encoding
    return encoding, errors or s.decode_errors


def _decode(raw: bytes, codec: tuple[str, str], op: str, offset: int) -> str:
    enc, err = codec
    try:
        return raw.decode(enc, errors=err)
    except UnicodeDecodeError as e:
        raise MalformedDataError(op, offset, f"cannot decode as {enc}: {e.reason}") from e


def decode_text(
    raw: bytes, op: str, offset: int, *, wide: bool = False,
    encoding: Optional[str] = None, errors: Optional[str] = None,
) -> str:
    """Decode bytes already taken from a cursor, honouring the configured codecs."""
    return _decode(raw, _codec(encoding, errors, wide=wide), op, offset)


def read_null_terminated_string(
    cur: Cursor, *, encoding: Optional[str] = None, errors: Optional[str] = None
) -> str:
    """Read single-byte characters up to a NUL; the NUL is consumed but not returned."""
    op = "null-terminated string"
    codec = _codec(encoding, errors)
    start = cur.tell()
    end = cur.find(b"\x00")
    if end < 0:
        raise MissingTerminatorError(op, start, cur.remaining())
    with cur.rollback():
        raw = cur.take(end - start + 1, op)
        return _decode(raw[:-1], codec, op, start)


def read_u16_prefixed_ascii(
    cur: Cursor, *, encoding: Optional[str] = None, errors: Optional[str] = None
) -> str:
    op = "u16-prefixed string"
    codec = _codec(encoding, errors)
    start = cur.tell()
    with cur.rollback():
        length = cur.u16()
        return _decode(cur.take(length, op), codec, op, start)


def read_u16_prefixed_wide(
    cur: Cursor, *, encoding: Optional[str] = None, errors: Optional[str] = None
) -> str:
    op = "u16-prefixed wide string"
    codec = _codec(encoding, errors, wide=True)
    start = cur.tell()
    with cur.rollback():
        length = cur.u16()
        return _decode(cur.take(2 * length, op), codec, op, start)


def read_fixed_length_string(
    cur: Cursor, count: int, *, encoding: Optional[str] = None, errors: Optional[str] = None
) -> str:
    """Read exactly `count` single-byte characters, dropping trailing NULs only."""
    op = "fixed-length string"
    codec = _codec(encoding, errors)
    start = cur.tell()
    with cur.rollback():
        return _decode(cur.take(count, op), codec, op, start).rstrip("\x00")
