import struct

import pytest

from assetbin.binary.cursor import Cursor
from assetbin.binary.errors import TrailingDataError
from assetbin.binary.reader import decode, load_bytes, open_cursor
from assetbin.binary.codecs.grids import read_bit_grid
from assetbin.binary.codecs.strings import read_null_terminated_string, read_u16_prefixed_ascii


def _record(cur: Cursor):
    return (
        read_null_terminated_string(cur),
        cur.u24(),
        read_u16_prefixed_ascii(cur),
        read_bit_grid(cur, 4, 2).values,
    )


RECORD = b"name\x00" + b"\x01\x02\x03" + b"\x02\x00ok" + bytes([0b1001, 0b0110])


def test_decode_sequence_of_primitives():
    assert decode(RECORD, _record) == (
        "name", 0x030201, "ok",
        (True, False, False, True, False, True, True, False),
    )


def test_decode_is_deterministic():
    data = b"junk" + RECORD
    cur1, cur2 = open_cursor(data, 4), open_cursor(data, 4)
    assert _record(cur1) == _record(cur2)
    assert cur1.tell() == cur2.tell() == len(data)


def test_decode_from_offset():
    assert decode(b"\xff\xff\x34\x12", Cursor.u16, offset=2) == 0x1234


def test_exhaust_reports_leftover():
    with pytest.raises(TrailingDataError) as ei:
        decode(b"\x01\x00\x00", Cursor.u16, exhaust=True)
    assert ei.value.leftover == 1
    assert ei.value.offset == 2
    assert decode(b"\x01\x00", Cursor.u16, exhaust=True) == 1


def test_open_cursor_sub_range():
    cur = open_cursor(b"\x00\x01\x02\x03", offset=1, length=2)
    assert len(cur) == 2
    assert cur.u16() == 0x0201
    assert cur.at_end()


def test_load_bytes_from_path(tmp_path):
    p = tmp_path / "blob.bin"
    p.write_bytes(struct.pack("<I", 42))
    assert load_bytes(p) == b"*\x00\x00\x00"
    assert decode(str(p), Cursor.u32) == 42
    assert load_bytes(bytearray(b"ab")) == b"ab"
