import pytest

from assetbin.binary.cursor import Cursor
from assetbin.binary.errors import (
    DecodeError,
    MalformedDataError,
    MissingTerminatorError,
    TruncatedInputError,
)
from assetbin.binary.codecs.strings import (
    read_fixed_length_string,
    read_null_terminated_string,
    read_u16_prefixed_ascii,
    read_u16_prefixed_wide,
)


def test_null_terminated():
    cur = Cursor(b"abc\x00")
    assert read_null_terminated_string(cur) == "abc"
    assert cur.tell() == 4


def test_null_terminated_sequence():
    cur = Cursor(b"\x00one\x00two\x00")
    assert [read_null_terminated_string(cur) for _ in range(3)] == ["", "one", "two"]
    assert cur.at_end()


def test_null_terminated_missing_terminator():
    cur = Cursor(b"xx\x00abc", 3)
    with pytest.raises(MissingTerminatorError) as ei:
        read_null_terminated_string(cur)
    assert isinstance(ei.value, TruncatedInputError)
    assert ei.value.offset == 3
    assert "terminator" in str(ei.value)
    assert cur.tell() == 3


def test_u16_prefixed_ascii():
    cur = Cursor(bytes([0x03, 0x00]) + b"foo")
    assert read_u16_prefixed_ascii(cur) == "foo"
    assert cur.tell() == 5


def test_u16_prefixed_ascii_truncated():
    cur = Cursor(bytes([0x05, 0x00]) + b"fo")
    with pytest.raises(TruncatedInputError):
        read_u16_prefixed_ascii(cur)
    assert cur.tell() == 0


def test_u16_prefixed_wide():
    cur = Cursor(bytes([0x02, 0x00]) + "hé".encode("utf-16-le"))
    assert read_u16_prefixed_wide(cur) == "hé"
    assert cur.tell() == 6


def test_u16_prefixed_wide_counts_characters():
    cur = Cursor(bytes([0x02, 0x00]) + "h".encode("utf-16-le"))
    with pytest.raises(TruncatedInputError) as ei:
        read_u16_prefixed_wide(cur)
    assert ei.value.needed == 4
    assert cur.tell() == 0


def test_fixed_length_strips_trailing_nulls():
    cur = Cursor(b"ab\x00\x00\x00")
    assert read_fixed_length_string(cur, 5) == "ab"
    assert cur.tell() == 5


def test_fixed_length_keeps_leading_nulls():
    assert read_fixed_length_string(Cursor(b"\x00ab\x00\x00"), 5) == "\x00ab"


def test_fixed_length_errors():
    cur = Cursor(b"abc")
    with pytest.raises(TruncatedInputError):
        read_fixed_length_string(cur, 5)
    with pytest.raises(DecodeError):
        read_fixed_length_string(cur, -1)
    assert cur.tell() == 0


def test_undecodable_bytes_are_replaced_by_default():
    cur = Cursor(b"\x01\x00\xe9")
    assert read_u16_prefixed_ascii(cur) == "\ufffd"
    assert cur.tell() == 3


def test_strict_decoding_fails_without_consuming():
    cur = Cursor(b"\x01\x00\xe9")
    with pytest.raises(MalformedDataError):
        read_u16_prefixed_ascii(cur, errors="strict")
    assert cur.tell() == 0


def test_encoding_override_and_settings(settings_env):
    assert read_u16_prefixed_ascii(Cursor(b"\x01\x00\xe9"), encoding="latin-1") == "é"
    settings_env(text_encoding="latin-1")
    assert read_fixed_length_string(Cursor(b"\xe9\x00"), 2) == "é"


def test_null_terminated_stops_at_sub_cursor_bound():
    parent = Cursor(b"abc\x00")
    cur = parent.sub(3)
    with pytest.raises(MissingTerminatorError):
        read_null_terminated_string(cur)
    assert cur.tell() == 0


def test_null_terminated_inside_sub_cursor():
    parent = Cursor(b"\xffab\x00cd\x00")
    parent.skip(1)
    cur = parent.sub(6)
    assert read_null_terminated_string(cur) == "ab"
    assert cur.tell() == 3
    assert read_null_terminated_string(cur) == "cd"
    assert cur.at_end()
