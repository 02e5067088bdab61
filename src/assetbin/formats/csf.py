"""
CSF compiled string tables.

Layout (all integers little-endian u32):
  header: " FSC", version, label count, string count, reserved, language
  label:  " LBL", string count, name length, name (ASCII)
  string: " RTS" | "WRTS", length in UTF-16 units, payload with every byte
          bit-inverted; "WRTS" is followed by length + ASCII extra value
"""
from __future__ import annotations
import logging

from ..binary.cursor import Cursor
from ..binary.errors import MalformedDataError
from ..binary.codecs.enums import read_enum_u32
from ..binary.codecs.strings import decode_text, read_fixed_length_string
from ..models.string_table import CsfLabel, CsfLanguage, CsfString, StringTable
from .registry import register_format

logger = logging.getLogger(__name__)

TAG_HEADER = " FSC"
TAG_LABEL = " LBL"
TAG_STRING = " RTS"
TAG_WIDE_STRING = "WRTS"


def _expect_tag(cur: Cursor, *allowed: str) -> str:
    start = cur.tell()
    tag = cur.take(4, "csf tag").decode("latin-1")
    if tag not in allowed:
        raise MalformedDataError("csf tag", start, f"expected {' or '.join(map(repr, allowed))}, got {tag!r}")
    return tag


def _read_string(cur: Cursor) -> CsfString:
    tag = _expect_tag(cur, TAG_STRING, TAG_WIDE_STRING)
    start = cur.tell()
    length = cur.u32()
    payload = bytes(~b & 0xFF for b in cur.take(2 * length, "csf string"))
    value = decode_text(payload, "csf string", start, wide=True)

    extra = None
    if tag == TAG_WIDE_STRING:
        extra = read_fixed_length_string(cur, cur.u32())
    return CsfString(value=value, extra=extra)


def _read_label(cur: Cursor) -> CsfLabel:
    _expect_tag(cur, TAG_LABEL)
    count = cur.u32()
    name = read_fixed_length_string(cur, cur.u32())
    return CsfLabel(name=name, strings=[_read_string(cur) for _ in range(count)])


@register_format(".csf")
def decode_string_table(cur: Cursor) -> StringTable:
    with cur.rollback():
        _expect_tag(cur, TAG_HEADER)
        version = cur.u32()
        num_labels = cur.u32()
        num_strings = cur.u32()
        cur.skip(4)  # reserved
        language = read_enum_u32(cur, CsfLanguage)

        labels = [_read_label(cur) for _ in range(num_labels)]

    found = sum(len(l.strings) for l in labels)
    if found != num_strings:
        logger.warning("csf: header declares %d strings, labels hold %d", num_strings, found)
    logger.debug("csf: %d labels, language %s", len(labels), language.name)
    return StringTable(version=version, language=language, labels=labels)
