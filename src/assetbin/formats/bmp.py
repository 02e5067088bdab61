from __future__ import annotations
import logging

from ..binary.cursor import Cursor
from ..binary.errors import MalformedDataError
from ..binary.codecs import layout as L
from ..models.bitmap import Bitmap, BitmapCompression, BitmapFileHeader, BitmapInfoHeader
from .registry import register_format

logger = logging.getLogger(__name__)

BMP_MAGIC = 0x4D42  # "BM" read as little-endian u16

FILE_HEADER = L.StructLayout(
    "BITMAPFILEHEADER",
    (
        L.u16("magic"),
        L.u32("file_size"),
        L.u16("reserved1"),
        L.u16("reserved2"),
        L.u32("pixel_offset"),
    ),
    size=14,
    model=BitmapFileHeader,
)

INFO_HEADER = L.StructLayout(
    "BITMAPINFOHEADER",
    (
        L.u32("header_size"),
        L.s32("width"),
        L.s32("height"),
        L.u16("planes"),
        L.u16("bit_count"),
        L.enum_u32("compression", BitmapCompression),
        L.u32("image_size"),
        L.s32("x_pixels_per_meter"),
        L.s32("y_pixels_per_meter"),
        L.u32("colors_used"),
        L.u32("colors_important"),
    ),
    size=40,
    model=BitmapInfoHeader,
)


@register_format(".bmp")
def decode_bitmap(cur: Cursor) -> Bitmap:
    """Decode the file and info headers of a Windows bitmap."""
    start = cur.tell()
    with cur.rollback():
        fh = L.read_struct(cur, FILE_HEADER)
        if fh.magic != BMP_MAGIC:
            raise MalformedDataError("bitmap", start, f"bad magic 0x{fh.magic:04x}")
        ih = L.read_struct(cur, INFO_HEADER)

        # Larger (V4/V5) info headers extend the 40-byte one; skip the extension.
        extra = ih.header_size - INFO_HEADER.size
        if extra:
            logger.debug("bitmap: skipping %d bytes of extended info header", extra)
            cur.skip(extra)
    return Bitmap(file_header=fh, info_header=ih)
