from __future__ import annotations
import struct

from ..cursor import Cursor
from ..errors import GridSizeError
from ...config import get_settings
from ...models.grid import BitGrid, UInt16Grid


def _check_dims(cur: Cursor, op: str, width: int, height: int, nbytes: int) -> None:
    if width < 0 or height < 0:
        raise GridSizeError(op, cur.tell(), f"negative dimensions {width}x{height}")
    limit = get_settings().max_grid_bytes
    if nbytes > limit:
        raise GridSizeError(
            op, cur.tell(), f"{width}x{height} needs {nbytes} bytes, limit is {limit}"
        )
    cur.require(nbytes, op)


def read_uint16_grid(cur: Cursor, width: int, height: int) -> UInt16Grid:
    """
    width*height little-endian u16 values, y outer / x inner.
    """
    op = "uint16 grid"
    count = width * height
    _check_dims(cur, op, width, height, 2 * count)
    raw = cur.take(2 * count, op)
    return UInt16Grid(width=width, height=height, values=struct.unpack(f"<{count}H", raw))


def read_bit_grid(cur: Cursor, width: int, height: int) -> BitGrid:
    """
    ceil(width/8) bytes per row. Column x is bit (x % 8), LSB first, of byte
    x // 8 of its row; a row never continues in the previous row's last byte.
    """
    op = "bit grid"
    stride = (width + 7) // 8
    _check_dims(cur, op, width, height, stride * height)
    if stride == 0:
        return BitGrid(width=width, height=height, values=())
    out: list[bool] = []
    for _ in range(height):
        row = cur.take(stride, op)
        out.extend(bool(row[x >> 3] & (1 << (x & 7))) for x in range(width))
    return BitGrid(width=width, height=height, values=tuple(out))
