from __future__ import annotations
from enum import IntEnum
from pydantic import BaseModel, Field

from ..binary.codecs.enums import register_enum


@register_enum
class BitmapCompression(IntEnum):
    RGB = 0
    RLE8 = 1
    RLE4 = 2
    BITFIELDS = 3
    JPEG = 4
    PNG = 5

class BitmapFileHeader(BaseModel):
    magic: int
    file_size: int = Field(..., ge=0)
    reserved1: int = 0
    reserved2: int = 0
    pixel_offset: int = Field(..., ge=0)

class BitmapInfoHeader(BaseModel):
    header_size: int = Field(..., ge=40)
    width: int
    height: int   # negative means rows are stored top-down
    planes: int = Field(..., ge=1)
    bit_count: int
    compression: BitmapCompression = BitmapCompression.RGB
    image_size: int = 0
    x_pixels_per_meter: int = 0
    y_pixels_per_meter: int = 0
    colors_used: int = 0
    colors_important: int = 0

    @property
    def top_down(self) -> bool:
        return self.height < 0

class Bitmap(BaseModel):
    file_header: BitmapFileHeader
    info_header: BitmapInfoHeader
