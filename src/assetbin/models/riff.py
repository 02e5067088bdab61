from __future__ import annotations
from enum import IntEnum
from typing import List, Optional
from pydantic import BaseModel, Field

from ..binary.codecs.enums import register_enum


@register_enum
class WaveFormat(IntEnum):
    PCM = 0x0001
    ADPCM = 0x0002
    IEEE_FLOAT = 0x0003
    ALAW = 0x0006
    MULAW = 0x0007
    IMA_ADPCM = 0x0011
    MPEG_LAYER3 = 0x0055
    EXTENSIBLE = 0xFFFE

class WaveFormatHeader(BaseModel):
    audio_format: WaveFormat
    channels: int = Field(..., ge=1)
    sample_rate: int = Field(..., ge=1)
    byte_rate: int = Field(..., ge=0)
    block_align: int = Field(..., ge=0)
    bits_per_sample: int = Field(..., ge=0)

class Wave(BaseModel):
    format: WaveFormatHeader
    data_size: int = Field(..., ge=0)

    @property
    def duration_s(self) -> float:
        if not self.format.byte_rate:
            return 0.0
        return self.data_size / self.format.byte_rate

class AniHeader(BaseModel):
    header_size: int
    num_frames: int = Field(..., ge=0)
    num_steps: int = Field(..., ge=0)
    width: int = 0
    height: int = 0
    bit_count: int = 0
    planes: int = 0
    display_rate: int = 0   # default step time, in 1/60 s
    flags: int = 0

    @property
    def has_icon_frames(self) -> bool:
        return bool(self.flags & 0x1)

    @property
    def has_sequence(self) -> bool:
        return bool(self.flags & 0x2)

class AnimatedCursor(BaseModel):
    header: AniHeader
    rates: List[int] = Field(default_factory=list)
    sequence: List[int] = Field(default_factory=list)
    frame_sizes: List[int] = Field(default_factory=list)
    title: Optional[str] = None
    artist: Optional[str] = None

    def step_rate(self, step: int) -> int:
        """Display time of animation step `step`, in 1/60 s."""
        if self.rates:
            return self.rates[step]
        return self.header.display_rate

    def step_frame(self, step: int) -> int:
        if self.sequence:
            return self.sequence[step]
        return step
