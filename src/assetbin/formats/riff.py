"""
RIFF containers: WAV audio headers and ANI animated cursors.

A RIFF file is "RIFF", u32 size, a 4-char form type, then chunks of
(4-char id, u32 size, data, one pad byte when size is odd).
"""
from __future__ import annotations
import logging
from typing import Iterator, Tuple

from ..binary.cursor import Cursor
from ..binary.errors import MalformedDataError
from ..binary.codecs import layout as L
from ..binary.codecs.strings import read_null_terminated_string
from ..models.riff import AniHeader, AnimatedCursor, Wave, WaveFormat, WaveFormatHeader
from .registry import register_format

logger = logging.getLogger(__name__)

WAVE_FMT = L.StructLayout(
    "WAVEFORMAT",
    (
        L.enum_u16("audio_format", WaveFormat),
        L.u16("channels"),
        L.u32("sample_rate"),
        L.u32("byte_rate"),
        L.u16("block_align"),
        L.u16("bits_per_sample"),
    ),
    size=16,
    model=WaveFormatHeader,
)

ANI_HEADER = L.StructLayout(
    "ANIHEADER",
    (
        L.u32("header_size"),
        L.u32("num_frames"),
        L.u32("num_steps"),
        L.u32("width"),
        L.u32("height"),
        L.u32("bit_count"),
        L.u32("planes"),
        L.u32("display_rate"),
        L.u32("flags"),
    ),
    size=36,
    model=AniHeader,
)


def _fourcc(cur: Cursor) -> str:
    return cur.take(4, "fourcc").decode("latin-1")


def read_riff_header(cur: Cursor, form: str) -> Cursor:
    """Check the RIFF header and form type; returns a cursor over the chunk area."""
    start = cur.tell()
    magic = _fourcc(cur)
    if magic != "RIFF":
        raise MalformedDataError("riff header", start, f"bad magic {magic!r}")
    size = cur.u32()
    found = _fourcc(cur)
    if found != form:
        raise MalformedDataError("riff header", start + 8, f"form {found!r}, expected {form!r}")
    # size counts the form type plus the chunks
    body = max(size - 4, 0)
    if body > cur.remaining():
        logger.warning("riff: declared size %d exceeds the %d bytes present", size, cur.remaining() + 4)
        body = cur.remaining()
    return cur.sub(body)


def iter_chunks(cur: Cursor) -> Iterator[Tuple[str, Cursor]]:
    """Yield (chunk id, cursor over chunk data) until the cursor is exhausted."""
    while cur.remaining() >= 8:
        cid = _fourcc(cur)
        size = cur.u32()
        body = cur.sub(size)
        if size & 1 and cur.remaining():
            cur.skip(1)
        yield cid, body
    if cur.remaining():
        logger.warning("riff: %d stray bytes after last chunk at offset %d", cur.remaining(), cur.tell())
        cur.skip(cur.remaining())


def _read_u32_table(body: Cursor) -> list[int]:
    return [body.u32() for _ in range(body.remaining() // 4)]


@register_format(".wav")
def decode_wave(cur: Cursor) -> Wave:
    start = cur.tell()
    with cur.rollback():
        chunks = read_riff_header(cur, "WAVE")
        fmt = None
        data_size = None
        for cid, body in iter_chunks(chunks):
            if cid == "fmt ":
                # WAVEFORMATEX and WAVEFORMATEXTENSIBLE extend the 16-byte header
                fmt = L.read_struct(body, WAVE_FMT)
            elif cid == "data":
                data_size = len(body)
            else:
                logger.debug("wav: skipping %r chunk (%d bytes)", cid, len(body))

        if fmt is None:
            raise MalformedDataError("wav", start, "no 'fmt ' chunk")
        if data_size is None:
            raise MalformedDataError("wav", start, "no 'data' chunk")
    return Wave(format=fmt, data_size=data_size)


def _read_info(body: Cursor, out: dict) -> None:
    for cid, sub in iter_chunks(body):
        if cid == "INAM":
            out["title"] = read_null_terminated_string(sub)
        elif cid == "IART":
            out["artist"] = read_null_terminated_string(sub)


@register_format(".ani")
def decode_cursor(cur: Cursor) -> AnimatedCursor:
    start = cur.tell()
    with cur.rollback():
        chunks = read_riff_header(cur, "ACON")
        header = None
        out: dict = {"rates": [], "sequence": [], "frame_sizes": []}
        for cid, body in iter_chunks(chunks):
            if cid == "anih":
                header = L.read_struct(body, ANI_HEADER)
            elif cid == "rate":
                out["rates"] = _read_u32_table(body)
            elif cid == "seq ":
                out["sequence"] = _read_u32_table(body)
            elif cid == "LIST":
                kind = _fourcc(body)
                if kind == "fram":
                    out["frame_sizes"] = [len(icon) for fid, icon in iter_chunks(body) if fid == "icon"]
                elif kind == "INFO":
                    _read_info(body, out)
            else:
                logger.warning("ani: unknown chunk %r (%d bytes) skipped", cid, len(body))

        if header is None:
            raise MalformedDataError("ani", start, "no 'anih' chunk")
        for name in ("rates", "sequence"):
            if out[name] and len(out[name]) != header.num_steps:
                raise MalformedDataError(
                    "ani", start, f"{name} has {len(out[name])} entries, header declares {header.num_steps} steps"
                )
    return AnimatedCursor(header=header, **out)
