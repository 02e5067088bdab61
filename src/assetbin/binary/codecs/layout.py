from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from ..cursor import Cursor
from ..errors import LayoutError, MalformedDataError
from .enums import read_enum_i32, read_enum_u8, read_enum_u16, read_enum_u32
from .strings import read_fixed_length_string

# A packed structure is an ordered plan of fields, each with an explicit byte
# width and its own reader. Fields with an empty name are consumed and dropped.


@dataclass(frozen=True)
class StructField:
    name: str
    width: int
    read: Callable[[Cursor], Any]


def u8(name: str) -> StructField:  return StructField(name, 1, Cursor.u8)
def s8(name: str) -> StructField:  return StructField(name, 1, Cursor.s8)
def u16(name: str) -> StructField: return StructField(name, 2, Cursor.u16)
def s16(name: str) -> StructField: return StructField(name, 2, Cursor.s16)
def u24(name: str) -> StructField: return StructField(name, 3, Cursor.u24)
def u32(name: str) -> StructField: return StructField(name, 4, Cursor.u32)
def s32(name: str) -> StructField: return StructField(name, 4, Cursor.s32)
def f32(name: str) -> StructField: return StructField(name, 4, Cursor.f32)
def u16_be(name: str) -> StructField: return StructField(name, 2, Cursor.u16_be)
def u32_be(name: str) -> StructField: return StructField(name, 4, Cursor.u32_be)

def raw(name: str, count: int) -> StructField:
    return StructField(name, count, lambda c: c.take(count, f"field {name}"))

def fixed_str(name: str, count: int) -> StructField:
    return StructField(name, count, lambda c: read_fixed_length_string(c, count))

def padding(count: int) -> StructField:
    return StructField("", count, lambda c: c.skip(count))

def enum_u8(name: str, enum_cls: Type[IntEnum]) -> StructField:
    return StructField(name, 1, lambda c: read_enum_u8(c, enum_cls))

def enum_u16(name: str, enum_cls: Type[IntEnum]) -> StructField:
    return StructField(name, 2, lambda c: read_enum_u16(c, enum_cls))

def enum_i32(name: str, enum_cls: Type[IntEnum]) -> StructField:
    return StructField(name, 4, lambda c: read_enum_i32(c, enum_cls))

def enum_u32(name: str, enum_cls: Type[IntEnum]) -> StructField:
    return StructField(name, 4, lambda c: read_enum_u32(c, enum_cls))


@dataclass(frozen=True)
class StructLayout:
    """
    Field plan for a packed, sequential structure.

    `size` is the declared byte size; when omitted it is the sum of the field
    widths. A declared size that disagrees with the fields is a LayoutError.
    If `model` is set, read_struct builds that pydantic model from the fields.
    """
    name: str
    fields: Tuple[StructField, ...]
    size: Optional[int] = None
    model: Optional[Type[BaseModel]] = None

    def __post_init__(self):
        total = 0
        seen = set()
        for f in self.fields:
            if f.width < 0:
                raise LayoutError(f"{self.name}.{f.name}: negative width {f.width}")
            if f.name:
                if f.name in seen:
                    raise LayoutError(f"{self.name}: duplicate field {f.name!r}")
                seen.add(f.name)
            total += f.width
        if self.size is None:
            object.__setattr__(self, "size", total)
        elif self.size != total:
            raise LayoutError(f"{self.name}: fields cover {total} bytes, declared size is {self.size}")

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.name)


def read_struct(cur: Cursor, layout: StructLayout) -> Any:
    """
    Consume exactly layout.size bytes and decode them field by field.
    Returns a dict, or an instance of layout.model when one is set.
    """
    op = f"struct {layout.name}"
    start = cur.tell()
    cur.require(layout.size, op)
    with cur.rollback():
        out: Dict[str, Any] = {}
        for f in layout.fields:
            before = cur.tell()
            value = f.read(cur)
            if cur.tell() - before != f.width:
                raise LayoutError(
                    f"{layout.name}.{f.name}: reader consumed {cur.tell() - before} bytes, width is {f.width}"
                )
            if f.name:
                out[f.name] = value

        if layout.model is None:
            return out
        try:
            return layout.model(**out)
        except ValidationError as e:
            raise MalformedDataError(op, start, str(e)) from e
