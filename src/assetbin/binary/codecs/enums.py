from __future__ import annotations
from enum import IntEnum
from threading import Lock
from typing import Callable, Dict, FrozenSet, Type, TypeVar

from ..cursor import Cursor
from ..errors import MalformedEnumError

E = TypeVar("E", bound=IntEnum)

# enum type -> legal raw values, filled when the enum is registered
_VALID_VALUES: Dict[type, FrozenSet[int]] = {}
_LOCK = Lock()


def register_enum(enum_cls: Type[E]) -> Type[E]:
    """Decorator recording the legal raw values of an IntEnum."""
    with _LOCK:
        _VALID_VALUES[enum_cls] = frozenset(int(m.value) for m in enum_cls)
    return enum_cls


def valid_values(enum_cls: Type[IntEnum]) -> FrozenSet[int]:
    values = _VALID_VALUES.get(enum_cls)
    if values is None:
        register_enum(enum_cls)
        values = _VALID_VALUES[enum_cls]
    return values


def _cast(cur: Cursor, enum_cls: Type[E], read: Callable[[Cursor], int], op: str) -> E:
    start = cur.tell()
    with cur.rollback():
        raw = read(cur)
        if raw not in valid_values(enum_cls):
            raise MalformedEnumError(op, start, enum_cls.__name__, raw)
    return enum_cls(raw)


def read_enum_u8(cur: Cursor, enum_cls: Type[E]) -> E:
    return _cast(cur, enum_cls, Cursor.u8, "enum u8")

def read_enum_u16(cur: Cursor, enum_cls: Type[E]) -> E:
    return _cast(cur, enum_cls, Cursor.u16, "enum u16")

def read_enum_i32(cur: Cursor, enum_cls: Type[E]) -> E:
    """Signed 32-bit raw value; formats store some 16-bit enums widened to int32."""
    return _cast(cur, enum_cls, Cursor.s32, "enum i32")

def read_enum_u32(cur: Cursor, enum_cls: Type[E]) -> E:
    return _cast(cur, enum_cls, Cursor.u32, "enum u32")
