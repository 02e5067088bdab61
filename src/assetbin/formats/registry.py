"""
Extension -> format decoder registry.

Each format module registers its top-level decoder with @register_format;
importing this module imports the built-in formats so they are available.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Callable, Dict, Union

from pydantic import BaseModel

from ..binary.cursor import Cursor
from ..binary.reader import decode

logger = logging.getLogger(__name__)

FormatDecoder = Callable[[Cursor], BaseModel]

FORMATS: Dict[str, FormatDecoder] = {}

_BUILTIN_MODULES = ("bmp", "csf", "riff")


class UnsupportedFormatError(ValueError):
    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"no decoder registered for {Path(self.path).suffix or 'files without extension'}: {self.path}")


def register_format(*extensions: str):
    """Decorator to register a decoder for one or more file extensions."""
    def decorator(fn: FormatDecoder) -> FormatDecoder:
        for ext in extensions:
            FORMATS[ext.lower()] = fn
        return fn
    return decorator


def _load_builtins() -> None:
    for name in _BUILTIN_MODULES:
        importlib.import_module(f"{__package__}.{name}")


def supported_extensions() -> list[str]:
    _load_builtins()
    return sorted(FORMATS)


def decoder_for(path: Union[str, Path]) -> FormatDecoder:
    _load_builtins()
    ext = Path(str(path)).suffix.lower()
    try:
        return FORMATS[ext]
    except KeyError:
        raise UnsupportedFormatError(path) from None


def decode_file(path: Union[str, Path], *, offset: int = 0) -> BaseModel:
    """Decode a file with the decoder registered for its extension."""
    fn = decoder_for(path)
    logger.debug("decoding %s with %s", path, fn.__name__)
    return decode(Path(str(path)), fn, offset=offset)
