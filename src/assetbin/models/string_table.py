from __future__ import annotations
from enum import IntEnum
from typing import List, Optional
from pydantic import BaseModel, Field

from ..binary.codecs.enums import register_enum


@register_enum
class CsfLanguage(IntEnum):
    ENGLISH_US = 0
    ENGLISH_UK = 1
    GERMAN = 2
    FRENCH = 3
    SPANISH = 4
    ITALIAN = 5
    JAPANESE = 6
    JABBERWOCKIE = 7
    KOREAN = 8
    CHINESE = 9

class CsfString(BaseModel):
    value: str
    extra: Optional[str] = None   # only present on WRTS entries

class CsfLabel(BaseModel):
    name: str
    strings: List[CsfString] = Field(default_factory=list)

class StringTable(BaseModel):
    version: int = Field(..., ge=0)
    language: CsfLanguage
    labels: List[CsfLabel] = Field(default_factory=list)

    def lookup(self, name: str) -> Optional[str]:
        """First string of the label `name` (case-insensitive), if any."""
        key = name.lower()
        for label in self.labels:
            if label.name.lower() == key and label.strings:
                return label.strings[0].value
        return None
