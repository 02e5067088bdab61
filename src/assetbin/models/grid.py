from __future__ import annotations
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Grid(BaseModel):
    """Row-major width x height grid; grid[x, y] is element y*width + x."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    values: Tuple = ()

    @model_validator(mode="after")
    def check_size(self):
        if len(self.values) != self.width * self.height:
            raise ValueError(
                f"{len(self.values)} values for a {self.width}x{self.height} grid"
            )
        return self

    def _index(self, xy: tuple[int, int]) -> int:
        x, y = xy
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def __getitem__(self, xy: tuple[int, int]):
        return self.values[self._index(xy)]

    def row(self, y: int) -> tuple:
        if not (0 <= y < self.height):
            raise IndexError(f"row {y} outside grid of height {self.height}")
        return tuple(self.values[y * self.width:(y + 1) * self.width])

    def rows(self) -> list[tuple]:
        return [self.row(y) for y in range(self.height)]


class UInt16Grid(_Grid):
    values: Tuple[int, ...] = ()


class BitGrid(_Grid):
    values: Tuple[bool, ...] = ()

    def count(self) -> int:
        """Number of set cells."""
        return sum(self.values)
