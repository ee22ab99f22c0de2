from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned pixel rectangle with x1 <= x2 and y1 <= y2."""

    x1: float
    x2: float
    y1: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x1, self.x2, self.y1, self.y2)


@dataclass(frozen=True)
class PointValues:
    x: float
    y: float
    kind: Literal["point"] = "point"

    @property
    def aggregate_value(self) -> float:
        return self.y


@dataclass(frozen=True)
class IntervalValues:
    x1: float
    x2: float
    y: float
    kind: Literal["interval"] = "interval"

    @property
    def length(self) -> float:
        return self.x2 - self.x1

    @property
    def aggregate_value(self) -> float:
        return self.y


ItemValues = Union[PointValues, IntervalValues]


@dataclass(frozen=True)
class PlottedItem:
    index: int
    box: BoundingBox
    values: ItemValues
    generation: int


@dataclass(frozen=True)
class ItemSet:
    """All items plotted by one render pass; indices are only valid within it."""

    generation: int
    items: tuple[PlottedItem, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def get(self, index: int) -> PlottedItem | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def boxes(self) -> np.ndarray:
        if not self.items:
            return np.empty((0, 4), dtype=np.float64)
        return np.asarray([item.box.as_tuple() for item in self.items], dtype=np.float64)
