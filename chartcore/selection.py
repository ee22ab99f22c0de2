from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chartcore.items import BoundingBox, ItemSet, PlottedItem


PRIMARY_BUTTON = 0


def normalize_rect(ax: float, ay: float, bx: float, by: float) -> BoundingBox:
    return BoundingBox(x1=min(ax, bx), x2=max(ax, bx), y1=min(ay, by), y2=max(ay, by))


def axis_overlap(b1: float, b2: float, q1: float, q2: float) -> bool:
    return (b1 <= q1 and b2 >= q2) or (q1 <= b1 <= q2) or (q1 <= b2 <= q2)


def _axis_overlap_mask(b1: np.ndarray, b2: np.ndarray, q1: float, q2: float) -> np.ndarray:
    return ((b1 <= q1) & (b2 >= q2)) | ((b1 >= q1) & (b1 <= q2)) | ((b2 >= q1) & (b2 <= q2))


class SelectionIndex:
    """Brute-force rectangle hit testing over the items of one render pass.

    Every query scans all boxes; fine for the item counts a chart displays.
    """

    def __init__(self, item_set: ItemSet) -> None:
        self._item_set = item_set
        self._boxes = item_set.boxes()

    @property
    def generation(self) -> int:
        return self._item_set.generation

    def mask(self, rect: BoundingBox) -> np.ndarray:
        b = self._boxes
        if b.shape[0] == 0:
            return np.zeros(0, dtype=bool)
        x_hit = _axis_overlap_mask(b[:, 0], b[:, 1], rect.x1, rect.x2)
        y_hit = _axis_overlap_mask(b[:, 2], b[:, 3], rect.y1, rect.y2)
        return x_hit & y_hit

    def query(self, rect: BoundingBox) -> list[PlottedItem]:
        hits = np.flatnonzero(self.mask(rect))
        return [self._item_set.items[int(i)] for i in hits]


@dataclass
class SelectionDrag:
    active: bool = False
    origin: tuple[float, float] | None = None
    rect: BoundingBox | None = None

    @property
    def moved(self) -> bool:
        return self.rect is not None and (self.rect.width > 0 or self.rect.height > 0)

    def begin(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> bool:
        if button != PRIMARY_BUTTON:
            return False
        self.active = True
        self.origin = (float(x), float(y))
        self.rect = None
        return True

    def update(self, x: float, y: float) -> BoundingBox | None:
        if not self.active or self.origin is None:
            return None
        ox, oy = self.origin
        self.rect = normalize_rect(ox, oy, float(x), float(y))
        return self.rect

    def end(self, button: int = PRIMARY_BUTTON) -> bool:
        if button != PRIMARY_BUTTON:
            return False
        self.active = False
        self.origin = None
        self.rect = None
        return True
