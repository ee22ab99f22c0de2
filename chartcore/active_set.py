from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Literal

from chartcore.items import ItemSet, PlottedItem


LOGGER = logging.getLogger(__name__)


ActiveState = Literal["empty", "single", "multiple"]


class ActiveItemSetController:
    """Ordered set of selected items for the current item generation.

    Items are identified by index, which is only meaningful for the item set
    currently bound; items carrying another generation are ignored.
    """

    def __init__(self, item_set: ItemSet | None = None) -> None:
        self._item_set: ItemSet | None = None
        self._active: list[PlottedItem] = []
        if item_set is not None:
            self.bind(item_set)

    @property
    def generation(self) -> int | None:
        return None if self._item_set is None else self._item_set.generation

    @property
    def items(self) -> tuple[PlottedItem, ...]:
        return tuple(self._active)

    @property
    def indices(self) -> tuple[int, ...]:
        return tuple(item.index for item in self._active)

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(item.values.aggregate_value for item in self._active)

    @property
    def state(self) -> ActiveState:
        if not self._active:
            return "empty"
        if len(self._active) == 1:
            return "single"
        return "multiple"

    def __len__(self) -> int:
        return len(self._active)

    def bind(self, item_set: ItemSet) -> None:
        if self._item_set is None or item_set.generation != self._item_set.generation:
            if self._active:
                LOGGER.debug(
                    "item generation %s -> %s, clearing %d active items",
                    self.generation,
                    item_set.generation,
                    len(self._active),
                )
            self._active = []
        else:
            # Same generation re-laid out: indices still hold, boxes may have moved.
            refreshed = (item_set.get(item.index) for item in self._active)
            self._active = [item for item in refreshed if item is not None]
        self._item_set = item_set

    def is_active(self, index: int) -> bool:
        return any(item.index == index for item in self._active)

    def add(self, item: PlottedItem) -> bool:
        if not self._is_current(item):
            return False
        self._active.append(item)
        return True

    def remove(self, index: int) -> None:
        self._active = [item for item in self._active if item.index != index]

    def replace(self, items: Sequence[PlottedItem]) -> bool:
        if not all(self._is_current(item) for item in items):
            return False
        self._active = list(items)
        return True

    def clear(self) -> None:
        self._active = []

    def select_all(self) -> None:
        self._active = [] if self._item_set is None else list(self._item_set.items)

    def click(self, item: PlottedItem, *, ctrl: bool = False) -> None:
        if not self._is_current(item):
            return
        active = self.is_active(item.index)
        if ctrl:
            if active:
                self.remove(item.index)
            else:
                self.add(item)
            return
        if len(self._active) > 1:
            self.replace([item])
        elif active:
            self.clear()
        else:
            self.replace([item])

    def _is_current(self, item: PlottedItem) -> bool:
        if self._item_set is None or item.generation != self._item_set.generation:
            LOGGER.debug("ignoring item %d from stale generation %d", item.index, item.generation)
            return False
        return True
