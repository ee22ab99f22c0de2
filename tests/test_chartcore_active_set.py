from __future__ import annotations

import unittest

from chartcore.active_set import ActiveItemSetController
from chartcore.items import BoundingBox, ItemSet, PlottedItem, PointValues


def _items(generation: int, count: int = 3, shift: float = 0.0) -> ItemSet:
    items = tuple(
        PlottedItem(
            index=i,
            box=BoundingBox(x1=i * 10.0 + shift, x2=i * 10.0 + 5.0 + shift, y1=0.0, y2=5.0),
            values=PointValues(x=float(i), y=float(i + 1)),
            generation=generation,
        )
        for i in range(count)
    )
    return ItemSet(generation=generation, items=items)


class ActiveStateTests(unittest.TestCase):
    def test_state_follows_count(self) -> None:
        item_set = _items(1)
        active = ActiveItemSetController(item_set)
        self.assertEqual(active.state, "empty")
        active.add(item_set.items[0])
        self.assertEqual(active.state, "single")
        active.add(item_set.items[2])
        self.assertEqual(active.state, "multiple")
        self.assertEqual(active.indices, (0, 2))
        self.assertEqual(active.values, (1.0, 3.0))

    def test_select_all_and_clear(self) -> None:
        item_set = _items(1)
        active = ActiveItemSetController(item_set)
        active.select_all()
        self.assertEqual(active.indices, (0, 1, 2))
        active.clear()
        self.assertEqual(len(active), 0)

    def test_select_all_without_items(self) -> None:
        active = ActiveItemSetController()
        active.select_all()
        self.assertEqual(active.items, ())
        self.assertIsNone(active.generation)


class ClickTests(unittest.TestCase):
    def setUp(self) -> None:
        self.item_set = _items(1)
        self.active = ActiveItemSetController(self.item_set)
        self.a, self.b, self.c = self.item_set.items

    def test_plain_click_selects_single(self) -> None:
        self.active.click(self.a)
        self.assertEqual(self.active.indices, (0,))

    def test_plain_click_on_sole_active_item_clears(self) -> None:
        self.active.click(self.a)
        self.active.click(self.a)
        self.assertEqual(self.active.indices, ())

    def test_plain_click_on_other_item_replaces(self) -> None:
        self.active.click(self.a)
        self.active.click(self.b)
        self.assertEqual(self.active.indices, (1,))

    def test_plain_click_collapses_multiple_selection(self) -> None:
        self.active.replace([self.a, self.b])
        self.active.click(self.a)
        self.assertEqual(self.active.indices, (0,))

    def test_ctrl_click_toggles(self) -> None:
        self.active.click(self.a, ctrl=True)
        self.active.click(self.c, ctrl=True)
        self.assertEqual(self.active.indices, (0, 2))
        self.active.click(self.a, ctrl=True)
        self.assertEqual(self.active.indices, (2,))


class GenerationTests(unittest.TestCase):
    def test_new_generation_clears_selection(self) -> None:
        active = ActiveItemSetController(_items(1))
        active.select_all()
        with self.assertLogs("chartcore.active_set", level="DEBUG") as logs:
            active.bind(_items(2))
        self.assertEqual(active.items, ())
        self.assertEqual(active.generation, 2)
        self.assertTrue(any("clearing 3 active items" in line for line in logs.output))

    def test_same_generation_refreshes_boxes(self) -> None:
        item_set = _items(1)
        active = ActiveItemSetController(item_set)
        active.add(item_set.items[1])
        self.assertEqual(active.items[0].box.x1, 10.0)
        active.bind(_items(1, shift=7.0))
        self.assertEqual(active.indices, (1,))
        self.assertEqual(active.items[0].box.x1, 17.0)

    def test_same_generation_drops_indices_that_vanished(self) -> None:
        active = ActiveItemSetController(_items(1, count=3))
        active.select_all()
        active.bind(_items(1, count=2))
        self.assertEqual(active.indices, (0, 1))

    def test_stale_items_are_ignored(self) -> None:
        old = _items(1)
        active = ActiveItemSetController(old)
        active.bind(_items(2))
        with self.assertLogs("chartcore.active_set", level="DEBUG") as logs:
            self.assertFalse(active.add(old.items[0]))
            self.assertFalse(active.replace([old.items[1]]))
            active.click(old.items[2])
        self.assertEqual(active.items, ())
        self.assertTrue(any("stale generation 1" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
