from __future__ import annotations

import unittest

import numpy as np

from chartcore.divides import generate_x_divides
from chartcore.errors import ChartConfigError
from chartcore.milestones import create_milestone_line, generate_milestones, parse_milestone_source


def _line(value=None, coord=None, axis="x"):
    return create_milestone_line(
        axis,
        origin=10.0,
        length=100.0,
        cross_start=200.0,
        cross_end=20.0,
        min_value=0.0,
        max_value=10.0,
        value=value,
        coord=coord,
    )


class MilestoneBoundaryTests(unittest.TestCase):
    def test_value_at_min_is_excluded(self) -> None:
        self.assertIsNone(_line(0.0))
        self.assertIsNone(_line(0.0004))

    def test_value_at_max_is_included(self) -> None:
        line = _line(10.0)
        self.assertIsNotNone(line)
        assert line is not None
        self.assertEqual(line.pixel_coord, 110.0)

    def test_value_rounding_to_max_is_included(self) -> None:
        self.assertIsNotNone(_line(10.0001))
        self.assertIsNone(_line(10.001))

    def test_values_outside_domain_are_excluded(self) -> None:
        self.assertIsNone(_line(-1.0))
        self.assertIsNone(_line(11.0))


class MilestoneGeometryTests(unittest.TestCase):
    def test_x_milestone_is_vertical_across_cross_range(self) -> None:
        line = _line(5.0)
        assert line is not None
        self.assertEqual(line.pixel_coord, 60.0)
        self.assertEqual((line.line.x1, line.line.y1, line.line.x2, line.line.y2), (60.0, 200.0, 60.0, 20.0))

    def test_y_milestone_is_horizontal(self) -> None:
        line = create_milestone_line(
            "y",
            origin=200.0,
            length=-100.0,
            cross_start=10.0,
            cross_end=310.0,
            min_value=0.0,
            max_value=4.0,
            value=1.0,
        )
        assert line is not None
        self.assertEqual((line.line.x1, line.line.y1, line.line.x2, line.line.y2), (10.0, 175.0, 310.0, 175.0))

    def test_coordinate_only_recovers_value(self) -> None:
        line = _line(coord=60.0)
        assert line is not None
        self.assertAlmostEqual(line.value, 5.0)
        self.assertEqual(line.pixel_coord, 60.0)

    def test_requires_value_or_coord(self) -> None:
        with self.assertRaises(ValueError):
            _line()


class MilestoneSourceTests(unittest.TestCase):
    def _generate(self, source):
        divides = generate_x_divides(
            (0.0, 10.0), 5, 100.0, x_origin=10.0, y_origin=200.0, divide_offset=5.0, spacing=5.0, font_size=12.0
        )
        return generate_milestones(
            source,
            "x",
            visible_values=np.asarray([0.0, 2.5, 10.0]),
            divides=divides,
            origin=10.0,
            length=100.0,
            cross_start=200.0,
            cross_end=20.0,
            min_value=0.0,
            max_value=10.0,
        )

    def test_values_source_uses_visible_data(self) -> None:
        lines = self._generate("values")
        self.assertEqual([m.value for m in lines], [2.5, 10.0])

    def test_divides_source_reuses_divide_coordinates(self) -> None:
        lines = self._generate("divides")
        self.assertEqual([m.pixel_coord for m in lines], [30.0, 50.0, 70.0, 90.0, 110.0])

    def test_explicit_values(self) -> None:
        lines = self._generate((1.0, 12.0, 3.0))
        self.assertEqual([m.value for m in lines], [1.0, 3.0])

    def test_absent_source_yields_nothing(self) -> None:
        self.assertEqual(self._generate(None), ())

    def test_parse_source(self) -> None:
        self.assertEqual(parse_milestone_source("values"), "values")
        self.assertEqual(parse_milestone_source([1, 2.5]), (1.0, 2.5))
        self.assertEqual(parse_milestone_source(np.asarray([3.0])), (3.0,))
        self.assertIsNone(parse_milestone_source(None))
        with self.assertRaises(ChartConfigError):
            parse_milestone_source("ticks")
        with self.assertRaises(ChartConfigError):
            parse_milestone_source([1, "two"])
        with self.assertRaises(ChartConfigError):
            parse_milestone_source(5)


if __name__ == "__main__":
    unittest.main()
