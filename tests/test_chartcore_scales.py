from __future__ import annotations

import math
import random
import unittest

import numpy as np

from chartcore.errors import ChartDataError
from chartcore.scales import clamp, map_values, natural_bounds, to_pixel, to_value


class CoordinateMapperTests(unittest.TestCase):
    def test_to_pixel_is_linear_from_origin(self) -> None:
        self.assertEqual(to_pixel(10.0, 100.0, 0.0, 5.0), 10.0)
        self.assertEqual(to_pixel(10.0, 100.0, 5.0, 5.0), 110.0)
        self.assertEqual(to_pixel(10.0, 100.0, 2.5, 5.0), 60.0)

    def test_negative_length_flips_axis(self) -> None:
        self.assertEqual(to_pixel(200.0, -100.0, 5.0, 5.0), 100.0)
        self.assertEqual(to_pixel(200.0, -100.0, 1.0, 4.0), 175.0)

    def test_round_trip_within_tolerance(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            max_value = rng.uniform(0.01, 1e4)
            value = rng.uniform(1e-6, 1.0) * max_value
            origin = rng.uniform(-500.0, 500.0)
            length = rng.choice([-1.0, 1.0]) * rng.uniform(1.0, 2000.0)
            coord = to_pixel(origin, length, value, max_value)
            back = to_value(origin, length, coord, max_value)
            self.assertTrue(math.isclose(back, value, rel_tol=1e-9, abs_tol=1e-9 * max_value))

    def test_zero_max_value_propagates_non_finite(self) -> None:
        self.assertTrue(math.isnan(to_pixel(0.0, 100.0, 0.0, 0.0)))
        self.assertTrue(math.isinf(to_pixel(0.0, 100.0, 1.0, 0.0)))

    def test_map_values_matches_scalar_mapping(self) -> None:
        values = np.asarray([0.0, 1.0, 2.0, 3.0])
        mapped = map_values(10.0, 390.0, values, 3.0)
        expected = [to_pixel(10.0, 390.0, v, 3.0) for v in values.tolist()]
        self.assertTrue(np.allclose(mapped, expected))

    def test_clamp(self) -> None:
        self.assertEqual(clamp(-1.0, 0.0, 5.0), 0.0)
        self.assertEqual(clamp(7.0, 0.0, 5.0), 5.0)
        self.assertEqual(clamp(3.0, 0.0, 5.0), 3.0)


class NaturalBoundsTests(unittest.TestCase):
    def test_point_bounds_use_max_per_axis(self) -> None:
        data = np.asarray([[1.0, 2.0], [2.0, 4.0], [3.0, 1.0]])
        bounds = natural_bounds(data, "point")
        self.assertEqual((bounds.x_max, bounds.y_max), (3.0, 4.0))

    def test_interval_bounds_use_x2(self) -> None:
        data = np.asarray([[0.0, 1.0, 2.0], [1.0, 6.0, 4.0]])
        bounds = natural_bounds(data, "interval")
        self.assertEqual((bounds.x_max, bounds.y_max), (6.0, 4.0))

    def test_overrides_win(self) -> None:
        data = np.asarray([[1.0, 2.0]])
        bounds = natural_bounds(data, "point", x_max_value=10.0, y_max_value=20.0)
        self.assertEqual((bounds.x_max, bounds.y_max), (10.0, 20.0))

    def test_empty_dataset_requires_overrides(self) -> None:
        empty = np.empty((0, 2))
        with self.assertRaises(ChartDataError):
            natural_bounds(empty, "point")
        bounds = natural_bounds(empty, "point", x_max_value=1.0, y_max_value=2.0)
        self.assertEqual((bounds.x_max, bounds.y_max), (1.0, 2.0))


if __name__ == "__main__":
    unittest.main()
