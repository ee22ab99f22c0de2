from __future__ import annotations

import unittest

from chartcore.formatting import format_fixed, round_half_up


class FormatFixedTests(unittest.TestCase):
    def test_default_precision_is_zero_decimals(self) -> None:
        self.assertEqual(format_fixed(4.0), "4")
        self.assertEqual(format_fixed(3.6), "4")

    def test_ties_round_away_from_zero(self) -> None:
        self.assertEqual(format_fixed(2.5), "3")
        self.assertEqual(format_fixed(-2.5), "-3")

    def test_rounds_exact_binary_value(self) -> None:
        # 1.005 is stored slightly below 1.005.
        self.assertEqual(format_fixed(1.005, 2), "1.00")
        self.assertEqual(format_fixed(0.125, 2), "0.13")

    def test_pads_trailing_zeros(self) -> None:
        self.assertEqual(format_fixed(2, 3), "2.000")
        self.assertEqual(format_fixed(1 / 3, 2), "0.33")

    def test_negative_zero_is_rendered_unsigned(self) -> None:
        self.assertEqual(format_fixed(-0.0001, 0), "0")
        self.assertEqual(format_fixed(-0.0001, 2), "0.00")

    def test_non_finite_values_pass_through(self) -> None:
        self.assertEqual(format_fixed(float("nan")), "nan")
        self.assertEqual(format_fixed(float("inf"), 2), "inf")

    def test_large_values_do_not_overflow_decimal_context(self) -> None:
        self.assertEqual(format_fixed(1e30, 2), "1000000000000000019884624838656.00")

    def test_rejects_invalid_precision(self) -> None:
        with self.assertRaises(ValueError):
            format_fixed(1.0, -1)
        with self.assertRaises(ValueError):
            format_fixed(1.0, 21)

    def test_round_half_up_returns_float(self) -> None:
        self.assertEqual(round_half_up(10.0001, 3), 10.0)
        self.assertEqual(round_half_up(0.0005, 3), 0.001)
        self.assertEqual(round_half_up(-0.0005, 3), -0.001)


if __name__ == "__main__":
    unittest.main()
