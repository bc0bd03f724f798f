"""Unit tests for numeric helpers."""

import math
import unittest

from stockdash.numeric import (
    NOT_AVAILABLE, fcf_per_share_growth, format_currency, format_dollar_amount,
    format_percentage, is_number, round_to_decimal, safe_divide, safe_ratio, safe_round,
)


class TestRounding(unittest.TestCase):
    """Test rounding helpers."""

    def test_round_to_decimal(self):
        self.assertEqual(round_to_decimal(3.14159, 2), 3.14)
        self.assertEqual(round_to_decimal(3.14159, 3), 3.142)

    def test_round_defaults_to_two_places(self):
        self.assertEqual(round_to_decimal(2.71828, 0), 2.72)
        self.assertEqual(round_to_decimal(2.71828, -1), 2.72)

    def test_round_passes_nan_through(self):
        self.assertTrue(math.isnan(round_to_decimal(float("nan"))))

    def test_safe_round(self):
        self.assertEqual(safe_round(None), 0.0)
        self.assertEqual(safe_round(float("nan")), 0.0)
        self.assertEqual(safe_round(float("inf")), 0.0)
        self.assertEqual(safe_round(1.005001), 1.01)


class TestDivision(unittest.TestCase):
    """Test guarded division."""

    def test_safe_divide(self):
        self.assertEqual(safe_divide(10, 4), 2.5)
        self.assertEqual(safe_divide(10, 0), 0.0)
        self.assertEqual(safe_divide(10, 0, default=-1), -1)
        self.assertEqual(safe_divide(None, 5), 0.0)

    def test_safe_ratio(self):
        self.assertEqual(safe_ratio(100, 8), "12.50")
        self.assertEqual(safe_ratio(100, 0), NOT_AVAILABLE)
        self.assertEqual(safe_ratio(None, 3), NOT_AVAILABLE)

    def test_is_number(self):
        self.assertTrue(is_number(3))
        self.assertTrue(is_number(-0.5))
        self.assertFalse(is_number(True))
        self.assertFalse(is_number("3"))
        self.assertFalse(is_number(float("inf")))


class TestFormatting(unittest.TestCase):
    """Test display formatting."""

    def test_dollar_amount_suffixes(self):
        self.assertEqual(format_dollar_amount(2.5e12), "2.50T")
        self.assertEqual(format_dollar_amount(3.21e9), "3.21B")
        self.assertEqual(format_dollar_amount(4_560_000), "4.56M")
        self.assertEqual(format_dollar_amount(999.5), "999.50")

    def test_currency(self):
        self.assertEqual(format_currency(1234.5), "$1,234.50")
        self.assertEqual(format_currency(-20, "€"), "-€20.00")
        self.assertEqual(format_currency(None), NOT_AVAILABLE)

    def test_percentage(self):
        self.assertEqual(format_percentage(12.3456), "12.35%")
        self.assertEqual(format_percentage(5, signed=True), "+5.00%")
        self.assertEqual(format_percentage(-5, signed=True), "-5.00%")
        self.assertEqual(format_percentage(float("nan")), NOT_AVAILABLE)


class TestFcfGrowth(unittest.TestCase):
    """Test FCF per share growth."""

    def test_quarterly_one_year(self):
        series = [2.2, 2.1, 2.05, 2.02, 2.0]
        self.assertEqual(fcf_per_share_growth(series, 1), 10.0)

    def test_annual_multi_year(self):
        series = [4.0, 3.0, 2.0, 1.0]
        self.assertEqual(fcf_per_share_growth(series, 2, periods_per_year=1), 41.42)

    def test_non_positive_or_missing(self):
        self.assertIsNone(fcf_per_share_growth([2.0, 1, 1, 1, -1.0], 1))
        self.assertIsNone(fcf_per_share_growth([2.0, 1.0], 1))
        self.assertIsNone(fcf_per_share_growth([], 1))
        self.assertIsNone(fcf_per_share_growth([None, 1, 1, 1, 1], 1))


if __name__ == "__main__":
    unittest.main()
