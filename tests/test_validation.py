"""Unit tests for input sanitizing and validation."""

import unittest

from stockdash.validation import (
    sanitize_company_name, sanitize_numeric_input, sanitize_stock_symbol,
    validate_calculator_inputs, validate_cash_amount, validate_holding_edit,
    validate_stock_entry, validate_ticker,
)
from stockdash.valuation import CashFlowInputs, EarningsInputs


class TestSanitizers(unittest.TestCase):
    """Test sanitize_* helpers."""

    def test_stock_symbol(self):
        self.assertEqual(sanitize_stock_symbol("  aapl "), "AAPL")
        self.assertEqual(sanitize_stock_symbol("brk.b"), "BRK.B")
        self.assertEqual(sanitize_stock_symbol("<script>"), "SCRIPT")
        self.assertIsNone(sanitize_stock_symbol(""))
        self.assertIsNone(sanitize_stock_symbol("ABCDEFGHIJK"))
        self.assertIsNone(sanitize_stock_symbol(None))

    def test_numeric_input(self):
        self.assertEqual(sanitize_numeric_input(" $1,250.50 "), 1250.5)
        self.assertEqual(sanitize_numeric_input("-3"), -3.0)
        self.assertEqual(sanitize_numeric_input(7), 7.0)
        self.assertIsNone(sanitize_numeric_input("abc"))
        self.assertIsNone(sanitize_numeric_input(""))
        self.assertIsNone(sanitize_numeric_input("1.2.3"))
        self.assertIsNone(sanitize_numeric_input(float("nan")))
        self.assertIsNone(sanitize_numeric_input(None))

    def test_company_name(self):
        self.assertEqual(sanitize_company_name('  Procter  & "Gamble" '), "Procter Gamble")
        self.assertEqual(len(sanitize_company_name("x" * 300)), 100)
        self.assertIsNone(sanitize_company_name("   "))


class TestValidators(unittest.TestCase):
    """Test validate_* rules."""

    def test_ticker(self):
        self.assertEqual(validate_ticker("aapl"), [])
        self.assertTrue(validate_ticker(""))
        self.assertTrue(validate_ticker("AA PL"))
        self.assertEqual(len(validate_ticker("A" * 15)), 1)
        self.assertTrue(validate_ticker("usd", reserved="USD"))

    def test_stock_entry(self):
        self.assertEqual(validate_stock_entry(10, 150.0), [])
        self.assertEqual(len(validate_stock_entry(0, 0)), 2)
        self.assertTrue(validate_stock_entry(10, float("inf")))
        self.assertTrue(validate_stock_entry("10", 1.0))

    def test_stock_entry_has_no_upper_bound(self):
        self.assertEqual(validate_stock_entry(2_000_000_000, 0.0004), [])
        self.assertEqual(validate_stock_entry(1, 1_200_000.0), [])

    def test_cash_amount(self):
        self.assertEqual(validate_cash_amount(0.01), [])
        self.assertTrue(validate_cash_amount(0))
        self.assertTrue(validate_cash_amount(None))

    def test_holding_edit_allows_zero(self):
        self.assertEqual(validate_holding_edit(0, 0), [])
        self.assertEqual(len(validate_holding_edit(None, float("nan"))), 2)

    def test_calculator_inputs(self):
        self.assertEqual(validate_calculator_inputs(EarningsInputs(5, 10, 20)), [])
        self.assertTrue(validate_calculator_inputs(EarningsInputs(5, -100, 20)))
        self.assertTrue(validate_calculator_inputs(CashFlowInputs(5, 10, 4, desired_return=-150)))
        self.assertTrue(validate_calculator_inputs(EarningsInputs(float("nan"), 10, 20)))


if __name__ == "__main__":
    unittest.main()
