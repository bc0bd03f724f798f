"""Unit tests for terminal rendering."""

import io
import unittest
from unittest.mock import patch

from rich.console import Console

from stockdash import display
from stockdash.ledger import HoldingsLedger
from stockdash.models import Fundamentals, StockSearchResult
from stockdash.valuation import EarningsInputs, ValuationMethod, perform_calculation


def _capture():
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestDisplay(unittest.TestCase):
    """Render into a string buffer and inspect the text."""

    def setUp(self):
        self.console = _capture()
        patcher = patch.object(display, "console", self.console)
        patcher.start()
        self.addCleanup(patcher.stop)

    def output(self) -> str:
        return self.console.file.getvalue()

    def test_portfolio_uses_given_currency(self):
        ledger = HoldingsLedger()
        ledger.add_stock(StockSearchResult("AAPL", "Apple", 180.0), 10, 150.0)
        display.print_portfolio(ledger, currency="€")
        self.assertIn("€1,800.00", self.output())
        self.assertNotIn("$", self.output())

    def test_default_currency_is_dollar(self):
        ledger = HoldingsLedger()
        ledger.add_cash(250.0)
        display.print_portfolio(ledger)
        self.assertIn("$250.00", self.output())

    def test_fundamentals_show_price_to_fcf(self):
        f = Fundamentals(ticker="AAPL", name="Apple", price=200.0, fcf_per_share_ttm=8.0)
        display.print_fundamentals(f, currency="£")
        text = self.output()
        self.assertIn("P/FCF", text)
        self.assertIn("25.00", text)
        self.assertIn("£200.00", text)

    def test_price_to_fcf_missing(self):
        display.print_fundamentals(Fundamentals(ticker="XYZ", price=10.0))
        line = next(l for l in self.output().splitlines() if "P/FCF" in l)
        self.assertIn("N/A", line)

    def test_valuation_panel(self):
        inputs = EarningsInputs(eps=12.25, eps_growth_rate=12.3, target_pe_ratio=23.25)
        result = perform_calculation(inputs, 300)
        display.print_valuation(ValuationMethod.EARNINGS, inputs, result, currency="€")
        self.assertIn(f"€{result.fair_value:,.2f}", self.output())


if __name__ == "__main__":
    unittest.main()
