"""Unit tests for table sorting."""

import unittest

from stockdash.ledger import HoldingsLedger
from stockdash.models import StockSearchResult
from stockdash.sorting import SortDirection, SortField, SortState, chart_view, sorted_view


class TestSortState(unittest.TestCase):
    """Test header-click cycling."""

    def test_same_field_cycles(self):
        s = SortState().toggle(SortField.SHARES)
        self.assertEqual((s.field, s.direction), (SortField.SHARES, SortDirection.ASC))
        s = s.toggle(SortField.SHARES)
        self.assertEqual(s.direction, SortDirection.DESC)
        s = s.toggle(SortField.SHARES)
        self.assertEqual(s, SortState())
        self.assertFalse(s.active)

    def test_new_field_starts_ascending(self):
        s = SortState().toggle("name").toggle("name")
        self.assertEqual(s.direction, SortDirection.DESC)
        s = s.toggle(SortField.WEIGHT)
        self.assertEqual((s.field, s.direction), (SortField.WEIGHT, SortDirection.ASC))

    def test_unknown_field_raises(self):
        with self.assertRaises(ValueError):
            SortState().toggle("ticker_symbol")


class TestSortedView(unittest.TestCase):
    """Test sorted_view against a small ledger."""

    def setUp(self):
        self.ledger = HoldingsLedger()
        self.ledger.add_stock(StockSearchResult("MSFT", "microsoft", 400.0), 2, 420.0)   # 800, -40
        self.ledger.add_stock(StockSearchResult("AAPL", "Apple", 180.0), 10, 150.0)      # 1800, +300
        self.ledger.add_stock(StockSearchResult("KO", "Coca-Cola", 60.0), 10, 60.0)      # 600, 0
        self.ledger.add_cash(800.0)
        self.natural = self.ledger.tickers()

    def _view(self, state):
        return [h.ticker for h in self.ledger.sorted_view(state)]

    def test_name_is_case_insensitive(self):
        self.assertEqual(self._view(SortState(SortField.NAME, SortDirection.ASC)),
                         ["AAPL", "USD", "KO", "MSFT"])

    def test_numeric_descending(self):
        self.assertEqual(self._view(SortState(SortField.MARKET_VALUE, SortDirection.DESC)),
                         ["AAPL", "MSFT", "USD", "KO"])

    def test_gain_loss_percent(self):
        self.assertEqual(self._view(SortState(SortField.GAIN_LOSS_PERCENT, SortDirection.ASC)),
                         ["MSFT", "KO", "USD", "AAPL"])

    def test_ties_keep_ledger_order(self):
        """MSFT and USD are both worth 800; ledger order decides in both directions."""
        asc  = self._view(SortState(SortField.WEIGHT, SortDirection.ASC))
        desc = self._view(SortState(SortField.WEIGHT, SortDirection.DESC))
        self.assertLess(asc.index("MSFT"), asc.index("USD"))
        self.assertLess(desc.index("MSFT"), desc.index("USD"))

    def test_view_does_not_change_ledger_order(self):
        self._view(SortState(SortField.SHARES, SortDirection.DESC))
        self.assertEqual(self.ledger.tickers(), self.natural)

    def test_three_clicks_restore_natural_order(self):
        state = SortState()
        for _ in range(3):
            state = state.toggle(SortField.CURRENT_PRICE)
        self.assertEqual(self._view(state), self.natural)

    def test_none_direction_returns_natural_order(self):
        self.assertEqual(self._view(SortState(SortField.SHARES, SortDirection.NONE)), self.natural)

    def test_zero_cost_basis_sorts(self):
        self.ledger.update_cost_basis("KO", 0)
        rows = sorted_view(self.ledger, SortState(SortField.GAIN_LOSS_PERCENT, SortDirection.DESC))
        self.assertEqual(len(rows), 4)

    def test_chart_view_heaviest_first(self):
        self.assertEqual([h.ticker for h in chart_view(self.ledger)],
                         ["AAPL", "MSFT", "USD", "KO"])


if __name__ == "__main__":
    unittest.main()
