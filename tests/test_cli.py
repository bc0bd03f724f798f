"""Unit tests for the interactive menu, with prompts and the provider mocked."""

import io
import unittest
from unittest.mock import MagicMock, patch

from rich.console import Console

from stockdash import cli, display
from stockdash.config import Config
from stockdash.ledger import HoldingsLedger
from stockdash.models import StockSearchResult

BRKA = StockSearchResult(ticker="BRK.A", name="Berkshire Hathaway", current_price=1.2e6)


class TestAddStock(unittest.TestCase):
    """Test CLI.add_stock."""

    def setUp(self):
        for target in (cli, display):
            patcher = patch.object(target, "console", Console(file=io.StringIO()))
            patcher.start()
            self.addCleanup(patcher.stop)
        self.provider = MagicMock()
        self.provider.search_stock.return_value = BRKA
        self.ledger = HoldingsLedger()
        self.app = cli.CLI(Config(), provider=self.provider, ledger=self.ledger)

    def test_uses_given_empty_ledger(self):
        self.assertIs(self.app.ledger, self.ledger)

    @patch("stockdash.cli.Confirm.ask")
    @patch("stockdash.cli.Prompt.ask")
    def test_ordinary_entry_needs_no_confirmation(self, mock_prompt, mock_confirm):
        self.provider.search_stock.return_value = StockSearchResult("AAPL", "Apple", 180.0)
        mock_prompt.side_effect = ["AAPL", "10", "150"]
        self.app.add_stock()
        mock_confirm.assert_not_called()
        self.assertEqual(self.ledger.get_holding("AAPL").shares, 10)

    @patch("stockdash.cli.Confirm.ask", return_value=True)
    @patch("stockdash.cli.Prompt.ask")
    def test_high_price_is_confirmed_then_added(self, mock_prompt, mock_confirm):
        mock_prompt.side_effect = ["BRK.A", "1", "1200000"]
        self.app.add_stock()
        mock_confirm.assert_called_once()
        self.assertEqual(self.ledger.get_holding("BRK.A").cost_basis, 1.2e6)

    @patch("stockdash.cli.Confirm.ask", return_value=False)
    @patch("stockdash.cli.Prompt.ask")
    def test_declined_confirmation_adds_nothing(self, mock_prompt, mock_confirm):
        mock_prompt.side_effect = ["BRK.A", "2000000000", "1"]
        self.app.add_stock()
        self.assertNotIn("BRK.A", self.ledger)

    def test_currency_comes_from_config(self):
        app = cli.CLI(Config(currency_symbol="€"), provider=self.provider, ledger=self.ledger)
        self.ledger.add_cash(50.0)
        app.view_portfolio()
        self.assertIn("€50.00", display.console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
