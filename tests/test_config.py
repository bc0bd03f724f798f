"""Unit tests for environment configuration."""

import os
import unittest
from unittest.mock import patch

from stockdash.config import Config


class TestConfig(unittest.TestCase):
    """Test Config.from_env."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = Config.from_env()
        self.assertEqual(config.cash_ticker, "USD")
        self.assertEqual(config.currency_symbol, "$")
        self.assertEqual(config.desired_return, 15.0)
        self.assertEqual(config.log_level, "WARNING")

    @patch.dict(os.environ, {
        "STOCKDASH_CASH_TICKER": " eur ",
        "STOCKDASH_CASH_NAME": "Euro Cash",
        "STOCKDASH_CURRENCY_SYMBOL": "€",
        "STOCKDASH_DESIRED_RETURN": "10.5",
        "STOCKDASH_LOG_LEVEL": "debug",
        "STOCKDASH_CASH_LOGO": "",
    }, clear=True)
    def test_overrides(self):
        config = Config.from_env()
        self.assertEqual(config.cash_ticker, "EUR")
        self.assertEqual(config.cash_name, "Euro Cash")
        self.assertEqual(config.currency_symbol, "€")
        self.assertEqual(config.desired_return, 10.5)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertIsNone(config.cash_logo)

    @patch.dict(os.environ, {"STOCKDASH_DESIRED_RETURN": "lots"}, clear=True)
    def test_bad_return(self):
        with self.assertRaises(ValueError):
            Config.from_env()

    @patch.dict(os.environ, {"STOCKDASH_LOG_LEVEL": "LOUD"}, clear=True)
    def test_bad_log_level(self):
        with self.assertRaises(ValueError):
            Config.from_env()


if __name__ == "__main__":
    unittest.main()
