"""Configuration management for stockdash."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Cash position
    cash_ticker: str = "USD"
    cash_name: str = "Cash"
    cash_logo: Optional[str] = "https://flagcdn.com/w320/us.png"

    # Display
    currency_symbol: str = "$"

    # Calculator
    desired_return: float = 15.0  # % per year used to seed the calculator

    # Export
    export_dir: str = "."

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        raw_return = os.getenv("STOCKDASH_DESIRED_RETURN", "").strip()
        try:
            desired_return = float(raw_return) if raw_return else cls.desired_return
        except ValueError:
            raise ValueError(
                f"STOCKDASH_DESIRED_RETURN must be a number, got {raw_return!r}"
            ) from None

        log_level = os.getenv("STOCKDASH_LOG_LEVEL", cls.log_level).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"STOCKDASH_LOG_LEVEL {log_level!r} is not a logging level")

        return cls(
            cash_ticker=os.getenv("STOCKDASH_CASH_TICKER", cls.cash_ticker).strip().upper(),
            cash_name=os.getenv("STOCKDASH_CASH_NAME", cls.cash_name).strip(),
            cash_logo=os.getenv("STOCKDASH_CASH_LOGO", cls.cash_logo) or None,
            currency_symbol=os.getenv("STOCKDASH_CURRENCY_SYMBOL", cls.currency_symbol),
            desired_return=desired_return,
            export_dir=os.getenv("STOCKDASH_EXPORT_DIR", cls.export_dir),
            log_level=log_level,
        )


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )
