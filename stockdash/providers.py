"""
stockdash/providers.py  —  Quotes, stock search and fundamentals via yfinance

This is the data-fetch collaborator of the ledger and calculator: it turns
yfinance output into StockSearchResult / Fundamentals records. Lookups that
fail are logged and come back as None or as a partially filled record; they
never raise into the caller.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd
import yfinance as yf

from stockdash.models import Fundamentals, StockSearchResult
from stockdash.numeric import fcf_per_share_growth, is_number, round_to_decimal
from stockdash.validation import sanitize_company_name, sanitize_stock_symbol

logger = logging.getLogger(__name__)


def _num(value) -> Optional[float]:
    """yfinance mixes None, NaN and strings into numeric fields."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if is_number(value) else None


def _fcf_series(cashflow: pd.DataFrame, shares: Optional[float]) -> List[Optional[float]]:
    """Annual FCF per share, newest first, from Ticker.cashflow."""
    if cashflow is None or cashflow.empty or not shares:
        return []
    if "Free Cash Flow" not in cashflow.index:
        return []
    row = cashflow.loc["Free Cash Flow"]
    row = row[sorted(row.index, reverse=True)]
    return [(_num(v) / shares) if _num(v) is not None else None for v in row]


class QuoteProvider:
    def __init__(self):
        self._cache: Dict[str, float] = {}
        self._info:  Dict[str, dict]  = {}

    def _ticker_info(self, ticker: str) -> dict:
        if ticker not in self._info:
            try:
                self._info[ticker] = yf.Ticker(ticker).info or {}
            except Exception as e:
                logger.warning("Could not fetch profile for %s: %s", ticker, e)
                return {}
        return self._info[ticker]

    # ── Prices ───────────────────────────────────────────────────────────────

    def get_price(self, ticker: str) -> Optional[float]:
        ticker = ticker.upper()
        if ticker in self._cache:
            return self._cache[ticker]
        try:
            t     = yf.Ticker(ticker)
            price = _num(t.fast_info.get("lastPrice")) or _num(t.fast_info.get("regularMarketPrice"))
            if price is None:
                hist  = t.history(period="2d")
                price = _num(hist["Close"].iloc[-1]) if not hist.empty else None
            if price is not None:
                self._cache[ticker] = price
                return price
        except Exception as e:
            logger.warning("Could not fetch %s: %s", ticker, e)
        return None

    def get_prices(self, tickers: List[str]) -> Dict[str, Optional[float]]:
        tickers  = [t.upper() for t in tickers]
        to_fetch = [t for t in tickers if t not in self._cache]

        if to_fetch:
            try:
                raw = yf.download(to_fetch, period="2d", progress=False, auto_adjust=True)
                if not raw.empty:
                    close = raw["Close"]
                    if isinstance(close, pd.Series):
                        close = close.to_frame(name=to_fetch[0])
                    close.columns = [str(c).upper() for c in close.columns]
                    for ticker in to_fetch:
                        if ticker in close.columns:
                            series = close[ticker].dropna()
                            if not series.empty:
                                self._cache[ticker] = float(series.iloc[-1])
            except Exception as e:
                logger.warning("Batch fetch failed: %s", e)

        for ticker in to_fetch:
            if ticker not in self._cache:
                self.get_price(ticker)

        return {t: self._cache.get(t) for t in tickers}

    def clear_cache(self) -> None:
        self._cache.clear()
        self._info.clear()

    # ── Search ───────────────────────────────────────────────────────────────

    def search_stock(self, symbol: str) -> Optional[StockSearchResult]:
        """
        Resolve a typed symbol to a search result. None when the symbol is
        malformed or Yahoo knows nothing about it; a known symbol whose quote
        failed still comes back, with current_price 0.
        """
        ticker = sanitize_stock_symbol(symbol)
        if ticker is None:
            return None

        info  = self._ticker_info(ticker)
        price = self.get_price(ticker)
        name  = sanitize_company_name(info.get("longName") or info.get("shortName"))
        if price is None and not name:
            logger.info("No stock found with ticker %r", ticker)
            return None

        return StockSearchResult(
            ticker=ticker,
            name=name or f"{ticker} Company",
            current_price=price or 0.0,
            logo=info.get("logo_url") or "",
        )

    # ── Fundamentals ─────────────────────────────────────────────────────────

    def fetch_fundamentals(self, symbol: str) -> Fundamentals:
        ticker = sanitize_stock_symbol(symbol) or symbol.strip().upper()
        info   = self._ticker_info(ticker)
        price  = self.get_price(ticker) or _num(info.get("currentPrice"))
        shares = _num(info.get("sharesOutstanding"))

        fcf_per_share = None
        growth        = None
        fcf_total     = _num(info.get("freeCashflow"))
        if fcf_total is not None and shares:
            fcf_per_share = fcf_total / shares
        try:
            series = _fcf_series(yf.Ticker(ticker).cashflow, shares)
            growth = fcf_per_share_growth(series, 1, periods_per_year=1)
            if fcf_per_share is None and series:
                fcf_per_share = series[0]
        except Exception as e:
            logger.warning("Could not fetch cash flow statement for %s: %s", ticker, e)

        fcf_yield = None
        if fcf_per_share is not None and price:
            fcf_yield = round_to_decimal(fcf_per_share / price * 100, 2)

        eps_growth = _num(info.get("earningsGrowth"))

        return Fundamentals(
            ticker=ticker,
            name=sanitize_company_name(info.get("longName") or info.get("shortName")),
            currency=info.get("currency"),
            logo=info.get("logo_url"),
            price=price,
            change=_num(info.get("regularMarketChange")),
            change_percent=_num(info.get("regularMarketChangePercent")),
            eps_ttm=_num(info.get("trailingEps")),
            pe_ratio_ttm=_num(info.get("trailingPE")),
            eps_growth_ttm=eps_growth * 100 if eps_growth is not None else None,
            fcf_per_share_ttm=fcf_per_share,
            fcf_yield_ttm=fcf_yield,
            fcf_per_share_growth_ttm=growth,
        )
