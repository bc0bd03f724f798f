"""
stockdash/ledger.py  —  Holdings ledger

HoldingsLedger owns the ordered list of holdings (stocks plus at most one
cash position). Adding a ticker that is already held merges into it with a
weighted-average cost basis instead of creating a duplicate row.

Mutators are synchronous and return True when something changed. Bad input
from the UI (non-positive amounts, unknown tickers) is logged and ignored;
only a wrong argument type raises. Persisting a change, and rolling it back
when the backend refuses it, is the caller's job: take snapshot() before the
optimistic update and restore() it on failure.
"""

import copy
import logging
from typing import Iterable, Iterator, List, Optional

from stockdash.models import Holding, HoldingMetrics, HoldingType, StockSearchResult
from stockdash.numeric import is_number, safe_divide
from stockdash.validation import (
    validate_cash_amount, validate_holding_edit, validate_stock_entry, validate_ticker,
)

logger = logging.getLogger(__name__)

CASH_TICKER = "USD"
CASH_NAME   = "Cash"
CASH_LOGO   = "https://flagcdn.com/w320/us.png"


# ── Metrics ──────────────────────────────────────────────────────────────────

def market_value(holding: Holding) -> float:
    if holding.is_cash:
        return holding.cost_basis
    return holding.shares * holding.current_price


def compute_metrics(holding: Holding, total_market_value: float) -> HoldingMetrics:
    """
    Derived figures for one row. A zero cost basis reports 0% gain rather
    than dividing by zero; an empty portfolio reports 0% weight.
    """
    value = market_value(holding)
    if holding.is_cash:
        gain_loss = gain_loss_pct = 0.0
    else:
        gain_loss     = holding.shares * (holding.current_price - holding.cost_basis)
        gain_loss_pct = safe_divide(holding.current_price - holding.cost_basis,
                                    holding.cost_basis) * 100
    return HoldingMetrics(
        market_value=value,
        gain_loss_dollar=gain_loss,
        gain_loss_percent=gain_loss_pct,
        weight_percent=safe_divide(value, total_market_value) * 100,
    )


def total_market_value(holdings: Iterable[Holding]) -> float:
    return sum(market_value(h) for h in holdings)


def total_gain_loss(holdings: Iterable[Holding]) -> float:
    return sum(h.shares * (h.current_price - h.cost_basis)
               for h in holdings if not h.is_cash)


def total_cash_position(holdings: Iterable[Holding]) -> float:
    return sum(market_value(h) for h in holdings if h.is_cash)


# ── Ledger ───────────────────────────────────────────────────────────────────

class HoldingsLedger:
    def __init__(self, holdings: Optional[Iterable[Holding]] = None,
                 cash_ticker: str = CASH_TICKER,
                 cash_name:   str = CASH_NAME,
                 cash_logo:   Optional[str] = CASH_LOGO):
        self.cash_ticker = cash_ticker.upper()
        self.cash_name   = cash_name
        self.cash_logo   = cash_logo
        self._holdings: List[Holding] = self._normalised(holdings or [])

    def _normalised(self, holdings: Iterable[Holding]) -> List[Holding]:
        """
        Checked copies of `holdings`. Raises before anything is assigned, so
        a bad row never leaves the ledger half-built.
        """
        rows: List[Holding] = []
        seen = set()
        for holding in holdings:
            if not isinstance(holding, Holding):
                raise TypeError(f"Expected Holding, got {type(holding).__name__}")
            h = copy.copy(holding)
            h.ticker = h.ticker.strip().upper()
            h.type   = HoldingType(h.type)
            if h.ticker in seen:
                raise ValueError(f"Duplicate ticker {h.ticker!r} in ledger")
            if h.is_cash != (h.ticker == self.cash_ticker):
                raise ValueError(f"Ticker {self.cash_ticker!r} is reserved for the single cash holding")
            if h.is_cash:
                h.shares        = 1
                h.current_price = h.cost_basis
            seen.add(h.ticker)
            rows.append(h)
        return rows

    def _find(self, ticker: str) -> Optional[int]:
        if not isinstance(ticker, str):
            return None
        ticker = ticker.strip().upper()
        for i, h in enumerate(self._holdings):
            if h.ticker == ticker:
                return i
        return None

    # ── Read access ──────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._holdings)

    def __iter__(self) -> Iterator[Holding]:
        return iter(list(self._holdings))

    def __contains__(self, ticker) -> bool:
        return self._find(ticker) is not None

    def get_holding(self, ticker: str) -> Optional[Holding]:
        i = self._find(ticker)
        return self._holdings[i] if i is not None else None

    def all_holdings(self) -> List[Holding]:
        """Holdings in ledger order (a new list; the rows themselves are shared)."""
        return list(self._holdings)

    def tickers(self) -> List[str]:
        return [h.ticker for h in self._holdings]

    @property
    def cash(self) -> Optional[Holding]:
        return self.get_holding(self.cash_ticker)

    # ── Holdings CRUD ────────────────────────────────────────────────────────

    def add_stock(self, found: StockSearchResult, shares: float,
                  avg_price_paid: float) -> bool:
        if not isinstance(found, StockSearchResult):
            raise TypeError(f"Expected StockSearchResult, got {type(found).__name__}")

        errors = (validate_ticker(found.ticker, reserved=self.cash_ticker)
                  + validate_stock_entry(shares, avg_price_paid))
        if errors:
            logger.warning("Rejected stock entry for %r: %s", found.ticker, " ".join(errors))
            return False

        ticker   = found.ticker.strip().upper()
        quote    = found.current_price if is_number(found.current_price) else 0.0
        existing = self.get_holding(ticker)

        if existing is not None:
            new_shares          = existing.shares + shares
            existing.cost_basis = (existing.shares * existing.cost_basis
                                   + shares * avg_price_paid) / new_shares
            existing.shares     = new_shares
            # A failed quote lookup comes back as 0; keep the last known price then
            if quote > 0:
                existing.current_price = quote
            if found.logo and not existing.logo:
                existing.logo = found.logo
            logger.debug("Merged %s: %.4f shares @ %.4f", ticker,
                         existing.shares, existing.cost_basis)
            return True

        self._holdings.append(Holding(
            ticker=ticker,
            name=found.name or ticker,
            type=HoldingType.STOCK,
            shares=shares,
            cost_basis=avg_price_paid,
            current_price=quote,
            logo=found.logo or None,
        ))
        logger.debug("Added %s: %.4f shares @ %.4f", ticker, shares, avg_price_paid)
        return True

    def add_cash(self, amount: float) -> bool:
        errors = validate_cash_amount(amount)
        if errors:
            logger.warning("Rejected cash entry: %s", " ".join(errors))
            return False

        cash = self.cash
        if cash is not None:
            cash.cost_basis   += amount
            cash.current_price = cash.cost_basis
        else:
            self._holdings.append(Holding(
                ticker=self.cash_ticker,
                name=self.cash_name,
                type=HoldingType.CASH,
                shares=1,
                cost_basis=amount,
                current_price=amount,
                logo=self.cash_logo,
                currency=self.cash_ticker,
            ))
        logger.debug("Cash position now %.2f", self.cash.cost_basis)
        return True

    def update_holding(self, ticker: str, new_shares: float,
                       new_cost_basis: float) -> bool:
        holding = self.get_holding(ticker)
        if holding is None:
            logger.warning("Cannot update %r: not in ledger", ticker)
            return False
        if holding.is_cash:
            # quantity is fixed at 1 for cash; only the amount is editable
            errors = validate_holding_edit(1, new_cost_basis)
        else:
            errors = validate_holding_edit(new_shares, new_cost_basis)
        if errors:
            logger.warning("Rejected edit for %s: %s", holding.ticker, " ".join(errors))
            return False

        if holding.is_cash:
            holding.cost_basis    = max(0.0, new_cost_basis)
            holding.current_price = holding.cost_basis
        else:
            holding.shares     = max(0.0, new_shares)
            holding.cost_basis = max(0.0, new_cost_basis)
        logger.debug("Updated %s: shares=%s cost_basis=%s", holding.ticker,
                     holding.shares, holding.cost_basis)
        return True

    def update_shares(self, ticker: str, shares: float) -> bool:
        holding = self.get_holding(ticker)
        if holding is None:
            logger.warning("Cannot update %r: not in ledger", ticker)
            return False
        return self.update_holding(ticker, shares, holding.cost_basis)

    def update_cost_basis(self, ticker: str, cost_basis: float) -> bool:
        holding = self.get_holding(ticker)
        if holding is None:
            logger.warning("Cannot update %r: not in ledger", ticker)
            return False
        return self.update_holding(ticker, holding.shares, cost_basis)

    def refresh_price(self, ticker: str, price: Optional[float]) -> bool:
        """Apply a fresh quote to a stock holding. Cash has no quote."""
        holding = self.get_holding(ticker)
        if holding is None or holding.is_cash:
            return False
        if not is_number(price) or price <= 0:
            return False
        holding.current_price = float(price)
        return True

    def remove(self, ticker: str) -> bool:
        i = self._find(ticker)
        if i is None:
            return False
        removed = self._holdings.pop(i)
        logger.debug("Removed %s", removed.ticker)
        return True

    # ── Ordering ─────────────────────────────────────────────────────────────

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move one row; everything in between shifts by one (not a swap)."""
        n = len(self._holdings)
        if not (0 <= from_index < n and 0 <= to_index < n):
            logger.warning("Reorder %s -> %s out of range for %d holdings",
                           from_index, to_index, n)
            return False
        if from_index == to_index:
            return False
        self._holdings.insert(to_index, self._holdings.pop(from_index))
        return True

    def move(self, active_ticker: str, over_ticker: str) -> bool:
        """Drag-and-drop: move `active_ticker` to the slot held by `over_ticker`."""
        src, dst = self._find(active_ticker), self._find(over_ticker)
        if src is None or dst is None:
            return False
        return self.reorder(src, dst)

    # ── Rollback support ─────────────────────────────────────────────────────

    def snapshot(self) -> List[Holding]:
        return copy.deepcopy(self._holdings)

    def restore(self, snapshot: List[Holding]) -> None:
        self._holdings = self._normalised(snapshot)

    # ── Aggregates ───────────────────────────────────────────────────────────

    def total_market_value(self) -> float:
        return total_market_value(self._holdings)

    def total_gain_loss(self) -> float:
        return total_gain_loss(self._holdings)

    def total_cash_position(self) -> float:
        return total_cash_position(self._holdings)

    def compute_metrics(self, holding: Holding) -> HoldingMetrics:
        return compute_metrics(holding, self.total_market_value())

    def sorted_view(self, state) -> List[Holding]:
        from stockdash.sorting import sorted_view
        return sorted_view(self._holdings, state)
