"""
stockdash/numeric.py  —  Rounding, guarded division and display formatting

Nothing here imports another stockdash module, so every other layer
(valuation, ledger, display) can lean on it.
"""

import math
from typing import Optional, Sequence

NOT_AVAILABLE  = "N/A"
DECIMAL_PLACES = 2


def is_number(value) -> bool:
    """True for a finite int/float (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_to_decimal(num: float, decimal_places: int = DECIMAL_PLACES) -> float:
    """
    Round to `decimal_places`, falling back to 2 for a missing or negative
    count. NaN passes through untouched.
    """
    if isinstance(num, float) and math.isnan(num):
        return num
    if not decimal_places or decimal_places < 0:
        decimal_places = DECIMAL_PLACES
    return round(float(num), decimal_places)


def safe_round(value: Optional[float], decimal_places: int = DECIMAL_PLACES) -> float:
    """Like round_to_decimal, but None / NaN / ±inf collapse to 0.0."""
    if not is_number(value):
        return 0.0
    return round_to_decimal(value, decimal_places)


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    if not is_number(numerator) or not is_number(denominator) or denominator == 0:
        return default
    result = numerator / denominator
    return result if math.isfinite(result) else default


def safe_ratio(numerator: Optional[float], denominator: Optional[float],
               decimal_places: int = DECIMAL_PLACES) -> str:
    """Display ratio, e.g. price / FCF per share; "N/A" when either side is missing or zero."""
    if not numerator or not denominator:
        return NOT_AVAILABLE
    return f"{round_to_decimal(safe_divide(numerator, denominator), decimal_places):.{decimal_places}f}"


# ── Formatters ───────────────────────────────────────────────────────────────

def format_dollar_amount(amount: float) -> str:
    """Compact large amounts with T / B / M suffixes."""
    if amount >= 1e12:
        return f"{amount / 1e12:.2f}T"
    if amount >= 1e9:
        return f"{amount / 1e9:.2f}B"
    if amount >= 1e6:
        return f"{amount / 1e6:.2f}M"
    return f"{amount:.2f}"


def format_currency(value: Optional[float], symbol: str = "$") -> str:
    if not is_number(value):
        return NOT_AVAILABLE
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: Optional[float],
                      decimal_places: int = DECIMAL_PLACES,
                      signed: bool = False) -> str:
    if not is_number(value):
        return NOT_AVAILABLE
    sign = "+" if signed and value > 0 else ""
    return f"{sign}{value:.{decimal_places}f}%"


# ── Growth ───────────────────────────────────────────────────────────────────

def fcf_per_share_growth(values: Sequence[Optional[float]], period: int,
                         periods_per_year: int = 4) -> Optional[float]:
    """
    Annualised growth (%) of FCF per share over `period` years.

    `values` is newest-first: values[0] is the latest reading and
    values[period * periods_per_year] the one `period` years earlier
    (quarterly TTM series by default, pass periods_per_year=1 for
    annual figures). Both readings must be positive, otherwise None.
    """
    if not values or period <= 0:
        return None
    previous_index = period * periods_per_year
    if previous_index >= len(values):
        return None
    latest, previous = values[0], values[previous_index]
    if not is_number(latest) or not is_number(previous):
        return None
    if latest <= 0 or previous <= 0:
        return None
    cagr = ((latest / previous) ** (1 / period) - 1) * 100
    return round_to_decimal(cagr, 2)
