"""
stockdash/validation.py  —  Input sanitizing and validation rules

Validators return a list of error strings (empty = valid); sanitizers return
the cleaned value or None. The ledger and calculator call validate_*() at
their boundary and the CLI shows the messages, so no range checks are
scattered through the UI layer.
"""

import re
from typing import List, Optional, Union

from stockdash.numeric import is_number

_HTML_CHARS       = re.compile(r'[<>"\'&]')
_NON_SYMBOL_CHARS = re.compile(r'[^\w.\-]')
_SYMBOL_PATTERN   = re.compile(r'^[A-Z0-9.\-]{1,10}$')
_NON_NUMERIC      = re.compile(r'[^0-9.\-]')
_WHITESPACE       = re.compile(r'\s+')

_MAX_TICKER_LEN = 10
_MAX_NAME_LEN   = 100


# ── Sanitizers ───────────────────────────────────────────────────────────────

def sanitize_stock_symbol(raw) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    cleaned = _HTML_CHARS.sub("", raw.strip())
    cleaned = _NON_SYMBOL_CHARS.sub("", cleaned).upper()
    if not cleaned or len(cleaned) > _MAX_TICKER_LEN:
        return None
    return cleaned if _SYMBOL_PATTERN.match(cleaned) else None


def sanitize_numeric_input(raw: Union[str, int, float, None]) -> Optional[float]:
    """
    Parse user text such as " $1,250.50 " into a float.
    Returns None for empty, unparsable or non-finite input.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if is_number(raw) else None
    if not isinstance(raw, str):
        return None
    cleaned = _NON_NUMERIC.sub("", raw.strip())
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if is_number(value) else None


def sanitize_company_name(raw) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    cleaned = _WHITESPACE.sub(" ", _HTML_CHARS.sub("", raw.strip()))[:_MAX_NAME_LEN]
    return cleaned or None


# ── Validators ───────────────────────────────────────────────────────────────

def validate_ticker(ticker: str, reserved: Optional[str] = None) -> List[str]:
    errors = []
    t = ticker.strip().upper() if isinstance(ticker, str) else ""
    if not t:
        errors.append("Ticker symbol cannot be empty.")
        return errors
    if len(t) > _MAX_TICKER_LEN:
        errors.append(f"Ticker '{t}' is too long (max {_MAX_TICKER_LEN} characters).")
    elif sanitize_stock_symbol(t) != t:
        errors.append(f"Ticker '{t}' contains invalid characters. "
                      f"Only letters, numbers, dots and hyphens are allowed.")
    if reserved and t == reserved.upper():
        errors.append(f"Ticker '{t}' is reserved for the cash position.")
    return errors


def _check_positive(label: str, value) -> List[str]:
    if not is_number(value):
        return [f"{label} must be a number."]
    if value <= 0:
        return [f"{label} must be greater than zero."]
    return []


def validate_stock_entry(shares: float, avg_price_paid: float) -> List[str]:
    return (_check_positive("Shares", shares)
            + _check_positive("Average price paid", avg_price_paid))


def validate_cash_amount(amount: float) -> List[str]:
    if not is_number(amount):
        return ["Cash amount must be a number."]
    if amount <= 0:
        return ["Cash amount must be greater than zero."]
    return []


def validate_holding_edit(shares: float, cost_basis: float) -> List[str]:
    """Edits are clamped at zero by the ledger, so only shape is checked here."""
    errors = []
    if not is_number(shares):
        errors.append("Shares must be a number.")
    if not is_number(cost_basis):
        errors.append("Cost basis must be a number.")
    return errors


def validate_calculator_inputs(inputs) -> List[str]:
    """
    Check an EarningsInputs / CashFlowInputs instance before it reaches the
    calculator. A zero multiple or yield would project an infinite price.
    """
    errors = []
    for name, value in vars(inputs).items():
        if not is_number(value):
            errors.append(f"{name.replace('_', ' ').capitalize()} must be a number.")
    if errors:
        return errors

    if hasattr(inputs, "target_pe_ratio") and inputs.target_pe_ratio <= 0:
        errors.append("Target P/E ratio must be greater than zero.")
    if hasattr(inputs, "target_fcf_yield") and inputs.target_fcf_yield <= 0:
        errors.append("Target FCF yield must be greater than zero.")
    for name in ("eps_growth_rate", "fcf_growth_rate"):
        if getattr(inputs, name, 0) <= -100:
            errors.append("Growth rate must be above -100%.")
    if inputs.desired_return <= -100:
        errors.append("Desired return must be above -100%.")
    return errors
