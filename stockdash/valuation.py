"""
stockdash/valuation.py  —  Five-year discounted projection (fair value calculator)

Two interchangeable methods project a price five years out:

  earnings    future EPS  × target P/E
  cash flow   future FCF  ÷ target FCF yield

The target is discounted back at the desired annual return to give a fair
value, and compared with the current price to give the implied CAGR.
Everything here is pure; Calculator only remembers the active method and
its inputs.
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Optional, Union

from stockdash.models import Fundamentals
from stockdash.numeric import DECIMAL_PLACES, is_number, safe_round

logger = logging.getLogger(__name__)

PROJECTION_YEARS       = 5
DEFAULT_DESIRED_RETURN = 15.0


class ValuationMethod(str, Enum):
    EARNINGS  = "earnings"
    CASH_FLOW = "cash_flow"


@dataclass(frozen=True)
class EarningsInputs:
    eps:             float
    eps_growth_rate: float                          # % per year
    target_pe_ratio: float
    desired_return:  float = DEFAULT_DESIRED_RETURN  # % per year


@dataclass(frozen=True)
class CashFlowInputs:
    fcf_per_share:    float
    fcf_growth_rate:  float                          # % per year
    target_fcf_yield: float                          # %
    desired_return:   float = DEFAULT_DESIRED_RETURN  # % per year


CalculatorInputs = Union[EarningsInputs, CashFlowInputs]


@dataclass(frozen=True)
class CalculationResult:
    fair_value:       float
    current_price:    float
    target_price_5yr: float
    projected_cagr:   float


def _finite(value: float) -> float:
    return value if is_number(value) else 0.0


def _growth_factor(rate_pct: float) -> float:
    try:
        return (1 + rate_pct / 100) ** PROJECTION_YEARS
    except OverflowError:
        return math.inf


# ── Methods ──────────────────────────────────────────────────────────────────

def project_earnings(eps: float, eps_growth_rate: float, target_pe_ratio: float) -> float:
    """5-year target price from EPS growth and an exit P/E."""
    if target_pe_ratio <= 0:
        return 0.0
    return _finite(eps * _growth_factor(eps_growth_rate) * target_pe_ratio)


def project_cash_flow(fcf_per_share: float, fcf_growth_rate: float,
                      target_fcf_yield: float) -> float:
    """5-year target price from FCF/share growth and an exit FCF yield (%)."""
    if target_fcf_yield <= 0:
        return 0.0
    future_fcf = fcf_per_share * _growth_factor(fcf_growth_rate)
    return _finite(future_fcf / (target_fcf_yield / 100))


def discount_to_present(target_price: float, desired_return: float) -> float:
    factor = _growth_factor(desired_return)
    if not is_number(factor) or factor <= 0:
        return 0.0
    return _finite(target_price / factor)


def projected_cagr(target_price: float, current_price: float) -> float:
    """Annualised return (%) implied by moving from current to target price."""
    if current_price <= 0:
        return 0.0
    if target_price <= 0:
        return -100.0
    return _finite(((target_price / current_price) ** (1 / PROJECTION_YEARS) - 1) * 100)


def target_price(inputs: CalculatorInputs) -> float:
    if isinstance(inputs, EarningsInputs):
        return project_earnings(inputs.eps, inputs.eps_growth_rate, inputs.target_pe_ratio)
    if isinstance(inputs, CashFlowInputs):
        return project_cash_flow(inputs.fcf_per_share, inputs.fcf_growth_rate,
                                 inputs.target_fcf_yield)
    raise TypeError(f"Expected EarningsInputs or CashFlowInputs, got {type(inputs).__name__}")


def perform_calculation(inputs: CalculatorInputs, current_price: float) -> CalculationResult:
    """
    Full valuation for one input set. Intermediate values keep full
    precision; only the returned figures are rounded.
    """
    current_price = _finite(current_price)
    target        = target_price(inputs)
    fair_value    = discount_to_present(target, inputs.desired_return)
    cagr          = projected_cagr(target, current_price)

    return CalculationResult(
        fair_value=safe_round(fair_value, DECIMAL_PLACES),
        current_price=safe_round(current_price, DECIMAL_PLACES),
        target_price_5yr=safe_round(target, DECIMAL_PLACES),
        projected_cagr=safe_round(cagr, DECIMAL_PLACES),
    )


# ── Seeding from fundamentals ────────────────────────────────────────────────

def initial_earnings_inputs(fundamentals: Optional[Fundamentals],
                            desired_return: float = DEFAULT_DESIRED_RETURN) -> EarningsInputs:
    f = fundamentals
    return EarningsInputs(
        eps=safe_round(f.eps_ttm if f else None),
        eps_growth_rate=safe_round(f.eps_growth_ttm if f else None),
        target_pe_ratio=safe_round(f.pe_ratio_ttm if f else None),
        desired_return=desired_return,
    )


def initial_cash_flow_inputs(fundamentals: Optional[Fundamentals],
                             desired_return: float = DEFAULT_DESIRED_RETURN) -> CashFlowInputs:
    f = fundamentals
    return CashFlowInputs(
        fcf_per_share=safe_round(f.fcf_per_share_ttm if f else None),
        fcf_growth_rate=safe_round(f.fcf_per_share_growth_ttm if f else None),
        target_fcf_yield=safe_round(f.fcf_yield_ttm if f else None),
        desired_return=desired_return,
    )


def initial_inputs(method: ValuationMethod, fundamentals: Optional[Fundamentals],
                   desired_return: float = DEFAULT_DESIRED_RETURN) -> CalculatorInputs:
    if method == ValuationMethod.EARNINGS:
        return initial_earnings_inputs(fundamentals, desired_return)
    return initial_cash_flow_inputs(fundamentals, desired_return)


# ── Calculator ───────────────────────────────────────────────────────────────

class Calculator:
    """
    Holds the selected method and that method's inputs. Switching methods
    drops the current inputs and reseeds the other set from the fundamentals;
    the two sets are never blended.
    """

    def __init__(self, method: ValuationMethod = ValuationMethod.EARNINGS,
                 fundamentals: Optional[Fundamentals] = None,
                 desired_return: float = DEFAULT_DESIRED_RETURN):
        self.fundamentals    = fundamentals
        self.default_return  = desired_return
        self.method          = ValuationMethod(method)
        self.inputs: CalculatorInputs = initial_inputs(self.method, fundamentals, desired_return)
        self.current_price   = _finite(fundamentals.price) if fundamentals and fundamentals.price else 0.0

    def switch_method(self, method: ValuationMethod) -> None:
        method = ValuationMethod(method)
        if method == self.method:
            return
        self.method = method
        self.inputs = initial_inputs(method, self.fundamentals, self.default_return)
        logger.debug("Calculator switched to %s", method.value)

    def update(self, **values: float) -> None:
        """Change one or more fields of the active input set."""
        known   = {f.name for f in fields(self.inputs)}
        unknown = set(values) - known
        if unknown:
            raise TypeError(f"{type(self.inputs).__name__} has no field(s) "
                            f"{', '.join(sorted(unknown))}")
        self.inputs = replace(self.inputs, **{k: float(v) for k, v in values.items()})

    def set_current_price(self, price: float) -> None:
        self.current_price = _finite(price)

    @property
    def result(self) -> CalculationResult:
        return perform_calculation(self.inputs, self.current_price)
