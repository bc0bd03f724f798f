"""
stockdash/models.py  —  Pure dataclasses, no dependencies on other stockdash modules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class HoldingType(str, Enum):
    STOCK = "stock"
    CASH  = "cash"


@dataclass
class Holding:
    ticker:        str
    name:          str
    type:          HoldingType
    shares:        float
    cost_basis:    float          # stock: avg price per share; cash: amount held
    current_price: float          # cash: always equal to cost_basis
    logo:          Optional[str] = None
    exchange:      Optional[str] = None
    industry:      Optional[str] = None
    currency:      Optional[str] = None

    @property
    def is_cash(self) -> bool:
        return self.type == HoldingType.CASH


@dataclass(frozen=True)
class HoldingMetrics:
    market_value:      float
    gain_loss_dollar:  float
    gain_loss_percent: float
    weight_percent:    float


@dataclass(frozen=True)
class StockSearchResult:
    ticker:        str
    name:          str
    current_price: float = 0.0   # 0.0 when the quote lookup failed
    logo:          str   = ""


@dataclass(frozen=True)
class Fundamentals:
    """
    Already-fetched quote + TTM fundamentals for one ticker.
    Any field except the ticker may be missing.
    """
    ticker:                   str
    name:                     Optional[str]   = None
    currency:                 Optional[str]   = None
    logo:                     Optional[str]   = None
    price:                    Optional[float] = None
    change:                   Optional[float] = None
    change_percent:           Optional[float] = None
    eps_ttm:                  Optional[float] = None
    pe_ratio_ttm:             Optional[float] = None
    eps_growth_ttm:           Optional[float] = None
    fcf_per_share_ttm:        Optional[float] = None
    fcf_yield_ttm:            Optional[float] = None
    fcf_per_share_growth_ttm: Optional[float] = None
