"""
stockdash/sorting.py  —  Column sorting for the holdings table

Sorting is a view parameter: sorted_view() returns a sorted copy and never
touches the ledger order, which only reorder()/move() change.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from stockdash.ledger import compute_metrics, total_market_value
from stockdash.models import Holding


class SortField(str, Enum):
    NAME              = "name"
    SHARES            = "shares"
    COST_BASIS        = "cost_basis"
    CURRENT_PRICE     = "current_price"
    MARKET_VALUE      = "market_value"
    GAIN_LOSS         = "gain_loss"
    GAIN_LOSS_PERCENT = "gain_loss_percent"
    WEIGHT            = "weight"


class SortDirection(str, Enum):
    ASC  = "asc"
    DESC = "desc"
    NONE = "none"


@dataclass(frozen=True)
class SortState:
    field:     Optional[SortField] = None
    direction: SortDirection       = SortDirection.NONE

    @property
    def active(self) -> bool:
        return self.field is not None and self.direction != SortDirection.NONE

    def toggle(self, field: Union[SortField, str]) -> "SortState":
        """
        Header click: the same column cycles asc → desc → off,
        a different column always starts ascending.
        """
        field = SortField(field)
        if field != self.field or self.direction == SortDirection.NONE:
            return SortState(field, SortDirection.ASC)
        if self.direction == SortDirection.ASC:
            return SortState(field, SortDirection.DESC)
        return SortState()


def sort_value(holding: Holding, field: SortField, total_value: float):
    if field == SortField.NAME:
        return holding.name.lower()
    if field == SortField.SHARES:
        return holding.shares
    if field == SortField.COST_BASIS:
        return holding.cost_basis
    if field == SortField.CURRENT_PRICE:
        return holding.current_price

    metrics = compute_metrics(holding, total_value)
    return {
        SortField.MARKET_VALUE:      metrics.market_value,
        SortField.GAIN_LOSS:         metrics.gain_loss_dollar,
        SortField.GAIN_LOSS_PERCENT: metrics.gain_loss_percent,
        SortField.WEIGHT:            metrics.weight_percent,
    }[field]


def sorted_view(holdings: Iterable[Holding], state: SortState) -> List[Holding]:
    """Stable sort of a copy; ties keep ledger order in both directions."""
    rows = list(holdings)
    if not state.active:
        return rows
    total = total_market_value(rows)
    return sorted(rows,
                  key=lambda h: sort_value(h, state.field, total),
                  reverse=state.direction == SortDirection.DESC)


def chart_view(holdings: Iterable[Holding]) -> List[Holding]:
    """Allocation-chart order: heaviest weight first, whatever the table sort."""
    return sorted_view(holdings, SortState(SortField.WEIGHT, SortDirection.DESC))
