"""
stockdash/analysis.py  —  Tabular views and diversification figures
"""

from typing import Dict, Iterable

import pandas as pd

from stockdash.ledger import compute_metrics, market_value, total_market_value
from stockdash.models import Holding

HOLDING_COLUMNS = ["Ticker", "Name", "Type", "Shares", "Cost Basis", "Price",
                   "Market Value", "Gain/Loss", "Gain/Loss (%)", "Weight (%)"]


def holdings_frame(holdings: Iterable[Holding]) -> pd.DataFrame:
    """One row per holding, in the order given, with rounded metrics."""
    rows  = list(holdings)
    total = total_market_value(rows)
    records = []
    for h in rows:
        m = compute_metrics(h, total)
        records.append({
            "Ticker":        h.ticker,
            "Name":          h.name,
            "Type":          h.type.value.upper(),
            "Shares":        h.shares,
            "Cost Basis":    round(h.cost_basis, 2),
            "Price":         round(h.current_price, 2),
            "Market Value":  round(m.market_value, 2),
            "Gain/Loss":     round(m.gain_loss_dollar, 2),
            "Gain/Loss (%)": round(m.gain_loss_percent, 2),
            "Weight (%)":    round(m.weight_percent, 2),
        })
    return pd.DataFrame(records, columns=HOLDING_COLUMNS)


def portfolio_weights(holdings: Iterable[Holding]) -> Dict[str, float]:
    """Ticker → weight as a fraction of total market value."""
    values = {h.ticker: market_value(h) for h in holdings}
    total  = sum(values.values())
    return {t: v / total for t, v in values.items()} if total else {}


def concentration_hhi(weights: Dict[str, float]) -> float:
    """Herfindahl-Hirschman index on the 0–10,000 scale."""
    return sum(w ** 2 for w in weights.values()) * 10_000


def by_holding_type(holdings: Iterable[Holding]) -> pd.DataFrame:
    rows: Dict[str, float] = {}
    for h in holdings:
        rows[h.type.value] = rows.get(h.type.value, 0) + market_value(h)
    total = sum(rows.values())
    if not rows or not total:
        return pd.DataFrame()
    return pd.DataFrame([{"Type": k.upper(), "Value": round(v, 2),
                          "Weight (%)": round(v / total * 100, 2)}
                         for k, v in sorted(rows.items(), key=lambda x: -x[1])])

