"""
stockdash/display.py
====================
Renders the holdings table, totals and valuation results in the terminal
with `rich`. Only read-only projections of the ledger and calculator come
in here; nothing is mutated.
"""

from functools import partial
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stockdash.ledger import HoldingsLedger, compute_metrics, total_market_value
from stockdash.models import Fundamentals, Holding
from stockdash.numeric import (
    NOT_AVAILABLE, format_currency, format_dollar_amount, format_percentage, safe_ratio,
)
from stockdash.sorting import SortDirection, SortField, SortState, chart_view
from stockdash.valuation import CalculationResult, CalculatorInputs, ValuationMethod

console = Console()

# ── Palette ─────────────────────────────────────────────────────────────────
GAIN   = "green"
LOSS   = "red"
MUTED  = "grey62"
ACCENT = "steel_blue1"
HEAD   = "bold white"

COLUMNS = [
    (SortField.NAME,              "Name"),
    (SortField.SHARES,            "Shares"),
    (SortField.COST_BASIS,        "Avg Cost"),
    (SortField.CURRENT_PRICE,     "Price"),
    (SortField.MARKET_VALUE,      "Market Value"),
    (SortField.GAIN_LOSS,         "G/L $"),
    (SortField.GAIN_LOSS_PERCENT, "G/L %"),
    (SortField.WEIGHT,            "Weight"),
]


# ── Formatters ───────────────────────────────────────────────────────────────

def _colour(value: float, text: str) -> str:
    if value > 0:  return f"[{GAIN}]{text}[/{GAIN}]"
    if value < 0:  return f"[{LOSS}]{text}[/{LOSS}]"
    return f"[{MUTED}]{text}[/{MUTED}]"

def _cur(value: float, symbol: str = "$") -> str:
    return format_currency(value, symbol)

def _pct(value: float) -> str:
    return format_percentage(value, signed=True)

def _sort_marker(field: SortField, state: SortState) -> str:
    if state.field != field or state.direction == SortDirection.NONE:
        return ""
    return " ▲" if state.direction == SortDirection.ASC else " ▼"


# ── Holdings table ───────────────────────────────────────────────────────────

def print_portfolio(ledger: HoldingsLedger, state: Optional[SortState] = None,
                    currency: str = "$") -> None:
    state = state or SortState()
    rows  = ledger.sorted_view(state)
    if not rows:
        console.print(f"\n  [{MUTED}]No holdings yet. Add a stock or a cash position to get started.[/{MUTED}]\n")
        return

    table = Table(
        box=box.SIMPLE,
        show_header=True,
        header_style=f"bold {ACCENT}",
        show_edge=False,
        pad_edge=True,
        row_styles=["", "on grey7"],
    )
    table.add_column("#", width=3, style=MUTED)
    table.add_column("Ticker", style=HEAD, min_width=7)
    for field, title in COLUMNS:
        justify = "left" if field == SortField.NAME else "right"
        table.add_column(title + _sort_marker(field, state), justify=justify, min_width=9)

    total = ledger.total_market_value()
    for h in rows:
        m = compute_metrics(h, total)
        table.add_row(
            str(ledger.tickers().index(h.ticker) + 1),
            h.ticker,
            h.name,
            f"{h.shares:,.4f}".rstrip("0").rstrip(".") if not h.is_cash else "—",
            _cur(h.cost_basis, currency),
            _cur(h.current_price, currency),
            _cur(m.market_value, currency),
            _colour(m.gain_loss_dollar, _cur(m.gain_loss_dollar, currency)),
            _colour(m.gain_loss_percent, _pct(m.gain_loss_percent)),
            format_percentage(m.weight_percent),
        )

    console.print()
    console.print(table)
    print_totals(ledger, currency)


def print_totals(ledger: HoldingsLedger, currency: str = "$") -> None:
    pnl   = ledger.total_gain_loss()
    value = ledger.total_market_value()
    parts = [
        f"[{MUTED}]Value[/{MUTED}]  [bold white]{_cur(value, currency)}[/bold white] [{MUTED}]({format_dollar_amount(value)})[/{MUTED}]",
        f"[{MUTED}]G/L[/{MUTED}]  {_colour(pnl, _cur(pnl, currency))}",
        f"[{MUTED}]Cash[/{MUTED}]  [white]{_cur(ledger.total_cash_position(), currency)}[/white]",
    ]
    console.print("  " + "     ".join(parts) + "\n")


def print_allocation(holdings: List[Holding], currency: str = "$") -> None:
    rows = chart_view(holdings)
    total = total_market_value(rows)
    if not rows or total == 0:
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style=f"bold {ACCENT}",
                  show_edge=False, pad_edge=True)
    table.add_column("Ticker", min_width=8)
    table.add_column("Value",  justify="right", min_width=13)
    table.add_column("",       min_width=36)

    BAR_WIDTH = 28
    for h in rows:
        m    = compute_metrics(h, total)
        fill = round(m.weight_percent / 100 * BAR_WIDTH)
        bar  = (
            f"[{ACCENT}]{'█' * fill}[/{ACCENT}]"
            f"[{MUTED}]{'░' * (BAR_WIDTH - fill)}[/{MUTED}]"
            f"  [{MUTED}]{m.weight_percent:.1f}%[/{MUTED}]"
        )
        table.add_row(h.ticker, _cur(m.market_value, currency), bar)

    console.print(table)


# ── Research / calculator ────────────────────────────────────────────────────

def _metric(value: Optional[float], fmt) -> str:
    return fmt(value) if value is not None else f"[{MUTED}]{NOT_AVAILABLE}[/{MUTED}]"


def print_fundamentals(f: Fundamentals, currency: str = "$") -> None:
    cur = partial(_cur, symbol=currency)
    title = f"[bold white]{f.ticker}[/bold white]  [{MUTED}]{f.name or ''}[/{MUTED}]"
    change = f.change_percent or 0.0
    lines = [
        f"[{MUTED}]Price[/{MUTED}]          {_metric(f.price, cur)}  {_colour(change, _pct(change))}",
        f"[{MUTED}]EPS (TTM)[/{MUTED}]      {_metric(f.eps_ttm, cur)}",
        f"[{MUTED}]P/E (TTM)[/{MUTED}]      {_metric(f.pe_ratio_ttm, lambda v: f'{v:.2f}')}",
        f"[{MUTED}]EPS growth[/{MUTED}]     {_metric(f.eps_growth_ttm, format_percentage)}",
        f"[{MUTED}]FCF / share[/{MUTED}]    {_metric(f.fcf_per_share_ttm, cur)}",
        f"[{MUTED}]P/FCF[/{MUTED}]          {safe_ratio(f.price, f.fcf_per_share_ttm)}",
        f"[{MUTED}]FCF yield[/{MUTED}]      {_metric(f.fcf_yield_ttm, format_percentage)}",
        f"[{MUTED}]FCF growth[/{MUTED}]     {_metric(f.fcf_per_share_growth_ttm, format_percentage)}",
    ]
    console.print(Panel("\n".join(lines), title=title, border_style=ACCENT, padding=(1, 2)))


def print_valuation(method: ValuationMethod, inputs: CalculatorInputs,
                    result: CalculationResult, currency: str = "$") -> None:
    label = "Earnings (EPS × P/E)" if method == ValuationMethod.EARNINGS else "Free cash flow (FCF ÷ yield)"
    upside = result.fair_value - result.current_price
    lines = [f"[{MUTED}]Method[/{MUTED}]          {label}"]
    for name, value in vars(inputs).items():
        lines.append(f"[{MUTED}]{name.replace('_', ' ').capitalize():<16}[/{MUTED}]{value:,.2f}")
    lines += [
        "",
        f"[{MUTED}]Current price[/{MUTED}]   [white]{_cur(result.current_price, currency)}[/white]",
        f"[{MUTED}]5-year target[/{MUTED}]   [white]{_cur(result.target_price_5yr, currency)}[/white]",
        f"[{MUTED}]Fair value[/{MUTED}]      [bold white]{_cur(result.fair_value, currency)}[/bold white]"
        f"  {_colour(upside, _cur(upside, currency))}",
        f"[{MUTED}]Projected CAGR[/{MUTED}]  {_colour(result.projected_cagr, _pct(result.projected_cagr))}",
    ]
    console.print(Panel("\n".join(lines), title="[bold white]Fair value[/bold white]",
                        border_style=ACCENT, padding=(1, 2)))
