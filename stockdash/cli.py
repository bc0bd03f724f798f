"""
stockdash/cli.py
================
Interactive terminal front end: a holdings table you can add to, edit,
reorder and sort, plus the fair value calculator. All state changes go
through HoldingsLedger / Calculator; this module only prompts and prints.
"""

from dataclasses import fields
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from stockdash import analysis, display, exporter
from stockdash.config import Config
from stockdash.ledger import HoldingsLedger
from stockdash.numeric import format_currency
from stockdash.providers import QuoteProvider
from stockdash.sorting import SortField, SortState
from stockdash.validation import (
    sanitize_numeric_input, sanitize_stock_symbol, validate_calculator_inputs,
)
from stockdash.valuation import Calculator, ValuationMethod

console = Console()

# Entries above these are almost certainly typos; the user is asked to confirm
LARGE_PRICE    = 1_000_000.0
LARGE_QUANTITY = 1_000_000_000


class CLI:
    """Main command-line interface class."""

    SORT_FIELDS = {str(i): f for i, f in enumerate(SortField, 1)}

    def __init__(self, config: Optional[Config] = None,
                 provider: Optional[QuoteProvider] = None,
                 ledger: Optional[HoldingsLedger] = None):
        self.config   = config or Config()
        self.provider = provider if provider is not None else QuoteProvider()
        if ledger is None:
            ledger = HoldingsLedger(cash_ticker=self.config.cash_ticker,
                                    cash_name=self.config.cash_name,
                                    cash_logo=self.config.cash_logo)
        self.ledger   = ledger
        self.sort_state = SortState()
        self.currency   = self.config.currency_symbol

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _prompt_number(self, prompt: str, default: Optional[float] = None,
                       positive: bool = True) -> float:
        """Keep asking until the user enters a usable number."""
        while True:
            raw = Prompt.ask(prompt, default=None if default is None else f"{default:g}")
            value = sanitize_numeric_input(raw)
            if value is None:
                console.print("[red]That doesn't look like a number. Try again.[/red]")
                continue
            if positive and value <= 0:
                console.print("[red]Please enter a positive number.[/red]")
                continue
            return value

    def _prompt_ticker(self, prompt: str = "Ticker") -> Optional[str]:
        ticker = sanitize_stock_symbol(Prompt.ask(prompt))
        if ticker is None:
            console.print("[red]Not a valid ticker symbol.[/red]")
        return ticker

    # -----------------------------------------------------------------------
    # Menu actions
    # -----------------------------------------------------------------------

    def view_portfolio(self):
        display.print_portfolio(self.ledger, self.sort_state, self.currency)

    def add_stock(self):
        console.print("\n[steel_blue1]── Add stock ──[/steel_blue1]")
        ticker = self._prompt_ticker("Ticker symbol (e.g. AAPL, MSFT)")
        if ticker is None:
            return
        console.print("[dim]Searching...[/dim]")
        found = self.provider.search_stock(ticker)
        if found is None:
            console.print(f"[red]No stock found with ticker \"{ticker}\".[/red]")
            return
        console.print(f"  [bold]{found.name}[/bold] ({found.ticker})  "
                      f"{format_currency(found.current_price, self.currency)}")

        shares = self._prompt_number("Shares")
        price  = self._prompt_number("Average price paid per share")
        if shares > LARGE_QUANTITY or price > LARGE_PRICE:
            if not Confirm.ask(f"[yellow]{shares:,.0f} shares at {format_currency(price, self.currency)} "
                               f"seems unusually high. Add anyway?[/yellow]"):
                return
        if self.ledger.add_stock(found, shares, price):
            console.print(f"[green]✓ {found.ticker} added.[/green]")
        else:
            console.print(f"[red]Could not add {found.ticker}.[/red]")

    def add_cash(self):
        amount = self._prompt_number("Cash amount")
        if self.ledger.add_cash(amount):
            console.print("[green]✓ Cash position updated.[/green]")

    def edit_holding(self):
        ticker = self._prompt_ticker("Ticker to edit")
        holding = self.ledger.get_holding(ticker) if ticker else None
        if holding is None:
            console.print("[red]Not in your portfolio.[/red]")
            return
        if holding.is_cash:
            amount = self._prompt_number("Cash amount", default=holding.cost_basis, positive=False)
            ok = self.ledger.update_holding(holding.ticker, 1, amount)
        else:
            shares = self._prompt_number("Shares", default=holding.shares, positive=False)
            cost   = self._prompt_number("Average cost", default=holding.cost_basis, positive=False)
            ok = self.ledger.update_holding(holding.ticker, shares, cost)
        if ok:
            console.print(f"[green]✓ {holding.ticker} updated.[/green]")
        else:
            console.print(f"[red]Could not update {holding.ticker}.[/red]")

    def remove_holding(self):
        ticker = self._prompt_ticker("Ticker to remove")
        if ticker is None:
            return
        if Confirm.ask(f"[red]Remove {ticker} from the portfolio?[/red]"):
            if self.ledger.remove(ticker):
                console.print(f"[green]✓ {ticker} removed.[/green]")
            else:
                console.print(f"[red]'{ticker}' not found.[/red]")

    def move_holding(self):
        if len(self.ledger) < 2:
            console.print("[yellow]Nothing to reorder.[/yellow]")
            return
        for i, t in enumerate(self.ledger.tickers(), 1):
            console.print(f"  {i}. [cyan]{t}[/cyan]")
        src = int(self._prompt_number("Move position"))
        dst = int(self._prompt_number("To position"))
        if not self.ledger.reorder(src - 1, dst - 1):
            console.print("[red]Invalid positions.[/red]")

    def change_sort(self):
        for key, field in self.SORT_FIELDS.items():
            console.print(f"  {key}. {field.value.replace('_', ' ')}")
        choice = Prompt.ask("Sort by", choices=list(self.SORT_FIELDS))
        self.sort_state = self.sort_state.toggle(self.SORT_FIELDS[choice])
        self.view_portfolio()

    def refresh_quotes(self):
        self.provider.clear_cache()
        stocks = [h.ticker for h in self.ledger if not h.is_cash]
        if not stocks:
            return
        console.print("[dim]Fetching live prices...[/dim]")
        prices  = self.provider.get_prices(stocks)
        updated = sum(self.ledger.refresh_price(t, p) for t, p in prices.items())
        console.print(f"[green]✓ {updated} of {len(stocks)} prices refreshed.[/green]")

    def show_allocation(self):
        holdings = self.ledger.all_holdings()
        display.print_allocation(holdings, self.currency)
        breakdown = analysis.by_holding_type(holdings)
        for _, row in breakdown.iterrows():
            console.print(f"  [grey62]{row['Type']:<6}[/grey62] {row['Weight (%)']:.2f}%")
        if not breakdown.empty:
            hhi = analysis.concentration_hhi(analysis.portfolio_weights(holdings))
            console.print(f"  [grey62]Concentration (HHI)[/grey62]  {hhi:,.0f}\n")

    def export_data(self):
        rows = self.ledger.sorted_view(self.sort_state)
        if not rows:
            console.print("[yellow]No holdings to export.[/yellow]")
            return
        choice = Prompt.ask("1 = Excel  2 = CSV  3 = Both", choices=["1", "2", "3"])
        if choice in ("1", "3"):
            fname = exporter.export_to_excel(rows, directory=self.config.export_dir)
            console.print(f"[green]✓ Excel saved: {fname}[/green]")
        if choice in ("2", "3"):
            fname = exporter.export_to_csv(rows, directory=self.config.export_dir)
            console.print(f"[green]✓ CSV saved:   {fname}[/green]")

    def run_calculator(self):
        ticker = self._prompt_ticker("Ticker to value")
        if ticker is None:
            return
        console.print("[dim]Fetching fundamentals...[/dim]")
        fundamentals = self.provider.fetch_fundamentals(ticker)
        display.print_fundamentals(fundamentals, self.currency)

        calc = Calculator(ValuationMethod.EARNINGS, fundamentals, self.config.desired_return)
        while True:
            errors = validate_calculator_inputs(calc.inputs)
            if errors:
                for e in errors:
                    console.print(f"[yellow]{e}[/yellow]")
            else:
                display.print_valuation(calc.method, calc.inputs, calc.result, self.currency)

            names   = [f.name for f in fields(calc.inputs)]
            options = {str(i): n for i, n in enumerate(names, 1)}
            console.print("  " + "   ".join(f"{k}={n.replace('_', ' ')}" for k, n in options.items())
                          + "   m=switch method   q=back")
            choice = Prompt.ask("Edit", choices=list(options) + ["m", "q"], default="q")
            if choice == "q":
                return
            if choice == "m":
                other = (ValuationMethod.CASH_FLOW if calc.method == ValuationMethod.EARNINGS
                         else ValuationMethod.EARNINGS)
                calc.switch_method(other)
                continue
            field = options[choice]
            value = self._prompt_number(field.replace("_", " ").capitalize(),
                                        default=getattr(calc.inputs, field), positive=False)
            calc.update(**{field: value})

    # -----------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------

    MENU = """
[grey39]┌─────────────────────────────────┐[/grey39]
[grey39]│[/grey39]  [steel_blue1]Stock Dashboard[/steel_blue1]                 [grey39]│[/grey39]
[grey39]├─────────────────────────────────┤[/grey39]
[grey39]│[/grey39]  [white]1[/white]  [grey62]View portfolio[/grey62]              [grey39]│[/grey39]
[grey39]│[/grey39]  [white]2[/white]  [grey62]Add stock[/grey62]                   [grey39]│[/grey39]
[grey39]│[/grey39]  [white]3[/white]  [grey62]Add cash[/grey62]                    [grey39]│[/grey39]
[grey39]│[/grey39]  [white]4[/white]  [grey62]Edit holding[/grey62]                [grey39]│[/grey39]
[grey39]│[/grey39]  [white]5[/white]  [grey62]Remove holding[/grey62]              [grey39]│[/grey39]
[grey39]│[/grey39]  [white]6[/white]  [grey62]Move holding[/grey62]                [grey39]│[/grey39]
[grey39]│[/grey39]  [white]7[/white]  [grey62]Sort table[/grey62]                  [grey39]│[/grey39]
[grey39]│[/grey39]  [white]8[/white]  [grey62]Refresh prices[/grey62]              [grey39]│[/grey39]
[grey39]│[/grey39]  [white]9[/white]  [grey62]Fair value calculator[/grey62]       [grey39]│[/grey39]
[grey39]│[/grey39]  [white]a[/white]  [grey62]Allocation[/grey62]                  [grey39]│[/grey39]
[grey39]│[/grey39]  [white]e[/white]  [grey62]Export  (Excel / CSV)[/grey62]       [grey39]│[/grey39]
[grey39]│[/grey39]  [white]q[/white]  [grey62]Quit[/grey62]                        [grey39]│[/grey39]
[grey39]└─────────────────────────────────┘[/grey39]"""

    def run(self):
        console.print(Panel(
            "[bold white]Stock Dashboard[/bold white]  [grey62]portfolio · fair value · yfinance[/grey62]",
            border_style="grey39",
            padding=(0, 2),
        ))

        actions = {
            "1": self.view_portfolio,
            "2": self.add_stock,
            "3": self.add_cash,
            "4": self.edit_holding,
            "5": self.remove_holding,
            "6": self.move_holding,
            "7": self.change_sort,
            "8": self.refresh_quotes,
            "9": self.run_calculator,
            "a": self.show_allocation,
            "e": self.export_data,
        }
        while True:
            console.print(self.MENU)
            choice = Prompt.ask("Choice", default="1").strip().lower()

            if choice == "q":
                console.print("[cyan]Goodbye![/cyan]")
                break
            action = actions.get(choice)
            if action is None:
                console.print("[red]Invalid choice. Please try again.[/red]")
                continue
            action()
