"""
stockdash/exporter.py  —  Excel and CSV export of the holdings view
"""

import csv, os
from datetime import datetime
from typing import List, Optional

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from stockdash.ledger import compute_metrics, total_cash_position, total_gain_loss, total_market_value
from stockdash.models import Holding

# ── Colour constants ──────────────────────────────────────────────────────────
HEADER_BG  = "1A237E"
HEADER_FG  = "FFFFFF"
SUBHEAD_BG = "283593"
POS_FG     = "1B5E20"
NEG_FG     = "B71C1C"
ALT_ROW    = "E8EAF6"

CSV_FIELDS = ["ticker", "name", "type", "shares", "cost_basis", "current_price",
              "market_value", "gain_loss", "gain_loss_percent", "weight_percent"]

def _border():
    s = Side(style="thin", color="BDBDBD")
    return Border(left=s, right=s, top=s, bottom=s)

def _header_font(bold=True, size=10):
    return Font(name="Arial", size=size, bold=bold, color=HEADER_FG)

def _header_fill(bg=HEADER_BG):
    return PatternFill("solid", fgColor=bg)

def _style(cell, value=None, font=None, fill=None, fmt=None, align="left"):
    if value is not None: cell.value = value
    if font:  cell.font = font
    if fill:  cell.fill = fill
    if fmt:   cell.number_format = fmt
    cell.border    = _border()
    cell.alignment = Alignment(horizontal=align)
    return cell

def _default_name(ext: str, directory: str) -> str:
    return os.path.join(directory, f"portfolio_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{ext}")

# ── Public API ────────────────────────────────────────────────────────────────
def export_to_excel(holdings: List[Holding],
                    filename: Optional[str] = None,
                    directory: str = ".") -> str:
    """Write the rows in the order given (pass a sorted view to export it sorted)."""
    if filename is None:
        filename = _default_name("xlsx", directory)
    wb = openpyxl.Workbook()
    _summary_sheet(wb, holdings)
    if "Sheet" in wb.sheetnames:
        del wb["Sheet"]
    wb.save(filename)
    return filename

def export_to_csv(holdings: List[Holding],
                  filename: Optional[str] = None,
                  directory: str = ".") -> str:
    if filename is None:
        filename = _default_name("csv", directory)
    total = total_market_value(holdings)
    with open(filename, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        for h in holdings:
            m = compute_metrics(h, total)
            w.writerow({"ticker": h.ticker, "name": h.name, "type": h.type.value,
                        "shares":            round(h.shares, 6),
                        "cost_basis":        round(h.cost_basis, 4),
                        "current_price":     round(h.current_price, 4),
                        "market_value":      round(m.market_value, 2),
                        "gain_loss":         round(m.gain_loss_dollar, 2),
                        "gain_loss_percent": round(m.gain_loss_percent, 2),
                        "weight_percent":    round(m.weight_percent, 2)})
    return filename

# ── Summary sheet ─────────────────────────────────────────────────────────────
def _summary_sheet(wb, holdings):
    ws = wb.create_sheet("Holdings")

    # Title rows
    for row, text, size in [(1,"Portfolio Holdings",16),(2,f"Generated: {datetime.now().strftime('%d %b %Y  %H:%M')}",10)]:
        ws.merge_cells(f"A{row}:J{row}")
        c = ws[f"A{row}"]
        c.value = text
        c.font  = Font(name="Arial", size=size, bold=(row==1), italic=(row==2), color=HEADER_FG)
        c.fill  = _header_fill(HEADER_BG if row==1 else SUBHEAD_BG)
        c.alignment = Alignment(horizontal="center", vertical="center")
    ws.row_dimensions[1].height = 30

    headers = ["Ticker","Name","Type","Shares","Avg Cost ($)","Price ($)",
               "Market Value ($)","Gain/Loss ($)","Gain/Loss %","Weight %"]
    for col, h in enumerate(headers, 1):
        _style(ws.cell(4, col, h), font=_header_font(), fill=_header_fill(), align="center")
    ws.row_dimensions[4].height = 20

    total = total_market_value(holdings)
    fmts  = [None,None,None,"#,##0.0000","$#,##0.00","$#,##0.00","$#,##0.00",
             '$#,##0.00;[Red]($#,##0.00)',"0.00%;[Red]-0.00%","0.00%"]
    for i, h in enumerate(holdings):
        row  = 5 + i
        m    = compute_metrics(h, total)
        fill = PatternFill("solid", fgColor=ALT_ROW if i%2==0 else "FFFFFF")
        vals = [h.ticker, h.name, h.type.value.upper(), h.shares,
                h.cost_basis, h.current_price, m.market_value,
                m.gain_loss_dollar, m.gain_loss_percent/100, m.weight_percent/100]

        for col, (val, fmt) in enumerate(zip(vals, fmts), 1):
            cell = ws.cell(row, col, val)
            cell.font   = Font(name="Arial", size=10)
            cell.fill   = fill
            cell.border = _border()
            cell.alignment = Alignment(horizontal="right" if col>3 else "left")
            if fmt: cell.number_format = fmt
            if col in (8, 9):
                cell.font = Font(name="Arial", size=10, color=POS_FG if val>=0 else NEG_FG)

    # Totals row
    tr  = 5 + len(holdings)
    pnl = total_gain_loss(holdings)
    for col in range(1, 11):
        ws.cell(tr, col).fill   = _header_fill(SUBHEAD_BG)
        ws.cell(tr, col).border = _border()

    _style(ws.cell(tr, 1, "TOTAL"), font=Font(name="Arial", bold=True, color=HEADER_FG))
    _style(ws.cell(tr, 2, f"Cash {total_cash_position(holdings):,.2f}"),
           font=Font(name="Arial", italic=True, color=HEADER_FG))
    _style(ws.cell(tr, 7, total), font=Font(name="Arial",bold=True,color=HEADER_FG),
           fmt="$#,##0.00", align="right")
    _style(ws.cell(tr, 8, pnl), font=Font(name="Arial",bold=True,color=POS_FG if pnl>=0 else NEG_FG),
           fmt='$#,##0.00;[Red]($#,##0.00)', align="right")

    for i, w in enumerate([10,24,8,12,14,12,16,16,12,10], 1):
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.freeze_panes = "A5"
