# src/journal/report_builder.py
"""Tabular trade report for spreadsheet export."""
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from src.journal.models import Trade, naive_local

REPORT_COLUMNS = [
    "Date",
    "Instrument",
    "Type",
    "Lot",
    "Buy Price",
    "Sell Price",
    "Brokerage",
    "Net P&L",
    "Result",
    "Note",
]


def build_trade_report(trades: Iterable[Trade]) -> pd.DataFrame:
    """Build one report row per trade, in journal order."""
    rows = [
        {
            "Date": naive_local(t.date).strftime("%Y-%m-%d %H:%M"),
            "Instrument": t.pair,
            "Type": t.direction.value,
            "Lot": f"{t.lot_size:.2f}",
            "Buy Price": t.entry_price,
            "Sell Price": t.exit_price,
            "Brokerage": "0.00",
            "Net P&L": f"{t.result:.2f}",
            "Result": t.status.value,
            "Note": t.notes or "",
        }
        for t in trades
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_trade_report(trades: Iterable[Trade], path: str | Path) -> Path:
    """Write the trade report as CSV.

    Args:
        trades: Journal trades.
        path: Destination file.

    Returns:
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_trade_report(trades).to_csv(path, index=False)
    return path
