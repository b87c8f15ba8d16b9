from datetime import date
from typing import Sequence

import pandas as pd

from expenso import config
from expenso.domain import Transaction

CSV_COLUMNS = ["Date", "Type", "Category", "Source", "Amount", "Notes"]


def _group_indian(digits: str) -> str:
    # 12345678 -> 1,23,45,678
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_rupee(amount: float) -> str:
    """Rupee amount with Indian digit grouping, e.g. ₹1,00,000 or ₹1,234.5."""
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.2f}".rstrip("0").rstrip(".")
    whole, _, frac = text.partition(".")
    grouped = _group_indian(whole)
    return f"{sign}{config.CURRENCY_SYMBOL}{grouped}" + (f".{frac}" if frac else "")


def format_date(d: date) -> str:
    return d.strftime("%d %b %Y")


def transactions_frame(trans: Sequence[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "Date": t.date.isoformat(),
            "Type": t.type,
            "Category": t.category,
            "Source": t.source,
            "Amount": t.amount,
            "Notes": t.notes,
        }
        for t in trans
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_csv(trans: Sequence[Transaction]) -> str:
    """CSV of the given (already filtered) passbook rows, header included."""
    return transactions_frame(trans).to_csv(index=False)
