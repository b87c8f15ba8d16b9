"""Chart aggregations over the ledger.

Every query builds a fixed window of calendar buckets, zero-fills it and then
accumulates matching transactions. Transactions whose date falls outside the
window are ignored. Nothing here mutates its input or raises on empty input.
"""

import zlib
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from expenso import config
from expenso.domain import (
    CategoryExpense,
    DailyBreakdown,
    DailyExpense,
    MonthlyExpense,
    Transaction,
    WeeklyTrend,
)
from expenso.filters import by_date_range, by_year_month
from expenso.transforms import expense_transactions


def category_color(category: str) -> str:
    """Color keyed on the category name, independent of which other categories exist."""
    if category in config.CATEGORY_COLORS:
        return config.CATEGORY_COLORS[category]
    return config.PALETTE[zlib.crc32(category.encode("utf-8")) % len(config.PALETTE)]


def category_expenses(
    trans: Tuple[Transaction, ...], year: Optional[int] = None, month: Optional[int] = None
) -> List[CategoryExpense]:
    totals: Dict[str, float] = {}
    in_period = by_year_month(year, month)

    for t in expense_transactions(trans):
        if t.category and in_period(t):
            totals[t.category] = totals.get(t.category, 0.0) + t.amount

    # dict keeps first-seen order
    return [CategoryExpense(category=c, amount=a, color=category_color(c)) for c, a in totals.items()]


def daily_expenses(trans: Tuple[Transaction, ...], today: date) -> List[DailyExpense]:
    days = config.DAILY_WINDOW_DAYS
    buckets: Dict[date, float] = {today - timedelta(days=i): 0.0 for i in range(days - 1, -1, -1)}

    for t in expense_transactions(trans):
        if t.date in buckets:
            buckets[t.date] += t.amount

    return [DailyExpense(date=d, label=d.strftime("%b %d"), amount=a) for d, a in buckets.items()]


def daily_breakdown(trans: Tuple[Transaction, ...], center: date) -> List[DailyBreakdown]:
    """Seven days from three before ``center`` to three after, expenses and income per day."""
    expenses: Dict[date, float] = {center + timedelta(days=i): 0.0 for i in range(-3, 4)}
    income: Dict[date, float] = dict.fromkeys(expenses, 0.0)

    for t in trans:
        if t.date not in expenses:
            continue
        if t.is_debit:
            expenses[t.date] += t.amount
        elif t.is_credit:
            income[t.date] += t.amount

    return [
        DailyBreakdown(date=d, label=d.strftime("%b %d"), expenses=expenses[d], income=income[d])
        for d in expenses
    ]


def week_start(d: date) -> date:
    # weeks start on Monday
    return d - timedelta(days=d.weekday())


def weekly_trends(trans: Tuple[Transaction, ...], today: date) -> List[WeeklyTrend]:
    current = week_start(today)
    weeks = config.WEEKLY_WINDOW_WEEKS
    starts = [current - timedelta(weeks=i) for i in range(weeks - 1, -1, -1)]
    expenses: Dict[date, float] = dict.fromkeys(starts, 0.0)
    income: Dict[date, float] = dict.fromkeys(starts, 0.0)
    # the current week is cut off at today
    in_window = by_date_range(starts[0], today)

    for t in filter(in_window, trans):
        ws = week_start(t.date)
        if t.is_debit:
            expenses[ws] += t.amount
        elif t.is_credit:
            income[ws] += t.amount

    return [
        WeeklyTrend(week_start=ws, label=ws.strftime("%b %d"), expenses=expenses[ws], income=income[ws])
        for ws in starts
    ]


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_window(year: Optional[int], today: date) -> List[Tuple[int, int]]:
    if year is None or year == today.year:
        n = config.MONTHLY_WINDOW_MONTHS
        return [shift_month(today.year, today.month, -i) for i in range(n - 1, -1, -1)]
    return [(year, m) for m in config.PAST_YEAR_MONTHS]


def monthly_expenses(
    trans: Tuple[Transaction, ...], year: Optional[int], today: date
) -> List[MonthlyExpense]:
    buckets: Dict[Tuple[int, int], float] = dict.fromkeys(month_window(year, today), 0.0)

    for t in expense_transactions(trans):
        key = (t.date.year, t.date.month)
        if key in buckets:
            buckets[key] += t.amount

    return [
        MonthlyExpense(month=date(y, m, 1).strftime("%b"), year=y, total=total)
        for (y, m), total in buckets.items()
    ]


def available_years(trans: Tuple[Transaction, ...], today: date) -> List[int]:
    years = sorted({t.date.year for t in trans}, reverse=True)
    return years or [today.year]
