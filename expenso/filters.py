import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from expenso.domain import Transaction
from expenso.transforms import signed_amount


def by_type(tx_type: str):
    def _filter(t: Transaction) -> bool:
        return tx_type == "all" or t.type == tx_type

    return _filter


def by_date_range(start: date, end: date):
    def _filter(t: Transaction) -> bool:
        return start <= t.date <= end

    return _filter


def by_year_month(year: Optional[int] = None, month: Optional[int] = None):
    def _filter(t: Transaction) -> bool:
        if year is not None and t.date.year != year:
            return False
        if month is not None and t.date.month != month:
            return False
        return True

    return _filter


def _amount_text(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def by_search(term: str):
    needle = term.strip().lower()

    def _filter(t: Transaction) -> bool:
        if not needle:
            return True
        return (
            needle in t.source.lower()
            or needle in t.category.lower()
            or needle in t.notes.lower()
            or needle in _amount_text(t.amount)
        )

    return _filter


def all_of(*preds: Callable[[Transaction], bool]):
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter


def filter_transactions(
    trans: Sequence[Transaction], search: str = "", type_filter: str = "all"
) -> tuple[Transaction, ...]:
    """Passbook view: matching transactions, newest first."""
    matched = filter(all_of(by_search(search), by_type(type_filter)), trans)
    return tuple(sorted(matched, key=lambda t: t.date, reverse=True))


def running_balances(filtered: Sequence[Transaction]) -> tuple[float, ...]:
    """Balance at each row of a newest-first list, accumulated from the oldest row."""
    balances = []
    balance = 0.0
    for t in reversed(filtered):
        balance += signed_amount(t)
        balances.append(balance)
    return tuple(reversed(balances))


@dataclass(frozen=True)
class Page:
    items: tuple
    page: int
    total_pages: int
    start: int
    end: int


def paginate(items: Sequence, page: int, per_page: int) -> Page:
    total_pages = math.ceil(len(items) / per_page) if per_page > 0 else 0
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page
    end = min(start + per_page, len(items))
    return Page(items=tuple(items[start:end]), page=page, total_pages=total_pages, start=start, end=end)
