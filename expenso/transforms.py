import json
from dataclasses import replace
from datetime import date, timedelta
from functools import reduce
from typing import Any, Dict, Optional, Tuple

from expenso.domain import Goal, Investment, Transaction
from expenso.logging_config import setup_logger

logger = setup_logger(__name__)


def _resolve_date(raw: Dict[str, Any], key: str, offset_key: str, today: date, sign: int) -> Optional[date]:
    if raw.get(key):
        return date.fromisoformat(raw[key])
    if offset_key in raw:
        return today + timedelta(days=sign * int(raw[offset_key]))
    return None


def transaction_from_dict(raw: Dict[str, Any], today: date) -> Transaction:
    return Transaction(
        id=str(raw["id"]),
        amount=float(raw["amount"]),
        date=_resolve_date(raw, "date", "days_ago", today, -1) or today,
        type=raw["type"],
        category=raw.get("category", ""),
        source=raw.get("source", ""),
        notes=raw.get("notes", ""),
    )


def goal_from_dict(raw: Dict[str, Any], today: date) -> Goal:
    investments = tuple(
        Investment(
            id=str(i["id"]),
            amount=float(i["amount"]),
            date=_resolve_date(i, "date", "days_ago", today, -1) or today,
            notes=i.get("notes", ""),
        )
        for i in raw.get("investments", [])
    )
    return Goal(
        id=str(raw["id"]),
        name=raw["name"],
        target_amount=float(raw["target_amount"]),
        current_amount=float(raw.get("current_amount", 0)),
        category=raw.get("category", "Other"),
        description=raw.get("description", ""),
        target_date=_resolve_date(raw, "target_date", "target_in_days", today, 1),
        created_date=_resolve_date(raw, "created_date", "created_days_ago", today, -1) or today,
        completed=bool(raw.get("completed", False)),
        investments=investments,
    )


def load_seed(
    path: str, today: Optional[date] = None
) -> Tuple[Tuple[Transaction, ...], Tuple[Goal, ...]]:
    """Load the mock seed. Dates may be absolute (ISO) or relative to ``today``."""
    today = today or date.today()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    transactions = tuple(transaction_from_dict(t, today) for t in data["transactions"])
    goals = tuple(goal_from_dict(g, today) for g in data.get("goals", []))

    logger.info(f"Loaded seed {path}: {len(transactions)} transactions, {len(goals)} goals")
    return transactions, goals


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)


def add_goal(goals: Tuple[Goal, ...], g: Goal) -> Tuple[Goal, ...]:
    return goals + (g,)


def update_goal(goals: Tuple[Goal, ...], goal_id: str, updates: Dict[str, Any]) -> Tuple[Goal, ...]:
    # shallow merge, completed is left as it was
    return tuple(replace(g, **updates) if g.id == goal_id else g for g in goals)


def delete_goal(goals: Tuple[Goal, ...], goal_id: str) -> Tuple[Goal, ...]:
    return tuple(filter(lambda g: g.id != goal_id, goals))


def find_goal(goals: Tuple[Goal, ...], goal_id: str) -> Optional[Goal]:
    return next((g for g in goals if g.id == goal_id), None)


def apply_investment(goal: Goal, investment: Investment) -> Goal:
    current = goal.current_amount + investment.amount
    return replace(
        goal,
        current_amount=current,
        completed=current >= goal.target_amount,
        investments=goal.investments + (investment,),
    )


def income_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.is_credit, trans))


def expense_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.is_debit, trans))


def signed_amount(t: Transaction) -> float:
    return t.amount if t.is_credit else -t.amount


def total_income(trans: Tuple[Transaction, ...]) -> float:
    return reduce(lambda acc, t: acc + t.amount, income_transactions(trans), 0.0)


def total_expenses(trans: Tuple[Transaction, ...]) -> float:
    return reduce(lambda acc, t: acc + t.amount, expense_transactions(trans), 0.0)


def current_balance(trans: Tuple[Transaction, ...]) -> float:
    return total_income(trans) - total_expenses(trans)
