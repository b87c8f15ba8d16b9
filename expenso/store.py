"""
In-memory ledger of transactions and savings goals.

One ``ExpenseStore`` is built at application start and handed to every view
that needs it. Collections are immutable tuples; every mutation swaps in a new
tuple and then publishes an event on the injected ``EventBus``. Queries are
recomputed from the full collections on each call.
"""

from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from expenso import aggregation, config, projection, transforms
from expenso.domain import (
    CategoryExpense,
    DailyBreakdown,
    DailyExpense,
    Goal,
    GoalProgress,
    GoalSummary,
    Investment,
    MonthlyExpense,
    Transaction,
    WeeklyTrend,
)
from expenso.events import (
    GOAL_ADDED,
    GOAL_DELETED,
    GOAL_UPDATED,
    INVESTMENT_ADDED,
    TRANSACTION_ADDED,
    EventBus,
    create_event_bus,
)
from expenso.logging_config import setup_logger

logger = setup_logger(__name__)


class GoalNotFoundError(KeyError):
    """Raised when a goal id does not match any stored goal."""


def _new_id() -> str:
    return str(uuid4())


class ExpenseStore:

    def __init__(
        self,
        transactions: Tuple[Transaction, ...] = (),
        goals: Tuple[Goal, ...] = (),
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._transactions = tuple(transactions)
        self._goals = tuple(goals)
        self.bus = bus if bus is not None else create_event_bus()
        self.clock = clock or datetime.now
        # handler results of the most recent mutation
        self.last_results: List[dict] = []

    @classmethod
    def from_seed(cls, path: str = config.SEED_PATH, bus: Optional[EventBus] = None,
                  clock: Optional[Callable[[], datetime]] = None) -> "ExpenseStore":
        clock = clock or datetime.now
        transactions, goals = transforms.load_seed(path, today=clock().date())
        return cls(transactions, goals, bus=bus, clock=clock)

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    @property
    def goals(self) -> Tuple[Goal, ...]:
        return self._goals

    def today(self) -> date:
        return self.clock().date()

    def _publish(self, name: str, payload: dict) -> List[dict]:
        self.last_results = self.bus.publish(name, payload)
        return self.last_results

    # ---- Mutations ----

    def add_transaction(self, **data: Any) -> Transaction:
        """Append a transaction. Input is trusted: forms validate before calling."""
        t = Transaction(id=_new_id(), **data)
        self._transactions = transforms.add_transaction(self._transactions, t)
        logger.info(f"Added {t.type} {t.amount:.2f} ({t.label or '-'}) on {t.date}")
        self._publish(TRANSACTION_ADDED, {"transaction_id": t.id, "type": t.type, "amount": t.amount})
        return t

    def add_goal(self, **data: Any) -> Goal:
        data.setdefault("created_date", self.today())
        data["completed"] = False
        data["investments"] = ()
        g = Goal(id=_new_id(), **data)
        self._goals = transforms.add_goal(self._goals, g)
        logger.info(f"Added goal {g.name!r} target {g.target_amount:.2f}")
        self._publish(GOAL_ADDED, {"goal_id": g.id, "goal_name": g.name})
        return g

    def update_goal(self, goal_id: str, **updates: Any) -> Optional[Goal]:
        """Shallow merge of ``updates``. ``completed`` is kept as stored."""
        if transforms.find_goal(self._goals, goal_id) is None:
            logger.warning(f"update_goal: unknown goal id {goal_id!r}")
            return None
        updates.pop("id", None)
        self._goals = transforms.update_goal(self._goals, goal_id, updates)
        goal = transforms.find_goal(self._goals, goal_id)
        logger.info(f"Updated goal {goal_id!r}: {sorted(updates)}")
        self._publish(GOAL_UPDATED, {"goal_id": goal_id, "fields": sorted(updates)})
        return goal

    def delete_goal(self, goal_id: str) -> bool:
        if transforms.find_goal(self._goals, goal_id) is None:
            logger.warning(f"delete_goal: unknown goal id {goal_id!r}")
            return False
        self._goals = transforms.delete_goal(self._goals, goal_id)
        logger.info(f"Deleted goal {goal_id!r}")
        self._publish(GOAL_DELETED, {"goal_id": goal_id})
        return True

    def add_investment_to_goal(
        self, goal_id: str, amount: float, on: Optional[date] = None, notes: str = ""
    ) -> Tuple[Goal, Transaction]:
        """
        Record a contribution to a goal and its mirrored ledger entry together.

        The goal gets the investment appended, ``current_amount`` incremented
        and ``completed`` recomputed; the ledger gets a debit in the "Goals"
        category. Both collections are replaced only after both records are
        built, so an unknown goal leaves the store untouched.

        Raises:
            GoalNotFoundError: if ``goal_id`` is unknown
        """
        goal = transforms.find_goal(self._goals, goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)

        on = on or self.today()
        investment = Investment(id=_new_id(), amount=amount, date=on, notes=notes)
        updated = transforms.apply_investment(goal, investment)
        entry = Transaction(
            id=_new_id(),
            amount=amount,
            date=on,
            type=config.DEBIT,
            category=config.GOALS_CATEGORY,
            notes=f"Investment in {goal.name}" + (f": {notes}" if notes else ""),
        )

        self._goals = transforms.update_goal(self._goals, goal_id, {
            "current_amount": updated.current_amount,
            "completed": updated.completed,
            "investments": updated.investments,
        })
        self._transactions = transforms.add_transaction(self._transactions, entry)

        logger.info(f"Invested {amount:.2f} in goal {goal.name!r}: "
                    f"{updated.current_amount:.2f} / {updated.target_amount:.2f}")
        self._publish(INVESTMENT_ADDED, {
            "goal_id": goal_id,
            "goal_name": goal.name,
            "transaction_id": entry.id,
            "amount": amount,
            "current_amount": updated.current_amount,
            "target_amount": updated.target_amount,
            "completed": updated.completed,
            "was_completed": goal.completed,
        })
        return updated, entry

    def reset(self, transactions: Tuple[Transaction, ...], goals: Tuple[Goal, ...]) -> None:
        self._transactions = tuple(transactions)
        self._goals = tuple(goals)
        self.last_results = []
        logger.info(f"Store reset: {len(self._transactions)} transactions, {len(self._goals)} goals")

    # ---- Queries ----

    def total_income(self) -> float:
        return transforms.total_income(self._transactions)

    def total_expenses(self) -> float:
        return transforms.total_expenses(self._transactions)

    def current_balance(self) -> float:
        return transforms.current_balance(self._transactions)

    def category_expenses(self, year: Optional[int] = None, month: Optional[int] = None) -> List[CategoryExpense]:
        return aggregation.category_expenses(self._transactions, year, month)

    def daily_expenses(self) -> List[DailyExpense]:
        return aggregation.daily_expenses(self._transactions, self.today())

    def daily_breakdown(self, center: Optional[date] = None) -> List[DailyBreakdown]:
        return aggregation.daily_breakdown(self._transactions, center or self.today())

    def weekly_trends(self) -> List[WeeklyTrend]:
        return aggregation.weekly_trends(self._transactions, self.today())

    def monthly_expenses(self, year: Optional[int] = None) -> List[MonthlyExpense]:
        return aggregation.monthly_expenses(self._transactions, year, self.today())

    def available_years(self) -> List[int]:
        return aggregation.available_years(self._transactions, self.today())

    def monthly_savings(self) -> float:
        return projection.monthly_savings(self._transactions, self.today())

    def goal_progress(self, goal_id: str) -> GoalProgress:
        goal = transforms.find_goal(self._goals, goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        return projection.goal_progress(goal, self.monthly_savings(), self.clock())

    def goal_summary(self) -> GoalSummary:
        return projection.goal_summary(self._goals)

    def summary(self) -> Dict[str, float]:
        return {
            "income": self.total_income(),
            "expenses": self.total_expenses(),
            "balance": self.current_balance(),
        }
