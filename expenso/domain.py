from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float        # always positive, sign comes from type
    date: date
    type: str            # "credit" or "debit"
    category: str = ""   # debit only
    source: str = ""     # credit only
    notes: str = ""

    @property
    def is_credit(self) -> bool:
        return self.type == "credit"

    @property
    def is_debit(self) -> bool:
        return self.type == "debit"

    @property
    def label(self) -> str:
        # category for expenses, source for income
        return self.source if self.is_credit else self.category


@dataclass(frozen=True)
class Investment:
    id: str
    amount: float
    date: date
    notes: str = ""


# A savings target fed by investments
@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target_amount: float
    current_amount: float = 0.0
    category: str = "Other"
    description: str = ""
    target_date: Optional[date] = None
    created_date: Optional[date] = None
    completed: bool = False          # cached, only refreshed when an investment is added
    investments: tuple[Investment, ...] = ()


@dataclass(frozen=True)
class CategoryExpense:
    category: str
    amount: float
    color: str


@dataclass(frozen=True)
class DailyExpense:
    date: date
    label: str
    amount: float


@dataclass(frozen=True)
class DailyBreakdown:
    date: date
    label: str
    expenses: float
    income: float


@dataclass(frozen=True)
class WeeklyTrend:
    week_start: date
    label: str
    expenses: float
    income: float


@dataclass(frozen=True)
class MonthlyExpense:
    month: str   # short month name, e.g. "Sep"
    year: int
    total: float


@dataclass(frozen=True)
class GoalProgress:
    goal_id: str
    percent: float
    remaining: float
    days_to_achieve: int
    can_achieve: bool
    status: str
    time_left: str


@dataclass(frozen=True)
class GoalSummary:
    total_goals: int
    completed_goals: int
    total_target: float
    total_current: float
    percent: float
