import math
from datetime import date, datetime, time
from functools import lru_cache
from typing import Iterable, Optional

from expenso import config
from expenso.aggregation import shift_month
from expenso.domain import Goal, GoalProgress, GoalSummary, Transaction


@lru_cache(maxsize=128)
def monthly_savings(trans: tuple[Transaction, ...], today: date) -> float:
    """Average of income minus expenses over the current month and the ones before it."""
    months = config.SAVINGS_WINDOW_MONTHS
    window = {shift_month(today.year, today.month, -i) for i in range(months)}
    net = 0.0

    for t in trans:
        if (t.date.year, t.date.month) in window:
            net += t.amount if t.is_credit else -t.amount

    return net / months


def is_target_reached(goal: Goal) -> bool:
    return goal.target_amount > 0 and goal.current_amount >= goal.target_amount


def time_left(target_date: Optional[date], now: datetime) -> str:
    if target_date is None:
        return ""
    target = datetime.combine(target_date, time.min)
    if target < now:
        return "Overdue"

    delta = target - now
    hours, rem = divmod(delta.seconds, 3600)
    minutes = rem // 60
    if delta.days > 0:
        return f"{delta.days}d {hours}h {minutes}m"
    return f"{hours}h {minutes}m"


def goal_progress(goal: Goal, savings: float, now: datetime) -> GoalProgress:
    """Progress, projection and status of one goal as shown on its card."""
    if goal.target_amount > 0:
        percent = min(goal.current_amount / goal.target_amount * 100, 100.0)
    else:
        percent = 0.0
    remaining = goal.target_amount - goal.current_amount

    days_to_achieve = math.ceil(remaining / savings * 30) if savings > 0 else 0

    if goal.target_date is not None:
        deadline = datetime.combine(goal.target_date, time.min)
        # whole days from now until midnight of the target date
        can_achieve = (deadline - now).days >= days_to_achieve
        overdue = deadline < now
    else:
        can_achieve = True
        overdue = False

    if goal.completed:
        status = "Completed"
    elif overdue:
        status = "Overdue"
    elif not can_achieve:
        status = "At Risk"
    else:
        status = "On Track"

    return GoalProgress(
        goal_id=goal.id,
        percent=percent,
        remaining=remaining,
        days_to_achieve=days_to_achieve,
        can_achieve=can_achieve,
        status=status,
        time_left=time_left(goal.target_date, now),
    )


def goal_summary(goals: Iterable[Goal]) -> GoalSummary:
    goals = tuple(goals)
    total_target = sum(g.target_amount for g in goals)
    total_current = sum(g.current_amount for g in goals)
    percent = total_current / total_target * 100 if total_target > 0 else 0.0

    return GoalSummary(
        total_goals=len(goals),
        completed_goals=sum(1 for g in goals if g.completed),
        total_target=total_target,
        total_current=total_current,
        percent=percent,
    )
