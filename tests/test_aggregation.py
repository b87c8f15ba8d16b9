from datetime import date, timedelta

from expenso import config
from expenso.aggregation import (
    available_years,
    category_color,
    category_expenses,
    daily_breakdown,
    daily_expenses,
    monthly_expenses,
    shift_month,
    week_start,
    weekly_trends,
)
from expenso.domain import Transaction
from expenso.transforms import total_expenses

# Thursday; its week starts on Monday 2026-10-12
TODAY = date(2026, 10, 15)


def debit(id, amount, category, d=TODAY):
    return Transaction(id=id, amount=amount, date=d, type="debit", category=category)


def credit(id, amount, source, d=TODAY):
    return Transaction(id=id, amount=amount, date=d, type="credit", source=source)


def test_category_expenses_first_seen_order():
    trans = (
        debit("t1", 100, "Food"),
        debit("t2", 50, "Transport"),
        debit("t3", 200, "Food"),
    )
    result = category_expenses(trans, TODAY.year, TODAY.month)

    assert [(c.category, c.amount) for c in result] == [("Food", 300), ("Transport", 50)]


def test_category_expenses_sum_to_total_expenses():
    trans = (
        debit("t1", 100, "Food", TODAY - timedelta(days=400)),
        debit("t2", 250, "Bills"),
        credit("t3", 5000, "Salary"),
        debit("t4", 75, "Health", TODAY - timedelta(days=40)),
    )
    assert sum(c.amount for c in category_expenses(trans)) == total_expenses(trans)


def test_category_expenses_filters_by_year_and_month():
    trans = (
        debit("t1", 100, "Food", date(2026, 10, 1)),
        debit("t2", 40, "Food", date(2026, 9, 30)),
        debit("t3", 60, "Bills", date(2025, 10, 3)),
    )
    assert [(c.category, c.amount) for c in category_expenses(trans, 2026, 10)] == [("Food", 100)]
    assert [(c.category, c.amount) for c in category_expenses(trans, 2026)] == [("Food", 140)]
    assert [(c.category, c.amount) for c in category_expenses(trans, month=10)] == [("Food", 100), ("Bills", 60)]


def test_category_colors_keyed_by_name():
    alone = category_expenses((debit("t1", 10, "Health"),))
    with_others = category_expenses((debit("t0", 5, "Food"), debit("t1", 10, "Health")))

    assert alone[0].color == config.CATEGORY_COLORS["Health"]
    assert with_others[1].color == alone[0].color


def test_unknown_category_color_is_stable():
    assert category_color("Pets") == category_color("Pets")
    assert category_color("Pets") in config.PALETTE


def test_daily_expenses_window():
    trans = (
        debit("t1", 100, "Food", TODAY),
        debit("t2", 40, "Food", TODAY - timedelta(days=6)),
        debit("t3", 999, "Food", TODAY - timedelta(days=7)),
        debit("t4", 999, "Food", TODAY + timedelta(days=1)),
        credit("t5", 500, "Salary", TODAY),
    )
    result = daily_expenses(trans, TODAY)

    assert len(result) == 7
    assert result[0].date == TODAY - timedelta(days=6)
    assert result[-1].date == TODAY
    assert result[-1].label == "Oct 15"
    assert result[-1].amount == 100
    assert result[0].amount == 40
    assert sum(d.amount for d in result) == 140


def test_daily_breakdown_around_center():
    center = date(2026, 10, 10)
    trans = (
        debit("t1", 30, "Food", center - timedelta(days=3)),
        credit("t2", 500, "Salary", center + timedelta(days=3)),
        debit("t3", 999, "Food", center + timedelta(days=4)),
    )
    result = daily_breakdown(trans, center)

    assert [d.date for d in result] == [center + timedelta(days=i) for i in range(-3, 4)]
    assert result[0].expenses == 30
    assert result[-1].income == 500
    assert sum(d.expenses for d in result) == 30


def test_week_start_is_monday():
    assert week_start(TODAY) == date(2026, 10, 12)
    assert week_start(date(2026, 10, 12)) == date(2026, 10, 12)
    assert week_start(date(2026, 10, 18)) == date(2026, 10, 12)


def test_weekly_trends_four_monday_weeks():
    trans = (
        debit("t1", 100, "Food", date(2026, 10, 12)),
        debit("t2", 50, "Food", date(2026, 9, 21)),
        debit("t3", 999, "Food", date(2026, 9, 20)),
        credit("t4", 700, "Salary", date(2026, 10, 1)),
    )
    result = weekly_trends(trans, TODAY)

    assert [w.week_start for w in result] == [
        date(2026, 9, 21), date(2026, 9, 28), date(2026, 10, 5), date(2026, 10, 12)
    ]
    assert result[0].expenses == 50
    assert result[1].income == 700
    assert result[-1].expenses == 100
    assert sum(w.expenses for w in result) == 150


def test_weekly_trends_ignore_dates_after_today():
    trans = (debit("t1", 80, "Food", TODAY + timedelta(days=2)),)
    assert sum(w.expenses for w in weekly_trends(trans, TODAY)) == 0


def test_shift_month_crosses_year():
    assert shift_month(2026, 2, -3) == (2025, 11)
    assert shift_month(2025, 12, 1) == (2026, 1)


def test_monthly_expenses_current_year_last_four_months():
    trans = (
        debit("t1", 100, "Food", date(2026, 7, 3)),
        debit("t2", 200, "Bills", date(2026, 10, 1)),
        debit("t3", 999, "Food", date(2026, 6, 30)),
    )
    result = monthly_expenses(trans, 2026, TODAY)

    assert [(m.month, m.year) for m in result] == [("Jul", 2026), ("Aug", 2026), ("Sep", 2026), ("Oct", 2026)]
    assert [m.total for m in result] == [100, 0, 0, 200]


def test_monthly_expenses_window_reaches_previous_year():
    today = date(2026, 2, 10)
    trans = (debit("t1", 60, "Food", date(2025, 11, 20)),)
    result = monthly_expenses(trans, None, today)

    assert [(m.month, m.year) for m in result] == [("Nov", 2025), ("Dec", 2025), ("Jan", 2026), ("Feb", 2026)]
    assert result[0].total == 60


def test_monthly_expenses_past_year_is_september_to_december():
    trans = (
        debit("t1", 100, "Food", date(2025, 9, 1)),
        debit("t2", 50, "Food", date(2025, 3, 1)),
    )
    result = monthly_expenses(trans, 2025, TODAY)

    assert [m.month for m in result] == ["Sep", "Oct", "Nov", "Dec"]
    assert [m.total for m in result] == [100, 0, 0, 0]


def test_available_years_newest_first():
    trans = (
        debit("t1", 1, "Food", date(2024, 5, 1)),
        debit("t2", 1, "Food", date(2026, 1, 1)),
        credit("t3", 1, "Gift", date(2024, 8, 1)),
    )
    assert available_years(trans, TODAY) == [2026, 2024]
    assert available_years((), TODAY) == [2026]


def test_empty_ledger_returns_zero_buckets():
    assert category_expenses(()) == []
    assert all(d.amount == 0 for d in daily_expenses((), TODAY))
    assert all(w.expenses == 0 and w.income == 0 for w in weekly_trends((), TODAY))
    assert all(m.total == 0 for m in monthly_expenses((), None, TODAY))
    assert all(d.expenses == 0 and d.income == 0 for d in daily_breakdown((), TODAY))
