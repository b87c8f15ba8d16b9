from datetime import date

from expenso.validation import (
    Left,
    Nothing,
    Right,
    Some,
    field_errors,
    parse_amount,
    validate_credit,
    validate_debit,
    validate_goal,
    validate_investment,
)


def test_maybe_get_or_else():
    assert Some(5).get_or_else(0) == 5
    assert Nothing().get_or_else(0) == 0
    assert Nothing().is_none()
    assert not Some(0).is_none()


def test_either_left_and_right():
    assert Right(5).get_or_else(0) == 5
    assert Right(5).is_right()
    left = Left("error")
    assert left.is_left()
    assert left.get_error() == "error"
    assert left.get_or_else(0) == 0


def test_parse_amount():
    assert parse_amount("120.50") == Some(120.5)
    assert parse_amount(" 42 ") == Some(42.0)
    assert parse_amount("").is_none()
    assert parse_amount("abc").is_none()
    assert parse_amount(None).is_none()
    assert parse_amount("nan").is_none()
    assert parse_amount("inf").is_none()


def test_validate_debit_success():
    result = validate_debit("120", "Food", tx_date=date(2026, 10, 1), notes="Groceries")

    assert result.is_right()
    data = result.get_or_else(None)
    assert data == {
        "amount": 120.0,
        "date": date(2026, 10, 1),
        "type": "debit",
        "category": "Food",
        "notes": "Groceries",
    }


def test_validate_debit_missing_amount_and_category():
    result = validate_debit("", "")

    assert result.is_left()
    errors = field_errors(result)
    assert errors["amount"] == "Please enter an amount"
    assert errors["category"] == "Please select a category"


def test_validate_debit_rejects_non_positive_amounts():
    for raw in ("0", "-5", "abc", "nan"):
        errors = field_errors(validate_debit(raw, "Food"))
        assert errors["amount"] == "Please enter a valid positive amount"


def test_validate_debit_custom_category():
    missing = validate_debit("50", "Others", custom_category="  ")
    assert field_errors(missing) == {"custom_category": "Please enter a custom category name"}

    ok = validate_debit("50", "Others", custom_category=" Pets ")
    assert ok.get_or_else({})["category"] == "Pets"


def test_validate_credit():
    ok = validate_credit("5000", "Salary", notes="Monthly salary")
    assert ok.is_right()
    assert ok.get_or_else({})["type"] == "credit"
    assert ok.get_or_else({})["source"] == "Salary"

    bad = validate_credit("", " ")
    errors = field_errors(bad)
    assert errors["source"] == "Please enter the source of income"
    assert errors["amount"] == "Please enter an amount"


def test_validate_goal():
    ok = validate_goal("Laptop", "80000", "25000", "Electronics")
    assert ok.get_or_else({})["target_amount"] == 80000
    assert ok.get_or_else({})["current_amount"] == 25000

    default_category = validate_goal("Trip", "1000")
    assert default_category.get_or_else({})["category"] == "Other"

    bad = field_errors(validate_goal("", "0", "-1"))
    assert set(bad) == {"name", "target_amount", "current_amount"}
    assert bad["current_amount"] == "Saved amount cannot be negative"


def test_validate_goal_blank_saved_amount_defaults_to_zero():
    for raw in ("", "  ", None):
        assert validate_goal("Trip", "1000", raw).get_or_else({})["current_amount"] == 0


def test_validate_goal_rejects_unusable_saved_amount():
    for raw in ("abc", "nan", "inf", "-inf"):
        result = validate_goal("Laptop", "80000", raw)
        assert result.is_left()
        assert field_errors(result) == {"current_amount": "Please enter a valid saved amount"}


def test_validate_investment():
    assert validate_investment("2000").get_or_else({})["amount"] == 2000
    assert field_errors(validate_investment("-2")) == {"amount": "Please enter a valid positive amount"}


def test_field_errors_of_right_is_empty():
    assert field_errors(Right({"amount": 1})) == {}
