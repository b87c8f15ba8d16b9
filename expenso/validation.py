import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Generic, List, Optional, TypeVar

from expenso import config

T = TypeVar('T')
E = TypeVar('E')


class Maybe(Generic[T], ABC):
    """Result of parsing one form field: ``Some(value)`` or ``Nothing()``."""

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_none(self) -> bool:
        pass


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_none(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Some({self._value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default

    def is_none(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):
    """Outcome of a form submission: ``Right(cleaned data)`` or ``Left(field errors)``."""

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value})"


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error})"


FormErrors = List[Dict[str, str]]


def parse_amount(raw: Any) -> Maybe[float]:
    """Parse form input into a finite float. Empty, non-numeric, nan or inf input is Nothing."""
    if raw is None:
        return Nothing()
    text = str(raw).strip()
    if not text:
        return Nothing()
    try:
        value = float(text)
    except ValueError:
        return Nothing()
    return Some(value) if math.isfinite(value) else Nothing()


def _is_blank(raw: Any) -> bool:
    return raw is None or not str(raw).strip()


def _error(field: str, error: str, message: str) -> Dict[str, str]:
    return {"field": field, "error": error, "message": message}


def _check_amount(raw: Any, field: str = "amount") -> Optional[Dict[str, str]]:
    if _is_blank(raw):
        return _error(field, "amount_required", "Please enter an amount")
    if parse_amount(raw).get_or_else(0.0) <= 0:
        return _error(field, "amount_invalid", "Please enter a valid positive amount")
    return None


def _check_saved_amount(raw: Any) -> Optional[Dict[str, str]]:
    # blank means nothing saved yet
    if _is_blank(raw):
        return None
    parsed = parse_amount(raw)
    if parsed.is_none():
        return _error("current_amount", "amount_invalid", "Please enter a valid saved amount")
    if parsed.get_or_else(0.0) < 0:
        return _error("current_amount", "amount_invalid", "Saved amount cannot be negative")
    return None


def field_errors(result: Either[FormErrors, Any]) -> Dict[str, str]:
    """Map field name to message, for rendering errors next to their inputs."""
    if result.is_right():
        return {}
    return {e["field"]: e["message"] for e in result.get_error()}


def validate_debit(
    amount: Any,
    category: str,
    custom_category: str = "",
    tx_date: Optional[date] = None,
    notes: str = "",
) -> Either[FormErrors, Dict[str, Any]]:
    errors: FormErrors = []

    amount_error = _check_amount(amount)
    if amount_error:
        errors.append(amount_error)

    if not category:
        errors.append(_error("category", "category_required", "Please select a category"))
    elif category == config.CUSTOM_CATEGORY and not (custom_category or "").strip():
        errors.append(_error("custom_category", "custom_category_required",
                             "Please enter a custom category name"))

    if errors:
        return Left(errors)

    final_category = custom_category.strip() if category == config.CUSTOM_CATEGORY else category
    return Right({
        "amount": parse_amount(amount).get_or_else(0.0),
        "date": tx_date or date.today(),
        "type": config.DEBIT,
        "category": final_category,
        "notes": notes or "",
    })


def validate_credit(
    amount: Any,
    source: str,
    tx_date: Optional[date] = None,
    notes: str = "",
) -> Either[FormErrors, Dict[str, Any]]:
    errors: FormErrors = []

    if not (source or "").strip():
        errors.append(_error("source", "source_required", "Please enter the source of income"))

    amount_error = _check_amount(amount)
    if amount_error:
        errors.append(amount_error)

    if errors:
        return Left(errors)

    return Right({
        "amount": parse_amount(amount).get_or_else(0.0),
        "date": tx_date or date.today(),
        "type": config.CREDIT,
        "source": source.strip(),
        "notes": notes or "",
    })


def validate_goal(
    name: str,
    target_amount: Any,
    current_amount: Any = 0,
    category: str = "",
    description: str = "",
    target_date: Optional[date] = None,
) -> Either[FormErrors, Dict[str, Any]]:
    errors: FormErrors = []

    if not (name or "").strip():
        errors.append(_error("name", "name_required", "Please enter a goal name"))

    target_error = _check_amount(target_amount, field="target_amount")
    if target_error:
        errors.append(target_error)

    current_error = _check_saved_amount(current_amount)
    if current_error:
        errors.append(current_error)

    if errors:
        return Left(errors)

    return Right({
        "name": name.strip(),
        "target_amount": parse_amount(target_amount).get_or_else(0.0),
        "current_amount": parse_amount(current_amount).get_or_else(0.0),
        "category": category or "Other",
        "description": description or "",
        "target_date": target_date,
    })


def validate_investment(amount: Any, notes: str = "") -> Either[FormErrors, Dict[str, Any]]:
    amount_error = _check_amount(amount)
    if amount_error:
        return Left([amount_error])
    return Right({"amount": parse_amount(amount).get_or_else(0.0), "notes": notes or ""})
