from typing import Any, Callable, Dict, List, Sequence

Calculator = Callable[..., Dict[str, Any]]


class DashboardService:
    """Facade that builds the dashboard report from injected calculators.

    calculators: sequence of functions taking (store, acc) -> dict (partial results).
    ``acc`` holds everything earlier calculators produced.
    """

    def __init__(self, calculators: Sequence[Calculator]):
        self.calculators = calculators

    def report(self, store) -> Dict[str, Any]:
        """Run calculators in order and return the merged result with intermediate steps."""
        report = {"steps": [], "errors": [], "result": {}}

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            name = getattr(calc, "__name__", str(calc))
            try:
                out = calc(store, acc)
            except Exception as e:
                report["errors"].append({"calculator": name, "error": f"{type(e).__name__}: {e}"})
                continue
            report["steps"].append({"calculator": name, "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


def calc_summary(store, acc) -> Dict[str, Any]:
    return {
        "income": store.total_income(),
        "expenses": store.total_expenses(),
        "balance": store.current_balance(),
    }


def calc_categories(store, acc) -> Dict[str, Any]:
    return {"categories": store.category_expenses()}


def calc_daily(store, acc) -> Dict[str, Any]:
    return {"daily": store.daily_expenses()}


def calc_weekly(store, acc) -> Dict[str, Any]:
    return {"weekly": store.weekly_trends()}


def calc_savings_rate(store, acc) -> Dict[str, Any]:
    income = acc.get("income", 0.0)
    rate = acc.get("balance", 0.0) / income * 100 if income > 0 else 0.0
    return {"savings_rate": rate}


def default_calculators() -> List[Calculator]:
    return [calc_summary, calc_categories, calc_daily, calc_weekly, calc_savings_rate]
