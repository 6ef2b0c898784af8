"""Expense reporting helpers."""

from decimal import Decimal
from typing import Iterable

from backend.app.models.expense import Expense
from backend.app.services.billing import to_money


def summarize_expenses(expenses: Iterable[Expense]) -> dict:
    """Total amount, count and a per-category breakdown of the given expenses."""
    total = Decimal("0.00")
    count = 0
    categories: dict[str, dict] = {}
    for expense in expenses:
        amount = to_money(expense.amount)
        total += amount
        count += 1
        bucket = categories.setdefault(expense.category, {"count": 0, "total": Decimal("0.00")})
        bucket["count"] += 1
        bucket["total"] += amount

    return {
        "total_amount": to_money(total),
        "total_count": count,
        "category_stats": {key: {"count": data["count"], "total": to_money(data["total"])} for key, data in categories.items()},
    }
