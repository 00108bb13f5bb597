"""Summary statistics over transactions."""

from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable

from finance_tracker.models import Transaction, TransactionSummary, TransactionType, as_decimal

ZERO = Decimal("0")


def summarize(transactions: Iterable[Transaction]) -> TransactionSummary:
    """
    Compute totals, balance and expenses per category in a single pass.

    Amounts are summed as ``Decimal``, so the result is exact and does not
    depend on input order.
    """
    total_income = ZERO
    total_expense = ZERO
    expense_by_cat: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for t in transactions:
        amount = as_decimal(t.amount)
        if t.type == TransactionType.INCOME:
            total_income += amount
        else:
            total_expense += amount
            expense_by_cat[t.category] += amount

    return TransactionSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        expense_by_category=dict(expense_by_cat),
    )


def category_breakdown(expense_by_category: dict[str, Decimal]) -> list[dict[str, Any]]:
    """
    Get per-category share of expenses, largest first.

    Returns list of dicts with 'category', 'amount' (Decimal), 'percentage' (float, 0-100)
    """
    amounts = {cat: as_decimal(amount) for cat, amount in expense_by_category.items()}
    total = sum(amounts.values(), ZERO)

    rows = [
        {
            "category": cat,
            "amount": amount,
            "percentage": float(amount / total * 100) if total > 0 else 0.0,
        }
        for cat, amount in amounts.items()
    ]
    rows.sort(key=lambda r: (-r["amount"], r["category"]))
    return rows
