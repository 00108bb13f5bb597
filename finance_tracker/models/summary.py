"""Derived statistics over the transaction list."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TransactionSummary(BaseModel):
    """Totals, balance and per-category expenses. Never persisted."""

    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    expense_by_category: dict[str, Decimal] = Field(default_factory=dict)
