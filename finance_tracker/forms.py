"""State behind the creation dialogs, kept free of UI widgets."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Sequence

from pydantic import BaseModel, Field

from finance_tracker.models import Category, Transaction, TransactionType

DATE_FORMAT = "%Y-%m-%d"
CENT = Decimal("0.01")


def parse_amount(text: str) -> Decimal:
    """Parse user input as a non-negative amount in cents; anything unparseable becomes 0.00."""
    try:
        value = Decimal(text)
        if not value.is_finite():
            return Decimal("0.00")
        return abs(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (TypeError, InvalidOperation):
        return Decimal("0.00")


class TransactionForm(BaseModel):
    """Add-transaction dialog state."""

    amount_text: str = ""
    description: str = ""
    type: TransactionType = TransactionType.EXPENSE
    date: datetime = Field(default_factory=datetime.now)
    category: str = ""
    categories: list[str] = Field(default_factory=list)

    @property
    def can_submit(self) -> bool:
        return self.amount_text != "" and self.category != ""

    @property
    def amount(self) -> Decimal:
        return parse_amount(self.amount_text)

    @property
    def date_text(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    def set_categories(self, categories: Sequence[Category]) -> None:
        """Replace the selectable categories and preselect the first one."""
        self.categories = [c.name for c in categories]
        self.category = self.categories[0] if self.categories else ""

    def select_type(self, type: TransactionType, categories: Sequence[Category]) -> None:
        self.type = type
        self.set_categories(categories)

    def set_date(self, text: str) -> bool:
        """Set the date from ``YYYY-MM-DD``; returns False and keeps the old date if invalid."""
        try:
            self.date = datetime.strptime(text, DATE_FORMAT)
        except (TypeError, ValueError):
            return False
        return True

    def to_transaction(self) -> Transaction:
        return Transaction(
            amount=self.amount,
            category=self.category,
            date=self.date,
            description=self.description,
            type=self.type,
        )


class CategoryForm(BaseModel):
    """Add-category dialog state."""

    name: str = ""
    type: TransactionType = TransactionType.EXPENSE

    @property
    def can_submit(self) -> bool:
        return self.name.strip() != ""

    def to_category(self) -> Category:
        return Category(name=self.name.strip(), type=self.type)
