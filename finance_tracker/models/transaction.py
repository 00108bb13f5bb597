"""Transaction model for the finance tracker."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class TransactionType(str, Enum):
    """Direction of a transaction; also scopes category names."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


def as_decimal(value) -> Decimal:
    """Exact decimal for an amount given as Decimal, int, float or str."""
    if isinstance(value, Decimal):
        return value
    # str() keeps the float's shortest repr, so 0.1 becomes Decimal("0.1")
    return Decimal(str(value))


class Transaction(SQLModel, table=True):
    """A single income or expense entry entered by the user."""

    __tablename__ = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Magnitude only, the direction lives in `type`
    amount: Decimal = Field(max_digits=12, decimal_places=2)

    # Name of the category at creation time, not a foreign key
    category: str

    date: datetime = Field(index=True)
    description: str = Field(default="")
    type: TransactionType = Field(index=True)
