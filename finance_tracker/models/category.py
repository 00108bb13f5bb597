"""Category model for the finance tracker."""

from typing import Optional

from sqlmodel import Field, SQLModel

from finance_tracker.models.transaction import TransactionType


class Category(SQLModel, table=True):
    """User-defined category. Names are unique only within a type."""

    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    type: TransactionType = Field(index=True)
