"""Data models for the finance tracker."""

from finance_tracker.models.category import Category
from finance_tracker.models.summary import TransactionSummary
from finance_tracker.models.transaction import Transaction, TransactionType, as_decimal

__all__ = [
    "Category",
    "Transaction",
    "TransactionSummary",
    "TransactionType",
    "as_decimal",
]
