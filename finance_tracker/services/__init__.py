"""Services package for the finance tracker."""

from finance_tracker.services.analytics_service import category_breakdown, summarize
from finance_tracker.services.category_service import CategoryService
from finance_tracker.services.state import FinanceState
from finance_tracker.services.transaction_service import TransactionService

__all__ = [
    "CategoryService",
    "FinanceState",
    "TransactionService",
    "category_breakdown",
    "summarize",
]
