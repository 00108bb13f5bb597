"""Application state shared by the UI: live views, derived summary and commands."""

import logging

from finance_tracker.database import Database
from finance_tracker.live import LiveQuery, Observable
from finance_tracker.models import Category, Transaction, TransactionSummary, TransactionType
from finance_tracker.services.analytics_service import summarize
from finance_tracker.services.category_service import CategoryService
from finance_tracker.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = {
    TransactionType.EXPENSE: "Default",
    TransactionType.INCOME: "Salary",
}


class FinanceState:
    """Bridges the store's live queries and the presentation layer."""

    def __init__(self, database: Database):
        self.database = database
        self.transaction_service = TransactionService(database)
        self.category_service = CategoryService(database)

        self.transactions: LiveQuery[list[Transaction]] = (
            self.transaction_service.watch_transactions()
        )
        self.income_categories: LiveQuery[list[Category]] = (
            self.category_service.watch_categories(TransactionType.INCOME)
        )
        self.expense_categories: LiveQuery[list[Category]] = (
            self.category_service.watch_categories(TransactionType.EXPENSE)
        )
        self.summary: Observable[TransactionSummary] = self.transactions.map(summarize)

    def categories(self, type: TransactionType) -> LiveQuery[list[Category]]:
        if type == TransactionType.INCOME:
            return self.income_categories
        return self.expense_categories

    def activate(self) -> None:
        """Run first-launch setup."""
        self.seed_default_categories()

    def seed_default_categories(self) -> None:
        """Insert a default category for each type that has none yet."""
        for type, name in DEFAULT_CATEGORIES.items():
            if not self.category_service.read_categories(type):
                logger.info("Seeding default %s category %r", type.value, name)
                self.insert_category(Category(name=name, type=type))

    def insert_transaction(self, transaction: Transaction) -> None:
        self.transaction_service.insert_transaction(transaction)

    def insert_category(self, category: Category) -> None:
        self.category_service.insert_category(category)
