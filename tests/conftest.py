from datetime import datetime

import pytest

from finance_tracker.database import Database
from finance_tracker.models import Transaction, TransactionType
from finance_tracker.services import FinanceState


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'test.db'}")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def state(database):
    return FinanceState(database)


@pytest.fixture
def make_txn():
    def factory(amount, type=TransactionType.EXPENSE, category="Food", day=1, description=""):
        return Transaction(
            amount=amount,
            category=category,
            date=datetime(2025, 9, day),
            description=description,
            type=type,
        )

    return factory
