"""Service for storing and querying transactions."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from finance_tracker.database import Database, StorageError
from finance_tracker.events import TRANSACTION_INSERTED
from finance_tracker.live import LiveQuery
from finance_tracker.models import Transaction, as_decimal

logger = logging.getLogger(__name__)


class TransactionService:
    """Append-only access to the ``transactions`` table."""

    def __init__(self, database: Database):
        self.database = database

    def read_transactions(self) -> list[Transaction]:
        """Return all transactions, newest date first."""
        try:
            with self.database.get_session() as session:
                query = select(Transaction).order_by(
                    Transaction.date.desc(), Transaction.id.desc()
                )
                return list(session.exec(query).all())
        except SQLAlchemyError as e:
            logger.exception("Failed to read transactions")
            raise StorageError("Could not load transactions") from e

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        """
        Insert a new transaction and notify live queries.

        Any id already set on ``transaction`` is ignored; the database assigns one.

        Returns:
            The stored transaction with its id populated
        """
        stored = Transaction(
            amount=as_decimal(transaction.amount),
            category=transaction.category,
            date=transaction.date,
            description=transaction.description or "",
            type=transaction.type,
        )
        try:
            with self.database.get_session() as session:
                session.add(stored)
                session.commit()
                session.refresh(stored)
        except SQLAlchemyError as e:
            logger.exception("Failed to insert transaction")
            raise StorageError("Could not save transaction") from e

        logger.debug(
            "Inserted transaction %s: %s %.2f (%s)",
            stored.id, stored.type.value, stored.amount, stored.category,
        )
        self.database.events.publish(
            TRANSACTION_INSERTED, {"id": stored.id, "type": stored.type}
        )
        return stored

    def watch_transactions(self) -> LiveQuery[list[Transaction]]:
        """Live view of ``read_transactions`` that refreshes on every insert."""
        return LiveQuery(
            self.database.events, TRANSACTION_INSERTED, self.read_transactions
        )
