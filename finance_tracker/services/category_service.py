"""Service for storing and querying categories."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from finance_tracker.database import Database, StorageError
from finance_tracker.events import CATEGORY_INSERTED
from finance_tracker.live import LiveQuery
from finance_tracker.models import Category, TransactionType

logger = logging.getLogger(__name__)


class CategoryService:
    """Append-only access to the ``categories`` table."""

    def __init__(self, database: Database):
        self.database = database

    def read_categories(self, type: TransactionType) -> list[Category]:
        """Return categories of one type ordered by name."""
        try:
            with self.database.get_session() as session:
                query = (
                    select(Category)
                    .where(Category.type == type)
                    .order_by(Category.name.asc(), Category.id.asc())
                )
                return list(session.exec(query).all())
        except SQLAlchemyError as e:
            logger.exception("Failed to read %s categories", type.value)
            raise StorageError("Could not load categories") from e

    def insert_category(self, category: Category) -> Category:
        """Insert a new category and notify live queries of the same type."""
        stored = Category(name=category.name, type=category.type)
        try:
            with self.database.get_session() as session:
                session.add(stored)
                session.commit()
                session.refresh(stored)
        except SQLAlchemyError as e:
            logger.exception("Failed to insert category %r", category.name)
            raise StorageError("Could not save category") from e

        logger.debug("Inserted %s category %r", stored.type.value, stored.name)
        self.database.events.publish(
            CATEGORY_INSERTED, {"id": stored.id, "type": stored.type}
        )
        return stored

    def watch_categories(self, type: TransactionType) -> LiveQuery[list[Category]]:
        """Live view of ``read_categories(type)``; other types do not trigger it."""
        return LiveQuery(
            self.database.events,
            CATEGORY_INSERTED,
            lambda: self.read_categories(type),
            affects=lambda payload: payload.get("type") == type,
        )
