"""Database configuration and session management."""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from finance_tracker.events import EventBus

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class StorageError(Exception):
    """Raised when the local database cannot be read or written."""


class Database:
    """Owns the SQLite engine and the event bus that drives live queries.

    One instance is created at startup and passed to whatever needs storage.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        self.events = EventBus()

    def init_db(self) -> None:
        """Create tables and stamp or verify the schema version."""
        # Import models to register them with SQLModel
        from finance_tracker.models import Category, Transaction  # noqa: F401

        try:
            with self.engine.begin() as conn:
                version = conn.execute(text("PRAGMA user_version")).scalar() or 0
                if version not in (0, SCHEMA_VERSION):
                    raise StorageError(
                        f"Unsupported database schema version {version} "
                        f"(expected {SCHEMA_VERSION})"
                    )
                SQLModel.metadata.create_all(conn)
                if version == 0:
                    conn.execute(text(f"PRAGMA user_version = {SCHEMA_VERSION}"))
        except SQLAlchemyError as e:
            logger.exception("Failed to initialize database at %s", self.url)
            raise StorageError(f"Could not open database: {e}") from e

        logger.info("Database ready at %s (schema v%d)", self.url, self.schema_version())

    def schema_version(self) -> int:
        with self.engine.connect() as conn:
            return conn.execute(text("PRAGMA user_version")).scalar() or 0

    def get_session(self) -> Session:
        """Get a new database session."""
        return Session(self.engine, expire_on_commit=False)

    def dispose(self) -> None:
        self.engine.dispose()
