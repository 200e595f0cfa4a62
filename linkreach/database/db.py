"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from linkreach.models.base import Base

logger = logging.getLogger(__name__)


def _build_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if database_url in {"sqlite://", "sqlite:///:memory:"}:
            # One shared connection, otherwise every session sees an empty database.
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
    )


class Database:
    """Engine and session factory owned by the process entry point.

    Request handlers receive sessions through ``get_db``; nothing in the
    package reaches for a module-level engine.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.url = database_url
        self.engine = _build_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create every table known to the model metadata."""
        Base.metadata.create_all(bind=self.engine)

    def get_db(self) -> Generator[Session, None, None]:
        """Yield a session for dependency injection contexts."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context-manager wrapper for safe DB session lifecycle."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def verify_connection(self) -> bool:
        """Verify DB connectivity during startup."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as exc:
            logger.warning(
                "database.connection_failed",
                extra={
                    "event": "database.connection_failed",
                    "scheme": self.url.split("://", 1)[0],
                    "error": str(exc),
                },
            )
            return False

    def dispose(self) -> None:
        self.engine.dispose()
