"""
Database handle - engine and session factory
"""

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gestion_alquiler.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """Owns the SQLAlchemy engine. Built once at startup and injected."""

    def __init__(self, database_url: str, engine: Engine = None):
        self.url = database_url
        self.engine = engine or self._create_engine(database_url)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False
        )

    @staticmethod
    def _create_engine(database_url: str) -> Engine:
        if database_url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory databases only live as long as their single connection
            if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
                kwargs["poolclass"] = StaticPool
            return create_engine(database_url, **kwargs)
        return create_engine(database_url, pool_pre_ping=True, pool_recycle=1800)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed", url=self.engine.url.render_as_string(hide_password=True))


def get_db(request: Request) -> Iterator[Session]:
    """Request-scoped session from the application's database handle"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
