"""
Database initialization script
"""

from sqlalchemy.exc import SQLAlchemyError

from gestion_alquiler.core.exceptions import DatabaseException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db import models  # noqa: F401  (registers the tables)
from gestion_alquiler.db.base import Base
from gestion_alquiler.db.session import Database

logger = get_logger(__name__)

def init_db(database: Database) -> None:
    """Initialize the database by creating all tables"""
    try:
        logger.info("Creating database tables")
        Base.metadata.create_all(bind=database.engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error("Failed to initialize database", error=str(e))
        raise DatabaseException(f"Failed to initialize database: {e}") from e
