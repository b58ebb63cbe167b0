from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.session import get_db

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """Liveness check, including a round trip to the database."""
    logger.info("Health check requested")
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        database = "unavailable"
    return {
        "status": "healthy" if database == "ok" else "degraded",
        "components": {"database": database}
    }
