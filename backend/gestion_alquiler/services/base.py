"""
Service helpers shared by the CRUD services
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gestion_alquiler.core.exceptions import DatabaseException, NotFoundException, ValidationException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.utils.dates import day_range, end_of_day_ms
from gestion_alquiler.utils.pagination import PaginationParams, paginate

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")


class BaseService:
    """Holds the request session and the common lookups"""

    def __init__(self, db: Session, page_limit: int = 10):
        self.db = db
        self.page_limit = page_limit

    @contextmanager
    def db_errors(self, action: str) -> Iterator[None]:
        """Roll back and re-raise store failures as DatabaseException"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database operation failed", action=action, error=str(e))
            raise DatabaseException(f"Error {action}: {e}") from e

    def paginate(self, query: Any, model: Any, params: PaginationParams, endpoint_tag: str) -> Dict[str, Any]:
        with self.db_errors(f"listing {endpoint_tag}"):
            return paginate(query, model, params, self.page_limit, endpoint_tag)

    def get_or_404(self, model: Type[ModelT], record_id: int, label: str) -> ModelT:
        with self.db_errors(f"getting {label} {record_id}"):
            record = self.db.get(model, record_id)
        if record is None:
            raise NotFoundException(f"{label.capitalize()} {record_id} not found")
        return record

    def save(self, record: Any, action: str) -> Any:
        with self.db_errors(action):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def remove(self, record: Any, action: str) -> None:
        with self.db_errors(action):
            self.db.delete(record)
            self.db.commit()


def reject_nulls(changes: Dict[str, Any], nullable: Iterable[str] = ()) -> None:
    """Partial updates may only null out nullable fields"""
    nullable = set(nullable)
    for field, value in changes.items():
        if value is None and field not in nullable:
            raise ValidationException(f"Field {field} cannot be null")


def apply_day_range(query: Any, column: Any, start: Optional[int], end: Optional[int], label: str) -> Any:
    """Filter ``column`` on a whole-day range, either bound may be omitted"""
    if start is None and end is None:
        return query
    if start is not None and end is not None:
        lower, upper = day_range(start, end, label)
        return query.filter(column >= lower, column <= upper)
    if start is not None:
        lower, _ = day_range(start, start, label)
        return query.filter(column >= lower)
    return query.filter(column <= end_of_day_ms(end))
