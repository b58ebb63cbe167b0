"""
Pagination - Paged and sorted retrieval of list endpoints
"""

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from sqlalchemy.orm import ColumnProperty, Query

from gestion_alquiler.core.exceptions import NotFoundException, ValidationException
from gestion_alquiler.core.logging import get_logger

logger = get_logger(__name__)


class PaginationParams(BaseModel):
    """Page request. ``sort_by`` is a camelCase API field name."""
    page: int = Field(1, ge=1)
    limit: Optional[int] = Field(None, ge=1)
    sort_by: str = "updatedAt"
    sort_order: str = Field("asc", pattern="^(asc|desc)$")


def camel_to_snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


def paginate(
    query: Query,
    model: Any,
    params: PaginationParams,
    max_limit: int,
    endpoint_tag: str = "not_specified"
) -> Dict[str, Any]:
    """
    Apply sorting and paging to ``query``

    Args:
        query: Filtered SQLAlchemy query over ``model``
        model: Mapped class, used to resolve the sort column
        params: Page request
        max_limit: Upper bound for the page size
        endpoint_tag: Label for logging

    Returns:
        Dict with ``results`` and ``pagination`` (pages and items blocks)

    Raises:
        NotFoundException: If nothing matches the filters
        ValidationException: If the sort field is unknown or the page is
            past the last one
    """
    limit = min(params.limit, max_limit) if params.limit else max_limit
    column = getattr(model, camel_to_snake(params.sort_by), None)
    if column is None or not isinstance(getattr(column, "property", None), ColumnProperty):
        raise ValidationException(f"Cannot sort by {params.sort_by}")

    count = query.count()
    logger.debug("Pagination count", endpoint=endpoint_tag, count=count, page=params.page, limit=limit)
    if count == 0:
        raise NotFoundException("No results found")

    total_pages = math.ceil(count / limit)
    if params.page > total_pages:
        raise ValidationException(f"Page {params.page} is greater than total pages {total_pages}")

    order = column.desc() if params.sort_order == "desc" else column.asc()
    results: List[Any] = (
        query.order_by(order, model.id.asc())
        .offset((params.page - 1) * limit)
        .limit(limit)
        .all()
    )

    page = params.page
    return {
        "results": results,
        "pagination": {
            "pages": {
                "current": page,
                "prev": page - 1 if page > 1 else None,
                "has_prev": page > 1,
                "next": page + 1 if page < total_pages else None,
                "has_next": page < total_pages,
                "total": total_pages
            },
            "items": {
                "limit": limit,
                "begin": (page - 1) * limit + 1,
                "end": min(page * limit, count),
                "total": count
            }
        }
    }
