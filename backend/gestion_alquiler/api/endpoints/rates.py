"""
Rate Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gestion_alquiler.api.deps import get_rate_service, pagination_params
from gestion_alquiler.api.schemas import DeletedResponse, Page, RateCreate, RateResponse, RateUpdate
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.rates import RateService
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=Page[RateResponse])
def list_rates(
    name: Optional[str] = None,
    apartment_id: Optional[int] = Query(None, alias="apartmentId"),
    pagination: PaginationParams = Depends(pagination_params),
    service: RateService = Depends(get_rate_service)
):
    logger.info("Listing rates", page=pagination.page)
    return service.list(pagination, name=name, apartment_id=apartment_id)


@router.get("/{rate_id}", response_model=RateResponse)
def get_rate(rate_id: int, service: RateService = Depends(get_rate_service)):
    return service.get(rate_id)


@router.post("", response_model=RateResponse, status_code=status.HTTP_201_CREATED)
def create_rate(data: RateCreate, service: RateService = Depends(get_rate_service)):
    logger.info("Creating rate", apartment_id=data.apartment_id)
    return service.create(data)


@router.put("/{rate_id}", response_model=RateResponse)
def update_rate(rate_id: int, data: RateUpdate, service: RateService = Depends(get_rate_service)):
    """Update a rate. Price or VAT changes reprice every income of the rate."""
    logger.info("Updating rate", rate_id=rate_id)
    return service.update(rate_id, data)


@router.delete("/{rate_id}", response_model=DeletedResponse)
def delete_rate(rate_id: int, service: RateService = Depends(get_rate_service)):
    logger.info("Deleting rate", rate_id=rate_id)
    service.delete(rate_id)
    return DeletedResponse(id=rate_id)
