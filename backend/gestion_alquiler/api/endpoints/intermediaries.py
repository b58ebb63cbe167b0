"""
Intermediary Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from gestion_alquiler.api.deps import get_intermediary_service, pagination_params
from gestion_alquiler.api.schemas import (
    DeletedResponse, IntermediaryCreate, IntermediaryResponse, IntermediaryUpdate, Page
)
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.intermediaries import IntermediaryService
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=Page[IntermediaryResponse])
def list_intermediaries(
    name: Optional[str] = None,
    surname: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    pagination: PaginationParams = Depends(pagination_params),
    service: IntermediaryService = Depends(get_intermediary_service)
):
    logger.info("Listing intermediaries", page=pagination.page)
    return service.list(pagination, name=name, surname=surname, email=email, phone=phone)


@router.get("/{intermediary_id}", response_model=IntermediaryResponse)
def get_intermediary(intermediary_id: int, service: IntermediaryService = Depends(get_intermediary_service)):
    return service.get(intermediary_id)


@router.post("", response_model=IntermediaryResponse, status_code=status.HTTP_201_CREATED)
def create_intermediary(data: IntermediaryCreate, service: IntermediaryService = Depends(get_intermediary_service)):
    logger.info("Creating intermediary")
    return service.create(data)


@router.put("/{intermediary_id}", response_model=IntermediaryResponse)
def update_intermediary(
    intermediary_id: int,
    data: IntermediaryUpdate,
    service: IntermediaryService = Depends(get_intermediary_service)
):
    logger.info("Updating intermediary", intermediary_id=intermediary_id)
    return service.update(intermediary_id, data)


@router.delete("/{intermediary_id}", response_model=DeletedResponse)
def delete_intermediary(intermediary_id: int, service: IntermediaryService = Depends(get_intermediary_service)):
    logger.info("Deleting intermediary", intermediary_id=intermediary_id)
    service.delete(intermediary_id)
    return DeletedResponse(id=intermediary_id)
