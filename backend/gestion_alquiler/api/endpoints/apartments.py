"""
Apartment Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gestion_alquiler.api.deps import get_apartment_service, pagination_params
from gestion_alquiler.api.schemas import (
    ApartmentCreate, ApartmentResponse, ApartmentUpdate, DeletedResponse, Page
)
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.apartments import ApartmentService
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=Page[ApartmentResponse])
def list_apartments(
    name: Optional[str] = None,
    address: Optional[str] = None,
    city: Optional[str] = None,
    postal_code: Optional[str] = Query(None, alias="postalCode"),
    country: Optional[str] = None,
    pagination: PaginationParams = Depends(pagination_params),
    service: ApartmentService = Depends(get_apartment_service)
):
    logger.info("Listing apartments", page=pagination.page)
    return service.list(
        pagination,
        name=name,
        address=address,
        city=city,
        postal_code=postal_code,
        country=country
    )


@router.get("/{apartment_id}", response_model=ApartmentResponse)
def get_apartment(apartment_id: int, service: ApartmentService = Depends(get_apartment_service)):
    return service.get(apartment_id)


@router.post("", response_model=ApartmentResponse, status_code=status.HTTP_201_CREATED)
def create_apartment(data: ApartmentCreate, service: ApartmentService = Depends(get_apartment_service)):
    logger.info("Creating apartment")
    return service.create(data)


@router.put("/{apartment_id}", response_model=ApartmentResponse)
def update_apartment(
    apartment_id: int,
    data: ApartmentUpdate,
    service: ApartmentService = Depends(get_apartment_service)
):
    logger.info("Updating apartment", apartment_id=apartment_id)
    return service.update(apartment_id, data)


@router.delete("/{apartment_id}", response_model=DeletedResponse)
def delete_apartment(apartment_id: int, service: ApartmentService = Depends(get_apartment_service)):
    logger.info("Deleting apartment", apartment_id=apartment_id)
    service.delete(apartment_id)
    return DeletedResponse(id=apartment_id)
