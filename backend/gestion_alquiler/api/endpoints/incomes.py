"""
Income Endpoints - Booking invoices
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gestion_alquiler.api.deps import get_income_service, pagination_params
from gestion_alquiler.api.schemas import DeletedResponse, IncomeCreate, IncomeResponse, IncomeUpdate, Page
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.incomes import IncomeService
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=Page[IncomeResponse])
def list_incomes(
    apartment_id: Optional[int] = Query(None, alias="apartmentId"),
    intermediary_id: Optional[int] = Query(None, alias="intermediaryId"),
    rate_id: Optional[int] = Query(None, alias="rateId"),
    start_check_in: Optional[int] = Query(None, alias="startCheckIn", description="UTC ms"),
    end_check_in: Optional[int] = Query(None, alias="endCheckIn", description="UTC ms"),
    start_check_out: Optional[int] = Query(None, alias="startCheckOut", description="UTC ms"),
    end_check_out: Optional[int] = Query(None, alias="endCheckOut", description="UTC ms"),
    nights: Optional[int] = Query(None, ge=0),
    client_name: Optional[str] = Query(None, alias="clientName"),
    client_nif: Optional[str] = Query(None, alias="clientNif"),
    client_phone: Optional[str] = Query(None, alias="clientPhone"),
    number_of_people: Optional[int] = Query(None, alias="numberOfPeople", ge=1),
    pagination: PaginationParams = Depends(pagination_params),
    service: IncomeService = Depends(get_income_service)
):
    logger.info("Listing incomes", page=pagination.page)
    return service.list(
        pagination,
        apartment_id=apartment_id,
        intermediary_id=intermediary_id,
        rate_id=rate_id,
        start_check_in=start_check_in,
        end_check_in=end_check_in,
        start_check_out=start_check_out,
        end_check_out=end_check_out,
        nights=nights,
        client_name=client_name,
        client_nif=client_nif,
        client_phone=client_phone,
        number_of_people=number_of_people
    )


@router.get("/{income_id}", response_model=IncomeResponse)
def get_income(income_id: int, service: IncomeService = Depends(get_income_service)):
    return service.get(income_id)


@router.post("", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
def create_income(data: IncomeCreate, service: IncomeService = Depends(get_income_service)):
    """Create an income. Nights and totals are computed from the stay and the rate."""
    logger.info("Creating income", apartment_id=data.apartment_id, rate_id=data.rate_id)
    return service.create(data)


@router.put("/{income_id}", response_model=IncomeResponse)
def update_income(income_id: int, data: IncomeUpdate, service: IncomeService = Depends(get_income_service)):
    logger.info("Updating income", income_id=income_id)
    return service.update(income_id, data)


@router.delete("/{income_id}", response_model=DeletedResponse)
def delete_income(income_id: int, service: IncomeService = Depends(get_income_service)):
    logger.info("Deleting income", income_id=income_id)
    service.delete(income_id)
    return DeletedResponse(id=income_id)
