"""
Expense Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gestion_alquiler.api.deps import get_expense_service, pagination_params
from gestion_alquiler.api.schemas import DeletedResponse, ExpenseCreate, ExpenseResponse, ExpenseUpdate, Page
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.expenses import ExpenseService
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=Page[ExpenseResponse])
def list_expenses(
    concept: Optional[str] = None,
    apartment_id: Optional[int] = Query(None, alias="apartmentId"),
    start_date: Optional[int] = Query(None, alias="startDate", description="UTC ms"),
    end_date: Optional[int] = Query(None, alias="endDate", description="UTC ms"),
    provider_nif: Optional[str] = Query(None, alias="providerNif"),
    paid: Optional[bool] = None,
    pagination: PaginationParams = Depends(pagination_params),
    service: ExpenseService = Depends(get_expense_service)
):
    logger.info("Listing expenses", page=pagination.page)
    return service.list(
        pagination,
        concept=concept,
        apartment_id=apartment_id,
        start_date=start_date,
        end_date=end_date,
        provider_nif=provider_nif,
        paid=paid
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    return service.get(expense_id)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(data: ExpenseCreate, service: ExpenseService = Depends(get_expense_service)):
    logger.info("Creating expense", apartment_id=data.apartment_id)
    return service.create(data)


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(expense_id: int, data: ExpenseUpdate, service: ExpenseService = Depends(get_expense_service)):
    logger.info("Updating expense", expense_id=expense_id)
    return service.update(expense_id, data)


@router.delete("/{expense_id}", response_model=DeletedResponse)
def delete_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    logger.info("Deleting expense", expense_id=expense_id)
    service.delete(expense_id)
    return DeletedResponse(id=expense_id)
