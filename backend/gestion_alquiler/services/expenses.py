"""
Expense Service - CRUD over apartment expenses
"""

from typing import Any, Dict, Optional

from gestion_alquiler.api.schemas import ExpenseCreate, ExpenseUpdate
from gestion_alquiler.core.exceptions import NotFoundException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import Apartment, Expense
from gestion_alquiler.services.base import BaseService, apply_day_range, reject_nulls
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)


class ExpenseService(BaseService):

    def list(
        self,
        pagination: PaginationParams,
        concept: Optional[str] = None,
        apartment_id: Optional[int] = None,
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
        provider_nif: Optional[str] = None,
        paid: Optional[bool] = None
    ) -> Dict[str, Any]:
        query = self.db.query(Expense)
        if concept:
            query = query.filter(Expense.concept == concept)
        if apartment_id:
            query = query.filter(Expense.apartment_id == apartment_id)
        query = apply_day_range(query, Expense.date, start_date, end_date, "date")
        if provider_nif:
            query = query.filter(Expense.provider_nif == provider_nif)
        if paid is not None:
            query = query.filter(Expense.paid == paid)
        return self.paginate(query, Expense, pagination, "expenses")

    def get(self, expense_id: int) -> Expense:
        return self.get_or_404(Expense, expense_id, "expense")

    def _check_apartment(self, apartment_id: int) -> None:
        with self.db_errors(f"getting apartment {apartment_id}"):
            apartment = self.db.get(Apartment, apartment_id)
        if apartment is None:
            raise NotFoundException(f"Apartment {apartment_id} not found for the expense")

    def create(self, data: ExpenseCreate) -> Expense:
        self._check_apartment(data.apartment_id)
        expense = Expense(**data.model_dump())
        expense.refresh_totals()
        return self.save(expense, "creating expense")

    def update(self, expense_id: int, data: ExpenseUpdate) -> Expense:
        expense = self.get(expense_id)
        changes = data.model_dump(exclude_unset=True)
        reject_nulls(changes, nullable=("provider_nif",))
        if "apartment_id" in changes:
            self._check_apartment(changes["apartment_id"])
        for field, value in changes.items():
            setattr(expense, field, value)
        if "expense" in changes or "iva" in changes:
            expense.refresh_totals()
        return self.save(expense, f"updating expense {expense_id}")

    def delete(self, expense_id: int) -> None:
        expense = self.get(expense_id)
        self.remove(expense, f"deleting expense {expense_id}")
        logger.info("Expense deleted", expense_id=expense_id)
