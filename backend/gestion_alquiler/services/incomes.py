"""
Income Service - CRUD over booking invoices

Nights and totals are never taken from the client: they are derived from the
stay and from the referenced rate every time one of their inputs changes.
"""

from typing import Any, Dict, Optional

from gestion_alquiler.api.schemas import IncomeCreate, IncomeUpdate
from gestion_alquiler.core.exceptions import NotFoundException, ValidationException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import Apartment, Income, Intermediary, Rate
from gestion_alquiler.services.base import BaseService, apply_day_range, reject_nulls
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)

# Fields that feed nights_between or income_totals
TOTALS_INPUTS = {"check_in", "check_out", "number_of_people", "discount", "rate_id"}


class IncomeService(BaseService):

    def list(
        self,
        pagination: PaginationParams,
        apartment_id: Optional[int] = None,
        intermediary_id: Optional[int] = None,
        rate_id: Optional[int] = None,
        start_check_in: Optional[int] = None,
        end_check_in: Optional[int] = None,
        start_check_out: Optional[int] = None,
        end_check_out: Optional[int] = None,
        nights: Optional[int] = None,
        client_name: Optional[str] = None,
        client_nif: Optional[str] = None,
        client_phone: Optional[str] = None,
        number_of_people: Optional[int] = None
    ) -> Dict[str, Any]:
        query = self.db.query(Income)
        if apartment_id:
            query = query.filter(Income.apartment_id == apartment_id)
        if intermediary_id:
            query = query.filter(Income.intermediary_id == intermediary_id)
        if rate_id:
            query = query.filter(Income.rate_id == rate_id)
        query = apply_day_range(query, Income.check_in, start_check_in, end_check_in, "check in")
        query = apply_day_range(query, Income.check_out, start_check_out, end_check_out, "check out")
        if nights is not None:
            query = query.filter(Income.nights == nights)
        if client_name:
            query = query.filter(Income.client_name == client_name)
        if client_nif:
            query = query.filter(Income.client_nif == client_nif)
        if client_phone:
            query = query.filter(Income.client_phone == client_phone)
        if number_of_people:
            query = query.filter(Income.number_of_people == number_of_people)
        return self.paginate(query, Income, pagination, "incomes")

    def get(self, income_id: int) -> Income:
        return self.get_or_404(Income, income_id, "income")

    def _load_rate(self, income: Income) -> Rate:
        """
        Check the references of ``income`` and return its rate

        Raises:
            NotFoundException: If the apartment, intermediary or rate is missing
            ValidationException: If the rate belongs to another apartment or
                the stay does not end after it starts
        """
        with self.db_errors("checking income references"):
            apartment = self.db.get(Apartment, income.apartment_id)
            intermediary = self.db.get(Intermediary, income.intermediary_id)
            rate = self.db.get(Rate, income.rate_id)

        if apartment is None:
            raise NotFoundException(f"Apartment {income.apartment_id} not found for the income")
        if intermediary is None:
            raise NotFoundException(f"Intermediary {income.intermediary_id} not found for the income")
        if rate is None:
            raise NotFoundException(f"Rate {income.rate_id} not found for the income")
        if rate.apartment_id != income.apartment_id:
            raise ValidationException(
                f"Rate {rate.id} does not belong to apartment {income.apartment_id}",
                error_code="RATE_APARTMENT_MISMATCH"
            )
        if income.check_out <= income.check_in:
            raise ValidationException("Check out must be after check in")
        return rate

    def create(self, data: IncomeCreate) -> Income:
        income = Income(**data.model_dump())
        rate = self._load_rate(income)
        income.refresh_totals(rate)
        income = self.save(income, "creating income")
        logger.info(
            "Income created",
            income_id=income.id,
            nights=income.nights,
            total_invoice=income.total_invoice
        )
        return income

    def update(self, income_id: int, data: IncomeUpdate) -> Income:
        income = self.get(income_id)
        changes = data.model_dump(exclude_unset=True)
        reject_nulls(changes, nullable=("observations",))

        for field, value in changes.items():
            setattr(income, field, value)
        rate = self._load_rate(income)

        if TOTALS_INPUTS.intersection(changes):
            income.refresh_totals(rate)
        return self.save(income, f"updating income {income_id}")

    def delete(self, income_id: int) -> None:
        income = self.get(income_id)
        self.remove(income, f"deleting income {income_id}")
        logger.info("Income deleted", income_id=income_id)
