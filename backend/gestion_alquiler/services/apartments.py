"""
Apartment Service - CRUD over apartments
"""

from typing import Any, Dict, Optional

from gestion_alquiler.api.schemas import ApartmentCreate, ApartmentUpdate
from gestion_alquiler.core.exceptions import ConflictException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import Apartment, Expense, Income, Rate
from gestion_alquiler.services.base import BaseService, reject_nulls
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)


class ApartmentService(BaseService):

    def list(
        self,
        pagination: PaginationParams,
        name: Optional[str] = None,
        address: Optional[str] = None,
        city: Optional[str] = None,
        postal_code: Optional[str] = None,
        country: Optional[str] = None
    ) -> Dict[str, Any]:
        query = self.db.query(Apartment)
        if name:
            query = query.filter(Apartment.name == name)
        if address:
            query = query.filter(Apartment.address == address)
        if city:
            query = query.filter(Apartment.city == city)
        if postal_code:
            query = query.filter(Apartment.postal_code == postal_code)
        if country:
            query = query.filter(Apartment.country == country)
        return self.paginate(query, Apartment, pagination, "apartments")

    def get(self, apartment_id: int) -> Apartment:
        return self.get_or_404(Apartment, apartment_id, "apartment")

    def create(self, data: ApartmentCreate) -> Apartment:
        logger.debug("Creating apartment", name=data.name)
        apartment = Apartment(**data.model_dump())
        return self.save(apartment, "creating apartment")

    def update(self, apartment_id: int, data: ApartmentUpdate) -> Apartment:
        apartment = self.get(apartment_id)
        changes = data.model_dump(exclude_unset=True)
        reject_nulls(changes)
        for field, value in changes.items():
            setattr(apartment, field, value)
        logger.debug("Updating apartment", apartment_id=apartment_id, fields=sorted(changes))
        return self.save(apartment, f"updating apartment {apartment_id}")

    def delete(self, apartment_id: int) -> None:
        """Delete an apartment that owns no rates, incomes or expenses"""
        apartment = self.get(apartment_id)
        with self.db_errors(f"counting dependants of apartment {apartment_id}"):
            dependants = {
                "rates": self.db.query(Rate).filter(Rate.apartment_id == apartment_id).count(),
                "incomes": self.db.query(Income).filter(Income.apartment_id == apartment_id).count(),
                "expenses": self.db.query(Expense).filter(Expense.apartment_id == apartment_id).count()
            }
        if any(dependants.values()):
            raise ConflictException(
                f"Apartment {apartment_id} still has dependent records",
                details=dependants
            )
        self.remove(apartment, f"deleting apartment {apartment_id}")
        logger.info("Apartment deleted", apartment_id=apartment_id)
