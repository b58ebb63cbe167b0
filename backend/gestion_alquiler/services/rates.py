"""
Rate Service - CRUD over rates

Income totals are stored but always derived from the current price and VAT
of their rate, so editing either one recomputes every income of the rate.
"""

from typing import Any, Dict, List, Optional

from gestion_alquiler.api.schemas import RateCreate, RateUpdate
from gestion_alquiler.core.exceptions import ConflictException, NotFoundException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import Apartment, Income, Rate
from gestion_alquiler.services.base import BaseService, reject_nulls
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)

PRICING_FIELDS = ("price_per_night", "iva")


class RateService(BaseService):

    def list(
        self,
        pagination: PaginationParams,
        name: Optional[str] = None,
        apartment_id: Optional[int] = None
    ) -> Dict[str, Any]:
        query = self.db.query(Rate)
        if name:
            query = query.filter(Rate.name == name)
        if apartment_id:
            query = query.filter(Rate.apartment_id == apartment_id)
        return self.paginate(query, Rate, pagination, "rates")

    def get(self, rate_id: int) -> Rate:
        return self.get_or_404(Rate, rate_id, "rate")

    def _check_apartment(self, apartment_id: int) -> None:
        with self.db_errors(f"getting apartment {apartment_id}"):
            apartment = self.db.get(Apartment, apartment_id)
        if apartment is None:
            raise NotFoundException(f"Apartment {apartment_id} not found for the rate")

    def create(self, data: RateCreate) -> Rate:
        self._check_apartment(data.apartment_id)
        rate = Rate(**data.model_dump())
        logger.debug("Creating rate", name=data.name, apartment_id=data.apartment_id)
        return self.save(rate, "creating rate")

    def update(self, rate_id: int, data: RateUpdate) -> Rate:
        rate = self.get(rate_id)
        changes = data.model_dump(exclude_unset=True)
        reject_nulls(changes)

        if "apartment_id" in changes and changes["apartment_id"] != rate.apartment_id:
            self._check_apartment(changes["apartment_id"])
            with self.db_errors(f"counting incomes of rate {rate_id}"):
                in_use = self.db.query(Income).filter(Income.rate_id == rate_id).count()
            if in_use:
                raise ConflictException(
                    f"Rate {rate_id} is used by {in_use} incomes and cannot change apartment",
                    details={"incomes": in_use}
                )

        for field, value in changes.items():
            setattr(rate, field, value)

        repriced: List[Income] = []
        if any(field in changes for field in PRICING_FIELDS):
            with self.db_errors(f"loading incomes of rate {rate_id}"):
                repriced = self.db.query(Income).filter(Income.rate_id == rate_id).all()
            for income in repriced:
                income.refresh_totals(rate)

        rate = self.save(rate, f"updating rate {rate_id}")
        logger.info("Rate updated", rate_id=rate_id, fields=sorted(changes), incomes_repriced=len(repriced))
        return rate

    def delete(self, rate_id: int) -> None:
        rate = self.get(rate_id)
        with self.db_errors(f"counting incomes of rate {rate_id}"):
            in_use = self.db.query(Income).filter(Income.rate_id == rate_id).count()
        if in_use:
            raise ConflictException(
                f"Rate {rate_id} is still used by {in_use} incomes",
                details={"incomes": in_use}
            )
        self.remove(rate, f"deleting rate {rate_id}")
        logger.info("Rate deleted", rate_id=rate_id)
