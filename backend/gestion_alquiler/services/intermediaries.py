"""
Intermediary Service - CRUD over booking channels
"""

from typing import Any, Dict, Optional

from gestion_alquiler.api.schemas import IntermediaryCreate, IntermediaryUpdate
from gestion_alquiler.core.exceptions import ConflictException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import Income, Intermediary
from gestion_alquiler.services.base import BaseService, reject_nulls
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)


class IntermediaryService(BaseService):

    def list(
        self,
        pagination: PaginationParams,
        name: Optional[str] = None,
        surname: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None
    ) -> Dict[str, Any]:
        query = self.db.query(Intermediary)
        if name:
            query = query.filter(Intermediary.name == name)
        if surname:
            query = query.filter(Intermediary.surname == surname)
        if email:
            query = query.filter(Intermediary.email == email)
        if phone:
            query = query.filter(Intermediary.phone == phone)
        return self.paginate(query, Intermediary, pagination, "intermediaries")

    def get(self, intermediary_id: int) -> Intermediary:
        return self.get_or_404(Intermediary, intermediary_id, "intermediary")

    def create(self, data: IntermediaryCreate) -> Intermediary:
        intermediary = Intermediary(**data.model_dump())
        return self.save(intermediary, "creating intermediary")

    def update(self, intermediary_id: int, data: IntermediaryUpdate) -> Intermediary:
        intermediary = self.get(intermediary_id)
        changes = data.model_dump(exclude_unset=True)
        reject_nulls(changes, nullable=("email", "phone"))
        for field, value in changes.items():
            setattr(intermediary, field, value)
        return self.save(intermediary, f"updating intermediary {intermediary_id}")

    def delete(self, intermediary_id: int) -> None:
        intermediary = self.get(intermediary_id)
        with self.db_errors(f"counting incomes of intermediary {intermediary_id}"):
            in_use = self.db.query(Income).filter(Income.intermediary_id == intermediary_id).count()
        if in_use:
            raise ConflictException(
                f"Intermediary {intermediary_id} is still used by {in_use} incomes",
                details={"incomes": in_use}
            )
        self.remove(intermediary, f"deleting intermediary {intermediary_id}")
        logger.info("Intermediary deleted", intermediary_id=intermediary_id)
