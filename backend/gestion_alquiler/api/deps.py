"""
Shared request dependencies
"""

from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from gestion_alquiler.core.config import Settings
from gestion_alquiler.core.security import get_app_settings, get_cipher
from gestion_alquiler.db.session import get_db
from gestion_alquiler.services.apartments import ApartmentService
from gestion_alquiler.services.auth import AuthService
from gestion_alquiler.services.dashboard import DashboardService
from gestion_alquiler.services.expenses import ExpenseService
from gestion_alquiler.services.incomes import IncomeService
from gestion_alquiler.services.intermediaries import IntermediaryService
from gestion_alquiler.services.rates import RateService
from gestion_alquiler.services.users import UserService
from gestion_alquiler.utils.encryption import CredentialCipher
from gestion_alquiler.utils.pagination import PaginationParams


def pagination_params(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    sort_by: str = Query("updatedAt", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder", pattern="^(asc|desc)$")
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)


def get_apartment_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> ApartmentService:
    return ApartmentService(db, settings.PAGINATION_LIMIT)


def get_rate_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> RateService:
    return RateService(db, settings.PAGINATION_LIMIT)


def get_intermediary_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> IntermediaryService:
    return IntermediaryService(db, settings.PAGINATION_LIMIT)


def get_income_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> IncomeService:
    return IncomeService(db, settings.PAGINATION_LIMIT)


def get_expense_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> ExpenseService:
    return ExpenseService(db, settings.PAGINATION_LIMIT)


def get_user_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    cipher: CredentialCipher = Depends(get_cipher)
) -> UserService:
    return UserService(db, cipher, settings.PAGINATION_LIMIT)


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    cipher: CredentialCipher = Depends(get_cipher)
) -> AuthService:
    return AuthService(db, cipher, settings)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)
