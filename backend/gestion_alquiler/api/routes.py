"""
API Routes Configuration
"""

from fastapi import APIRouter, Depends

from gestion_alquiler.api.endpoints import (
    apartments,
    auth,
    dashboard,
    expenses,
    incomes,
    intermediaries,
    rates,
    users
)
from gestion_alquiler.core.security import get_current_user, require_admin

# Create main router
router = APIRouter()

authenticated = [Depends(get_current_user)]

# Include endpoint routers
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"], dependencies=authenticated)
router.include_router(apartments.router, prefix="/apartments", tags=["apartments"], dependencies=authenticated)
router.include_router(rates.router, prefix="/rates", tags=["rates"], dependencies=authenticated)
router.include_router(
    intermediaries.router, prefix="/intermediaries", tags=["intermediaries"], dependencies=authenticated
)
router.include_router(incomes.router, prefix="/incomes", tags=["incomes"], dependencies=authenticated)
router.include_router(expenses.router, prefix="/expenses", tags=["expenses"], dependencies=authenticated)
router.include_router(users.router, prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])
