"""
Dashboard Endpoints - Income, expense and VAT settlement
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from gestion_alquiler.api.deps import get_dashboard_service
from gestion_alquiler.api.schemas import DashboardResponse, QuarterDashboardResponse
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.dashboard import DashboardService

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(service: DashboardService = Depends(get_dashboard_service)):
    """Settlement over every income and expense"""
    logger.info("Dashboard requested")
    return service.get_dashboard()


@router.get("/{quarter}", response_model=QuarterDashboardResponse)
def get_quarter_dashboard(
    quarter: int = Path(..., ge=1, le=4),
    year: Optional[int] = Query(None, ge=1970, le=9998),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Settlement of one quarter

    Incomes are counted by check-in and expenses by date. The year defaults
    to the current one.
    """
    logger.info("Quarter dashboard requested", quarter=quarter, year=year)
    return service.get_quarter_dashboard(quarter, year)
