"""
Auth Endpoints
"""

from fastapi import APIRouter, Depends

from gestion_alquiler.api.deps import get_auth_service
from gestion_alquiler.api.schemas import LoginRequest, LoginResponse
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.services.auth import AuthService

logger = get_logger(__name__)
router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange a username and password for a bearer token"""
    logger.info("Login requested")
    return service.login(credentials)
