"""
User Endpoints - Admin-only user management
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from gestion_alquiler.api.deps import get_user_service, pagination_params
from gestion_alquiler.api.schemas import (
    ChangePasswordRequest, DeletedResponse, Page, UserCreate, UserResponse, UserUpdate
)
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import UserRole
from gestion_alquiler.services.users import UserService
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=Page[UserResponse])
def list_users(
    username: Optional[str] = None,
    role: Optional[UserRole] = None,
    email: Optional[str] = None,
    deleted: Optional[bool] = None,
    pagination: PaginationParams = Depends(pagination_params),
    service: UserService = Depends(get_user_service)
):
    logger.info("Listing users", page=pagination.page)
    return service.list(pagination, username=username, role=role, email=email, deleted=deleted)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.to_response(service.get(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    logger.info("Creating user", role=data.role.value)
    return service.to_response(service.create(data))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, service: UserService = Depends(get_user_service)):
    logger.info("Updating user", user_id=user_id)
    return service.to_response(service.update(user_id, data))


@router.put("/{user_id}/change-password", response_model=UserResponse)
def change_password(
    user_id: int,
    data: ChangePasswordRequest,
    service: UserService = Depends(get_user_service)
):
    logger.info("Changing user password", user_id=user_id)
    return service.to_response(service.change_password(user_id, data))


@router.put("/{user_id}/set-deleted", response_model=UserResponse)
def set_deleted(user_id: int, service: UserService = Depends(get_user_service)):
    logger.info("Soft deleting user", user_id=user_id)
    return service.to_response(service.set_deleted(user_id))


@router.delete("/{user_id}", response_model=DeletedResponse)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    logger.info("Deleting user", user_id=user_id)
    service.delete(user_id)
    return DeletedResponse(id=user_id)
