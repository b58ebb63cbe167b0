"""
User Service - Management of API users

Usernames and passwords are kept encrypted with the credential cipher, so
lookups compare encrypted values and responses decrypt the username.
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from gestion_alquiler.api.schemas import ChangePasswordRequest, UserCreate, UserResponse, UserUpdate
from gestion_alquiler.core.exceptions import ConflictException, ValidationException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import User, UserRole
from gestion_alquiler.services.base import BaseService, reject_nulls
from gestion_alquiler.utils.encryption import CredentialCipher
from gestion_alquiler.utils.pagination import PaginationParams

logger = get_logger(__name__)


class UserService(BaseService):

    def __init__(self, db: Session, cipher: CredentialCipher, page_limit: int = 10):
        super().__init__(db, page_limit)
        self.cipher = cipher

    def to_response(self, user: User) -> UserResponse:
        response = UserResponse.model_validate(user)
        response.username = self.cipher.decrypt(user.username)
        return response

    def find_by_username(self, username: str) -> Optional[User]:
        with self.db_errors("looking up user"):
            return self.db.query(User).filter(User.username == self.cipher.encrypt(username)).first()

    def _check_username_free(self, username: str) -> None:
        if self.find_by_username(username) is not None:
            raise ConflictException(f"Username {username} already exists", error_code="DUPLICATE_USERNAME")

    def list(
        self,
        pagination: PaginationParams,
        username: Optional[str] = None,
        role: Optional[UserRole] = None,
        email: Optional[str] = None,
        deleted: Optional[bool] = None
    ) -> Dict[str, Any]:
        query = self.db.query(User)
        if username:
            query = query.filter(User.username == self.cipher.encrypt(username))
        if role:
            query = query.filter(User.role == role.value)
        if email:
            query = query.filter(User.email == email)
        if deleted is not None:
            query = query.filter(User.deleted == deleted)

        page = self.paginate(query, User, pagination, "users")
        page["results"] = [self.to_response(user) for user in page["results"]]
        return page

    def get(self, user_id: int) -> User:
        return self.get_or_404(User, user_id, "user")

    def create(self, data: UserCreate) -> User:
        self._check_username_free(data.username)
        user = User(
            username=self.cipher.encrypt(data.username),
            password=self.cipher.encrypt(data.password),
            role=data.role.value,
            email=data.email,
            deleted=False
        )
        user = self.save(user, "creating user")
        logger.info("User created", user_id=user.id, role=user.role)
        return user

    def update(self, user_id: int, data: UserUpdate) -> User:
        user = self.get(user_id)
        changes = data.model_dump(exclude_unset=True)
        reject_nulls(changes)

        if "username" in changes:
            encrypted = self.cipher.encrypt(changes["username"])
            if encrypted != user.username:
                self._check_username_free(changes["username"])
            user.username = encrypted
        if "role" in changes:
            user.role = changes["role"].value
        if "email" in changes:
            user.email = changes["email"]
        if "deleted" in changes:
            if changes["deleted"]:
                user.mark_as_deleted()
            else:
                user.deleted = False
                user.deleted_at = None
        return self.save(user, f"updating user {user_id}")

    def change_password(self, user_id: int, data: ChangePasswordRequest) -> User:
        user = self.get(user_id)
        if self.cipher.encrypt(data.old_password) != user.password:
            raise ValidationException("Old password does not match", error_code="WRONG_PASSWORD")
        user.password = self.cipher.encrypt(data.new_password)
        user = self.save(user, f"changing password of user {user_id}")
        logger.info("Password changed", user_id=user_id)
        return user

    def set_deleted(self, user_id: int) -> User:
        user = self.get(user_id)
        user.mark_as_deleted()
        user = self.save(user, f"soft deleting user {user_id}")
        logger.info("User marked as deleted", user_id=user_id)
        return user

    def delete(self, user_id: int) -> None:
        user = self.get(user_id)
        self.remove(user, f"deleting user {user_id}")
        logger.info("User deleted", user_id=user_id)
