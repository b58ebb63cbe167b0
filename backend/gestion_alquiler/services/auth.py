"""
Auth Service - Login and bootstrap admin
"""

from sqlalchemy.orm import Session

from gestion_alquiler.api.schemas import LoginRequest, LoginResponse, UserCreate
from gestion_alquiler.core.config import Settings
from gestion_alquiler.core.exceptions import AuthenticationException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.core.security import create_access_token
from gestion_alquiler.db.models import User, UserRole
from gestion_alquiler.services.users import UserService
from gestion_alquiler.utils.encryption import CredentialCipher

logger = get_logger(__name__)


class AuthService:

    def __init__(self, db: Session, cipher: CredentialCipher, settings: Settings):
        self.db = db
        self.settings = settings
        self.users = UserService(db, cipher, settings.PAGINATION_LIMIT)

    def login(self, credentials: LoginRequest) -> LoginResponse:
        """
        Check credentials and issue a token

        Raises:
            AuthenticationException: If the user does not exist, is deleted
                or the password does not match
        """
        user = self.users.find_by_username(credentials.username)
        if user is None or user.password != self.users.cipher.encrypt(credentials.password):
            logger.warning("Login failed")
            raise AuthenticationException("Invalid username or password")
        if user.deleted:
            logger.warning("Login attempt by deleted user", user_id=user.id)
            raise AuthenticationException("User is deleted", error_code="USER_DELETED")

        token, expires = create_access_token(credentials.username, user.role, self.settings)
        logger.info("User logged in", user_id=user.id, role=user.role)
        return LoginResponse(username=credentials.username, token=token, expires=expires)

    def create_admin_user(self) -> User:
        """Create the configured admin user unless it already exists"""
        existing = self.users.find_by_username(self.settings.ADMIN_USERNAME)
        if existing is not None:
            logger.debug("Admin user already exists", user_id=existing.id)
            return existing

        admin = self.users.create(UserCreate(
            username=self.settings.ADMIN_USERNAME,
            password=self.settings.ADMIN_PASSWORD,
            role=UserRole.ADMIN,
            email=self.settings.ADMIN_EMAIL
        ))
        logger.info("Admin user created", user_id=admin.id)
        return admin
