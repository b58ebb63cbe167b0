"""
Security - JWT issuing and request authentication
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gestion_alquiler.core.config import Settings
from gestion_alquiler.core.exceptions import AuthenticationException, PermissionException
from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import User, UserRole
from gestion_alquiler.db.session import get_db
from gestion_alquiler.utils.encryption import CredentialCipher

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cipher(request: Request) -> CredentialCipher:
    return request.app.state.cipher


def create_access_token(username: str, role: str, settings: Settings) -> Tuple[str, int]:
    """
    Issue a signed token for a user

    The payload only holds the username and role, never the password.

    Returns:
        Tuple of (token, lifetime in seconds)
    """
    now = datetime.now(timezone.utc)
    expires_in = settings.JWT_EXPIRE_MINUTES * 60
    payload = {
        "sub": username,
        "role": role,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in)
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    logger.info("JWT token generated", role=role)
    return token, expires_in


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationException("Token has expired", error_code="TOKEN_EXPIRED") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationException("Invalid token", error_code="INVALID_TOKEN") from e

    if "sub" not in payload:
        raise AuthenticationException("Invalid token", error_code="INVALID_TOKEN")
    return payload


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    cipher: CredentialCipher = Depends(get_cipher)
) -> User:
    """Resolve the bearer token into an active user"""
    if credentials is None:
        raise AuthenticationException("Missing bearer token")

    payload = decode_token(credentials.credentials, settings)
    user = db.query(User).filter(User.username == cipher.encrypt(payload["sub"])).first()
    if user is None or user.deleted:
        logger.warning("Token for unknown or deleted user")
        raise AuthenticationException("User not found or deleted")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN.value:
        raise PermissionException("Admin role required")
    return user
