from typing import Any, Dict, Optional
from fastapi import status

class GestionAlquilerException(Exception):
    """Base exception for the rental management application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Error envelope returned by the API."""
        body = {
            "statusCode": self.status_code,
            "error": self.error_code,
            "message": self.message
        }
        if self.details:
            body["details"] = self.details
        return body

class ValidationException(GestionAlquilerException):
    """Exception for data validation errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "BAD_REQUEST"

class NotFoundException(GestionAlquilerException):
    """Exception for missing records or references."""
    status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "RESOURCE_NOT_FOUND"

class ConflictException(GestionAlquilerException):
    """Exception for operations blocked by the state of other records."""
    status_code = status.HTTP_409_CONFLICT
    default_error_code = "CONFLICT"

class AuthenticationException(GestionAlquilerException):
    """Exception for invalid credentials or tokens."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_error_code = "UNAUTHORIZED"

class PermissionException(GestionAlquilerException):
    """Exception for authenticated users lacking the required role."""
    status_code = status.HTTP_403_FORBIDDEN
    default_error_code = "FORBIDDEN"

class DatabaseException(GestionAlquilerException):
    """Exception for database-related errors."""
    pass

class ConfigurationException(GestionAlquilerException):
    """Exception for configuration-related errors."""
    pass
