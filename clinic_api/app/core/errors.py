"""
Error taxonomy for the clinic API.

Every failure that can reach a client is a ``ClinicError`` subclass
carrying the HTTP status it maps to.  The exception handlers installed
by ``create_app`` turn them into ``{"error": message}`` JSON bodies, so
services and dependencies simply raise and never build responses
themselves.
"""

from typing import Dict, Optional


class ClinicError(Exception):
    """Base class for errors converted to JSON at the request boundary."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> None:
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(ClinicError):
    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(ClinicError):
    status_code = 401
    default_message = "Not authenticated"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message, headers or {"WWW-Authenticate": "Bearer"})


class InvalidTokenError(UnauthorizedError):
    default_message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    default_message = "Token expired"


class ForbiddenError(ClinicError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ClinicError):
    status_code = 404
    default_message = "Not found"


class StorageUnavailableError(ClinicError):
    status_code = 500
    default_message = "Storage unavailable"


class CorruptDataError(StorageUnavailableError):
    default_message = "Stored data is corrupt"


class ConfigurationError(RuntimeError):
    """Raised at startup when the configuration is unusable."""
