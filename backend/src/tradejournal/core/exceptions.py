"""
Custom exception classes for the Trading Journal application.

Provides domain-specific exceptions for error handling.
"""

from fastapi import HTTPException, status


class JournalException(Exception):
    """Base exception for the trading journal."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(JournalException):
    """Raised when validation fails."""

    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


class AuthenticationError(JournalException):
    """Raised when credentials are missing or invalid."""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, "AUTHENTICATION_ERROR")


class ConflictError(JournalException):
    """Raised when a unique resource already exists."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class DatabaseError(JournalException):
    """Raised when there's a database error."""

    def __init__(self, message: str):
        super().__init__(message, "DATABASE_ERROR")


class ConfigurationError(JournalException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "DATABASE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CONFIGURATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# HTTP Exception converters
def to_http_exception(exc: JournalException) -> HTTPException:
    """Convert JournalException to HTTPException."""
    status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(
        status_code=status_code,
        detail={
            "error": exc.code,
            "message": exc.message,
        },
    )
