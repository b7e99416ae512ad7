"""
Custom exceptions for the application.
All exceptions map to standard error codes and HTTP status codes.
"""
from typing import Optional, Dict, Any

from instructor_reviews.schemas.error import ErrorCode


class AppException(Exception):
    """
    Base exception class for all application exceptions.
    All custom exceptions should inherit from this.
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentException(AppException):
    """Raised when request arguments are missing or malformed (400)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.INVALID_ARGUMENT, message, details)


class UnauthorizedException(AppException):
    """Raised when the admin token is missing or wrong (401)."""

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.UNAUTHORIZED, message, details)


class PayloadTooLargeException(AppException):
    """Raised when an uploaded photo is too large (413)."""

    def __init__(
        self, message: str = "Payload too large", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(ErrorCode.PAYLOAD_TOO_LARGE, message, details)


class StoreException(AppException):
    """
    Raised when the backing store rejects a read or write (400).
    The message carries the backend's reason verbatim.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.STORE_ERROR, message, details)
