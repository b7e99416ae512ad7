"""
Core utilities package.
Exports configuration, logging, middleware, and exceptions.
"""
from instructor_reviews.core.config import settings, Settings
from instructor_reviews.core.logging import logger, log_error, log_warning
from instructor_reviews.core.middleware import RequestIdMiddleware, get_request_id
from instructor_reviews.core.exceptions import (
    AppException,
    InvalidArgumentException,
    UnauthorizedException,
    PayloadTooLargeException,
    StoreException,
)

__all__ = [
    "settings",
    "Settings",
    "logger",
    "log_error",
    "log_warning",
    "RequestIdMiddleware",
    "get_request_id",
    "AppException",
    "InvalidArgumentException",
    "UnauthorizedException",
    "PayloadTooLargeException",
    "StoreException",
]
