"""
Standard error response schemas.
All API errors follow this unified format.
"""
from typing import Optional, Dict, Any
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes used throughout the API."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"  # 400
    UNAUTHORIZED = "UNAUTHORIZED"  # 401
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"  # 413
    STORE_ERROR = "STORE_ERROR"  # 400
    INTERNAL = "INTERNAL"  # 500


class ErrorResponse(BaseModel):
    """
    Standard error response format.
    All API errors return this structure.

    Example:
    {
        "requestId": "abc-123-def",
        "error": "id and approved required",
        "code": "INVALID_ARGUMENT",
        "details": {"field": "approved"}
    }
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    error: str = Field(..., description="Human-readable error message")
    code: ErrorCode = Field(..., description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


# HTTP Status Code mapping for error codes
ERROR_CODE_TO_HTTP_STATUS = {
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.PAYLOAD_TOO_LARGE: 413,
    ErrorCode.STORE_ERROR: 400,
    ErrorCode.INTERNAL: 500,
}
