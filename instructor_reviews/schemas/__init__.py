"""
Pydantic schemas package.
Exports all request/response models.
"""
from instructor_reviews.schemas.review import (
    AdminTab,
    LocationListResponse,
    PhotoUploadResponse,
    ReviewCreate,
    ReviewListResponse,
    ReviewOutput,
    ReviewSort,
)
from instructor_reviews.schemas.instructor import (
    InstructorDirectoryResponse,
    InstructorProfile,
    InstructorProfileResponse,
    InstructorSummary,
    PLACEHOLDER_PHOTO,
)
from instructor_reviews.schemas.moderation import (
    ApproveRequest,
    BulkApproveRequest,
    BulkApproveResponse,
    HideRequest,
    ModerationResponse,
)
from instructor_reviews.schemas.error import ErrorCode, ErrorResponse, ERROR_CODE_TO_HTTP_STATUS

__all__ = [
    # Review
    "AdminTab",
    "LocationListResponse",
    "PhotoUploadResponse",
    "ReviewCreate",
    "ReviewListResponse",
    "ReviewOutput",
    "ReviewSort",
    # Instructor
    "InstructorDirectoryResponse",
    "InstructorProfile",
    "InstructorProfileResponse",
    "InstructorSummary",
    "PLACEHOLDER_PHOTO",
    # Moderation
    "ApproveRequest",
    "BulkApproveRequest",
    "BulkApproveResponse",
    "HideRequest",
    "ModerationResponse",
    # Error
    "ErrorCode",
    "ErrorResponse",
    "ERROR_CODE_TO_HTTP_STATUS",
]
