"""
Pydantic schemas for Review-related requests and responses.
"""
import uuid
from enum import Enum
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict


class ReviewSort(str, Enum):
    """Sort orders for review lists."""

    NEWEST = "newest"
    OLDEST = "oldest"
    RATING_DESC = "rating_desc"
    RATING_ASC = "rating_asc"
    FLAGS_DESC = "flags_desc"
    LOCATION_AZ = "location_az"


class AdminTab(str, Enum):
    """Moderation queue views."""

    PENDING = "pending"  # not approved, not hidden
    ALL = "all"
    HIDDEN = "hidden"


class ReviewCreate(BaseModel):
    """
    Input schema for a public review submission.
    POST /api/reviews

    Submissions are always stored unapproved and unhidden, so the moderation
    fields are not accepted here.
    """

    name: Optional[str] = Field(None, max_length=100, description="Reviewer display name")
    instructor: str = Field(..., min_length=1, max_length=100, description="Instructor name")
    location: Optional[str] = Field(None, max_length=120, description="Club / location")
    rating: int = Field(..., ge=1, le=5, description="Rating (1-5)")
    comment: Optional[str] = Field(None, max_length=4000, description="Review text")
    photo_url: Optional[str] = Field(
        None, max_length=2048, description="Public URL returned by POST /api/photos"
    )

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("name", "location", "comment", "photo_url")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Blank optional fields are stored as null."""
        if v is not None and not v:
            return None
        return v


class ReviewOutput(BaseModel):
    """
    Output schema for a review.
    Built from ORM rows; also the input type of the aggregation and ranking views.
    """

    id: str = Field(..., description="Review UUID")
    name: Optional[str] = None
    instructor: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    comments: Optional[str] = Field(None, description="Legacy synonym of comment")
    photo_url: Optional[str] = None
    created_at: datetime
    approved: bool = False
    hidden: bool = False
    approved_at: Optional[datetime] = None
    flag_count: int = 0
    moderator_note: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        if isinstance(v, uuid.UUID):
            return str(v)
        return v

    @field_validator("flag_count", mode="before")
    @classmethod
    def missing_flags_are_zero(cls, v):
        return 0 if v is None else v

    @computed_field
    @property
    def text(self) -> str:
        """Canonical comment text: comment, else the legacy comments field."""
        return self.comment or self.comments or ""

    @property
    def visible(self) -> bool:
        return self.approved and not self.hidden


class ReviewListResponse(BaseModel):
    """
    Response schema for review lists.
    GET /api/reviews, GET /api/admin/reviews
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    total: int = Field(..., description="Number of reviews after filtering")
    reviews: List[ReviewOutput]

    model_config = ConfigDict(populate_by_name=True)


class LocationListResponse(BaseModel):
    """
    Suggested clubs for the submission form.
    GET /api/locations
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    locations: List[str]

    model_config = ConfigDict(populate_by_name=True)


class PhotoUploadResponse(BaseModel):
    """
    Response schema for photo upload.
    POST /api/photos
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    url: str = Field(..., description="Public URL of the stored photo")

    model_config = ConfigDict(populate_by_name=True)
