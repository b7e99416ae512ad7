"""
Pydantic schemas for the instructor directory and profile pages.
"""
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from instructor_reviews.schemas.review import ReviewOutput

PLACEHOLDER_PHOTO = "/placeholder-avatar.png"


class InstructorSummary(BaseModel):
    """
    Aggregate over the visible reviews of one instructor name.
    Derived on every read, never stored.
    """

    name: str = Field(..., description="Instructor name as stored (trimmed)")
    count: int = Field(..., ge=0, description="Number of visible reviews")
    average: Optional[float] = Field(
        None, description="Mean rating rounded to one decimal; null when count is 0"
    )
    locations: List[str] = Field(default_factory=list, description="Distinct non-empty locations")
    photo: str = Field(PLACEHOLDER_PHOTO, description="Most recent photo or the placeholder")


class InstructorDirectoryResponse(BaseModel):
    """
    Response schema for the instructor directory.
    GET /api/instructors
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    instructors: List[InstructorSummary]
    locations: List[str] = Field(..., description="All locations, for the club filter")

    model_config = ConfigDict(populate_by_name=True)


class InstructorProfile(BaseModel):
    """A single instructor resolved from a (possibly partial) name."""

    display_name: str = Field(..., alias="displayName")
    count: int
    average: Optional[float] = None
    locations: List[str] = Field(default_factory=list)
    photo: str = PLACEHOLDER_PHOTO
    reviews: List[ReviewOutput] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class InstructorProfileResponse(BaseModel):
    """
    Response schema for an instructor profile.
    GET /api/instructors/{name}
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    profile: InstructorProfile

    model_config = ConfigDict(populate_by_name=True)
