"""
Pydantic schemas for moderation requests and responses.
"""
from typing import Annotated, Optional, List
from pydantic import BaseModel, BeforeValidator, Field, StrictBool, ConfigDict


def _coerce_review_id(v):
    # Ids arrive as strings, but integer ids from older clients are accepted too
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


ReviewId = Annotated[str, BeforeValidator(_coerce_review_id), Field(min_length=1)]


class ApproveRequest(BaseModel):
    """
    Request schema for approving or unapproving a review.
    POST /api/moderate/approve
    """

    id: ReviewId = Field(..., description="Review ID")
    approved: StrictBool = Field(..., description="Target approval state")
    moderator_note: Optional[str] = Field(None, max_length=1000, description="Optional note")

    model_config = ConfigDict(str_strip_whitespace=True)


class HideRequest(BaseModel):
    """
    Request schema for hiding or unhiding a review.
    POST /api/moderate/hide
    """

    id: ReviewId = Field(..., description="Review ID")
    hidden: StrictBool = Field(..., description="Target hidden state")

    model_config = ConfigDict(str_strip_whitespace=True)


class BulkApproveRequest(BaseModel):
    """
    Request schema for approving a fixed list of reviews in order.
    POST /api/moderate/bulk-approve
    """

    ids: List[ReviewId] = Field(..., min_length=1, max_length=500, description="Review IDs, in order")

    model_config = ConfigDict(str_strip_whitespace=True)


class ModerationResponse(BaseModel):
    """
    Response schema for a single moderation action.

    updated is 0 when the id matched no review; that is reported, not raised.
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    ok: bool = Field(..., description="Whether the action was applied")
    updated: int = Field(..., description="Number of reviews updated")

    model_config = ConfigDict(populate_by_name=True)


class BulkApproveResponse(BaseModel):
    """
    Response schema for bulk approval.

    Processing stops at the first failure; ids before it stay approved and
    ids after it are never attempted.
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    ok: bool = Field(..., description="True when every id was processed")
    approved: List[str] = Field(..., description="IDs approved before any failure")
    not_found: List[str] = Field(
        default_factory=list, alias="notFound", description="IDs that matched no review"
    )
    failed_id: Optional[str] = Field(None, alias="failedId", description="ID that failed")
    error: Optional[str] = Field(None, description="Failure reason")

    model_config = ConfigDict(populate_by_name=True)
