"""
Moderation API endpoints.

Each call needs "Authorization: Bearer <ADMIN_TOKEN>". The token is checked
before the body is validated: a wrong or missing token is a 401 whatever the
body holds, and nothing is written.
"""
from typing import Optional
from fastapi import APIRouter, Depends

from instructor_reviews.api.deps import get_bearer_token, get_moderation_gateway, verify_admin_token
from instructor_reviews.core.logging import logger
from instructor_reviews.core.middleware import get_request_id
from instructor_reviews.schemas.moderation import (
    ApproveRequest,
    BulkApproveRequest,
    BulkApproveResponse,
    HideRequest,
    ModerationResponse,
)
from instructor_reviews.services.moderation import ModerationGateway


router = APIRouter(prefix="/api/moderate", tags=["moderation"])


@router.post("/approve", response_model=ModerationResponse)
async def approve_review(
    request: ApproveRequest,
    token: Optional[str] = Depends(get_bearer_token),
    gateway: ModerationGateway = Depends(get_moderation_gateway),
    admin_token: str = Depends(verify_admin_token),
):
    """
    Approve or unapprove a review.

    Raises:
        401: Invalid admin token
        400: Missing id, non-boolean approved, or store error
    """
    request_id = get_request_id()

    logger.info(
        "Processing approval request",
        extra={"request_id": request_id, "review_id": request.id, "approved": request.approved},
    )

    updated = await gateway.set_approval(
        token, request.id, request.approved, moderator_note=request.moderator_note
    )
    if not updated:
        logger.warning(
            "Approval matched no review",
            extra={"request_id": request_id, "review_id": request.id},
        )

    return ModerationResponse(request_id=request_id, ok=True, updated=updated)


@router.post("/hide", response_model=ModerationResponse)
async def hide_review(
    request: HideRequest,
    token: Optional[str] = Depends(get_bearer_token),
    gateway: ModerationGateway = Depends(get_moderation_gateway),
    admin_token: str = Depends(verify_admin_token),
):
    """
    Hide or unhide a review. Approval is left as it is.

    Raises:
        401: Invalid admin token
        400: Missing id, non-boolean hidden, or store error
    """
    request_id = get_request_id()

    logger.info(
        "Processing hide request",
        extra={"request_id": request_id, "review_id": request.id, "hidden": request.hidden},
    )

    updated = await gateway.set_hidden(token, request.id, request.hidden)
    if not updated:
        logger.warning(
            "Hide matched no review",
            extra={"request_id": request_id, "review_id": request.id},
        )

    return ModerationResponse(request_id=request_id, ok=True, updated=updated)


@router.post("/bulk-approve", response_model=BulkApproveResponse)
async def bulk_approve_reviews(
    request: BulkApproveRequest,
    token: Optional[str] = Depends(get_bearer_token),
    gateway: ModerationGateway = Depends(get_moderation_gateway),
    admin_token: str = Depends(verify_admin_token),
):
    """
    Approve a list of reviews in order, stopping at the first failure.

    A failure part-way through is reported in the body (ok=false, failedId,
    error) rather than as an HTTP error, since earlier ids were applied.

    Raises:
        401: Invalid admin token
        400: Invalid input
    """
    request_id = get_request_id()

    logger.info(
        "Processing bulk approval request",
        extra={"request_id": request_id, "num_reviews": len(request.ids)},
    )

    result = await gateway.bulk_approve(token, request.ids)

    return BulkApproveResponse(
        request_id=request_id,
        ok=result.ok,
        approved=result.approved,
        not_found=result.not_found,
        failed_id=result.failed_id,
        error=result.error,
    )
