"""
Admin API endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from instructor_reviews.api.deps import get_moderation_store, verify_admin_token
from instructor_reviews.core.middleware import get_request_id
from instructor_reviews.core.logging import logger
from instructor_reviews.schemas.review import AdminTab, ReviewListResponse, ReviewSort
from instructor_reviews.services.ranking import filter_by_tab, filter_reviews, sort_reviews
from instructor_reviews.services.review_store import ReviewStore


router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/reviews", response_model=ReviewListResponse)
async def list_moderation_queue(
    tab: AdminTab = Query(AdminTab.PENDING),
    q: Optional[str] = Query(None, max_length=200, description="Free-text search"),
    sort: ReviewSort = Query(ReviewSort.NEWEST),
    store: ReviewStore = Depends(get_moderation_store),
    admin_token: str = Depends(verify_admin_token),
):
    """
    Moderation queue.

    Tabs: pending (not approved, not hidden), all, hidden. Search and sort
    run over the tab's rows.

    Raises:
        401: Invalid admin token
    """
    request_id = get_request_id()

    reviews = await store.fetch_reviews()
    reviews = sort_reviews(filter_reviews(filter_by_tab(reviews, tab), q), sort)

    logger.info(
        "Moderation queue loaded",
        extra={"request_id": request_id, "tab": tab.value, "total": len(reviews)},
    )

    return ReviewListResponse(request_id=request_id, total=len(reviews), reviews=reviews)
