"""
Instructor directory and profile endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from instructor_reviews.api.deps import get_review_store
from instructor_reviews.core.exceptions import InvalidArgumentException
from instructor_reviews.core.logging import logger
from instructor_reviews.core.middleware import get_request_id
from instructor_reviews.schemas.instructor import (
    InstructorDirectoryResponse,
    InstructorProfileResponse,
)
from instructor_reviews.schemas.review import ReviewSort
from instructor_reviews.services.aggregation import aggregate_instructors, build_instructor_profile
from instructor_reviews.services.ranking import filter_instructors, rank_instructors, sort_reviews
from instructor_reviews.services.review_store import ReviewStore


router = APIRouter(prefix="/api/instructors", tags=["instructors"])


@router.get("", response_model=InstructorDirectoryResponse)
async def list_instructors(
    q: Optional[str] = Query(None, max_length=100, description="Instructor name search"),
    location: Optional[str] = Query(None, max_length=120, description="Club filter"),
    store: ReviewStore = Depends(get_review_store),
):
    """
    Directory of instructors with visible reviews.

    Ranked by review count, then average rating, then name. The locations
    list always covers every instructor so the club filter stays complete
    while a search is active.
    """
    reviews = await store.fetch_visible_reviews()
    summaries, locations = aggregate_instructors(reviews)

    ranked = rank_instructors(filter_instructors(summaries, q, location))

    logger.debug(
        "Instructor directory built",
        extra={"instructors": len(summaries), "shown": len(ranked), "reviews": len(reviews)},
    )

    return InstructorDirectoryResponse(
        request_id=get_request_id(),
        instructors=ranked,
        locations=locations,
    )


@router.get("/{name}", response_model=InstructorProfileResponse)
async def get_instructor(
    name: str,
    sort: ReviewSort = Query(ReviewSort.NEWEST),
    store: ReviewStore = Depends(get_review_store),
):
    """
    Profile of one instructor.

    The name may be partial: an exact match wins, then a case-insensitive
    one, then every instructor containing it. An instructor without visible
    reviews gets an empty profile.

    Raises:
        400: Blank name
    """
    requested = name.strip()
    if not requested:
        raise InvalidArgumentException("Instructor name is required", details={"field": "name"})

    candidates = await store.fetch_visible_reviews(instructor_contains=requested)
    profile = build_instructor_profile(requested, candidates)
    profile.reviews = sort_reviews(profile.reviews, sort)

    return InstructorProfileResponse(request_id=get_request_id(), profile=profile)
