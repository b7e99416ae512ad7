"""
Public review API endpoints: submission, listing and suggested clubs.
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from instructor_reviews.api.deps import get_review_store
from instructor_reviews.core.logging import logger
from instructor_reviews.core.middleware import get_request_id
from instructor_reviews.schemas.review import (
    LocationListResponse,
    ReviewCreate,
    ReviewListResponse,
    ReviewOutput,
    ReviewSort,
)
from instructor_reviews.services.ranking import collation_key, filter_reviews, sort_reviews
from instructor_reviews.services.review_store import ReviewStore


router = APIRouter(prefix="/api", tags=["reviews"])

# Clubs offered before any review mentions them
SEED_LOCATIONS = [
    "Any LA Fitness (general)",
    "Aliso Viejo",
    "Anaheim",
    "Anaheim Hills",
    "Brea",
    "Buena Park",
    "Costa Mesa",
    "Fountain Valley",
    "Fullerton",
    "Garden Grove",
    "Huntington Beach",
    "Irvine – Barranca",
    "Irvine – Culver",
    "Irvine – Irvine Blvd",
    "Irvine – Michelson",
    "Irvine – Spectrum",
    "Irvine – Walnut",
    "Laguna Hills",
    "Laguna Niguel",
    "Lake Forest",
    "Mission Viejo",
    "Newport Beach",
    "Orange",
    "Placentia",
    "San Clemente",
    "San Juan Capistrano",
    "Santa Ana",
    "Tustin",
    "Westminster",
    "Yorba Linda",
]


@router.post("/reviews", response_model=ReviewOutput, status_code=status.HTTP_201_CREATED)
async def submit_review(
    request: ReviewCreate,
    store: ReviewStore = Depends(get_review_store),
):
    """
    Submit a review. It stays pending until an administrator approves it.

    Raises:
        400: Invalid input or store error
    """
    request_id = get_request_id()

    logger.info(
        "Processing review submission",
        extra={
            "request_id": request_id,
            "instructor": request.instructor,
            "location": request.location,
            "has_photo": request.photo_url is not None,
        },
    )

    review = await store.insert_review(request)

    logger.info(
        "Review submitted, pending approval",
        extra={"request_id": request_id, "review_id": review.id},
    )

    return review


@router.get("/reviews", response_model=ReviewListResponse)
async def list_reviews(
    q: Optional[str] = Query(None, max_length=200, description="Free-text search"),
    sort: ReviewSort = Query(ReviewSort.NEWEST),
    store: ReviewStore = Depends(get_review_store),
):
    """
    List visible reviews (approved and not hidden), filtered and sorted.
    """
    reviews = await store.fetch_visible_reviews()
    reviews = sort_reviews(filter_reviews(reviews, q), sort)

    return ReviewListResponse(request_id=get_request_id(), total=len(reviews), reviews=reviews)


@router.get("/locations", response_model=LocationListResponse)
async def list_locations(store: ReviewStore = Depends(get_review_store)):
    """
    Suggested clubs for the submission form: the seed list merged with
    every location already stored, trimmed, de-duplicated and sorted.
    """
    stored = await store.distinct_locations()

    merged = {loc.strip() for loc in SEED_LOCATIONS + stored if loc and loc.strip()}

    return LocationListResponse(
        request_id=get_request_id(),
        locations=sorted(merged, key=collation_key),
    )
