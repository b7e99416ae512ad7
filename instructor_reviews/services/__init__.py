"""
Services package.
Store clients, the moderation gateway, and the pure aggregation/ranking views.
"""
from instructor_reviews.services.review_store import ReviewStore
from instructor_reviews.services.photo_storage import PhotoStorage
from instructor_reviews.services.moderation import ModerationGateway, BulkApproveResult
from instructor_reviews.services.aggregation import (
    aggregate_instructors,
    average_rating,
    build_instructor_profile,
)
from instructor_reviews.services.ranking import (
    filter_by_tab,
    filter_instructors,
    filter_reviews,
    rank_instructors,
    sort_reviews,
)

__all__ = [
    "ReviewStore",
    "PhotoStorage",
    "ModerationGateway",
    "BulkApproveResult",
    "aggregate_instructors",
    "average_rating",
    "build_instructor_profile",
    "filter_by_tab",
    "filter_instructors",
    "filter_reviews",
    "rank_instructors",
    "sort_reviews",
]
