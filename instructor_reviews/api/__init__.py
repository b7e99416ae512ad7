"""
API routers package.
"""
from instructor_reviews.api import health, reviews, instructors, photos, admin, moderation

__all__ = [
    "health",
    "reviews",
    "instructors",
    "photos",
    "admin",
    "moderation",
]
