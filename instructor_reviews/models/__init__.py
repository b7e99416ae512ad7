"""
SQLAlchemy models package.
"""
from instructor_reviews.models.review import Review

__all__ = [
    "Review",
]
