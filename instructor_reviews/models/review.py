"""
Review model - one visitor submission about an instructor.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Integer,
    DateTime,
    Uuid,
    Index,
    CheckConstraint,
)

from instructor_reviews.db.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    """
    Reviews table.

    A review is publicly visible iff approved is true and hidden is false.
    The two flags are independent: hiding keeps approval, unapproving keeps
    hidden.
    """

    __tablename__ = "reviews"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Submission
    name = Column(String, nullable=True)  # Reviewer display name
    instructor = Column(String, nullable=False)
    location = Column(String, nullable=True)  # Club, from the suggested list or typed
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    # Legacy synonym of comment kept for old rows; never written.
    # Readers prefer comment and fall back to comments when it is empty.
    comments = Column(Text, nullable=True)
    photo_url = Column(String, nullable=True)

    # Server-assigned, immutable
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Moderation
    approved = Column(Boolean, default=False, nullable=False)
    hidden = Column(Boolean, default=False, nullable=False)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    flag_count = Column(Integer, default=0, nullable=False)
    moderator_note = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        Index("idx_reviews_visible", "approved", "hidden"),
        Index("idx_reviews_instructor", "instructor"),
        Index("idx_reviews_created_at", "created_at"),
    )

    def __repr__(self):
        return (
            f"<Review(id={self.id}, instructor={self.instructor!r}, rating={self.rating}, "
            f"approved={self.approved}, hidden={self.hidden})>"
        )
