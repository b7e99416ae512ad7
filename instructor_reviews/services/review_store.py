"""
Review store: the query surface over the reviews table.

Each call opens its own session and commits on its own. There is no
transaction spanning calls, so concurrent moderation is last-write-wins.
"""
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import distinct, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from instructor_reviews.core.exceptions import StoreException
from instructor_reviews.core.logging import logger
from instructor_reviews.models import Review
from instructor_reviews.models.review import utcnow
from instructor_reviews.schemas.review import ReviewCreate, ReviewOutput

# Columns moderation is allowed to change
UPDATABLE_COLUMNS = frozenset({"approved", "approved_at", "hidden", "moderator_note"})


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _store_error(operation: str, error: SQLAlchemyError) -> StoreException:
    # Surface the driver's message when there is one
    reason = str(getattr(error, "orig", None) or error)
    logger.error(
        f"Review store {operation} failed: {reason}",
        extra={"operation": operation, "error_type": type(error).__name__},
    )
    return StoreException(reason, details={"operation": operation})


class ReviewStore:
    """
    Reads and writes reviews through an injected session factory.

    Build one per connection role: the read store backs public listings and
    submissions, the moderation store uses the privileged connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def fetch_reviews(
        self,
        approved: Optional[bool] = None,
        hidden: Optional[bool] = None,
        instructor_contains: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[ReviewOutput]:
        """
        Fetch reviews matching the given filters.

        Args:
            approved: Equality filter on approved, skipped when None
            hidden: Equality filter on hidden, skipped when None
            instructor_contains: Case-insensitive substring filter on instructor
            newest_first: Order by created_at descending (ascending otherwise)

        Raises:
            StoreException: If the database rejects the query
        """
        stmt = select(Review)
        if approved is not None:
            stmt = stmt.where(Review.approved.is_(approved))
        if hidden is not None:
            stmt = stmt.where(Review.hidden.is_(hidden))
        if instructor_contains:
            pattern = f"%{_escape_like(instructor_contains)}%"
            stmt = stmt.where(Review.instructor.ilike(pattern, escape="\\"))
        order = Review.created_at.desc() if newest_first else Review.created_at.asc()
        stmt = stmt.order_by(order)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise _store_error("fetch", e)

        return [ReviewOutput.model_validate(row) for row in rows]

    async def fetch_visible_reviews(
        self, instructor_contains: Optional[str] = None
    ) -> List[ReviewOutput]:
        """Approved and not hidden."""
        return await self.fetch_reviews(
            approved=True, hidden=False, instructor_contains=instructor_contains
        )

    async def insert_review(self, submission: ReviewCreate) -> ReviewOutput:
        """
        Insert a new submission. It always starts unapproved and unhidden.

        Raises:
            StoreException: If the database rejects the insert
        """
        review = Review(
            name=submission.name,
            instructor=submission.instructor,
            location=submission.location,
            rating=submission.rating,
            comment=submission.comment,
            photo_url=submission.photo_url,
            comments=None,
            created_at=utcnow(),
            approved=False,
            hidden=False,
            approved_at=None,
            flag_count=0,
            moderator_note=None,
        )

        try:
            async with self._session_factory() as session:
                session.add(review)
                await session.commit()
                await session.refresh(review)
                created = ReviewOutput.model_validate(review)
        except SQLAlchemyError as e:
            raise _store_error("insert", e)

        return created

    async def update_review(self, review_id: str, values: Dict[str, Any]) -> int:
        """
        Update one review by id.

        Returns:
            Number of rows updated; 0 when the id matches nothing (including
            ids that are not UUIDs)

        Raises:
            ValueError: If values names a column moderation may not change
            StoreException: If the database rejects the update
        """
        unknown = set(values) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        try:
            review_uuid = uuid.UUID(str(review_id))
        except ValueError:
            logger.info("Update skipped for malformed review id", extra={"review_id": review_id})
            return 0

        stmt = (
            update(Review)
            .where(Review.id == review_uuid)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                updated = result.rowcount or 0
                await session.commit()
        except SQLAlchemyError as e:
            raise _store_error("update", e)

        return updated

    async def distinct_locations(self) -> List[str]:
        """Distinct non-null locations across all reviews, as stored."""
        stmt = select(distinct(Review.location)).where(Review.location.is_not(None))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [row for row in result.scalars().all() if row]
        except SQLAlchemyError as e:
            raise _store_error("fetch_locations", e)
