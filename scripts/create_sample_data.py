"""
Script to create sample reviews for local development.

Creates a mix of approved, pending and hidden reviews so the directory,
profile pages and moderation queue all have something to show.
"""
import asyncio
from datetime import datetime, timedelta, timezone

from instructor_reviews.core.config import settings
from instructor_reviews.db.database import build_engine, build_session_factory, init_db, close_db
from instructor_reviews.models import Review


SAMPLE_REVIEWS = [
    # Approved and visible
    {"name": "Dana", "instructor": "MonetB", "location": "Irvine – Spectrum", "rating": 5,
     "comment": "Great music, tough but fun.", "approved": True},
    {"name": None, "instructor": "MonetB", "location": "Tustin", "rating": 4,
     "comment": "Fast pace, clear cues.", "approved": True},
    {"name": "Lee", "instructor": "Alex", "location": "Brea", "rating": 4,
     "comment": "Good for beginners.", "approved": True},
    {"name": "Sam", "instructor": "Priya", "location": "Costa Mesa", "rating": 5,
     "comment": "Best yoga flow in OC.", "approved": True},
    # Approved but hidden
    {"name": "Anon", "instructor": "Alex", "location": "Brea", "rating": 1,
     "comment": "Off-topic rant.", "approved": True, "hidden": True},
    # Pending
    {"name": "Kim", "instructor": "Priya", "location": "Orange", "rating": 4,
     "comment": "Calm and focused class.", "approved": False},
    {"name": None, "instructor": "Jordan", "location": None, "rating": 3,
     "comment": None, "approved": False},
]


async def create_sample_data(session_factory) -> int:
    """Insert the sample reviews, spaced a day apart, newest last."""
    print("Creating sample data...")

    now = datetime.now(timezone.utc)
    async with session_factory() as db:
        for offset, data in enumerate(SAMPLE_REVIEWS):
            created_at = now - timedelta(days=len(SAMPLE_REVIEWS) - offset)
            review = Review(
                created_at=created_at,
                approved_at=created_at + timedelta(hours=1) if data.get("approved") else None,
                hidden=data.get("hidden", False),
                **{k: v for k, v in data.items() if k != "hidden"},
            )
            db.add(review)
        await db.commit()

    approved = sum(1 for r in SAMPLE_REVIEWS if r.get("approved") and not r.get("hidden"))
    print(f"✓ Created {len(SAMPLE_REVIEWS)} reviews")
    print(f"  - {approved} visible")
    print(f"  - {len(SAMPLE_REVIEWS) - approved} pending or hidden")
    return len(SAMPLE_REVIEWS)


async def main():
    """Main entry point."""
    engine = build_engine(settings.MODERATION_DATABASE_URL, debug=settings.DEBUG)
    try:
        print("Initializing database...")
        await init_db(engine)
        print("✓ Database initialized\n")

        await create_sample_data(build_session_factory(engine))
    finally:
        await close_db(engine)


if __name__ == "__main__":
    asyncio.run(main())
