"""Shared test fixtures: review factories, an in-memory store and an API client."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from instructor_reviews.api.deps import get_moderation_store, get_photo_storage, get_review_store
from instructor_reviews.core.config import Settings
from instructor_reviews.core.exceptions import StoreException
from instructor_reviews.db.database import build_engine, build_session_factory, close_db, init_db
from instructor_reviews.main import create_app
from instructor_reviews.schemas.review import ReviewCreate, ReviewOutput
from instructor_reviews.services.photo_storage import PhotoStorage
from instructor_reviews.services.review_store import UPDATABLE_COLUMNS, ReviewStore

ADMIN_TOKEN = "test-admin-token"
BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_review(**overrides: Any) -> ReviewOutput:
    """Build a visible review; override any field by keyword."""
    data: dict[str, Any] = {
        "id": str(uuid.uuid4()),
        "name": "Reviewer",
        "instructor": "MonetB",
        "location": "Brea",
        "rating": 5,
        "comment": "Great class",
        "comments": None,
        "photo_url": None,
        "created_at": BASE_TIME,
        "approved": True,
        "hidden": False,
        "approved_at": None,
        "flag_count": 0,
        "moderator_note": None,
    }
    data.update(overrides)
    return ReviewOutput(**data)


def at(hours: int) -> datetime:
    return BASE_TIME + timedelta(hours=hours)


class FakeReviewStore:
    """
    In-memory stand-in for ReviewStore.

    Ids listed in fail_ids make update_review raise StoreException, the way a
    rejected write would. Every update attempt is recorded in update_calls.
    """

    def __init__(self, reviews: list[ReviewOutput] | None = None, fail_ids: set[str] | None = None):
        self.reviews: dict[str, ReviewOutput] = {r.id: r for r in reviews or []}
        self.fail_ids = fail_ids or set()
        self.update_calls: list[tuple[str, dict[str, Any]]] = []

    async def fetch_reviews(
        self,
        approved: bool | None = None,
        hidden: bool | None = None,
        instructor_contains: str | None = None,
        newest_first: bool = True,
    ) -> list[ReviewOutput]:
        rows = list(self.reviews.values())
        if approved is not None:
            rows = [r for r in rows if r.approved is approved]
        if hidden is not None:
            rows = [r for r in rows if r.hidden is hidden]
        if instructor_contains:
            needle = instructor_contains.lower()
            rows = [r for r in rows if needle in (r.instructor or "").lower()]
        return sorted(rows, key=lambda r: r.created_at, reverse=newest_first)

    async def fetch_visible_reviews(self, instructor_contains: str | None = None) -> list[ReviewOutput]:
        return await self.fetch_reviews(approved=True, hidden=False, instructor_contains=instructor_contains)

    async def insert_review(self, submission: ReviewCreate) -> ReviewOutput:
        review = make_review(
            **submission.model_dump(),
            created_at=datetime.now(timezone.utc),
            approved=False,
            hidden=False,
        )
        self.reviews[review.id] = review
        return review

    async def update_review(self, review_id: str, values: dict[str, Any]) -> int:
        assert set(values) <= UPDATABLE_COLUMNS
        self.update_calls.append((review_id, dict(values)))
        if review_id in self.fail_ids:
            raise StoreException(f"update rejected for {review_id}")
        if review_id not in self.reviews:
            return 0
        self.reviews[review_id] = self.reviews[review_id].model_copy(update=values)
        return 1

    async def distinct_locations(self) -> list[str]:
        return sorted({r.location for r in self.reviews.values() if r.location})


@pytest.fixture
def review_factory() -> Callable[..., ReviewOutput]:
    return make_review


@pytest.fixture
def fake_store() -> FakeReviewStore:
    return FakeReviewStore()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        ADMIN_TOKEN=ADMIN_TOKEN,
        PHOTO_STORAGE_DIR=str(tmp_path / "photos"),
        PUBLIC_PHOTO_BASE_URL="/photos/",
        MAX_PHOTO_BYTES=1024,
    )


@pytest.fixture
def photo_storage(test_settings: Settings) -> PhotoStorage:
    return PhotoStorage(
        test_settings.PHOTO_STORAGE_DIR,
        test_settings.PUBLIC_PHOTO_BASE_URL,
        test_settings.MAX_PHOTO_BYTES,
    )


@pytest.fixture
def client(test_settings: Settings, fake_store: FakeReviewStore, photo_storage: PhotoStorage) -> TestClient:
    """API client wired to the in-memory store; the lifespan is not run."""
    app = create_app(test_settings)
    app.dependency_overrides[get_review_store] = lambda: fake_store
    app.dependency_overrides[get_moderation_store] = lambda: fake_store
    app.dependency_overrides[get_photo_storage] = lambda: photo_storage
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    """ReviewStore backed by a throwaway SQLite file."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'reviews.db'}")
    await init_db(engine)
    yield ReviewStore(build_session_factory(engine))
    await close_db(engine)
