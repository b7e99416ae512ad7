from __future__ import annotations

import pytest

from instructor_reviews.core.exceptions import (
    InvalidArgumentException,
    StoreException,
    UnauthorizedException,
)
from instructor_reviews.services.moderation import ModerationGateway

from tests.conftest import ADMIN_TOKEN, FakeReviewStore, make_review


def _gateway(store: FakeReviewStore, token: str | None = ADMIN_TOKEN) -> ModerationGateway:
    return ModerationGateway(store, token)


def test_authorize_accepts_exact_token() -> None:
    _gateway(FakeReviewStore()).authorize(ADMIN_TOKEN)


@pytest.mark.parametrize("token", [None, "", "wrong", ADMIN_TOKEN + " ", ADMIN_TOKEN.upper()])
def test_authorize_rejects_other_tokens(token: str | None) -> None:
    with pytest.raises(UnauthorizedException):
        _gateway(FakeReviewStore()).authorize(token)


@pytest.mark.parametrize("configured", [None, "", "   "])
def test_authorize_rejects_everything_without_configured_secret(configured: str | None) -> None:
    gateway = _gateway(FakeReviewStore(), configured)
    with pytest.raises(UnauthorizedException):
        gateway.authorize("")
    with pytest.raises(UnauthorizedException):
        gateway.authorize("anything")


@pytest.mark.asyncio
async def test_wrong_token_leaves_review_unchanged() -> None:
    review = make_review(approved=False)
    store = FakeReviewStore([review])

    with pytest.raises(UnauthorizedException):
        await _gateway(store).set_approval("wrong", review.id, True)

    assert store.reviews[review.id].approved is False
    assert store.update_calls == []


@pytest.mark.asyncio
async def test_approve_then_unapprove_keeps_hidden_and_clears_approved_at() -> None:
    review = make_review(approved=False, hidden=True)
    store = FakeReviewStore([review])
    gateway = _gateway(store)

    assert await gateway.set_approval(ADMIN_TOKEN, review.id, True) == 1
    approved = store.reviews[review.id]
    assert approved.approved is True
    assert approved.approved_at is not None
    assert approved.hidden is True

    assert await gateway.set_approval(ADMIN_TOKEN, review.id, False) == 1
    unapproved = store.reviews[review.id]
    assert unapproved.approved is False
    assert unapproved.approved_at is None
    assert unapproved.hidden is True


@pytest.mark.asyncio
async def test_approve_twice_refreshes_approved_at() -> None:
    review = make_review(approved=False)
    store = FakeReviewStore([review])
    gateway = _gateway(store)

    await gateway.set_approval(ADMIN_TOKEN, review.id, True)
    first = store.reviews[review.id].approved_at
    await gateway.set_approval(ADMIN_TOKEN, review.id, True)
    second = store.reviews[review.id].approved_at

    assert store.reviews[review.id].approved is True
    assert second >= first
    assert len(store.update_calls) == 2


@pytest.mark.asyncio
async def test_moderator_note_only_written_when_given() -> None:
    review = make_review(approved=False, moderator_note="earlier note")
    store = FakeReviewStore([review])
    gateway = _gateway(store)

    await gateway.set_approval(ADMIN_TOKEN, review.id, True)
    assert store.reviews[review.id].moderator_note == "earlier note"

    await gateway.set_approval(ADMIN_TOKEN, review.id, False, moderator_note="spam")
    assert store.reviews[review.id].moderator_note == "spam"


@pytest.mark.asyncio
async def test_hide_and_unhide_leave_approval_alone() -> None:
    review = make_review(approved=True)
    store = FakeReviewStore([review])
    gateway = _gateway(store)

    assert await gateway.set_hidden(ADMIN_TOKEN, review.id, True) == 1
    assert store.reviews[review.id].hidden is True
    assert store.reviews[review.id].approved is True

    assert await gateway.set_hidden(ADMIN_TOKEN, review.id, False) == 1
    assert store.reviews[review.id].hidden is False
    assert store.reviews[review.id].approved is True
    assert store.update_calls[-1][1] == {"hidden": False}


@pytest.mark.asyncio
async def test_unknown_id_is_a_soft_no_op() -> None:
    store = FakeReviewStore([make_review()])

    assert await _gateway(store).set_approval(ADMIN_TOKEN, "missing-id", True) == 0
    assert await _gateway(store).set_hidden(ADMIN_TOKEN, "missing-id", True) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("review_id", [None, "", "   ", True])
async def test_missing_id_is_rejected_without_update(review_id) -> None:
    store = FakeReviewStore()

    with pytest.raises(InvalidArgumentException):
        await _gateway(store).set_approval(ADMIN_TOKEN, review_id, True)
    with pytest.raises(InvalidArgumentException):
        await _gateway(store).set_hidden(ADMIN_TOKEN, review_id, True)

    assert store.update_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", ["true", 1, 0, None, "yes"])
async def test_non_boolean_flag_is_rejected_without_update(flag) -> None:
    review = make_review()
    store = FakeReviewStore([review])

    with pytest.raises(InvalidArgumentException):
        await _gateway(store).set_approval(ADMIN_TOKEN, review.id, flag)
    with pytest.raises(InvalidArgumentException):
        await _gateway(store).set_hidden(ADMIN_TOKEN, review.id, flag)

    assert store.update_calls == []


@pytest.mark.asyncio
async def test_token_checked_before_validation() -> None:
    with pytest.raises(UnauthorizedException):
        await _gateway(FakeReviewStore()).set_hidden("wrong", None, "not-a-bool")


@pytest.mark.asyncio
async def test_store_error_propagates() -> None:
    review = make_review()
    store = FakeReviewStore([review], fail_ids={review.id})

    with pytest.raises(StoreException):
        await _gateway(store).set_approval(ADMIN_TOKEN, review.id, True)


@pytest.mark.asyncio
async def test_bulk_approve_stops_at_first_failure() -> None:
    reviews = [make_review(id=str(i), approved=False) for i in (1, 2, 3)]
    store = FakeReviewStore(reviews, fail_ids={"2"})

    result = await _gateway(store).bulk_approve(ADMIN_TOKEN, ["1", "2", "3"])

    assert result.ok is False
    assert result.approved == ["1"]
    assert result.failed_id == "2"
    assert result.error == "update rejected for 2"
    assert store.reviews["1"].approved is True
    assert store.reviews["2"].approved is False
    assert store.reviews["3"].approved is False
    assert [call[0] for call in store.update_calls] == ["1", "2"]


@pytest.mark.asyncio
async def test_bulk_approve_all_succeed() -> None:
    reviews = [make_review(id=str(i), approved=False) for i in (1, 2, 3)]
    store = FakeReviewStore(reviews)

    result = await _gateway(store).bulk_approve(ADMIN_TOKEN, [1, 2, 3])

    assert result.ok is True
    assert result.approved == ["1", "2", "3"]
    assert all(store.reviews[str(i)].approved for i in (1, 2, 3))


@pytest.mark.asyncio
async def test_bulk_approve_with_wrong_token_touches_nothing() -> None:
    reviews = [make_review(id=str(i), approved=False) for i in (1, 2)]
    store = FakeReviewStore(reviews)

    with pytest.raises(UnauthorizedException):
        await _gateway(store).bulk_approve("wrong", ["1", "2"])

    assert store.update_calls == []


@pytest.mark.asyncio
async def test_bulk_approve_reports_unknown_ids_separately() -> None:
    store = FakeReviewStore([make_review(id="1", approved=False)])

    result = await _gateway(store).bulk_approve(ADMIN_TOKEN, ["nope-1", "1", "nope-2"])

    assert result.ok is True
    assert result.approved == ["1"]
    assert result.not_found == ["nope-1", "nope-2"]
    assert store.reviews["1"].approved is True


def test_authorize_compares_configured_secret_exactly() -> None:
    gateway = _gateway(FakeReviewStore(), " padded-secret ")

    gateway.authorize(" padded-secret ")
    with pytest.raises(UnauthorizedException):
        gateway.authorize("padded-secret")
