"""
Moderation gateway.

Checks the shared admin secret and applies approve/hide state changes to
single reviews. Nothing is written unless the token matches and the input
is well-formed.
"""
import hmac
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from instructor_reviews.core.exceptions import (
    AppException,
    InvalidArgumentException,
    UnauthorizedException,
)
from instructor_reviews.core.logging import logger
from instructor_reviews.services.review_store import ReviewStore


@dataclass
class BulkApproveResult:
    """
    Outcome of a bulk approval.

    approved holds ids that matched a review, not_found those that matched
    none. failed_id is None when every id went through.
    """

    approved: List[str] = field(default_factory=list)
    not_found: List[str] = field(default_factory=list)
    failed_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failed_id is None


def _require_id(review_id) -> str:
    if isinstance(review_id, bool) or review_id is None:
        raise InvalidArgumentException("id is required", details={"field": "id"})
    review_id = str(review_id).strip()
    if not review_id:
        raise InvalidArgumentException("id is required", details={"field": "id"})
    return review_id


def _require_flag(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidArgumentException(
            f"{name} must be a boolean",
            details={"field": name, "received_type": type(value).__name__},
        )
    return value


class ModerationGateway:
    """
    Approve/unapprove and hide/unhide reviews on behalf of an administrator.

    Usage:
        gateway = ModerationGateway(store, settings.ADMIN_TOKEN)
        updated = await gateway.set_approval(token, review_id, True)
    """

    def __init__(self, store: ReviewStore, admin_token: Optional[str]):
        self._store = store
        self._admin_token = admin_token or ""

    def authorize(self, token: Optional[str]) -> None:
        """
        Raises:
            UnauthorizedException: No secret configured, or token missing or wrong
        """
        if not self._admin_token.strip():
            logger.warning("Moderation attempted but no admin token is configured")
            raise UnauthorizedException("Unauthorized")
        if not token or not hmac.compare_digest(
            token.encode("utf-8"), self._admin_token.encode("utf-8")
        ):
            logger.warning("Moderation attempted with an invalid admin token")
            raise UnauthorizedException("Unauthorized")

    async def set_approval(
        self,
        token: Optional[str],
        review_id,
        approved,
        moderator_note: Optional[str] = None,
    ) -> int:
        """
        Approve or unapprove a review.

        Approving stamps approved_at with the current time (again on every
        approve); unapproving clears it. hidden is never touched.

        Returns:
            Rows updated; 0 when no review has this id

        Raises:
            UnauthorizedException: Bad or missing token
            InvalidArgumentException: Missing id or non-boolean flag
            StoreException: The store rejected the update
        """
        self.authorize(token)
        review_id = _require_id(review_id)
        approved = _require_flag(approved, "approved")

        values = {
            "approved": approved,
            "approved_at": datetime.now(timezone.utc) if approved else None,
        }
        if moderator_note is not None:
            values["moderator_note"] = moderator_note

        updated = await self._store.update_review(review_id, values)
        logger.info(
            "Review approval updated",
            extra={"review_id": review_id, "approved": approved, "updated": updated},
        )
        return updated

    async def set_hidden(self, token: Optional[str], review_id, hidden) -> int:
        """
        Hide or unhide a review. approved and approved_at are never touched.

        Returns:
            Rows updated; 0 when no review has this id
        """
        self.authorize(token)
        review_id = _require_id(review_id)
        hidden = _require_flag(hidden, "hidden")

        updated = await self._store.update_review(review_id, {"hidden": hidden})
        logger.info(
            "Review visibility updated",
            extra={"review_id": review_id, "hidden": hidden, "updated": updated},
        )
        return updated

    async def bulk_approve(self, token: Optional[str], review_ids: Sequence) -> BulkApproveResult:
        """
        Approve reviews one at a time, in order, stopping at the first failure.

        Reviews approved before the failure stay approved and the rest are
        left alone; there is no rollback.

        Raises:
            UnauthorizedException: Bad or missing token (checked before any update)
        """
        self.authorize(token)
        targets = list(review_ids)
        result = BulkApproveResult()

        for review_id in targets:
            try:
                updated = await self.set_approval(token, review_id, True)
            except AppException as e:
                result.failed_id = str(review_id)
                result.error = e.message
                processed = len(result.approved) + len(result.not_found)
                logger.warning(
                    "Bulk approval stopped",
                    extra={
                        "failed_id": result.failed_id,
                        "reason": e.message,
                        "processed": processed,
                        "remaining": len(targets) - processed - 1,
                    },
                )
                break
            if updated:
                result.approved.append(str(review_id))
            else:
                result.not_found.append(str(review_id))

        logger.info(
            "Bulk approval finished",
            extra={
                "requested": len(targets),
                "approved": len(result.approved),
                "not_found": len(result.not_found),
                "ok": result.ok,
            },
        )
        return result
