"""
API dependencies for dependency injection.

Stores are built once in the application lifespan and kept on app.state;
these dependencies hand them to the routes. Tests swap them out through
app.dependency_overrides.
"""
from typing import Optional
from fastapi import Depends, Header, Request

from instructor_reviews.core.config import Settings
from instructor_reviews.services.moderation import ModerationGateway
from instructor_reviews.services.photo_storage import PhotoStorage
from instructor_reviews.services.review_store import ReviewStore

BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_review_store(request: Request) -> ReviewStore:
    """Store on the read connection: public listings and submissions."""
    return request.app.state.review_store


def get_moderation_store(request: Request) -> ReviewStore:
    """Store on the privileged connection used for moderation writes."""
    return request.app.state.moderation_store


def get_photo_storage(request: Request) -> PhotoStorage:
    return request.app.state.photo_storage


def get_moderation_gateway(
    store: ReviewStore = Depends(get_moderation_store),
    settings: Settings = Depends(get_settings),
) -> ModerationGateway:
    return ModerationGateway(store, settings.ADMIN_TOKEN)


async def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Extract the token from an "Authorization: Bearer <token>" header.

    Returns None when the header is missing or uses another scheme; the
    gateway turns that into a 401.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):]


async def verify_admin_token(
    token: Optional[str] = Depends(get_bearer_token),
    gateway: ModerationGateway = Depends(get_moderation_gateway),
) -> str:
    """
    Dependency for admin-only reads.

    Raises:
        UnauthorizedException: If the token is missing or wrong
    """
    gateway.authorize(token)
    return token
