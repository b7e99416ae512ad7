"""
Health check endpoint.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from instructor_reviews.api.deps import get_settings
from instructor_reviews.core.config import Settings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    moderation_enabled: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Liveness probe. Does not touch the database.

    moderation_enabled is false when no ADMIN_TOKEN is configured, in which
    case every moderation call is refused.
    """
    return HealthResponse(
        status="ok",
        version=settings.APP_VERSION,
        moderation_enabled=bool(settings.ADMIN_TOKEN),
    )
