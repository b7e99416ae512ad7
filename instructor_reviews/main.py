"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from instructor_reviews.core.config import Settings, settings as default_settings
from instructor_reviews.core.middleware import RequestIdMiddleware, get_request_id
from instructor_reviews.core.logging import logger, log_error, log_warning
from instructor_reviews.core.exceptions import AppException
from instructor_reviews.schemas.error import ErrorResponse, ErrorCode, ERROR_CODE_TO_HTTP_STATUS
from instructor_reviews.db.database import build_engine, build_session_factory, init_db, close_db
from instructor_reviews.services.photo_storage import PhotoStorage
from instructor_reviews.services.review_store import ReviewStore

from instructor_reviews.api import health, reviews, instructors, photos, admin, moderation


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the store clients from settings on startup; dispose them on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("Starting up Instructor Reviews API")

    read_engine = build_engine(settings.DATABASE_URL, debug=settings.DEBUG)
    if settings.MODERATION_DATABASE_URL == settings.DATABASE_URL:
        moderation_engine = read_engine
    else:
        moderation_engine = build_engine(settings.MODERATION_DATABASE_URL, debug=settings.DEBUG)

    app.state.review_store = ReviewStore(build_session_factory(read_engine))
    app.state.moderation_store = ReviewStore(build_session_factory(moderation_engine))

    Path(settings.PHOTO_STORAGE_DIR).mkdir(parents=True, exist_ok=True)
    app.state.photo_storage = PhotoStorage(
        settings.PHOTO_STORAGE_DIR,
        settings.PUBLIC_PHOTO_BASE_URL,
        settings.MAX_PHOTO_BYTES,
    )

    if not settings.ADMIN_TOKEN:
        log_warning("ADMIN_TOKEN is not set; moderation endpoints will refuse every request")

    # Create missing tables on the privileged connection (use migrations in production)
    try:
        await init_db(moderation_engine)
        logger.info("Database initialized")
    except Exception as e:
        log_error("Failed to initialize database", e)
        # Continue anyway - every request reports store errors on its own

    yield

    logger.info("Shutting down Instructor Reviews API")
    await close_db(read_engine, moderation_engine)
    logger.info("Database connections closed")


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom application exceptions.

    Returns the error envelope with the status code mapped from the error code.
    """
    request_id = get_request_id()

    logger.warning(
        f"Application exception: {exc.error_code.value}",
        extra={
            "request_id": request_id,
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "details": exc.details,
        },
    )

    error_response = ErrorResponse(
        request_id=request_id,
        error=exc.message,
        code=exc.error_code,
        details=exc.details if exc.details else None,
    )

    status_code = ERROR_CODE_TO_HTTP_STATUS.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(by_alias=True, exclude_none=True),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors as 400 with the standard envelope.
    """
    request_id = get_request_id()

    errors = exc.errors()
    error_details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in errors
        ]
    }

    fields = sorted({detail["field"].split(".")[-1] for detail in error_details["validation_errors"]})

    logger.warning(
        "Validation error",
        extra={"request_id": request_id, "errors": error_details},
    )

    error_response = ErrorResponse(
        request_id=request_id,
        error=f"Invalid or missing: {', '.join(fields)}" if fields else "Request validation failed",
        code=ErrorCode.INVALID_ARGUMENT,
        details=error_details,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(by_alias=True, exclude_none=True),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Settings are validated when constructed, so a malformed configuration
    fails here rather than on the first request.
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Instructor reviews with admin moderation",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],  # Authorization for moderation
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        Handle all uncaught exceptions with a generic 500.
        The exception text is only exposed in DEBUG.

        This runs outside RequestIdMiddleware, after its context variable
        has been reset, so the id is read back from request.state.
        """
        request_id = getattr(request.state, "request_id", None) or get_request_id()

        logger.error(
            f"Uncaught exception: {str(exc)}",
            extra={"request_id": request_id, "exception_type": type(exc).__name__},
            exc_info=True,
        )

        error_response = ErrorResponse(
            request_id=request_id,
            error="Internal server error",
            code=ErrorCode.INTERNAL,
            details={"exception": str(exc)} if settings.DEBUG else None,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response.model_dump(by_alias=True, exclude_none=True),
        )

    app.include_router(health.router)
    app.include_router(reviews.router)
    app.include_router(instructors.router)
    app.include_router(photos.router)
    app.include_router(admin.router)
    app.include_router(moderation.router)

    # Serve uploaded photos when the public URL points back at this app
    photo_mount = settings.PUBLIC_PHOTO_BASE_URL.rstrip("/")
    if settings.PUBLIC_PHOTO_BASE_URL.startswith("/") and photo_mount:
        app.mount(
            photo_mount,
            StaticFiles(directory=settings.PHOTO_STORAGE_DIR, check_dir=False),
            name="photos",
        )

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "instructor_reviews.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        workers=default_settings.WORKERS,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
