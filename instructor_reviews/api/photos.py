"""
Photo upload endpoint.
"""
from fastapi import APIRouter, Depends, File, UploadFile, status

from instructor_reviews.api.deps import get_photo_storage
from instructor_reviews.core.logging import logger
from instructor_reviews.core.middleware import get_request_id
from instructor_reviews.schemas.review import PhotoUploadResponse
from instructor_reviews.services.photo_storage import PhotoStorage


router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.post("", response_model=PhotoUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    file: UploadFile = File(..., description="Instructor photo"),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """
    Upload an instructor photo and get back its public URL, to be sent as
    photo_url with the review submission.

    Raises:
        400: Not an image, or empty
        413: Photo too large
    """
    request_id = get_request_id()

    # Read one byte past the limit so oversized uploads are caught without
    # buffering the whole file
    content = await file.read(storage.max_bytes + 1)

    logger.info(
        "Processing photo upload",
        extra={
            "request_id": request_id,
            "upload_name": file.filename,
            "content_type": file.content_type,
        },
    )

    url = await storage.upload(file.filename, content, file.content_type)

    return PhotoUploadResponse(request_id=request_id, url=url)
