"""
Campus Market Backend: Image Upload Route Handlers
====================================================

What:  POST /api/upload stores an image; GET /uploads/{name} serves it back.

Request Flow (upload):
    1. Client sends multipart/form-data with an "image" field
    2. At most MAX_UPLOAD_SIZE + 1 bytes are read, enough to detect oversize
    3. FileService checks extension and size, then writes the file
    4. Response: {"url": "/uploads/<generated-name>"}

The returned URL is what clients put in the "image" field of announcements
and discounted products.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse

from campus_market.config import settings
from campus_market.exceptions import UploadRejectedError
from campus_market.schemas.common import ErrorResponse, UploadResponse
from campus_market.services.file_service import UPLOAD_URL_PREFIX, file_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])


@router.post(
    "/api/upload",
    response_model=UploadResponse,
    responses={400: {"description": "No file, wrong type or too large", "model": ErrorResponse}},
    summary="Upload an image",
    description="Accepts jpg, jpeg, png and gif files up to 5MB in the multipart field 'image'.",
)
async def upload_image(
    image: Optional[UploadFile] = File(default=None, description="Image file (jpg, jpeg, png, gif)"),
) -> UploadResponse:
    if image is None:
        raise UploadRejectedError(message="No file was uploaded.")

    try:
        content = await image.read(settings.max_upload_size + 1)
        logger.info(
            "Received upload: filename=%s, size=%d bytes",
            image.filename or "unknown",
            len(content),
        )
        url = await file_service.validate_and_store(
            filename=image.filename or "",
            content=content,
            content_length=image.size,
        )
    finally:
        await image.close()

    return UploadResponse(url=url)


@router.get(
    f"{UPLOAD_URL_PREFIX}/{{file_path:path}}",
    responses={
        200: {"description": "Image file"},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve an uploaded image",
)
async def serve_upload(file_path: str) -> FileResponse:
    full_path = file_service.resolve_upload(file_path)
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
