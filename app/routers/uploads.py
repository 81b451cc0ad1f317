# app/routers/uploads.py
"""
Image upload API. Stored images are served from `{API_PREFIX}/public`.
"""
from fastapi import APIRouter, HTTPException, UploadFile, File, status, Form
from typing import Optional
from pydantic import BaseModel
import logging

from app.core.auth import require_auth_key
from app.core.config import settings
from app.core.storage import get_storage_service

router = APIRouter(prefix="/upload", tags=["upload"])
logger = logging.getLogger(__name__)


class UploadResponse(BaseModel):
    filename: str
    file_size: int
    mime_type: str
    url: str


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    auth: Optional[str] = Form(None)
):
    """
    Upload an image for use in blogs.

    **Supported file types:** JPEG, PNG, GIF, WEBP

    **Permissions**: `auth` form field must match AUTH_KEY
    """
    require_auth_key(auth)

    file_content = await file.read()

    if len(file_content) > settings.MAX_FILE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size exceeds maximum {settings.MAX_FILE_SIZE / 1024 / 1024}MB"
        )

    mime_type = file.content_type
    if mime_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type: {mime_type}"
        )

    storage = get_storage_service()
    try:
        filename, file_size = await storage.save_file(file_content, file.filename, mime_type)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except OSError as e:
        logger.error(f"File upload failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload file: {str(e)}"
        )

    return UploadResponse(
        filename=filename,
        file_size=file_size,
        mime_type=mime_type,
        url=f"{settings.API_PREFIX}/public/{filename}"
    )
