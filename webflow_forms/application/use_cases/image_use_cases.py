"""Image staging use cases - Uploads to object storage."""
import logging
from typing import Any, Dict, Optional

from ...domain.entities.cms_item import ImageData
from ...domain.value_objects.form_submission import SubmittedFile
from ...infrastructure.storage.r2_storage import (
    ALLOWED_IMAGE_TYPES,
    MAX_UPLOAD_BYTES,
    R2Storage,
    build_file_key,
)

logger = logging.getLogger(__name__)

INVALID_TYPE_MESSAGE = "Invalid file type. Only images (JPEG, PNG, GIF, WebP) are allowed."


def _size_mb(size: int) -> str:
    return f"{size / (1024 * 1024):.2f}"


def validate_image_type(content_type: Optional[str]) -> None:
    """Raise ValueError unless the content type is an accepted image type."""
    if (content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        raise ValueError(INVALID_TYPE_MESSAGE)


def validate_image_upload(uploaded: Optional[SubmittedFile]) -> SubmittedFile:
    """
    Check an uploaded image before staging - pure function.

    Raises:
        ValueError: If no file was sent, the type is not an image or it exceeds 1.5MB
    """
    if uploaded is None:
        raise ValueError("No file provided")
    validate_image_type(uploaded.content_type)
    if uploaded.size > MAX_UPLOAD_BYTES:
        raise ValueError(
            f"File too large ({_size_mb(uploaded.size)}MB). Images should be compressed to ~1MB "
            f"on the client. Maximum allowed is 1.5MB."
        )
    return uploaded


def stage_image(storage: R2Storage, uploaded: Optional[SubmittedFile], now_ms: Optional[int] = None) -> Dict[str, Any]:
    """
    Validate and write an image to object storage.

    Returns:
        Upload result with fileKey, publicUrl and the ImageData shape under "data"
    """
    image = validate_image_upload(uploaded)
    file_key = build_file_key(image.filename, now_ms=now_ms)
    logger.info(f"Uploading image {image.filename} ({_size_mb(image.size)} MB, {image.content_type}) as {file_key}")

    public_url = storage.put_object(file_key, image.data, image.content_type)
    image_data = ImageData(url=public_url, alt=image.filename, file_key=file_key)

    return {
        "success": True,
        "fileKey": file_key,
        "publicUrl": public_url,
        "fileName": image.filename,
        "fileSize": image.size,
        "fileType": image.content_type,
        "data": image_data.to_dict(),
    }


def create_upload_url(storage: R2Storage, file_name: Optional[str], file_type: Optional[str]) -> Dict[str, Any]:
    """
    Presign a direct browser upload.

    Raises:
        ValueError: If the file name or type is missing, or the type is not an image
    """
    if not file_name or not file_type:
        raise ValueError("Missing fileName or fileType")
    validate_image_type(file_type)

    file_key = build_file_key(file_name)
    upload_url = storage.generate_upload_url(file_key, file_type)
    logger.info(f"Generated upload URL for {file_key}")
    return {
        "success": True,
        "uploadUrl": upload_url,
        "fileKey": file_key,
        "publicUrl": storage.public_url(file_key),
    }
