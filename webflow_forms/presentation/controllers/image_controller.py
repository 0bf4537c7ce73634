"""Image controller - Handles image staging in object storage."""
import logging
from typing import Any, Dict, Optional

from ...application.use_cases.image_use_cases import create_upload_url, stage_image
from ...domain.value_objects.form_submission import SubmittedFile
from ...infrastructure.storage.r2_storage import get_r2_storage
from ..dtos.image_models import UploadUrlRequest

logger = logging.getLogger(__name__)


def handle_upload_image(uploaded: Optional[SubmittedFile]) -> Dict[str, Any]:
    """
    Stage an uploaded image.

    Raises:
        ValueError: If the file is missing, not an image or too large
        RuntimeError: If storage is not configured or the upload fails
    """
    if uploaded is None:
        raise ValueError("No file provided")
    logger.info(f"Staging image {uploaded.filename} ({uploaded.size} bytes)")
    return stage_image(get_r2_storage(), uploaded)


def handle_upload_url(payload: UploadUrlRequest) -> Dict[str, Any]:
    """
    Create a presigned upload URL.

    Raises:
        ValueError: If fileName or fileType is missing or not an image type
    """
    if not payload.file_name or not payload.file_type:
        raise ValueError("Missing fileName or fileType")
    return create_upload_url(get_r2_storage(), payload.file_name, payload.file_type)
