"""Image router - Endpoints for staging images in object storage."""
import logging

from fastapi import APIRouter, Request

from ..controllers.image_controller import handle_upload_image, handle_upload_url
from ..dtos.image_models import UploadUrlRequest
from .form_parsing import read_form_submission
from .responses import error_response_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/images", tags=["Images"])


@router.post("/upload", status_code=200)
async def upload_image(request: Request):
    """
    Upload one image (multipart field ``file``) to object storage.

    Accepts JPEG, PNG, GIF and WebP up to 1.5MB.
    """
    try:
        form = await read_form_submission(request)
        return handle_upload_image(form.get_file("file"))
    except Exception as e:
        return error_response_for(e, "upload_image")


@router.post("/upload-url", status_code=200)
async def upload_url(payload: UploadUrlRequest):
    """Get a presigned URL for a direct browser upload."""
    try:
        return handle_upload_url(payload)
    except Exception as e:
        return error_response_for(e, "upload_url")
