"""Timeline router - Endpoints for timeline submissions and image attachment."""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from ..controllers.timeline_controller import (
    handle_attach_images,
    handle_timeline_status,
    handle_timeline_submit,
    handle_timeline_test,
)
from ..dtos.image_models import AttachImagesRequest
from .form_parsing import read_form_submission
from .responses import error_response_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timeline", tags=["Timeline"])


@router.get("/submit", status_code=200)
async def timeline_status() -> Dict[str, Any]:
    """Report which timeline settings are configured."""
    return handle_timeline_status()


@router.post("/submit")
async def submit_timeline(request: Request) -> RedirectResponse:
    """
    Submit a timeline form with up to two photos.

    Answers with a 303 carrying ``success=true&eventNumber=N`` or the error.
    """
    form = await read_form_submission(request)
    redirect_url = handle_timeline_submit(form, request.headers.get("referer"), request.url.path)
    return RedirectResponse(url=redirect_url, status_code=303)


@router.post("/attach-images", status_code=200)
async def attach_timeline_images(payload: AttachImagesRequest):
    """Attach images staged in object storage to a timeline item."""
    try:
        return handle_attach_images(payload)
    except Exception as e:
        return error_response_for(e, "attach_timeline_images")


@router.get("/test")
async def timeline_test(mode: str = Query("info", description="info, query or create")):
    """Timeline diagnostics."""
    try:
        return JSONResponse(content=handle_timeline_test(mode))
    except ValueError as e:
        logger.warning(f"Validation error in timeline_test: {e}")
        return PlainTextResponse(content=str(e), status_code=400)
    except Exception as e:
        logger.error(f"Error in timeline_test ({mode}): {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
