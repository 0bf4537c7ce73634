"""Memory journal router - Endpoints for memory submissions."""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from ..controllers.memory_controller import handle_memory_status, handle_memory_submit
from .form_parsing import read_form_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/memory", tags=["Memory Journal"])


@router.get("/submit", status_code=200)
async def memory_status() -> Dict[str, Any]:
    """Report which memory journal settings are configured."""
    return handle_memory_status()


@router.post("/submit")
async def submit_memory(request: Request) -> RedirectResponse:
    """
    Submit a memory journal form with optional profile image and photo.

    Answers with a 303 carrying ``success=true&memoryId=N`` or the error.
    """
    form = await read_form_submission(request)
    redirect_url = handle_memory_submit(form, request.headers.get("referer"), request.url.path)
    return RedirectResponse(url=redirect_url, status_code=303)
