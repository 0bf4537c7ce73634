"""Guestbook router - Endpoints for guestbook submissions and counts."""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from ..controllers.guestbook_controller import (
    handle_guestbook_count,
    handle_guestbook_count_text,
    handle_guestbook_status,
    handle_guestbook_submit,
)
from .form_parsing import read_form_submission
from .responses import NO_CACHE_HEADERS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/guestbook", tags=["Guestbook"])


@router.get("/submit", status_code=200)
async def guestbook_status() -> Dict[str, Any]:
    """Report that the guestbook endpoint is up."""
    return handle_guestbook_status()


@router.post("/submit")
async def submit_guestbook(request: Request) -> RedirectResponse:
    """
    Submit a guestbook form.

    Always answers with a 302 back to the guestbook page, carrying either
    ``success=true&id=N`` or ``error=true&message=...``.
    """
    form = await read_form_submission(request)
    redirect_url = handle_guestbook_submit(form, request.headers.get("referer"), request.url.path)
    return RedirectResponse(url=redirect_url, status_code=302)


@router.get("/count")
async def guestbook_count() -> JSONResponse:
    """Count of published guestbook entries as JSON."""
    try:
        return JSONResponse(content=handle_guestbook_count(), headers=NO_CACHE_HEADERS)
    except Exception as e:
        logger.error(f"Error fetching guestbook count: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e) or "Failed to fetch count", "count": 0},
            headers=NO_CACHE_HEADERS
        )


@router.get("/count-html")
async def guestbook_count_html() -> PlainTextResponse:
    """Count of published guestbook entries as plain text, for embedding."""
    return PlainTextResponse(content=handle_guestbook_count_text(), headers=NO_CACHE_HEADERS)
