"""Shared response helpers for the JSON API routers."""
import logging

from fastapi.responses import JSONResponse

from ...application.use_cases.cms_use_cases import ItemValidationError
from ...infrastructure.storage.r2_storage import StorageError
from ...infrastructure.webflow.cms_client import WebflowApiError
from ..dtos.errors import create_error_response

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


def error_response_for(e: Exception, operation: str) -> JSONResponse:
    """Map a service exception to a {"success": false, "error": ...} response."""
    if isinstance(e, ItemValidationError):
        logger.warning(f"Validation error in {operation}: {e}")
        return create_error_response(400, str(e), validationErrors=e.errors)
    if isinstance(e, ValueError):
        logger.warning(f"Validation error in {operation}: {e}")
        return create_error_response(400, str(e))
    if isinstance(e, WebflowApiError):
        logger.error(f"Webflow API error in {operation}: {e.status_code} - {e.message}")
        return create_error_response(e.status_code or 502, e.message)
    if isinstance(e, (StorageError, RuntimeError)):
        logger.error(f"Error in {operation}: {e}")
        return create_error_response(500, str(e))
    logger.error(f"Unexpected error in {operation}: {e}")
    return create_error_response(500, "Internal error")
