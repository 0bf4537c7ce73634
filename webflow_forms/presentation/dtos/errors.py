"""Error handling utilities for validation errors."""
from typing import Any, Dict, List, Sequence

from fastapi.responses import JSONResponse


def _format_errors(raw_errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    errors = []
    for error in raw_errors:
        # Request validation prefixes locations with "body" / "query"
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        field = ".".join(loc)
        error_type = error.get("type", "")
        error_msg = error.get("msg", "Invalid value")

        if error_type == "missing":
            error_msg = f"{field} is required"
        elif error_type == "dict_type":
            error_msg = f"{field} must be a JSON object"
        elif error_type == "extra_forbidden":
            error_msg = f"unexpected field '{error.get('input')}'"

        errors.append({
            "field": field,
            "error": error_msg
        })
    return errors


def create_validation_error_response(validation_error: Any) -> JSONResponse:
    """Convert a Pydantic or request validation error to standardized error response."""
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request",
            "errors": _format_errors(validation_error.errors())
        }
    )


def create_internal_error_response() -> JSONResponse:
    """Create standardized internal error response."""
    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal error",
            "errors": []
        }
    )


def create_error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    """Create a {"success": false, "error": ...} response used by the JSON API routes."""
    content: Dict[str, Any] = {"success": False, "error": error}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)
