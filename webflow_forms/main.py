"""FastAPI application entrypoint for webflow-forms."""
import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

# Load environment variables from .env file
load_dotenv()

from .config.config import get_mount_path
from .presentation.dtos.errors import create_validation_error_response, create_internal_error_response
from .presentation.routers.guestbook_router import router as guestbook_router
from .presentation.routers.timeline_router import router as timeline_router
from .presentation.routers.memory_router import router as memory_router
from .presentation.routers.image_router import router as image_router
from .presentation.routers.cms_router import router as cms_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# Reduce AWS SDK and HTTP client logging to WARNING to reduce noise
logging.getLogger('botocore').setLevel(logging.WARNING)
logging.getLogger('urllib3').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

app = FastAPI(title="webflow-forms")

# Include routers
mount_path = get_mount_path()
app.include_router(guestbook_router, prefix=mount_path)
app.include_router(timeline_router, prefix=mount_path)
app.include_router(memory_router, prefix=mount_path)
app.include_router(image_router, prefix=mount_path)
app.include_router(cms_router, prefix=mount_path)


@app.get("/")
async def root() -> Dict[str, Any]:
    """Service status."""
    return {"service": "webflow-forms", "status": "ok"}


@app.get("/health")
async def health() -> Dict[str, Any]:
    """Health check."""
    return {"status": "ok"}


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request, exc: RequestValidationError):
    """Handle request body/query validation errors."""
    logger.error(f"Request validation error on {request.url.path}: {exc.errors()}")
    return create_validation_error_response(exc)


@app.exception_handler(ValidationError)
async def validation_exception_handler(request, exc: ValidationError):
    """Handle Pydantic validation errors."""
    logger.error(f"Pydantic validation error on {request.url.path}: {exc.errors()}")
    return create_validation_error_response(exc)


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected error: {exc}")
    return create_internal_error_response()


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "webflow_forms.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
