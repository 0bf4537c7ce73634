"""Form parsing - Converts multipart/urlencoded bodies to FormSubmission."""
import logging
from typing import Dict

from fastapi import Request
from starlette.datastructures import UploadFile

from ...domain.value_objects.form_submission import FormSubmission, SubmittedFile

logger = logging.getLogger(__name__)


async def read_form_submission(request: Request) -> FormSubmission:
    """Read the request form; the first value of a repeated text field wins."""
    form = await request.form()
    fields: Dict[str, str] = {}
    files: Dict[str, SubmittedFile] = {}
    try:
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key not in files:
                    data = await value.read()
                    files[key] = SubmittedFile(
                        filename=value.filename or key,
                        content_type=value.content_type or "application/octet-stream",
                        data=data
                    )
            elif key not in fields:
                fields[key] = value
    finally:
        await form.close()

    logger.debug(f"Parsed form with fields {list(fields.keys())} and files {list(files.keys())}")
    return FormSubmission(fields=fields, files=files)
