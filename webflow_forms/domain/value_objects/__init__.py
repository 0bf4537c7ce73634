"""Domain value objects package."""
from .form_submission import FormSubmission, SubmittedFile

__all__ = [
    "FormSubmission",
    "SubmittedFile",
]
