"""Client-side counterpart of the embeddable form widgets."""
from .api_client import FormsApiClient, FormsApiError
from .image_compression import compress_image
from .submission_pipeline import PipelineCancelled, PipelineError, SubmissionPipeline
from .upload_session import UploadSession

__all__ = [
    "FormsApiClient",
    "FormsApiError",
    "compress_image",
    "PipelineCancelled",
    "PipelineError",
    "SubmissionPipeline",
    "UploadSession",
]
