"""Submission pipeline - validate, upload, assemble and submit a form in order."""
import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .api_client import FormsApiClient
from .image_compression import compress_image
from .upload_session import UploadSession

logger = logging.getLogger(__name__)

STEPS = ("validate", "upload", "assemble", "submit")


class PipelineError(RuntimeError):
    """A pipeline step failed; later steps did not run."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step
        self.message = message


class PipelineCancelled(PipelineError):
    """The pipeline was cancelled before a step started."""


class SubmissionPipeline:
    """
    Ordered form submission: validate -> upload assets -> assemble payload -> submit.

    Images are compressed and staged through the API, recorded in the upload
    session, and sent with the form as hidden fields. The first failing step
    raises PipelineError and stops the run; ``cancel`` stops it before the
    next step.
    """

    def __init__(
        self,
        api_client: FormsApiClient,
        endpoint: str,
        session: Optional[UploadSession] = None,
        required_fields: Sequence[str] = (),
        on_step: Optional[Callable[[str], None]] = None
    ):
        self.api_client = api_client
        self.endpoint = endpoint
        self.session = session or UploadSession()
        self.required_fields = tuple(required_fields)
        self.on_step = on_step
        self.completed_steps: List[str] = []
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _validate(self, fields: Mapping[str, str]) -> None:
        missing = [name for name in self.required_fields if not str(fields.get(name) or "").strip()]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

    def _upload(self, files: Mapping[str, Tuple[str, bytes]]) -> None:
        for upload_id, (file_name, data) in files.items():
            compressed, name, content_type = compress_image(data, file_name)
            image = self.api_client.upload_image(compressed, name, content_type)
            self.session.put(upload_id, image)
            logger.info(f"Staged {upload_id} at {image.url}")

    def _assemble(self, fields: Mapping[str, str]) -> Dict[str, str]:
        payload = dict(fields)
        payload.update(self.session.all_hidden_fields())
        return payload

    def run(self, fields: Mapping[str, str], files: Optional[Mapping[str, Tuple[str, bytes]]] = None) -> Dict[str, str]:
        """
        Run every step in order.

        Args:
            fields: Text form fields
            files: Images to stage, keyed by upload ID (e.g. "photo1") as (file_name, bytes)

        Returns:
            Outcome parsed from the submission redirect

        Raises:
            PipelineError: From the first step that fails
            PipelineCancelled: If cancel() was called before a step started
        """
        payload: Dict[str, str] = {}
        result: Dict[str, str] = {}
        for step in STEPS:
            if self._cancelled:
                logger.info(f"Pipeline cancelled before {step}")
                raise PipelineCancelled(step, "cancelled")
            try:
                if step == "validate":
                    self._validate(fields)
                elif step == "upload":
                    self._upload(files or {})
                elif step == "assemble":
                    payload = self._assemble(fields)
                else:
                    result = self.api_client.submit_form(self.endpoint, payload)
            except Exception as e:
                logger.error(f"Pipeline step {step} failed: {e}")
                raise PipelineError(step, str(e)) from e

            self.completed_steps.append(step)
            if self.on_step:
                self.on_step(step)
        return result
