"""Unit tests for the submission pipeline."""
import pytest
from unittest.mock import MagicMock, patch

from webflow_forms.client.api_client import FormsApiError
from webflow_forms.client.submission_pipeline import PipelineCancelled, PipelineError, SubmissionPipeline
from webflow_forms.client.upload_session import UploadSession
from webflow_forms.domain.entities.cms_item import ImageData

COMPRESS = 'webflow_forms.client.submission_pipeline.compress_image'


@pytest.fixture
def api() -> MagicMock:
    api = MagicMock()
    api.upload_image.return_value = ImageData(url="https://cdn/1.jpg", alt="one", file_key="images/1.jpg")
    api.submit_form.return_value = {"success": "true", "eventNumber": "3"}
    return api


@pytest.mark.unit
class TestSubmissionPipeline:
    """Tests for SubmissionPipeline."""

    @patch(COMPRESS)
    def test_runs_steps_in_order(self, mock_compress, api):
        mock_compress.return_value = (b"small", "one.jpg", "image/jpeg")
        steps = []
        pipeline = SubmissionPipeline(api, "/api/timeline/submit", required_fields=("name",), on_step=steps.append)

        result = pipeline.run({"name": "Wedding"}, {"photo1": ("one.png", b"big")})

        assert result == {"success": "true", "eventNumber": "3"}
        assert steps == ["validate", "upload", "assemble", "submit"]
        assert pipeline.completed_steps == steps
        api.upload_image.assert_called_once_with(b"small", "one.jpg", "image/jpeg")
        endpoint, payload = api.submit_form.call_args[0]
        assert endpoint == "/api/timeline/submit"
        assert payload == {
            "name": "Wedding",
            "photo1_url": "https://cdn/1.jpg",
            "photo1_alt": "one",
            "photo1_fileKey": "images/1.jpg",
        }

    def test_validation_failure_stops(self, api):
        pipeline = SubmissionPipeline(api, "/api/memory/submit", required_fields=("first_name", "email"))

        with pytest.raises(PipelineError) as exc_info:
            pipeline.run({"first_name": "Ada"})

        assert exc_info.value.step == "validate"
        assert "email" in exc_info.value.message
        assert pipeline.completed_steps == []
        api.upload_image.assert_not_called()
        api.submit_form.assert_not_called()

    @patch(COMPRESS)
    def test_upload_failure_stops_before_submit(self, mock_compress, api):
        mock_compress.return_value = (b"small", "one.jpg", "image/jpeg")
        api.upload_image.side_effect = FormsApiError("Upload failed", 500)
        pipeline = SubmissionPipeline(api, "/api/timeline/submit")

        with pytest.raises(PipelineError) as exc_info:
            pipeline.run({}, {"photo1": ("one.png", b"big")})

        assert exc_info.value.step == "upload"
        assert pipeline.completed_steps == ["validate"]
        api.submit_form.assert_not_called()

    def test_submit_failure(self, api):
        api.submit_form.side_effect = FormsApiError("Missing API token", 303)
        pipeline = SubmissionPipeline(api, "/api/guestbook/submit")

        with pytest.raises(PipelineError) as exc_info:
            pipeline.run({"full_name": "Ada"})

        assert exc_info.value.step == "submit"
        assert exc_info.value.message == "Missing API token"

    def test_cancel_between_steps(self, api):
        pipeline = SubmissionPipeline(api, "/api/guestbook/submit")
        pipeline.on_step = lambda step: pipeline.cancel() if step == "upload" else None

        with pytest.raises(PipelineCancelled) as exc_info:
            pipeline.run({"full_name": "Ada"})

        assert exc_info.value.step == "assemble"
        assert pipeline.cancelled is True
        assert pipeline.completed_steps == ["validate", "upload"]
        api.submit_form.assert_not_called()

    def test_existing_session_images_are_sent(self, api):
        session = UploadSession({"photo2": ImageData(url="https://cdn/2.jpg", alt="two", file_key="images/2.jpg")})
        pipeline = SubmissionPipeline(api, "/api/timeline/submit", session=session)

        pipeline.run({"name": "x"})

        payload = api.submit_form.call_args[0][1]
        assert payload["photo2_url"] == "https://cdn/2.jpg"
