"""Unit tests for image staging use cases."""
import pytest
from unittest.mock import MagicMock

from webflow_forms.application.use_cases.image_use_cases import (
    INVALID_TYPE_MESSAGE,
    create_upload_url,
    stage_image,
    validate_image_upload,
)
from webflow_forms.domain.value_objects.form_submission import SubmittedFile
from webflow_forms.infrastructure.storage.r2_storage import MAX_UPLOAD_BYTES


@pytest.fixture
def storage() -> MagicMock:
    """R2 storage double."""
    storage = MagicMock()
    storage.put_object.side_effect = lambda key, data, content_type: f"https://cdn.example.com/{key}"
    storage.public_url.side_effect = lambda key: f"https://cdn.example.com/{key}"
    storage.generate_upload_url.return_value = "https://signed.example.com/put"
    return storage


@pytest.mark.unit
class TestValidateImageUpload:
    """Tests for validate_image_upload."""

    def test_missing_file(self):
        with pytest.raises(ValueError, match="No file provided"):
            validate_image_upload(None)

    def test_rejects_non_image(self):
        uploaded = SubmittedFile(filename="a.pdf", content_type="application/pdf", data=b"%PDF")
        with pytest.raises(ValueError) as exc_info:
            validate_image_upload(uploaded)
        assert str(exc_info.value) == INVALID_TYPE_MESSAGE

    def test_rejects_oversized(self):
        uploaded = SubmittedFile(filename="a.jpg", content_type="image/jpeg", data=b"x" * (2 * 1024 * 1024))
        with pytest.raises(ValueError, match=r"File too large \(2\.00MB\)"):
            validate_image_upload(uploaded)

    def test_accepts_limit(self):
        uploaded = SubmittedFile(filename="a.webp", content_type="image/webp", data=b"x" * MAX_UPLOAD_BYTES)
        assert validate_image_upload(uploaded) is uploaded


@pytest.mark.unit
class TestStageImage:
    """Tests for stage_image."""

    def test_stage_image(self, storage):
        uploaded = SubmittedFile(filename="Beach.PNG", content_type="image/png", data=b"png-bytes")

        result = stage_image(storage, uploaded, now_ms=1700000000000)

        assert result["success"] is True
        assert result["fileKey"].startswith("images/1700000000000-")
        assert result["fileKey"].endswith(".png")
        assert result["publicUrl"] == f"https://cdn.example.com/{result['fileKey']}"
        assert result["fileSize"] == 9
        assert result["data"] == {"url": result["publicUrl"], "alt": "Beach.PNG", "fileKey": result["fileKey"]}
        storage.put_object.assert_called_once_with(result["fileKey"], b"png-bytes", "image/png")

    def test_invalid_file_not_uploaded(self, storage):
        with pytest.raises(ValueError):
            stage_image(storage, SubmittedFile(filename="a.txt", content_type="text/plain", data=b"x"))
        storage.put_object.assert_not_called()


@pytest.mark.unit
class TestCreateUploadUrl:
    """Tests for create_upload_url."""

    def test_create_upload_url(self, storage):
        result = create_upload_url(storage, "photo.jpeg", "image/jpeg")

        assert result["uploadUrl"] == "https://signed.example.com/put"
        assert result["fileKey"].endswith(".jpeg")
        assert result["publicUrl"].endswith(result["fileKey"])
        storage.generate_upload_url.assert_called_once_with(result["fileKey"], "image/jpeg")

    @pytest.mark.parametrize("file_name,file_type", [(None, "image/jpeg"), ("a.jpg", None), ("", "")])
    def test_missing_parameters(self, storage, file_name, file_type):
        with pytest.raises(ValueError, match="Missing fileName or fileType"):
            create_upload_url(storage, file_name, file_type)

    def test_invalid_type(self, storage):
        with pytest.raises(ValueError, match="Invalid file type"):
            create_upload_url(storage, "a.svg", "image/svg+xml")
