"""Tests for image staging endpoints."""
import pytest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from webflow_forms.infrastructure.storage.r2_storage import StorageError
from webflow_forms.main import app

GET_STORAGE = 'webflow_forms.presentation.controllers.image_controller.get_r2_storage'


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def storage() -> MagicMock:
    storage = MagicMock()
    storage.put_object.side_effect = lambda key, data, content_type: f"https://cdn.example.com/{key}"
    storage.public_url.side_effect = lambda key: f"https://cdn.example.com/{key}"
    storage.generate_upload_url.return_value = "https://signed.example.com/put"
    return storage


@pytest.mark.unit
class TestUploadImage:
    """Tests for /api/images/upload."""

    @patch(GET_STORAGE)
    def test_upload(self, mock_get_storage, client, storage):
        mock_get_storage.return_value = storage

        response = client.post("/api/images/upload", files={"file": ("beach.jpg", b"\xff\xd8abc", "image/jpeg")})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["fileName"] == "beach.jpg"
        assert body["fileType"] == "image/jpeg"
        assert body["fileKey"].startswith("images/") and body["fileKey"].endswith(".jpg")
        assert body["data"]["url"] == body["publicUrl"]

    def test_missing_file(self, client):
        response = client.post("/api/images/upload", data={"other": "x"})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "No file provided"}

    @patch(GET_STORAGE)
    def test_invalid_type(self, mock_get_storage, client, storage):
        mock_get_storage.return_value = storage
        response = client.post("/api/images/upload", files={"file": ("a.pdf", b"%PDF", "application/pdf")})
        assert response.status_code == 400
        assert "Invalid file type" in response.json()["error"]
        storage.put_object.assert_not_called()

    @patch(GET_STORAGE)
    def test_storage_failure(self, mock_get_storage, client, storage):
        storage.put_object.side_effect = StorageError("Failed to upload object to R2: AccessDenied - denied")
        mock_get_storage.return_value = storage

        response = client.post("/api/images/upload", files={"file": ("a.png", b"png", "image/png")})

        assert response.status_code == 500
        assert response.json()["success"] is False


@pytest.mark.unit
class TestUploadUrl:
    """Tests for /api/images/upload-url."""

    @patch(GET_STORAGE)
    def test_upload_url(self, mock_get_storage, client, storage):
        mock_get_storage.return_value = storage

        response = client.post("/api/images/upload-url", json={"fileName": "a.png", "fileType": "image/png"})

        assert response.status_code == 200
        assert response.json()["uploadUrl"] == "https://signed.example.com/put"
        assert response.json()["publicUrl"].endswith(response.json()["fileKey"])

    def test_missing_fields(self, client):
        response = client.post("/api/images/upload-url", json={"fileName": "a.png"})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing fileName or fileType"

    def test_storage_not_configured(self, client, clean_env):
        response = client.post("/api/images/upload-url", json={"fileName": "a.png", "fileType": "image/png"})
        assert response.status_code == 500
        assert "R2_ACCOUNT_ID" in response.json()["error"]
