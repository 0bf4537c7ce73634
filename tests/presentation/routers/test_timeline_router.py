"""Tests for timeline endpoints."""
import pytest
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

from fastapi.testclient import TestClient

from webflow_forms.domain.entities.cms_item import CmsItem, UploadedAsset
from webflow_forms.main import app

GET_CLIENT = 'webflow_forms.presentation.controllers.timeline_controller.get_webflow_client'
UPLOAD_ASSET = 'webflow_forms.application.use_cases.timeline_use_cases.upload_asset'


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.mark.unit
class TestTimelineSubmit:
    """Tests for /api/timeline/submit."""

    def test_get_status_reports_config(self, client, webflow_env):
        response = client.get("/api/timeline/submit")
        assert response.status_code == 200
        assert response.json()["config"] == {
            "hasWriteToken": True, "hasReadToken": True, "hasCollectionId": True, "hasSiteId": True
        }

    @patch(UPLOAD_ASSET)
    @patch(GET_CLIENT)
    def test_post_multipart(self, mock_get_client, mock_upload, client, webflow_env, mock_client, make_jpeg):
        mock_client.list_all_items.return_value = [CmsItem(id="a", field_data={"event-number": 4})]
        mock_get_client.return_value = mock_client
        mock_upload.return_value = UploadedAsset(file_id="f1", url="https://cdn/a.jpg")

        response = client.post(
            "/api/timeline/submit",
            data={"timeline_name_line_1": "Wedding", "month-year": "June 1990"},
            files={"fileToUpload1": ("a.jpg", make_jpeg(800, 600), "image/jpeg")},
            follow_redirects=False,
        )

        assert response.status_code == 303
        query = parse_qs(urlsplit(response.headers["location"]).query)
        assert query["success"] == ["true"]
        assert query["eventNumber"] == ["5"]
        assert mock_upload.call_args[0][1] == "site-123"
        field_data = mock_client.create_item.call_args[0][1]["fieldData"]
        assert field_data["name"] == "Wedding"
        assert field_data["photo-1"]["fileId"] == "f1"

    def test_post_missing_config_redirects_with_error(self, client, clean_env):
        response = client.post("/api/timeline/submit", data={"name": "x"}, follow_redirects=False)
        assert response.status_code == 303
        assert "error=true" in response.headers["location"]


@pytest.mark.unit
class TestAttachImagesEndpoint:
    """Tests for /api/timeline/attach-images."""

    @patch(GET_CLIENT)
    def test_attach(self, mock_get_client, client, webflow_env, mock_client):
        mock_get_client.return_value = mock_client

        response = client.post("/api/timeline/attach-images", json={
            "itemId": "item-1",
            "images": {"photo1": {"url": "https://r2/1.jpg", "alt": "One", "fileKey": "images/1.jpg"}, "photo2": None},
        })

        assert response.status_code == 200
        assert response.json() == {"success": True, "itemId": "item-1", "imagesAttached": ["photo-1"]}
        mock_client.update_item.assert_called_once_with(
            "timeline-col", "item-1", {"fieldData": {"photo-1": {"url": "https://r2/1.jpg", "alt": "One"}}}
        )

    def test_missing_item_id(self, client, webflow_env):
        response = client.post("/api/timeline/attach-images", json={"images": {}})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing itemId"}

    @patch(GET_CLIENT)
    def test_no_images(self, mock_get_client, client, webflow_env, mock_client):
        mock_get_client.return_value = mock_client
        response = client.post("/api/timeline/attach-images", json={"itemId": "item-1"})
        assert response.status_code == 200
        assert response.json()["message"] == "No images to attach"


@pytest.mark.unit
class TestTimelineDiagnostics:
    """Tests for /api/timeline/test."""

    def test_info(self, client, webflow_env):
        response = client.get("/api/timeline/test")
        assert response.status_code == 200
        assert response.json()["config"]["hasR2"] is False
        assert set(response.json()["modes"].keys()) == {"info", "create", "query"}

    def test_invalid_mode(self, client, webflow_env):
        response = client.get("/api/timeline/test?mode=delete")
        assert response.status_code == 400
        assert response.text == "Invalid mode"

    @patch(GET_CLIENT)
    def test_query(self, mock_get_client, client, webflow_env, mock_client):
        mock_client.list_all_items.return_value = [CmsItem(id="a", field_data={"event-number": 3})]
        mock_get_client.return_value = mock_client

        response = client.get("/api/timeline/test?mode=query")

        assert response.status_code == 200
        assert response.json()["nextTimelineId"] == 4
        assert response.json()["nextIsEven"] is True

    def test_query_without_token(self, client, clean_env):
        response = client.get("/api/timeline/test?mode=query")
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Missing API token"}
