"""Unit tests for the upload session."""
import json
import pytest

from webflow_forms.client.upload_session import UploadSession
from webflow_forms.domain.entities.cms_item import ImageData

IMAGE = ImageData(url="https://cdn.example.com/images/1.jpg", alt="beach", file_key="images/1.jpg")


@pytest.mark.unit
class TestUploadSession:
    """Tests for UploadSession."""

    def test_put_get_remove(self):
        session = UploadSession()
        session.put("photo1", IMAGE)

        assert "photo1" in session
        assert len(session) == 1
        assert session.get("photo1") == IMAGE

        session.remove("photo1")
        session.remove("photo1")
        assert session.get("photo1") is None
        assert len(session) == 0

    def test_sessions_are_isolated(self):
        first = UploadSession()
        second = UploadSession()
        first.put("photo1", IMAGE)
        assert "photo1" not in second

    def test_hidden_fields(self):
        session = UploadSession({"photo1": IMAGE})
        assert session.hidden_fields("photo1") == {
            "photo1_url": IMAGE.url,
            "photo1_alt": "beach",
            "photo1_fileKey": "images/1.jpg",
        }
        assert session.hidden_fields("photo2") == {}

    def test_all_hidden_fields(self):
        session = UploadSession({"photo1": IMAGE, "photo2": IMAGE})
        assert set(session.all_hidden_fields().keys()) == {
            "photo1_url", "photo1_alt", "photo1_fileKey", "photo2_url", "photo2_alt", "photo2_fileKey"
        }

    def test_clear(self):
        session = UploadSession({"photo1": IMAGE})
        session.clear()
        assert len(session) == 0

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "session.json"
        UploadSession({"photo1": IMAGE}).save(path)

        assert json.loads(path.read_text(encoding="utf-8")) == {"photo1": IMAGE.to_dict()}
        assert UploadSession.load(path).get("photo1") == IMAGE

    def test_load_missing_file(self, tmp_path):
        assert len(UploadSession.load(tmp_path / "missing.json")) == 0

    def test_from_dict_skips_entries_without_url(self):
        session = UploadSession.from_dict({"photo1": {"alt": "x"}, "photo2": None, "photo3": IMAGE.to_dict()})
        assert list(session.images().keys()) == ["photo3"]
