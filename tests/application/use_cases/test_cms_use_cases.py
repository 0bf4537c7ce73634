"""Unit tests for CMS pass-through use cases."""
import pytest

from webflow_forms.application.use_cases.cms_use_cases import (
    ItemValidationError,
    clamp_page,
    create_collection_item,
    get_collection_item,
    list_collection_items,
    update_collection_item,
)
from webflow_forms.domain.entities.cms_item import CmsItem


@pytest.mark.unit
class TestClampPage:
    """Tests for clamp_page."""

    @pytest.mark.parametrize("limit,offset,expected", [
        (None, None, {"limit": 20, "offset": 0}),
        (500, 10, {"limit": 100, "offset": 10}),
        (0, -5, {"limit": 1, "offset": 0}),
        (50, 0, {"limit": 50, "offset": 0}),
    ])
    def test_clamp(self, limit, offset, expected):
        assert clamp_page(limit, offset) == expected


@pytest.mark.unit
class TestCmsUseCases:
    """Tests for the generic CMS operations."""

    def test_list_uses_live_items(self, mock_client):
        mock_client.list_items_live.return_value = {"items": [], "pagination": {"total": 0}}

        result = list_collection_items(mock_client, "col", limit=1000)

        assert result == {"items": [], "pagination": {"total": 0}}
        mock_client.list_items_live.assert_called_once_with("col", limit=100, offset=0)

    def test_get_item(self, mock_client):
        mock_client.get_item_live.return_value = CmsItem(id="abc", field_data={"name": "A"})
        result = get_collection_item(mock_client, "col", "abc")
        assert result["id"] == "abc"
        assert result["fieldData"] == {"name": "A"}

    def test_create_requires_name_and_slug(self, mock_client):
        with pytest.raises(ItemValidationError) as exc_info:
            create_collection_item(mock_client, "col", {"name": "Only name"})

        assert str(exc_info.value) == "Name and slug are required fields"
        assert exc_info.value.errors == [{"field": "slug", "message": "Slug is required"}]
        mock_client.create_item.assert_not_called()

    def test_create_item(self, mock_client):
        result = create_collection_item(mock_client, "col", {"name": "A", "slug": "a"}, is_draft=True)

        assert result["id"] == "item-1"
        mock_client.create_item.assert_called_once_with("col", {"fieldData": {"name": "A", "slug": "a"}, "isDraft": True})

    def test_update_item_passes_only_given_flags(self, mock_client):
        update_collection_item(mock_client, "col", "item-1", {"email": "x@example.com"}, is_archived=False)
        mock_client.update_item.assert_called_once_with(
            "col", "item-1", {"fieldData": {"email": "x@example.com"}, "isArchived": False}
        )
