"""Unit tests for image orientation service."""
import pytest

from webflow_forms.application.services.image_orientation import (
    CARD_SIZE_CONFIGS,
    classify_aspect_ratio,
    detect_orientation,
    get_card_size_config,
    read_dimensions,
)
from webflow_forms.domain.entities.image_orientation import ImageOrientation


@pytest.mark.unit
class TestReadDimensions:
    """Tests for read_dimensions."""

    def test_jpeg_sof0(self, make_jpeg):
        assert read_dimensions(make_jpeg(800, 600)) == (800, 600)

    def test_png_ihdr(self, make_png):
        assert read_dimensions(make_png(1024, 768)) == (1024, 768)

    def test_unknown_signature(self):
        assert read_dimensions(b"GIF89a" + b"\x00" * 32) == (0, 0)

    def test_empty(self):
        assert read_dimensions(b"") == (0, 0)

    def test_jpeg_without_sof0(self):
        assert read_dimensions(b"\xff\xd8" + b"\x00" * 40) == (0, 0)

    def test_truncated_png(self):
        assert read_dimensions(b"\x89PNG\r\n\x1a\n\x00\x00") == (0, 0)


@pytest.mark.unit
class TestDetectOrientation:
    """Tests for detect_orientation."""

    def test_landscape_jpeg(self, make_jpeg):
        assert detect_orientation(make_jpeg(800, 600)) == ImageOrientation.LANDSCAPE

    def test_portrait_jpeg(self, make_jpeg):
        assert detect_orientation(make_jpeg(600, 800)) == ImageOrientation.PORTRAIT

    def test_square_png(self, make_png):
        assert detect_orientation(make_png(500, 500)) == ImageOrientation.SQUARE

    def test_ratio_at_boundary_is_square(self, make_png):
        assert detect_orientation(make_png(550, 500)) == ImageOrientation.SQUARE
        assert detect_orientation(make_png(450, 500)) == ImageOrientation.SQUARE

    def test_unknown_format_is_square(self):
        assert detect_orientation(b"not an image at all") == ImageOrientation.SQUARE

    def test_zero_width_is_square(self, make_png):
        assert detect_orientation(make_png(0, 500)) == ImageOrientation.SQUARE

    def test_truncated_jpeg_is_square(self, make_jpeg):
        truncated = make_jpeg(800, 600)[:24]
        assert detect_orientation(truncated) == ImageOrientation.SQUARE


@pytest.mark.unit
class TestCardSize:
    """Tests for the orientation to card size mapping."""

    def test_classify_aspect_ratio(self):
        assert classify_aspect_ratio(16, 9) == ImageOrientation.LANDSCAPE
        assert classify_aspect_ratio(9, 16) == ImageOrientation.PORTRAIT
        assert classify_aspect_ratio(0, 0) == ImageOrientation.SQUARE

    @pytest.mark.parametrize("orientation,tag,columns,rows", [
        (ImageOrientation.SQUARE, "1x1", 1, 1),
        (ImageOrientation.PORTRAIT, "1x2", 1, 2),
        (ImageOrientation.LANDSCAPE, "2x1", 2, 1),
    ])
    def test_card_size_config(self, orientation, tag, columns, rows):
        config = get_card_size_config(orientation)
        assert config.tag == tag == orientation.card_tag
        assert (config.columns, config.rows) == (columns, rows)

    def test_option_ids_are_distinct(self):
        option_ids = {config.option_id for config in CARD_SIZE_CONFIGS.values()}
        assert len(option_ids) == 3
