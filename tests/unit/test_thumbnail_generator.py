#!/usr/bin/env python3
"""
Unit tests for the thumbnail scaler.
"""

import pytest
from PIL import Image

from docthumbs.exceptions import InvalidThumbnailSizeError
from docthumbs.services.thumbnail_pipeline.generators.thumbnail_generator import (
    scale_to_box,
    scale_to_size,
)


@pytest.mark.unit
@pytest.mark.thumbnail
class TestThumbnailScaler:
    """Test suite for scale_to_box and scale_to_size."""

    def test_scale_to_box_preserves_aspect_ratio(self, sample_image):
        thumbnail = scale_to_box(sample_image, 150)
        assert thumbnail.size == (150, 75)

    def test_scale_to_box_returns_new_image(self, sample_image):
        thumbnail = scale_to_box(sample_image, 150)
        assert thumbnail is not sample_image
        assert sample_image.size == (800, 400)

    def test_small_image_is_copied_not_enlarged(self):
        image = Image.new("RGB", (40, 30), color="red")
        thumbnail = scale_to_box(image, 150)
        assert thumbnail.size == (40, 30)
        assert thumbnail is not image

    def test_upscale_when_allowed(self):
        image = Image.new("RGB", (40, 30), color="red")
        assert scale_to_box(image, 160, allow_upscale=True).size == (160, 120)

    def test_portrait_page_fits_height(self):
        page = Image.new("RGB", (612, 792), color="white")
        thumbnail = scale_to_box(page, 150)
        assert thumbnail.height == 150
        assert thumbnail.width <= 150

    def test_scale_to_size_fits_box(self):
        frame = Image.new("RGB", (1920, 1080), color="black")
        thumbnail = scale_to_size(frame, "320x240")
        assert thumbnail.size == (320, 180)

    def test_scale_to_size_accepts_tuple(self):
        frame = Image.new("RGB", (1920, 1080), color="black")
        assert scale_to_size(frame, (100, 100)).size == (100, 56)

    def test_mode_is_preserved(self):
        image = Image.new("RGBA", (400, 400), color=(255, 0, 0, 128))
        assert scale_to_box(image, 100).mode == "RGBA"

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_box_size(self, sample_image, size):
        with pytest.raises(InvalidThumbnailSizeError):
            scale_to_box(sample_image, size)

    def test_invalid_size_string(self, sample_image):
        with pytest.raises(InvalidThumbnailSizeError):
            scale_to_size(sample_image, "big")
