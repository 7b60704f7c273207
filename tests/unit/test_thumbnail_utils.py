#!/usr/bin/env python3
"""
Unit tests for thumbnail size helpers and the per-key lock registry.
"""

import threading
import time

import pytest

from docthumbs.exceptions import InvalidThumbnailSizeError
from docthumbs.services.thumbnail_pipeline.utils.thumbnail_utils import (
    KeyedLock,
    calculate_thumbnail_dimensions,
    parse_thumbnail_size,
    validate_box_size,
)


@pytest.mark.unit
@pytest.mark.thumbnail
class TestThumbnailUtils:
    """Test suite for size parsing and dimension calculation."""

    # ============================================================================
    # SIZE PARSING
    # ============================================================================

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("320x240", (320, 240)),
            ("1920X1080", (1920, 1080)),
            (" 64x64 ", (64, 64)),
            ((200, 150), (200, 150)),
        ],
    )
    def test_parse_thumbnail_size(self, value, expected):
        assert parse_thumbnail_size(value) == expected

    @pytest.mark.parametrize("value", ["320", "320x", "x240", "axb", "0x240", "-1x5", "1x2x3"])
    def test_parse_thumbnail_size_rejects_malformed(self, value):
        with pytest.raises(InvalidThumbnailSizeError):
            parse_thumbnail_size(value)

    def test_invalid_size_is_also_value_error(self):
        with pytest.raises(ValueError):
            parse_thumbnail_size("large")

    @pytest.mark.parametrize("value", [0, -10, True, "150", 1.5])
    def test_validate_box_size_rejects(self, value):
        with pytest.raises(InvalidThumbnailSizeError):
            validate_box_size(value)

    # ============================================================================
    # DIMENSION CALCULATION
    # ============================================================================

    def test_wide_source_fits_to_width(self):
        assert calculate_thumbnail_dimensions((1920, 1080), (320, 240)) == (320, 180)

    def test_tall_source_fits_to_height(self):
        assert calculate_thumbnail_dimensions((612, 792), (150, 150)) == (116, 150)

    def test_small_source_is_not_enlarged(self):
        assert calculate_thumbnail_dimensions((100, 50), (150, 150)) == (100, 50)

    def test_small_source_enlarged_when_allowed(self):
        assert calculate_thumbnail_dimensions(
            (100, 50), (150, 150), allow_upscale=True
        ) == (150, 75)

    def test_extreme_aspect_ratio_never_collapses_to_zero(self):
        assert calculate_thumbnail_dimensions((10000, 1), (100, 100)) == (100, 1)


@pytest.mark.unit
class TestKeyedLock:
    """Test suite for KeyedLock."""

    def test_same_key_is_serialised(self):
        keyed_lock = KeyedLock()
        active = []
        overlaps = []

        def work():
            with keyed_lock.hold(("ws", "node", "thumbnail")):
                active.append(1)
                if len(active) > 1:
                    overlaps.append(True)
                time.sleep(0.01)
                active.pop()

        threads = [threading.Thread(target=work) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []

    def test_different_keys_do_not_block(self):
        keyed_lock = KeyedLock()
        entered = threading.Event()

        def hold_other_key():
            with keyed_lock.hold("b"):
                entered.set()

        with keyed_lock.hold("a"):
            thread = threading.Thread(target=hold_other_key)
            thread.start()
            assert entered.wait(timeout=2)
            thread.join()

    def test_released_keys_are_forgotten(self):
        keyed_lock = KeyedLock()
        with keyed_lock.hold("a"):
            assert len(keyed_lock) == 1
        assert len(keyed_lock) == 0

    def test_lock_released_when_body_raises(self):
        keyed_lock = KeyedLock()
        with pytest.raises(RuntimeError):
            with keyed_lock.hold("a"):
                raise RuntimeError("boom")
        assert len(keyed_lock) == 0
