#!/usr/bin/env python3
"""
Unit tests for ThumbnailSettings.
"""

import pytest
from pydantic import ValidationError

from docthumbs.config import ThumbnailSettings
from docthumbs.enums import LogLevel, ThumbnailImageFormat


@pytest.mark.unit
class TestThumbnailSettings:
    """Test suite for environment-driven configuration."""

    @pytest.fixture(autouse=True)
    def clean_environment(self, monkeypatch):
        for name in (
            "DOCTHUMBS_DOCUMENT_SUPPORTED_FORMATS",
            "DOCTHUMBS_USE_BACKGROUND_JOB",
            "DOCTHUMBS_THUMBNAIL_IMAGE_FORMAT",
            "DOCTHUMBS_LOG_LEVEL",
            "DOCTHUMBS_FFMPEG_PATH",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = ThumbnailSettings(_env_file=None)
        assert settings.document_thumbnails_enabled is True
        assert settings.video_thumbnails_enabled is True
        assert settings.use_background_job is True
        assert settings.thumbnail_image_format == ThumbnailImageFormat.PNG
        assert settings.conversion_timeout_seconds == 120
        assert "pdf" in settings.document_formats_list
        assert settings.video_formats_list == ["video"]
        assert settings.temp_path is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DOCTHUMBS_USE_BACKGROUND_JOB", "false")
        monkeypatch.setenv("DOCTHUMBS_FFMPEG_PATH", "/opt/ffmpeg/bin/ffmpeg")
        monkeypatch.setenv("DOCTHUMBS_LOG_LEVEL", "debug")

        settings = ThumbnailSettings(_env_file=None)
        assert settings.use_background_job is False
        assert settings.ffmpeg_path == "/opt/ffmpeg/bin/ffmpeg"
        assert settings.log_level == LogLevel.DEBUG

    def test_comma_separated_formats(self, monkeypatch):
        monkeypatch.setenv("DOCTHUMBS_DOCUMENT_SUPPORTED_FORMATS", "pdf, word,,excel")
        settings = ThumbnailSettings(_env_file=None)
        assert settings.document_formats_list == ["pdf", "word", "excel"]

    def test_no_formats(self):
        settings = ThumbnailSettings(_env_file=None, document_supported_formats=None)
        assert settings.document_formats_list is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("png", ThumbnailImageFormat.PNG),
            ("JPEG", ThumbnailImageFormat.JPEG),
            ("jpg", ThumbnailImageFormat.JPEG),
        ],
    )
    def test_image_format_spellings(self, value, expected):
        settings = ThumbnailSettings(_env_file=None, thumbnail_image_format=value)
        assert settings.thumbnail_image_format == expected

    def test_invalid_image_format(self):
        with pytest.raises(ValidationError):
            ThumbnailSettings(_env_file=None, thumbnail_image_format="gif")

    @pytest.mark.parametrize("level", ["chatty", "trace"])
    def test_invalid_log_level(self, level):
        with pytest.raises(ValidationError):
            ThumbnailSettings(_env_file=None, log_level=level)

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            ThumbnailSettings(_env_file=None, conversion_timeout_seconds=1)

    def test_settings_are_frozen(self):
        settings = ThumbnailSettings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.use_background_job = False
