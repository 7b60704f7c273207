# docthumbs/config.py
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_CONVERSION_TIMEOUT_SECONDS,
    DEFAULT_DOCUMENT_FORMATS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_VIDEO_FORMATS,
)
from .enums import LogLevel, ThumbnailImageFormat


def _split_formats(value: Union[str, List[str], None]) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [group.strip() for group in value.split(",") if group.strip()]
    return list(value)


class ThumbnailSettings(BaseSettings):
    """
    Read-only pipeline configuration.

    Loaded once at startup from the environment (``DOCTHUMBS_`` prefix) or a
    ``.env`` file and injected into every component. Instances are frozen.
    """

    # Document thumbnails
    document_thumbnails_enabled: bool = Field(
        default=True, description="Enable document thumbnail generation"
    )
    # Can be set via DOCTHUMBS_DOCUMENT_SUPPORTED_FORMATS as comma-separated string
    document_supported_formats: Union[str, List[str], None] = Field(
        default=DEFAULT_DOCUMENT_FORMATS,
        description="Mime groups eligible for document thumbnails. Can be comma-separated string.",
    )

    # Video thumbnails
    video_thumbnails_enabled: bool = Field(
        default=True, description="Enable video thumbnail generation"
    )
    video_supported_formats: Union[str, List[str], None] = Field(
        default=DEFAULT_VIDEO_FORMATS,
        description="Mime groups eligible for video thumbnails. Can be comma-separated string.",
    )

    # Coordination
    use_background_job: bool = Field(
        default=True,
        description="Defer generation to a background job run after the triggering request",
    )
    thumbnail_image_format: ThumbnailImageFormat = Field(
        default=ThumbnailImageFormat.PNG,
        description="Encoding of stored document thumbnails (png or jpeg)",
    )
    jpeg_quality: int = Field(
        default=DEFAULT_JPEG_QUALITY, ge=1, le=95, description="JPEG encoder quality"
    )

    # External engines
    document_converter_enabled: bool = Field(
        default=True, description="Enable office document to PDF conversion"
    )
    soffice_path: str = Field(
        default="soffice", description="LibreOffice executable used for PDF conversion"
    )
    pdf_renderer_enabled: bool = Field(
        default=True, description="Enable PDF page rendering"
    )
    ffmpeg_enabled: bool = Field(default=True, description="Enable video frame extraction")
    ffmpeg_path: str = Field(default="ffmpeg", description="FFmpeg executable")
    conversion_timeout_seconds: int = Field(
        default=DEFAULT_CONVERSION_TIMEOUT_SECONDS,
        ge=5,
        le=3600,
        description="Upper bound for a single external conversion in seconds",
    )
    temp_directory: Optional[str] = Field(
        default=None, description="Directory for temporary files (defaults to system temp)"
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional)"
    )

    @property
    def document_formats_list(self) -> Optional[List[str]]:
        """Document mime groups as a list, or None when none are configured"""
        return _split_formats(self.document_supported_formats)

    @property
    def video_formats_list(self) -> Optional[List[str]]:
        """Video mime groups as a list, or None when none are configured"""
        return _split_formats(self.video_supported_formats)

    @property
    def temp_path(self) -> Optional[Path]:
        return Path(self.temp_directory) if self.temp_directory else None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> LogLevel:
        """Validate log level is one of the allowed values"""
        allowed_levels = LogLevel.__members__.keys()
        v_upper = str(v.value if isinstance(v, LogLevel) else v).upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(allowed_levels)}"
            )
        return LogLevel[v_upper]

    @field_validator("thumbnail_image_format", mode="before")
    @classmethod
    def validate_image_format(cls, v: str) -> ThumbnailImageFormat:
        """Accept png/jpeg in any case, plus the common 'jpg' spelling"""
        if isinstance(v, ThumbnailImageFormat):
            return v
        v_lower = str(v).strip().lower()
        if v_lower == "jpg":
            v_lower = ThumbnailImageFormat.JPEG.value
        try:
            return ThumbnailImageFormat(v_lower)
        except ValueError:
            allowed = ", ".join(f.value for f in ThumbnailImageFormat)
            raise ValueError(
                f"Invalid thumbnail image format '{v}'. Must be one of: {allowed}"
            )

    model_config = SettingsConfigDict(
        env_prefix="DOCTHUMBS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


# Global settings instance
settings = ThumbnailSettings()
