"""
docthumbs - document and video thumbnails for content repositories.
"""

from .config import ThumbnailSettings, settings
from .exceptions import (
    ConfigurationError,
    ConversionError,
    DocThumbsError,
    InvalidThumbnailSizeError,
    SchedulingError,
    ThumbnailGenerationError,
)
from .models import DeferredThumbnailJob, ThumbnailGenerationResult
from .services.logger import configure_logging
from .services.scheduling import EndOfRequestJobQueue
from .services.thumbnail_pipeline import (
    DocumentThumbnailService,
    ThumbnailPipeline,
    ThumbnailRuleService,
    VideoThumbnailService,
    create_thumbnail_pipeline,
)
from .workers import ThumbnailWorker

__version__ = "1.0.0"

__all__ = [
    "ThumbnailSettings",
    "settings",
    "configure_logging",
    "ThumbnailPipeline",
    "create_thumbnail_pipeline",
    "DocumentThumbnailService",
    "VideoThumbnailService",
    "ThumbnailRuleService",
    "EndOfRequestJobQueue",
    "ThumbnailWorker",
    "DeferredThumbnailJob",
    "ThumbnailGenerationResult",
    "DocThumbsError",
    "ThumbnailGenerationError",
    "ConversionError",
    "InvalidThumbnailSizeError",
    "SchedulingError",
    "ConfigurationError",
]
