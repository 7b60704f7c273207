# docthumbs/enums.py
"""
Centralized enums for the thumbnail pipeline.

All string constants that cross module boundaries (log categorisation, node
types, job metadata, output formats) live here as str-based enums.
"""

from enum import Enum

# =============================================================================
# LOGGING
# =============================================================================


class LogLevel(str, Enum):
    """Log level constants for centralized logging system."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogSource(str, Enum):
    """Log source constants for identifying log origins."""

    SYSTEM = "system"
    PIPELINE = "pipeline"
    CONVERTER = "converter"
    REPOSITORY = "repository"
    SCHEDULER = "scheduler"
    WORKER = "worker"
    RULES = "rules"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    DEBUG = "🐞"
    SKIPPED = "⏭️"

    JOB = "🔄"
    SCHEDULED = "⏳"
    DOCUMENT = "📄"
    VIDEO = "🎥"
    THUMBNAIL = "🖼️"
    STORAGE = "💾"
    TIMER = "⏱️"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    THUMBNAIL_PIPELINE = "thumbnail_pipeline"
    DOCUMENT_THUMBNAIL_SERVICE = "document_thumbnail_service"
    VIDEO_THUMBNAIL_SERVICE = "video_thumbnail_service"
    THUMBNAIL_RULE_SERVICE = "thumbnail_rule_service"
    THUMBNAIL_STORE = "thumbnail_store"
    THUMBNAIL_WORKER = "thumbnail_worker"
    JOB_QUEUE = "job_queue"

    DOCUMENT_CONVERTER = "document_converter"
    PDF_RENDERER = "pdf_renderer"
    FFMPEG = "ffmpeg"

    SYSTEM = "system"


# =============================================================================
# CONTENT REPOSITORY
# =============================================================================


class NodeType(str, Enum):
    """Kinds of content repository nodes the pipeline distinguishes."""

    FILE = "file"
    FOLDER = "folder"
    REFERENCE = "reference"
    RESOURCE = "resource"


# =============================================================================
# THUMBNAILS
# =============================================================================


class ThumbnailImageFormat(str, Enum):
    """Encoding used for stored thumbnail artifacts."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()


class ThumbnailJobType(str, Enum):
    """Kind of deferred thumbnail unit of work."""

    DOCUMENT = "document"
    VIDEO = "video"


class ThumbnailJobStatus(str, Enum):
    """Outcome of a deferred thumbnail job execution."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"
