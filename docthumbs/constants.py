# docthumbs/constants.py
"""
Global Constants for the thumbnail pipeline

Centralized location for all application constants to avoid hardcoded values
throughout the codebase.
"""

from typing import Dict, List

# =============================================================================
# CONTENT REPOSITORY PROPERTIES
# =============================================================================

PROPERTY_DATA = "data"
PROPERTY_WIDTH = "width"
PROPERTY_HEIGHT = "height"
PROPERTY_MIME_TYPE = "mime_type"
PROPERTY_LAST_MODIFIED = "last_modified"

IMAGE_MIXIN = "image"

DEFAULT_WORKSPACE = "default"

# =============================================================================
# MIME TYPE GROUPS
# =============================================================================

PDF_MIME_TYPE = "application/pdf"

# Patterns may contain "*" wildcards
MIME_TYPE_GROUPS: Dict[str, List[str]] = {
    "pdf": ["application/pdf", "application/x-pdf"],
    "word": [
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.template",
        "application/vnd.ms-word.document.macroenabled.12",
    ],
    "rtf": ["application/rtf", "text/rtf"],
    "excel": [
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.template",
        "application/vnd.ms-excel.sheet.macroenabled.12",
    ],
    "powerpoint": [
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "application/vnd.openxmlformats-officedocument.presentationml.slideshow",
        "application/vnd.openxmlformats-officedocument.presentationml.template",
    ],
    "openoffice": ["application/vnd.oasis.opendocument.*"],
    "text": ["text/plain", "text/csv", "text/html"],
    "image": ["image/*"],
    "video": ["video/*", "application/x-shockwave-flash", "application/mp4"],
}

DEFAULT_DOCUMENT_FORMATS = ["pdf", "word", "rtf", "excel", "powerpoint", "openoffice"]
DEFAULT_VIDEO_FORMATS = ["video"]

# =============================================================================
# THUMBNAIL GENERATION DEFAULTS
# =============================================================================

FIRST_PAGE_INDEX = 0
DEFAULT_JPEG_QUALITY = 85
DEFAULT_CONVERSION_TIMEOUT_SECONDS = 120

THUMBNAIL_SIZE_SEPARATOR = "x"

# Temporary file prefixes
TEMP_PREFIX_DOCUMENT_SOURCE = "doc-thumbnail-source-"
TEMP_PREFIX_VIDEO_SOURCE = "video-thumbnail-source-"
TEMP_PREFIX_VIDEO_FRAME = "video-thumbnail-"
TEMP_PREFIX_PDF_OUTPUT = "doc-thumbnail-pdf-"

# =============================================================================
# SCHEDULING
# =============================================================================

THUMBNAIL_JOB_ID_PREFIX = "thumbnail"
THUMBNAIL_JOB_MISFIRE_GRACE_SECONDS = 300

# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> | "
    "{message}"
)
LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "7 days"
