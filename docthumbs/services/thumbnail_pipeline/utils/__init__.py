"""
Thumbnail Pipeline Utilities
"""

from .mime_groups import guess_extension, is_mime_type_group, normalize_mime_type
from .thumbnail_utils import (
    KeyedLock,
    calculate_thumbnail_dimensions,
    parse_thumbnail_size,
    validate_box_size,
)

__all__ = [
    "is_mime_type_group",
    "normalize_mime_type",
    "guess_extension",
    "parse_thumbnail_size",
    "validate_box_size",
    "calculate_thumbnail_dimensions",
    "KeyedLock",
]
