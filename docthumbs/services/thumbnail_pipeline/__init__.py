# docthumbs/services/thumbnail_pipeline/__init__.py
"""
Thumbnail Pipeline Module

Document and video thumbnail generation: capability gate, PDF
normalisation, page rendering and frame extraction, scaling, storage and
deferred execution.
"""

from .converters import (
    DocumentConverter,
    FFmpegFrameExtractor,
    LibreOfficeConverter,
    PDFImageConverter,
    PyMuPDFImageConverter,
    VideoFrameExtractor,
)
from .document_thumbnail_service import DocumentThumbnailService
from .generators import scale_to_box, scale_to_size
from .services import PdfNormalizer, ThumbnailStoreWriter
from .thumbnail_pipeline import ThumbnailPipeline, create_thumbnail_pipeline
from .thumbnail_rule_service import ThumbnailRuleService
from .utils import (
    KeyedLock,
    calculate_thumbnail_dimensions,
    is_mime_type_group,
    parse_thumbnail_size,
)
from .video_thumbnail_service import VideoThumbnailService

__all__ = [
    # Main pipeline
    "ThumbnailPipeline",
    "create_thumbnail_pipeline",
    # Services
    "DocumentThumbnailService",
    "VideoThumbnailService",
    "ThumbnailRuleService",
    "PdfNormalizer",
    "ThumbnailStoreWriter",
    # Converters
    "DocumentConverter",
    "PDFImageConverter",
    "VideoFrameExtractor",
    "LibreOfficeConverter",
    "PyMuPDFImageConverter",
    "FFmpegFrameExtractor",
    # Utilities
    "scale_to_box",
    "scale_to_size",
    "parse_thumbnail_size",
    "calculate_thumbnail_dimensions",
    "is_mime_type_group",
    "KeyedLock",
]
