"""
Thumbnail Pipeline Services
"""

from .pdf_normalizer import PdfNormalizer
from .thumbnail_store import EncodedThumbnail, ThumbnailStoreWriter, encode_image

__all__ = ["PdfNormalizer", "ThumbnailStoreWriter", "EncodedThumbnail", "encode_image"]
