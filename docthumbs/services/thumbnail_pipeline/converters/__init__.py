"""
Conversion engines used by the thumbnail pipeline
"""

from .base import ConversionEngine, DocumentConverter, PDFImageConverter, VideoFrameExtractor
from .ffmpeg_frame_extractor import FFmpegFrameExtractor, build_frame_command
from .libreoffice_converter import LibreOfficeConverter
from .pdf_image_converter import PyMuPDFImageConverter

__all__ = [
    "ConversionEngine",
    "DocumentConverter",
    "PDFImageConverter",
    "VideoFrameExtractor",
    "LibreOfficeConverter",
    "PyMuPDFImageConverter",
    "FFmpegFrameExtractor",
    "build_frame_command",
]
