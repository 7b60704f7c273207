# docthumbs/services/thumbnail_pipeline/converters/base.py
"""
Conversion engine contracts.

The pipeline talks to three external engines: a document converter that
produces PDF, a PDF page renderer and a video frame extractor. Each one can
be switched off, and an absent engine is represented by a disabled one.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image


class ConversionEngine(ABC):
    """Common surface of every conversion engine."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether the engine is configured and usable."""


class DocumentConverter(ConversionEngine):
    """Converts office documents into another format (PDF)."""

    @abstractmethod
    def convert(self, in_file: Path, source_mime_type: str, target_mime_type: str) -> Path:
        """
        Convert a file and return the path of the produced file.

        The caller owns the produced file and removes it when done.

        Raises:
            ConversionError: if the engine fails or produces no output
        """


class PDFImageConverter(ConversionEngine):
    """Renders single PDF pages to bitmaps."""

    @abstractmethod
    def get_image_of_page(
        self, pdf: Union[BinaryIO, str, Path], page_index: int
    ) -> Image.Image:
        """
        Render one page of a PDF at the engine's default resolution.

        Raises:
            ConversionError: for a bad page index or undecodable data
        """


class VideoFrameExtractor(ConversionEngine):
    """Extracts still frames from video files."""

    @abstractmethod
    def generate_thumbnail(
        self,
        video_file: Path,
        output_file: Path,
        offset_seconds: int,
        thumbnail_size: str,
    ) -> bool:
        """
        Write one JPEG frame taken offset_seconds into the video.

        Args:
            video_file: Readable video file
            output_file: Destination JPEG file
            offset_seconds: Seek position from the start of the video
            thumbnail_size: "WxH" box the frame is fitted into

        Returns:
            True when the frame was written

        Raises:
            ConversionError: if no frame could be extracted
        """

    @abstractmethod
    def generate_thumbnail_file(
        self, video_file: Path, offset_seconds: int, thumbnail_size: str
    ) -> Path:
        """Like generate_thumbnail, writing into a new temporary file owned by the caller."""

