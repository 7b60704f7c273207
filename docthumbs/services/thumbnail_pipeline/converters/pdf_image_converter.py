# docthumbs/services/thumbnail_pipeline/converters/pdf_image_converter.py
"""
PDF page renderer backed by PyMuPDF.
"""

from pathlib import Path
from typing import BinaryIO, Union

import fitz  # pymupdf
from PIL import Image

from ....enums import LoggerName, LogSource
from ....exceptions import ConversionError
from ....services.logger import get_service_logger
from ....utils.time_utils import elapsed_ms, start_timer
from .base import PDFImageConverter

logger = get_service_logger(LoggerName.PDF_RENDERER, LogSource.CONVERTER)


class PyMuPDFImageConverter(PDFImageConverter):
    """Renders PDF pages at 72 dpi into RGB PIL images."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def is_enabled(self) -> bool:
        return self.enabled

    def get_image_of_page(
        self, pdf: Union[BinaryIO, str, Path], page_index: int
    ) -> Image.Image:
        """
        Render exactly one page.

        Args:
            pdf: Readable binary PDF stream (read once, not closed) or a file path
            page_index: Zero-based page index

        Returns:
            New RGB image owned by the caller

        Raises:
            ConversionError: for a negative or out of range page index, or
                empty / undecodable PDF data
        """
        if page_index < 0:
            raise ConversionError(f"Invalid page index {page_index}")

        if isinstance(pdf, (str, Path)):
            with open(pdf, "rb") as f:
                data = f.read()
        else:
            data = pdf.read()

        if not data:
            raise ConversionError("PDF data is empty")

        timer = start_timer()
        try:
            document = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise ConversionError(f"Unable to decode PDF: {e}") from e

        try:
            page_count = document.page_count
            if page_index >= page_count:
                raise ConversionError(
                    f"Page index {page_index} out of range, document has {page_count} page(s)",
                    details={"page_count": page_count},
                )

            try:
                page = document.load_page(page_index)
                pix = page.get_pixmap(alpha=False)
                image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
            except Exception as e:
                raise ConversionError(f"Failed to render page {page_index}: {e}") from e
        finally:
            document.close()

        logger.debug(
            f"Rendered page {page_index} ({image.width}x{image.height}) in {elapsed_ms(timer)} ms"
        )
        return image
