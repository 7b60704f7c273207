# docthumbs/services/thumbnail_pipeline/services/pdf_normalizer.py
"""
Document-to-PDF Normalizer

Makes any supported document available as a PDF stream. PDF sources pass
through untouched; other formats go through the document converter, with
every intermediate file scoped to the caller's ``with`` block.
"""

import subprocess
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from ....constants import PDF_MIME_TYPE, TEMP_PREFIX_DOCUMENT_SOURCE
from ....enums import LogEmoji, LoggerName, LogSource
from ....exceptions import ConversionError
from ....services.logger import get_service_logger
from ....utils.temp_file_manager import TempFileManager, delete_quietly
from ....utils.time_utils import elapsed_ms, start_timer
from ..converters.base import DocumentConverter
from ..utils.mime_groups import guess_extension, is_mime_type_group

logger = get_service_logger(LoggerName.DOCUMENT_CONVERTER, LogSource.PIPELINE)


class PdfNormalizer:
    """Turns document content into a readable PDF stream."""

    def __init__(
        self,
        converter: Optional[DocumentConverter] = None,
        temp_file_manager: Optional[TempFileManager] = None,
    ):
        self.converter = converter
        self.temp_file_manager = temp_file_manager or TempFileManager()

    def is_enabled(self) -> bool:
        """Whether non-PDF documents can be converted."""
        return self.converter is not None and self.converter.is_enabled()

    @staticmethod
    def is_pdf(mime_type: Optional[str]) -> bool:
        return is_mime_type_group(mime_type, ["pdf"])

    @contextmanager
    def to_pdf(
        self,
        source_stream: BinaryIO,
        source_mime_type: Optional[str],
        node_path: Optional[str] = None,
    ) -> Iterator[Optional[BinaryIO]]:
        """
        Yield the source as a PDF stream.

        Args:
            source_stream: Readable document content
            source_mime_type: Mime type of the content
            node_path: Path of the source node, for diagnostics

        Yields:
            The source stream itself for PDFs, a stream over the converted
            PDF for other formats, or None when conversion is disabled

        Raises:
            ConversionError: if the converter fails or produces no output
        """
        if self.is_pdf(source_mime_type):
            yield source_stream
            return

        if not self.is_enabled():
            logger.info(
                f"Document conversion disabled, no thumbnail possible for {node_path} ({source_mime_type})",
                emoji=LogEmoji.SKIPPED,
            )
            yield None
            return

        timer = start_timer()
        pdf_file = None
        try:
            with self.temp_file_manager.materialize(
                source_stream,
                TEMP_PREFIX_DOCUMENT_SOURCE,
                guess_extension(source_mime_type),
            ) as in_file:
                try:
                    pdf_file = self.converter.convert(
                        in_file, source_mime_type, PDF_MIME_TYPE
                    )
                except ConversionError as e:
                    if e.node_path is None:
                        e.node_path = node_path
                    raise
                except (OSError, subprocess.SubprocessError) as e:
                    raise ConversionError(
                        f"Error converting document to PDF: {e}", node_path=node_path
                    ) from e

            if pdf_file is None or not pdf_file.is_file():
                raise ConversionError(
                    "Document converter produced no PDF", node_path=node_path
                )

            logger.debug(
                f"Converted {node_path} to PDF in {elapsed_ms(timer)} ms",
                emoji=LogEmoji.TIMER,
            )
            with open(pdf_file, "rb") as pdf_stream:
                yield pdf_stream
        finally:
            delete_quietly(pdf_file)
