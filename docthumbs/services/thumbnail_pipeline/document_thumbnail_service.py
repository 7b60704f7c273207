# docthumbs/services/thumbnail_pipeline/document_thumbnail_service.py
"""
Document Thumbnail Service

Creates a thumbnail from the first page of a document: the content is
normalised to PDF, page one is rendered, scaled into a square box and stored
as a named child of the document node.
"""

from typing import List, Optional

from PIL import Image

from ...config import ThumbnailSettings
from ...constants import FIRST_PAGE_INDEX
from ...enums import LogEmoji, LoggerName, LogSource
from ...exceptions import ConversionError
from ...models.shared_models import ThumbnailGenerationResult
from ...repository.base import ContentNode
from ...services.logger import get_service_logger
from .base_thumbnail_service import BaseThumbnailService
from .converters.base import PDFImageConverter
from .generators.thumbnail_generator import scale_to_box
from .services.pdf_normalizer import PdfNormalizer
from .services.thumbnail_store import ThumbnailStoreWriter
from .utils.thumbnail_utils import KeyedLock, validate_box_size

logger = get_service_logger(
    LoggerName.DOCUMENT_THUMBNAIL_SERVICE, LogSource.PIPELINE, LogEmoji.DOCUMENT
)


class DocumentThumbnailService(BaseThumbnailService):
    """
    Generation orchestrator for document thumbnails.

    Ineligible documents yield False and never an exception. Conversion and
    unexpected failures yield False unless strict=True. Repository failures
    always propagate.
    """

    service_logger = logger

    def __init__(
        self,
        settings: ThumbnailSettings,
        pdf_converter: Optional[PDFImageConverter],
        normalizer: PdfNormalizer,
        store: ThumbnailStoreWriter,
        keyed_lock: Optional[KeyedLock] = None,
    ):
        """
        Initialize the document thumbnail service.

        Args:
            settings: Pipeline configuration
            pdf_converter: Page renderer; None means document thumbnails are unavailable
            normalizer: Document-to-PDF normaliser
            store: Thumbnail store writer
            keyed_lock: Per-key lock registry serialising runs for the same thumbnail
        """
        super().__init__(store, keyed_lock)
        self.settings = settings
        self.pdf_converter = pdf_converter
        self.normalizer = normalizer

    @property
    def supported_formats(self) -> Optional[List[str]]:
        return self.settings.document_formats_list

    def is_enabled(self) -> bool:
        return (
            self.settings.document_thumbnails_enabled
            and self.pdf_converter is not None
            and self.pdf_converter.is_enabled()
        )

    def get_image_of_first_page(self, node: ContentNode) -> Optional[Image.Image]:
        """
        Render the first page of a document node.

        Returns:
            New RGB image owned by the caller, or None when the document is
            not a PDF and document conversion is disabled

        Raises:
            ConversionError: if conversion or rendering fails
            RepositoryOperationError: if the content cannot be read
        """
        with node.open_content() as stream:
            with self.normalizer.to_pdf(stream, node.mime_type, node.path) as pdf_stream:
                if pdf_stream is None:
                    return None
                try:
                    return self.pdf_converter.get_image_of_page(
                        pdf_stream, FIRST_PAGE_INDEX
                    )
                except ConversionError as e:
                    if e.node_path is None:
                        e.node_path = node.path
                    raise

    def create_thumbnail(
        self,
        node: ContentNode,
        thumbnail_name: str,
        thumbnail_size: int,
        strict: bool = False,
    ) -> bool:
        """
        Create or replace a document thumbnail.

        Args:
            node: Document node
            thumbnail_name: Name of the artifact child node
            thumbnail_size: Edge of the square bounding box in pixels
            strict: Re-raise conversion and unexpected errors instead of returning False

        Returns:
            True if and only if an artifact was written
        """
        return self.generate_thumbnail(
            node, thumbnail_name, thumbnail_size, strict=strict
        ).generated

    def generate_thumbnail(
        self,
        node: ContentNode,
        thumbnail_name: str,
        thumbnail_size: int,
        strict: bool = False,
    ) -> ThumbnailGenerationResult:
        """Structured variant of create_thumbnail."""
        return self._run(
            node,
            thumbnail_name,
            strict,
            lambda: self._generate(node, thumbnail_name, thumbnail_size),
        )

    def _generate(
        self, node: ContentNode, thumbnail_name: str, thumbnail_size: int
    ) -> Optional[ContentNode]:
        validate_box_size(thumbnail_size)

        if not self.can_handle(node):
            logger.debug(
                f"Document thumbnails not applicable to {node.path} ({node.mime_type})",
                emoji=LogEmoji.SKIPPED,
            )
            return None

        image = self.get_image_of_first_page(node)
        if image is None:
            return None

        try:
            thumbnail = scale_to_box(image, thumbnail_size)
        finally:
            image.close()

        try:
            return self.store.store(node, thumbnail, thumbnail_name)
        finally:
            thumbnail.close()
