# docthumbs/services/thumbnail_pipeline/video_thumbnail_service.py
"""
Video Thumbnail Service

Creates a JPEG thumbnail from a single frame of a video node.
"""

from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from ...config import ThumbnailSettings
from ...constants import TEMP_PREFIX_VIDEO_FRAME, TEMP_PREFIX_VIDEO_SOURCE
from ...enums import LogEmoji, LoggerName, LogSource, ThumbnailImageFormat
from ...exceptions import ConversionError
from ...models.shared_models import ThumbnailGenerationResult
from ...repository.base import ContentNode
from ...services.logger import get_service_logger
from ...utils.temp_file_manager import TempFileManager
from .base_thumbnail_service import BaseThumbnailService
from .converters.base import VideoFrameExtractor
from .generators.thumbnail_generator import scale_to_size
from .services.thumbnail_store import ThumbnailStoreWriter
from .utils.mime_groups import guess_extension
from .utils.thumbnail_utils import KeyedLock, parse_thumbnail_size

logger = get_service_logger(
    LoggerName.VIDEO_THUMBNAIL_SERVICE, LogSource.PIPELINE, LogEmoji.VIDEO
)


class VideoThumbnailService(BaseThumbnailService):
    """Generation orchestrator for video thumbnails (always stored as JPEG)."""

    service_logger = logger

    def __init__(
        self,
        settings: ThumbnailSettings,
        frame_extractor: Optional[VideoFrameExtractor],
        store: ThumbnailStoreWriter,
        temp_file_manager: Optional[TempFileManager] = None,
        keyed_lock: Optional[KeyedLock] = None,
    ):
        super().__init__(store, keyed_lock)
        self.settings = settings
        self.frame_extractor = frame_extractor
        self.temp_file_manager = temp_file_manager or TempFileManager(
            settings.temp_path
        )

    @property
    def supported_formats(self) -> Optional[List[str]]:
        return self.settings.video_formats_list

    def is_enabled(self) -> bool:
        return (
            self.settings.video_thumbnails_enabled
            and self.frame_extractor is not None
            and self.frame_extractor.is_enabled()
        )

    def can_handle(self, node: ContentNode) -> bool:
        """Also requires the node to carry readable media content."""
        return super().can_handle(node) and node.has_content()

    def create_thumbnail(
        self,
        node: ContentNode,
        thumbnail_name: str,
        offset_seconds: int,
        thumbnail_size: str,
        strict: bool = False,
    ) -> bool:
        """
        Create or replace a video thumbnail.

        Args:
            node: Video node
            thumbnail_name: Name of the artifact child node
            offset_seconds: Position of the frame from the start of the video
            thumbnail_size: "WxH" bounding box
            strict: Re-raise conversion and unexpected errors instead of returning False

        Returns:
            True if and only if an artifact was written
        """
        return self.generate_thumbnail(
            node, thumbnail_name, offset_seconds, thumbnail_size, strict=strict
        ).generated

    def generate_thumbnail(
        self,
        node: ContentNode,
        thumbnail_name: str,
        offset_seconds: int,
        thumbnail_size: str,
        strict: bool = False,
    ) -> ThumbnailGenerationResult:
        """Structured variant of create_thumbnail."""
        return self._run(
            node,
            thumbnail_name,
            strict,
            lambda: self._generate(node, thumbnail_name, offset_seconds, thumbnail_size),
        )

    def _generate(
        self,
        node: ContentNode,
        thumbnail_name: str,
        offset_seconds: int,
        thumbnail_size: str,
    ) -> Optional[ContentNode]:
        parse_thumbnail_size(thumbnail_size)

        if not self.can_handle(node):
            logger.debug(
                f"Video thumbnails not applicable to {node.path} ({node.mime_type})",
                emoji=LogEmoji.SKIPPED,
            )
            return None

        with node.open_content() as stream, self.temp_file_manager.materialize(
            stream, TEMP_PREFIX_VIDEO_SOURCE, guess_extension(node.mime_type)
        ) as video_file, self.temp_file_manager.temporary_file(
            TEMP_PREFIX_VIDEO_FRAME, ".jpg"
        ) as frame_file:
            extracted = self.frame_extractor.generate_thumbnail(
                video_file, frame_file, offset_seconds, thumbnail_size
            )
            if not extracted:
                raise ConversionError(
                    f"No frame extracted at {offset_seconds}s", node_path=node.path
                )
            try:
                with Image.open(frame_file) as frame:
                    thumbnail = scale_to_size(frame, thumbnail_size)
            except (UnidentifiedImageError, OSError) as e:
                raise ConversionError(
                    f"Extracted frame is not a readable image: {e}", node_path=node.path
                ) from e

        try:
            return self.store.store(
                node, thumbnail, thumbnail_name, ThumbnailImageFormat.JPEG
            )
        finally:
            thumbnail.close()
