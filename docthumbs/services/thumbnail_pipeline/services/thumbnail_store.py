# docthumbs/services/thumbnail_pipeline/services/thumbnail_store.py
"""
Thumbnail Store Writer

Persists an encoded thumbnail as a named child of its source node and
refreshes the source node's last-modified timestamp so caches keyed on it
are invalidated.
"""

import io
from typing import Optional, Tuple

from PIL import Image

from ....constants import (
    DEFAULT_JPEG_QUALITY,
    IMAGE_MIXIN,
    PROPERTY_DATA,
    PROPERTY_HEIGHT,
    PROPERTY_LAST_MODIFIED,
    PROPERTY_MIME_TYPE,
    PROPERTY_WIDTH,
)
from ....enums import LogEmoji, LoggerName, LogSource, NodeType, ThumbnailImageFormat
from ....repository.base import ContentNode
from ....repository.exceptions import RepositoryOperationError
from ....services.logger import get_service_logger
from ....utils.time_utils import utc_now
from ..utils.thumbnail_utils import KeyedLock

logger = get_service_logger(LoggerName.THUMBNAIL_STORE, LogSource.REPOSITORY)

# Modes PNG can hold without conversion
PNG_MODES = ("1", "L", "LA", "I", "P", "RGB", "RGBA")


class EncodedThumbnail:
    """Encoded image bytes plus the metadata stored alongside them."""

    __slots__ = ("data", "width", "height", "mime_type")

    def __init__(self, data: bytes, width: int, height: int, mime_type: str):
        self.data = data
        self.width = width
        self.height = height
        self.mime_type = mime_type

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


def encode_image(
    image: Image.Image,
    image_format: ThumbnailImageFormat,
    jpeg_quality: int = DEFAULT_JPEG_QUALITY,
) -> EncodedThumbnail:
    """
    Encode an image to PNG or JPEG bytes.

    JPEG output is always RGB; PNG keeps the image mode when PNG supports it.
    """
    if image_format == ThumbnailImageFormat.JPEG:
        needs_conversion = image.mode != "RGB"
    else:
        needs_conversion = image.mode not in PNG_MODES
    encodable = image.convert("RGB") if needs_conversion else image

    try:
        with io.BytesIO() as buffer:
            if image_format == ThumbnailImageFormat.JPEG:
                encodable.save(
                    buffer, image_format.pil_format, quality=jpeg_quality, optimize=True
                )
            else:
                encodable.save(buffer, image_format.pil_format, optimize=True)
            data = buffer.getvalue()
        width, height = encodable.size
    finally:
        if encodable is not image:
            encodable.close()

    return EncodedThumbnail(data, width, height, image_format.mime_type)


class ThumbnailStoreWriter:
    """
    Writes thumbnail artifacts into the content repository.

    Regeneration overwrites the existing artifact in place, so there is at
    most one artifact per (node, thumbnail name).
    """

    def __init__(
        self,
        image_format: ThumbnailImageFormat = ThumbnailImageFormat.PNG,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
        keyed_lock: Optional[KeyedLock] = None,
    ):
        self.image_format = image_format
        self.jpeg_quality = jpeg_quality
        self.keyed_lock = keyed_lock or KeyedLock()

    def store(
        self,
        node: ContentNode,
        image: Image.Image,
        thumbnail_name: str,
        image_format: Optional[ThumbnailImageFormat] = None,
    ) -> ContentNode:
        """
        Encode and persist a thumbnail under the given name.

        Args:
            node: Source node owning the thumbnail
            image: Scaled thumbnail image (not closed)
            thumbnail_name: Name of the artifact child node
            image_format: Overrides the configured encoding (video uses JPEG)

        Returns:
            The artifact node

        Raises:
            RepositoryOperationError: if the repository rejects any write
        """
        encoded = encode_image(
            image, image_format or self.image_format, self.jpeg_quality
        )

        key = (node.workspace, node.identifier, thumbnail_name)
        with self.keyed_lock.hold(key):
            try:
                artifact = self._write(node, thumbnail_name, encoded)
            except RepositoryOperationError:
                raise
            except Exception as e:
                raise RepositoryOperationError(
                    f"Failed to store thumbnail {thumbnail_name} for {node.path}: {e}",
                    operation="store_thumbnail",
                ) from e

        logger.debug(
            f"Stored thumbnail {thumbnail_name} for {node.path} "
            f"({encoded.width}x{encoded.height}, {len(encoded.data)} bytes)",
            emoji=LogEmoji.STORAGE,
        )
        return artifact

    def _write(
        self, node: ContentNode, thumbnail_name: str, encoded: EncodedThumbnail
    ) -> ContentNode:
        node.checkout()

        artifact = node.get_child(thumbnail_name)
        created = artifact is None
        if created:
            artifact = node.add_child(
                thumbnail_name, NodeType.RESOURCE, mixins=[IMAGE_MIXIN]
            )
        else:
            artifact.checkout()
            if artifact.has_property(PROPERTY_DATA):
                artifact.remove_property(PROPERTY_DATA)

        modified_at = utc_now()
        try:
            artifact.set_property(PROPERTY_DATA, encoded.data)
            artifact.set_property(PROPERTY_WIDTH, encoded.width)
            artifact.set_property(PROPERTY_HEIGHT, encoded.height)
            artifact.set_property(PROPERTY_MIME_TYPE, encoded.mime_type)
            artifact.set_property(PROPERTY_LAST_MODIFIED, modified_at)
        except Exception:
            # Never leave a half-written new artifact behind
            if created:
                node.remove_child(thumbnail_name)
            raise
        node.set_property(PROPERTY_LAST_MODIFIED, modified_at)
        return artifact
