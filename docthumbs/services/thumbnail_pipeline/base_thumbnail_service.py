# docthumbs/services/thumbnail_pipeline/base_thumbnail_service.py
"""
Shared orchestration for document and video thumbnail services.

Owns the error policy: repository failures always propagate, conversion
and unexpected failures are logged with the node path and reported as "no
thumbnail" unless the caller asked for strict behaviour.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ...constants import PROPERTY_HEIGHT, PROPERTY_MIME_TYPE, PROPERTY_WIDTH
from ...enums import LogEmoji
from ...exceptions import ConversionError, ThumbnailGenerationError
from ...models.shared_models import ThumbnailGenerationResult
from ...repository.base import ContentNode
from ...repository.exceptions import RepositoryOperationError
from ...utils.time_utils import elapsed_ms, start_timer
from .services.thumbnail_store import ThumbnailStoreWriter
from .utils.mime_groups import is_mime_type_group
from .utils.thumbnail_utils import KeyedLock


class BaseThumbnailService(ABC):
    """Capability gate and error policy common to all thumbnail services."""

    service_logger = None

    def __init__(
        self,
        store: ThumbnailStoreWriter,
        keyed_lock: Optional[KeyedLock] = None,
    ):
        self.store = store
        # Must not be the store's lock: the store takes its own lock while this one is held
        self.keyed_lock = keyed_lock or KeyedLock()

    @property
    @abstractmethod
    def supported_formats(self) -> Optional[List[str]]:
        """Mime groups this service accepts, or None when none are configured."""

    @abstractmethod
    def is_enabled(self) -> bool: ...

    def can_handle(self, node: ContentNode) -> bool:
        """
        Whether a thumbnail can be generated for the node.

        Requires the service to be enabled, a configured format list, a
        concrete file node and a mime type in one of the configured groups.
        """
        if not self.is_enabled():
            return False
        formats = self.supported_formats
        if formats is None:
            return False
        if not node.is_file():
            return False
        return is_mime_type_group(node.mime_type, formats)

    def _run(
        self,
        node: ContentNode,
        thumbnail_name: str,
        strict: bool,
        generate: Callable[[], Optional[ContentNode]],
    ) -> ThumbnailGenerationResult:
        timer = start_timer()
        key = (node.workspace, node.identifier, thumbnail_name)

        try:
            with self.keyed_lock.hold(key):
                artifact = generate()
        except RepositoryOperationError as e:
            self.service_logger.error(
                f"Repository error while generating thumbnail {thumbnail_name} for {node.path}",
                exception=e,
                error_context={"node_path": node.path, "operation": e.operation},
            )
            raise
        except Exception as e:
            if isinstance(e, ThumbnailGenerationError) and e.node_path is None:
                e.node_path = node.path
            self.service_logger.error(
                f"Error generating thumbnail {thumbnail_name} for {node.path}: {e}",
                exception=None if isinstance(e, ConversionError) else e,
                error_context={"node_path": node.path, "thumbnail_name": thumbnail_name},
            )
            if strict:
                raise
            return ThumbnailGenerationResult(
                success=False,
                node_path=node.path,
                thumbnail_name=thumbnail_name,
                error=str(e),
                error_type=type(e).__name__,
                processing_time_ms=elapsed_ms(timer),
            )

        processing_time_ms = elapsed_ms(timer)
        if artifact is None:
            return ThumbnailGenerationResult(
                success=True,
                generated=False,
                node_path=node.path,
                thumbnail_name=thumbnail_name,
                processing_time_ms=processing_time_ms,
            )

        self.service_logger.debug(
            f"Created thumbnail {thumbnail_name} for {node.path} in {processing_time_ms} ms",
            emoji=LogEmoji.SUCCESS,
        )
        return ThumbnailGenerationResult(
            success=True,
            generated=True,
            node_path=node.path,
            thumbnail_name=thumbnail_name,
            thumbnail_path=artifact.path,
            width=artifact.get_property(PROPERTY_WIDTH),
            height=artifact.get_property(PROPERTY_HEIGHT),
            mime_type=artifact.get_property(PROPERTY_MIME_TYPE),
            processing_time_ms=processing_time_ms,
        )
