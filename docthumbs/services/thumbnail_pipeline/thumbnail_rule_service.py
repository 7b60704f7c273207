# docthumbs/services/thumbnail_pipeline/thumbnail_rule_service.py
"""
Thumbnail Rule Service

Entry point for rule-engine triggers. Decides whether a thumbnail request
is applicable, and whether it runs inline or as a job after the triggering
request. Nothing raised here ever reaches the trigger.
"""

from typing import Optional

from ...config import ThumbnailSettings
from ...enums import LogEmoji, LoggerName, LogSource, ThumbnailJobType
from ...models.shared_models import DeferredThumbnailJob
from ...repository.base import ContentNode
from ...services.logger import get_service_logger
from ..scheduling.job_queue_service import ThumbnailJobScheduler
from .document_thumbnail_service import DocumentThumbnailService
from .video_thumbnail_service import VideoThumbnailService

logger = get_service_logger(LoggerName.THUMBNAIL_RULE_SERVICE, LogSource.RULES)


class ThumbnailRuleService:
    """Deferred-execution coordinator for document and video thumbnails."""

    def __init__(
        self,
        settings: ThumbnailSettings,
        document_service: Optional[DocumentThumbnailService] = None,
        video_service: Optional[VideoThumbnailService] = None,
        scheduler: Optional[ThumbnailJobScheduler] = None,
    ):
        self.settings = settings
        self.document_service = document_service
        self.video_service = video_service
        self.scheduler = scheduler

        if settings.use_background_job and scheduler is None:
            logger.warning(
                "Background thumbnail jobs requested but no scheduler configured, generating inline"
            )

    @property
    def use_background_job(self) -> bool:
        return self.settings.use_background_job and self.scheduler is not None

    def is_enabled(self) -> bool:
        """True when any thumbnail service is present and enabled."""
        return self.is_document_enabled() or self.is_video_enabled()

    def is_document_enabled(self) -> bool:
        return self.document_service is not None and self.document_service.is_enabled()

    def is_video_enabled(self) -> bool:
        return self.video_service is not None and self.video_service.is_enabled()

    def request_document_thumbnail(
        self, node: ContentNode, thumbnail_name: str, thumbnail_size: int
    ) -> None:
        """
        Create a document thumbnail now or after the current request.

        Args:
            node: Document node that triggered the rule
            thumbnail_name: Name of the artifact child node
            thumbnail_size: Edge of the square bounding box in pixels
        """
        try:
            if not self.is_document_enabled():
                logger.debug("Document thumbnail service disabled, skipping")
                return
            if not self.document_service.can_handle(node):
                logger.debug(
                    f"Node {node.path} not supported for document thumbnails",
                    emoji=LogEmoji.SKIPPED,
                )
                return

            if self.use_background_job:
                self._schedule(
                    DeferredThumbnailJob(
                        job_type=ThumbnailJobType.DOCUMENT,
                        node_identifier=node.identifier,
                        workspace=node.workspace,
                        node_path=node.path,
                        thumbnail_name=thumbnail_name,
                        thumbnail_size=thumbnail_size,
                    )
                )
            else:
                self.document_service.create_thumbnail(node, thumbnail_name, thumbnail_size)
        except Exception as e:
            logger.error(
                f"Error creating thumbnail {thumbnail_name} for document {node.path}",
                exception=e,
                error_context={"node_path": node.path, "thumbnail_name": thumbnail_name},
            )

    def request_video_thumbnail(
        self,
        node: ContentNode,
        thumbnail_name: str,
        offset_seconds: int,
        thumbnail_size: str,
    ) -> None:
        """
        Create a video thumbnail now or after the current request.

        Args:
            node: Video node that triggered the rule
            thumbnail_name: Name of the artifact child node
            offset_seconds: Frame position from the start of the video
            thumbnail_size: "WxH" bounding box
        """
        try:
            if not self.is_video_enabled():
                logger.debug("Video thumbnail service disabled, skipping")
                return
            if not self.video_service.can_handle(node):
                logger.debug(
                    f"Node {node.path} not supported for video thumbnails",
                    emoji=LogEmoji.SKIPPED,
                )
                return

            if self.use_background_job:
                self._schedule(
                    DeferredThumbnailJob(
                        job_type=ThumbnailJobType.VIDEO,
                        node_identifier=node.identifier,
                        workspace=node.workspace,
                        node_path=node.path,
                        thumbnail_name=thumbnail_name,
                        thumbnail_size=thumbnail_size,
                        offset_seconds=offset_seconds,
                    )
                )
            else:
                self.video_service.create_thumbnail(
                    node, thumbnail_name, offset_seconds, thumbnail_size
                )
        except Exception as e:
            logger.error(
                f"Error creating thumbnail {thumbnail_name} for video {node.path}",
                exception=e,
                error_context={"node_path": node.path, "thumbnail_name": thumbnail_name},
            )

    def _schedule(self, job: DeferredThumbnailJob) -> None:
        self.scheduler.schedule_at_end_of_request(job)
        logger.debug(
            f"Thumbnail job {job.job_id} scheduled for end of request",
            emoji=LogEmoji.SCHEDULED,
        )
