# docthumbs/workers/thumbnail_worker.py
"""
Thumbnail Worker

Executes deferred thumbnail jobs. A job only carries identifiers and
parameters, so the worker resolves the node again before handing it to the
matching generation service. Failures are logged and counted, never raised:
the worker runs on scheduler threads with nobody to report to.
"""

import threading
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import ValidationError

from ..enums import LogEmoji, LoggerName, LogSource, ThumbnailJobStatus, ThumbnailJobType
from ..models.shared_models import DeferredThumbnailJob
from ..repository.base import ContentRepository
from ..repository.exceptions import NodeNotFoundError
from ..services.logger import get_service_logger
from ..utils.time_utils import elapsed_ms, start_timer, utc_now

if TYPE_CHECKING:
    from ..services.thumbnail_pipeline.document_thumbnail_service import (
        DocumentThumbnailService,
    )
    from ..services.thumbnail_pipeline.video_thumbnail_service import (
        VideoThumbnailService,
    )

logger = get_service_logger(LoggerName.THUMBNAIL_WORKER, LogSource.WORKER)


class ThumbnailWorker:
    """Background executor for DeferredThumbnailJob units of work."""

    def __init__(
        self,
        repository: ContentRepository,
        document_service: Optional["DocumentThumbnailService"] = None,
        video_service: Optional["VideoThumbnailService"] = None,
    ):
        self.name = "ThumbnailWorker"
        self.repository = repository
        self.document_service = document_service
        self.video_service = video_service

        self._stats_lock = threading.Lock()
        self._counts: Dict[str, int] = {status.value: 0 for status in ThumbnailJobStatus}
        self._last_job_at = None

    def execute(self, job_data: Dict[str, Any]) -> bool:
        """
        Run one deferred thumbnail job.

        Args:
            job_data: Plain-data job as produced by DeferredThumbnailJob.to_job_data()

        Returns:
            True if and only if an artifact was written
        """
        timer = start_timer()
        try:
            job = DeferredThumbnailJob.model_validate(job_data)
        except ValidationError as e:
            logger.error("Rejected malformed thumbnail job", exception=e)
            self._record(ThumbnailJobStatus.FAILED)
            return False

        try:
            node = self.repository.get_node_by_identifier(
                job.node_identifier, job.workspace
            )
        except NodeNotFoundError:
            logger.warning(
                f"Node {job.node_identifier} ({job.node_path}) no longer exists, skipping job {job.job_id}",
                emoji=LogEmoji.SKIPPED,
            )
            self._record(ThumbnailJobStatus.SKIPPED)
            return False
        except Exception as e:
            logger.error(
                f"Failed to resolve node for job {job.job_id}",
                exception=e,
                error_context={"job_id": job.job_id},
            )
            self._record(ThumbnailJobStatus.FAILED)
            return False

        try:
            result = self._run(job, node)
        except Exception as e:
            logger.error(
                f"Thumbnail job {job.job_id} failed for {node.path}",
                exception=e,
                error_context={"job_id": job.job_id, "node_path": node.path},
            )
            self._record(ThumbnailJobStatus.FAILED)
            return False

        if result is None:
            self._record(ThumbnailJobStatus.SKIPPED)
            return False

        if result.generated:
            logger.info(
                f"Thumbnail {job.thumbnail_name} generated for {node.path} in {elapsed_ms(timer)} ms",
                emoji=LogEmoji.SUCCESS,
            )
            self._record(ThumbnailJobStatus.COMPLETED)
            return True

        self._record(
            ThumbnailJobStatus.SKIPPED if result.success else ThumbnailJobStatus.FAILED
        )
        return False

    def _run(self, job: DeferredThumbnailJob, node):
        if job.job_type == ThumbnailJobType.DOCUMENT:
            if self.document_service is None:
                logger.warning(f"No document thumbnail service for job {job.job_id}")
                return None
            return self.document_service.generate_thumbnail(
                node, job.thumbnail_name, job.thumbnail_size
            )

        if self.video_service is None:
            logger.warning(f"No video thumbnail service for job {job.job_id}")
            return None
        return self.video_service.generate_thumbnail(
            node, job.thumbnail_name, job.offset_seconds, job.thumbnail_size
        )

    def _record(self, status: ThumbnailJobStatus) -> None:
        with self._stats_lock:
            self._counts[status.value] += 1
            self._last_job_at = utc_now()

    def get_status(self) -> Dict[str, Any]:
        """
        Get worker status.

        Returns:
            Dictionary with job outcome counters and the time of the last job
        """
        with self._stats_lock:
            counts = dict(self._counts)
            last_job_at = self._last_job_at
        return {
            "name": self.name,
            "document_thumbnails_enabled": bool(
                self.document_service and self.document_service.is_enabled()
            ),
            "video_thumbnails_enabled": bool(
                self.video_service and self.video_service.is_enabled()
            ),
            "jobs_completed": counts[ThumbnailJobStatus.COMPLETED.value],
            "jobs_skipped": counts[ThumbnailJobStatus.SKIPPED.value],
            "jobs_failed": counts[ThumbnailJobStatus.FAILED.value],
            "last_job_at": last_job_at.isoformat() if last_job_at else None,
        }
