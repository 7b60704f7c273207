# docthumbs/services/scheduling/job_queue_service.py
"""
End-of-request Job Queue

Thumbnail requests raised while a request (an upload, a save) is being
processed are buffered and only handed to the background scheduler once the
request finishes. Within one request, repeated requests for the same
(workspace, node, thumbnail name) collapse into a single job carrying the
latest parameters.

Dispatchers:
- APSchedulerJobDispatcher: one-shot "date" jobs on an APScheduler scheduler
- InlineJobDispatcher: runs the job immediately in the calling thread
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, List, Optional, Tuple

from apscheduler.schedulers.base import BaseScheduler

from ...constants import THUMBNAIL_JOB_MISFIRE_GRACE_SECONDS
from ...enums import LogEmoji, LoggerName, LogSource
from ...exceptions import SchedulingError
from ...models.shared_models import DeferredThumbnailJob
from ...services.logger import get_service_logger
from ...utils.time_utils import utc_now

logger = get_service_logger(LoggerName.JOB_QUEUE, LogSource.SCHEDULER)

JobKey = Tuple[str, str, str]


class JobDispatcher(ABC):
    """Hands a deferred thumbnail job to something that will execute it."""

    @abstractmethod
    def dispatch(self, job: DeferredThumbnailJob) -> None:
        """
        Raises:
            SchedulingError: if the job could not be handed over
        """


class ThumbnailJobScheduler(ABC):
    """Scheduler contract used by the thumbnail rule service."""

    @abstractmethod
    def schedule_at_end_of_request(self, job: DeferredThumbnailJob) -> None: ...


class APSchedulerJobDispatcher(JobDispatcher):
    """
    Dispatches jobs as one-shot APScheduler jobs.

    Job ids are derived from the job's dedup key, and existing jobs with the
    same id are replaced, so a node never has two pending jobs for the same
    thumbnail.
    """

    def __init__(
        self,
        scheduler: BaseScheduler,
        worker,
        misfire_grace_time: int = THUMBNAIL_JOB_MISFIRE_GRACE_SECONDS,
    ):
        self.scheduler = scheduler
        self.worker = worker
        self.misfire_grace_time = misfire_grace_time

    def dispatch(self, job: DeferredThumbnailJob) -> None:
        try:
            self.scheduler.add_job(
                func=self.worker.execute,
                trigger="date",
                run_date=utc_now(),
                id=job.job_id,
                name=f"{job.job_type.value} thumbnail {job.thumbnail_name} for {job.node_path or job.node_identifier}",
                kwargs={"job_data": job.to_job_data()},
                replace_existing=True,
                max_instances=1,
                coalesce=True,
                misfire_grace_time=self.misfire_grace_time,
            )
        except Exception as e:
            raise SchedulingError(f"Failed to schedule job {job.job_id}: {e}") from e

        logger.debug(f"Scheduled job {job.job_id}", emoji=LogEmoji.SCHEDULED)


class InlineJobDispatcher(JobDispatcher):
    """Executes jobs immediately in the calling thread."""

    def __init__(self, worker):
        self.worker = worker

    def dispatch(self, job: DeferredThumbnailJob) -> None:
        self.worker.execute(job.to_job_data())


class EndOfRequestJobQueue(ThumbnailJobScheduler):
    """
    Buffers thumbnail jobs until the surrounding request completes.

    Usage:
        queue = EndOfRequestJobQueue(APSchedulerJobDispatcher(scheduler, worker))
        with queue.request_scope():
            rule_service.request_document_thumbnail(node, "thumbnail", 150)
        # jobs are dispatched here

    Outside a request scope jobs are dispatched straight away. Buffers live
    in a context variable, so concurrent requests never share one.
    """

    def __init__(self, dispatcher: JobDispatcher):
        self.dispatcher = dispatcher
        self._pending: ContextVar[Optional[Dict[JobKey, DeferredThumbnailJob]]] = (
            ContextVar(f"thumbnail_job_queue_{id(self)}", default=None)
        )

    def in_request_scope(self) -> bool:
        return self._pending.get() is not None

    def pending_jobs(self) -> List[DeferredThumbnailJob]:
        """Jobs buffered in the current request scope."""
        buffer = self._pending.get()
        return list(buffer.values()) if buffer else []

    @contextmanager
    def request_scope(self) -> Iterator[None]:
        """
        Mark the lifetime of a triggering request.

        Nested scopes join the outermost one. Buffered jobs are dispatched
        when the outermost scope exits normally and discarded when the
        request raises.
        """
        if self.in_request_scope():
            yield
            return

        token = self._pending.set({})
        try:
            yield
        except BaseException:
            discarded = self._pending.get()
            if discarded:
                logger.warning(
                    f"Request failed, discarding {len(discarded)} pending thumbnail job(s)",
                    extra_context={"job_ids": [job.job_id for job in discarded.values()]},
                )
            raise
        else:
            self._flush(self._pending.get())
        finally:
            self._pending.reset(token)

    def schedule_at_end_of_request(self, job: DeferredThumbnailJob) -> None:
        """
        Queue a job for execution after the current request.

        Raises:
            SchedulingError: outside a request scope, if the dispatcher fails
        """
        buffer = self._pending.get()
        if buffer is None:
            self.dispatcher.dispatch(job)
            return

        if job.dedup_key in buffer:
            logger.debug(
                f"Replacing pending job {job.job_id} with newer request parameters"
            )
        buffer[job.dedup_key] = job

    def _flush(self, buffer: Dict[JobKey, DeferredThumbnailJob]) -> None:
        for job in buffer.values():
            try:
                self.dispatcher.dispatch(job)
            except Exception as e:
                logger.error(
                    f"Failed to dispatch thumbnail job {job.job_id}",
                    exception=e,
                    error_context={"job_id": job.job_id},
                )
        if buffer:
            logger.debug(
                f"Dispatched {len(buffer)} thumbnail job(s) at end of request",
                emoji=LogEmoji.JOB,
            )
