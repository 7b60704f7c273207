"""
Deferred thumbnail job scheduling
"""

from .job_queue_service import (
    APSchedulerJobDispatcher,
    EndOfRequestJobQueue,
    InlineJobDispatcher,
    JobDispatcher,
    ThumbnailJobScheduler,
)

__all__ = [
    "JobDispatcher",
    "ThumbnailJobScheduler",
    "EndOfRequestJobQueue",
    "APSchedulerJobDispatcher",
    "InlineJobDispatcher",
]
