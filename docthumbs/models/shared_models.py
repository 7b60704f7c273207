# docthumbs/models/shared_models.py
"""
Shared pydantic models for thumbnail generation requests and results.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import THUMBNAIL_JOB_ID_PREFIX
from ..enums import ThumbnailJobType
from ..utils.time_utils import utc_now


class DeferredThumbnailJob(BaseModel):
    """
    Snapshot of a thumbnail generation request queued for later execution.

    Holds identifiers and primitives only: the session that produced the
    request is gone by the time the job runs, so the node is resolved again
    from (node_identifier, workspace).
    """

    job_type: ThumbnailJobType = Field(..., description="document or video")
    node_identifier: str = Field(..., min_length=1)
    workspace: str = Field(..., min_length=1)
    node_path: Optional[str] = Field(
        default=None, description="Path at scheduling time, for diagnostics only"
    )
    thumbnail_name: str = Field(..., min_length=1)
    thumbnail_size: Union[int, str] = Field(
        ..., description="Square box in pixels (documents) or 'WxH' (video)"
    )
    offset_seconds: Optional[int] = Field(
        default=None, ge=0, description="Frame offset, video jobs only"
    )
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_job_parameters(self) -> "DeferredThumbnailJob":
        if self.job_type == ThumbnailJobType.VIDEO:
            if self.offset_seconds is None:
                raise ValueError("Video thumbnail jobs require offset_seconds")
            if not isinstance(self.thumbnail_size, str):
                raise ValueError("Video thumbnail jobs require a 'WxH' thumbnail_size")
        elif not isinstance(self.thumbnail_size, int):
            raise ValueError("Document thumbnail jobs require an integer thumbnail_size")
        return self

    @property
    def dedup_key(self) -> Tuple[str, str, str]:
        """One unit of work per (workspace, node, thumbnail name)."""
        return (self.workspace, self.node_identifier, self.thumbnail_name)

    @property
    def job_id(self) -> str:
        return ":".join((THUMBNAIL_JOB_ID_PREFIX,) + self.dedup_key)

    def to_job_data(self) -> Dict[str, Any]:
        """Plain-data form handed to schedulers."""
        return self.model_dump(mode="json")


class ThumbnailGenerationResult(BaseModel):
    """Result of a single thumbnail generation run"""

    success: bool
    generated: bool = False
    node_path: Optional[str] = None
    thumbnail_name: Optional[str] = None
    thumbnail_path: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    mime_type: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    processing_time_ms: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
