"""Bulk export job models."""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import Field

from fusion_export.models.base import CamelModel
from fusion_export.models.options import DownloadOptions
from fusion_export.models.project import GeneratedApp


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    """Bulk export job status."""

    PENDING = "pending"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED)


class BulkExportRequest(CamelModel):
    """Request to export several applications with shared options."""

    name: str | None = Field(default=None, max_length=200)
    apps: list[GeneratedApp] = Field(..., min_length=1)
    options: DownloadOptions = Field(default_factory=DownloadOptions)


class JobItemError(CamelModel):
    """A single application that failed to export."""

    app_name: str
    code: str
    message: str


class BulkExportJob(CamelModel):
    """State of a bulk export job."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    status: JobStatus = JobStatus.PENDING
    progress: float = 0.0

    app_names: list[str] = Field(default_factory=list)
    options: DownloadOptions

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = None

    total_size: int = 0
    processed_size: int = 0
    exported_count: int = 0
    errors: list[JobItemError] = Field(default_factory=list)

    result_filename: str | None = None
    result_size: int = 0

    def mark(self, status: JobStatus) -> None:
        """Move to a new status and stamp timestamps."""
        now = _utcnow()
        self.status = status
        self.updated_at = now
        if status.is_terminal:
            self.completed_at = now

    def record_progress(self, done: int, processed_size: int) -> None:
        total = len(self.app_names)
        self.progress = round(done / total * 100, 2) if total else 100.0
        self.processed_size = processed_size
        self.updated_at = _utcnow()
