"""Bulk export job management."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fusion_export.config import settings
from fusion_export.core.events import EventBus, get_event_bus
from fusion_export.core.exceptions import ExportError, JobNotFoundError, JobStateError
from fusion_export.core.exporter import ProjectExporter, get_exporter
from fusion_export.delivery.memory import MemoryDelivery
from fusion_export.models.formats import estimate_size
from fusion_export.models.jobs import BulkExportJob, BulkExportRequest, JobItemError, JobStatus
from fusion_export.models.package import DeliveryUnit
from fusion_export.models.project import GeneratedApp, slugify
from fusion_export.packagers.archive import ArchiveEntry, build_zip
from fusion_export.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class _JobRecord:
    job: BulkExportJob
    apps: list[GeneratedApp]
    resume: asyncio.Event = field(default_factory=asyncio.Event)
    result: DeliveryUnit | None = None

    def __post_init__(self) -> None:
        self.resume.set()


class BulkExportManager:
    """Runs bulk export jobs and keeps them in memory.

    Note: jobs and their results live in process memory and expire after
    ``ttl_hours``.
    """

    def __init__(
        self,
        exporter: ProjectExporter | None = None,
        events: EventBus | None = None,
        ttl_hours: int | None = None,
    ):
        self.exporter = exporter or get_exporter()
        self.events = events or get_event_bus()
        self._records: dict[UUID, _JobRecord] = {}
        self._ttl = timedelta(hours=ttl_hours or settings.job_ttl_hours)

    async def create_job(self, request: BulkExportRequest) -> BulkExportJob:
        """Register a job; nothing runs until ``run_job``."""
        name = request.name or f"bulk-export-{datetime.now(timezone.utc):%Y%m%d-%H%M%S}"
        job = BulkExportJob(
            name=name,
            app_names=[app.name for app in request.apps],
            options=request.options,
            total_size=sum(estimate_size(app, request.options) for app in request.apps),
        )
        self._records[job.id] = _JobRecord(job=job, apps=list(request.apps))
        logger.info("jobs.created", job_id=str(job.id), apps=len(request.apps))
        return job

    async def get_job(self, job_id: UUID) -> BulkExportJob:
        return self._get_record(job_id).job

    async def list_jobs(
        self,
        status: JobStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BulkExportJob], int]:
        """List jobs, newest first, with optional status filtering."""
        await self.cleanup_expired()
        jobs = [record.job for record in self._records.values()]

        if status:
            jobs = [j for j in jobs if j.status == status]

        jobs.sort(key=lambda j: j.created_at, reverse=True)

        total = len(jobs)
        return jobs[offset : offset + limit], total

    async def run_job(self, job_id: UUID) -> BulkExportJob:
        """Export every app of a pending job.

        A failing app is recorded in ``job.errors`` and the job moves on.
        The job fails only when no app could be exported.

        Raises:
            JobNotFoundError: unknown or expired job
            JobStateError: the job is not pending
        """
        record = self._get_record(job_id)
        job = record.job
        if job.status != JobStatus.PENDING:
            raise JobStateError(str(job_id), job.status.value, "run")

        job.mark(JobStatus.RUNNING)
        await self.events.publish_job_started(job.id, len(record.apps))
        logger.info("jobs.started", job_id=str(job.id), apps=len(record.apps))

        try:
            entries = await self._export_apps(record)

            # A paused job does not finalize until resumed
            await record.resume.wait()
            if job.status == JobStatus.CANCELLED:
                logger.info("jobs.cancelled", job_id=str(job.id))
            elif job.exported_count == 0:
                job.mark(JobStatus.FAILED)
            else:
                await self._store_result(record, entries)
                job.mark(JobStatus.COMPLETED)

        except Exception as e:
            logger.error("jobs.failed", job_id=str(job.id), error=str(e))
            job.mark(JobStatus.FAILED)
            await self.events.publish_error(job.id, str(e))
            raise

        await self.events.publish_job_finished(
            job.id, job.status.value, job.exported_count, len(job.errors)
        )
        logger.info(
            "jobs.completed",
            job_id=str(job.id),
            status=job.status.value,
            exported=job.exported_count,
            failed=len(job.errors),
        )
        return job

    async def _export_apps(self, record: _JobRecord) -> list[ArchiveEntry]:
        job = record.job
        entries: list[ArchiveEntry] = []
        used_prefixes: set[str] = set()
        processed = 0

        for done, app in enumerate(record.apps, start=1):
            await record.resume.wait()
            if job.status == JobStatus.CANCELLED:
                break

            delivery = MemoryDelivery()
            try:
                # No throttling inside a bundle
                await self.exporter.export(app, job.options, delivery, delay_ms=0)
            except ExportError as e:
                job.errors.append(
                    JobItemError(app_name=app.name, code=type(e).__name__, message=e.message)
                )
                await self.events.publish_item_failed(job.id, app.name, e.message)
                logger.warning(
                    "jobs.item_failed", job_id=str(job.id), app=app.name, error=e.message
                )
            else:
                prefix = _unique_prefix(app.slug, used_prefixes)
                entries.extend((f"{prefix}/{u.filename}", u.content) for u in delivery.units)
                job.exported_count += 1
                processed += delivery.total_bytes

            job.record_progress(done, processed)
            await self.events.publish_job_progress(job.id, app.name, job.progress, processed)

        return entries

    async def _store_result(self, record: _JobRecord, entries: list[ArchiveEntry]) -> None:
        job = record.job
        data = await asyncio.to_thread(build_zip, entries, job.options.compression_level)
        filename = f"{slugify(job.name)}.zip"
        record.result = DeliveryUnit(filename=filename, content=data, media_type="application/zip")
        job.result_filename = filename
        job.result_size = len(data)

    async def pause_job(self, job_id: UUID) -> BulkExportJob:
        record = self._get_record(job_id)
        job = record.job
        if job.status != JobStatus.RUNNING:
            raise JobStateError(str(job_id), job.status.value, "pause")
        record.resume.clear()
        job.mark(JobStatus.PAUSED)
        logger.info("jobs.paused", job_id=str(job_id))
        return job

    async def resume_job(self, job_id: UUID) -> BulkExportJob:
        record = self._get_record(job_id)
        job = record.job
        if job.status != JobStatus.PAUSED:
            raise JobStateError(str(job_id), job.status.value, "resume")
        job.mark(JobStatus.RUNNING)
        record.resume.set()
        logger.info("jobs.resumed", job_id=str(job_id))
        return job

    async def cancel_job(self, job_id: UUID) -> BulkExportJob:
        """Cancel a job; the app being exported finishes, nothing else starts."""
        record = self._get_record(job_id)
        job = record.job
        if job.status.is_terminal:
            raise JobStateError(str(job_id), job.status.value, "cancel")
        job.mark(JobStatus.CANCELLED)
        record.resume.set()
        logger.info("jobs.cancel_requested", job_id=str(job_id))
        return job

    async def delete_job(self, job_id: UUID) -> None:
        """Forget a job, cancelling it first if it is still active."""
        record = self._get_record(job_id)
        if not record.job.status.is_terminal:
            await self.cancel_job(job_id)
        del self._records[job_id]

    async def get_result(self, job_id: UUID) -> DeliveryUnit:
        """The bundled archive of a completed job."""
        record = self._get_record(job_id)
        if record.job.status != JobStatus.COMPLETED or record.result is None:
            raise JobStateError(str(job_id), record.job.status.value, "download")
        return record.result

    async def cleanup_expired(self) -> int:
        """Remove expired jobs. Returns count of removed jobs."""
        now = datetime.now(timezone.utc)
        expired = [
            job_id
            for job_id, record in self._records.items()
            if record.job.status.is_terminal and now - record.job.created_at > self._ttl
        ]
        for job_id in expired:
            del self._records[job_id]
        return len(expired)

    def _get_record(self, job_id: UUID) -> _JobRecord:
        record = self._records.get(job_id)
        if record is None:
            raise JobNotFoundError(str(job_id))
        if (
            record.job.status.is_terminal
            and datetime.now(timezone.utc) - record.job.created_at > self._ttl
        ):
            del self._records[job_id]
            raise JobNotFoundError(str(job_id))
        return record


def _unique_prefix(slug: str, used: set[str]) -> str:
    prefix = slug
    counter = 2
    while prefix in used:
        prefix = f"{slug}-{counter}"
        counter += 1
    used.add(prefix)
    return prefix


# Singleton instance
_job_manager: BulkExportManager | None = None


def get_job_manager() -> BulkExportManager:
    """Get the bulk export manager singleton."""
    global _job_manager
    if _job_manager is None:
        _job_manager = BulkExportManager()
    return _job_manager
