"""Dependency injection for API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from fusion_export.core.events import EventBus, get_event_bus
from fusion_export.core.exporter import ProjectExporter, get_exporter
from fusion_export.core.jobs import BulkExportManager, get_job_manager
from fusion_export.models.jobs import BulkExportJob


async def get_jobs() -> BulkExportManager:
    """Get the bulk export manager."""
    return get_job_manager()


async def get_events() -> EventBus:
    """Get the event bus."""
    return get_event_bus()


async def get_export_service() -> ProjectExporter:
    return get_exporter()


async def get_job_by_id(
    job_id: UUID,
    jobs: Annotated[BulkExportManager, Depends(get_jobs)],
) -> BulkExportJob:
    """Get a job by ID; unknown IDs surface as JobNotFoundError (404)."""
    return await jobs.get_job(job_id)


# Type aliases for cleaner signatures
JobsDep = Annotated[BulkExportManager, Depends(get_jobs)]
EventsDep = Annotated[EventBus, Depends(get_events)]
ExporterDep = Annotated[ProjectExporter, Depends(get_export_service)]
JobDep = Annotated[BulkExportJob, Depends(get_job_by_id)]
