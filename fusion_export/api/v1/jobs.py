"""Bulk export job endpoints."""

import asyncio
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Query, Response, status
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from fusion_export.api.deps import EventsDep, JobDep, JobsDep
from fusion_export.api.responses import attachment
from fusion_export.core.events import Event
from fusion_export.core.jobs import BulkExportManager
from fusion_export.models.jobs import BulkExportJob, BulkExportRequest, JobStatus
from fusion_export.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

_TERMINAL_EVENTS = ("job_completed", "error")


class JobListResponse(BaseModel):
    """Response for listing jobs."""

    jobs: list[BulkExportJob]
    total: int
    limit: int
    offset: int


async def run_job_background(job_id: UUID, jobs: BulkExportManager) -> None:
    """Background task to run a bulk export job."""
    try:
        await jobs.run_job(job_id)
    except Exception as e:
        # The job is already marked failed and an error event published
        logger.error("jobs.background_failed", job_id=str(job_id), error=str(e), exc_info=True)


@router.post(
    "",
    response_model=BulkExportJob,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Start a bulk export job",
    description="Returns immediately while the export continues in background.",
)
async def create_job(
    data: BulkExportRequest,
    jobs: JobsDep,
    background_tasks: BackgroundTasks,
) -> BulkExportJob:
    job = await jobs.create_job(data)
    background_tasks.add_task(run_job_background, job.id, jobs)
    return job


@router.get(
    "",
    response_model=JobListResponse,
    summary="List bulk export jobs",
)
async def list_jobs(
    jobs: JobsDep,
    status_filter: Annotated[JobStatus | None, Query(alias="status")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> JobListResponse:
    items, total = await jobs.list_jobs(status=status_filter, limit=limit, offset=offset)
    return JobListResponse(jobs=items, total=total, limit=limit, offset=offset)


@router.get("/{job_id}", response_model=BulkExportJob, summary="Get job details")
async def get_job(job: JobDep) -> BulkExportJob:
    return job


@router.post("/{job_id}/pause", response_model=BulkExportJob, summary="Pause a job")
async def pause_job(job: JobDep, jobs: JobsDep) -> BulkExportJob:
    return await jobs.pause_job(job.id)


@router.post("/{job_id}/resume", response_model=BulkExportJob, summary="Resume a job")
async def resume_job(job: JobDep, jobs: JobsDep) -> BulkExportJob:
    return await jobs.resume_job(job.id)


@router.post("/{job_id}/cancel", response_model=BulkExportJob, summary="Cancel a job")
async def cancel_job(job: JobDep, jobs: JobsDep) -> BulkExportJob:
    return await jobs.cancel_job(job.id)


@router.delete(
    "/{job_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a job",
)
async def delete_job(job: JobDep, jobs: JobsDep) -> None:
    """Cancel an active job or forget a finished one."""
    await jobs.delete_job(job.id)


@router.get("/{job_id}/download", summary="Download the bundled result")
async def download_job_result(job: JobDep, jobs: JobsDep) -> Response:
    return attachment(await jobs.get_result(job.id))


@router.get("/{job_id}/stream", summary="Stream job events (SSE)")
async def stream_job_events(job: JobDep, events: EventsDep) -> EventSourceResponse:
    """Stream progress events for a job using Server-Sent Events."""

    async def event_generator():
        queue = events.subscribe(job.id)

        try:
            yield {
                "event": "connected",
                "data": Event(
                    event_type="connected",
                    data={"job_id": str(job.id), "status": job.status.value},
                ).payload(),
            }

            if job.status.is_terminal:
                return

            while True:
                try:
                    event: Event = await asyncio.wait_for(queue.get(), timeout=30.0)
                    yield {"event": event.event_type, "data": event.payload()}

                    if event.event_type in _TERMINAL_EVENTS:
                        break

                except asyncio.TimeoutError:
                    yield {"event": "keepalive", "data": "{}"}

        finally:
            events.unsubscribe(job.id)

    return EventSourceResponse(event_generator())
