"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from fusion_export import __version__
from fusion_export.api.deps import JobsDep
from fusion_export.config import settings
from fusion_export.models.formats import FORMAT_CATALOG

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str
    timestamp: datetime
    formats: int
    jobs: int


@router.get("/health", response_model=HealthResponse)
async def health_check(jobs: JobsDep) -> HealthResponse:
    """Report service status, known formats and tracked bulk jobs."""
    _, total_jobs = await jobs.list_jobs(limit=1)
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        formats=len(FORMAT_CATALOG),
        jobs=total_jobs,
    )
