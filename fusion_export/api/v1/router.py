"""Main router for API v1."""

from fastapi import APIRouter

from fusion_export.api.v1 import exports, health, jobs

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(health.router, tags=["health"])
router.include_router(jobs.router, prefix="/exports/jobs", tags=["jobs"])
router.include_router(exports.router, prefix="/exports", tags=["exports"])
