"""Health routes for the Training Demo Service."""

from __future__ import annotations

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter

from services.training_demo_service.config import TrainingDemoSettings

router = APIRouter()

SERVICE_VERSION = "1.0.0"


@router.get("/healthz", tags=["Health"])
@inject
async def health_check(settings: FromDishka[TrainingDemoSettings]) -> dict[str, str | dict]:
    """Health check endpoint; the static directory being absent is not an error."""
    checks = {
        "service_responsive": True,
        "static_dir_exists": settings.STATIC_DIR.is_dir(),
    }

    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy",
        "message": "Training Demo Service is healthy",
        "version": SERVICE_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "checks": checks,
    }
