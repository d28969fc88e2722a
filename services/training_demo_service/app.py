"""Training Demo Service - deliberately vulnerable HTTP service for scanner training.

Serves an info index, a server-side fetch of caller-supplied URLs, a
deep-merge endpoint and static files from the public directory.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from training_service_libs.logging_utils import configure_service_logging, create_service_logger

from services.training_demo_service.api.external_routes import router as external_router
from services.training_demo_service.api.health_routes import SERVICE_VERSION
from services.training_demo_service.api.health_routes import router as health_router
from services.training_demo_service.api.info_routes import router as info_router
from services.training_demo_service.api.merge_routes import router as merge_router
from services.training_demo_service.config import TrainingDemoSettings, load_settings
from services.training_demo_service.di import TrainingDemoProvider
from services.training_demo_service.implementations.json_merger import DeepJsonMerger
from services.training_demo_service.middleware import (
    CorrelationIDMiddleware,
    ErrorHandlerMiddleware,
    JsonBodyMiddleware,
    MergeInspectionMiddleware,
    RequestLoggingMiddleware,
    StaticFilesMiddleware,
)

logger = create_service_logger("training_demo.app")


def log_boot_banner(settings: TrainingDemoSettings) -> None:
    """Announce the listen address and the training warning."""
    logger.info(f"Server running on port {settings.PORT}")
    logger.info(f"FOSSA CLI Training Demo running on http://localhost:{settings.PORT}")
    logger.warning("This application uses vulnerable packages for training purposes")
    logger.info("Run 'fossa analyze' to scan for vulnerabilities")


def create_app(settings: TrainingDemoSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Frozen settings; loaded from the environment when omitted.
    """
    settings = settings or load_settings()
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    container = make_async_container(
        TrainingDemoProvider(settings),
        FastapiProvider(),
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        log_boot_banner(settings)
        yield
        await container.close()
        logger.info("Training Demo Service shutdown completed")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=SERVICE_VERSION,
        description="Intentionally vulnerable demo service for dependency scanner training",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
        lifespan=lifespan,
    )

    # Pipeline; the last middleware added runs first
    app.add_middleware(MergeInspectionMiddleware, merger=DeepJsonMerger())
    app.add_middleware(StaticFilesMiddleware, directory=settings.STATIC_DIR)
    app.add_middleware(JsonBodyMiddleware, limit_bytes=settings.JSON_BODY_LIMIT_BYTES)
    app.add_middleware(ErrorHandlerMiddleware, settings=settings)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(info_router, tags=["Info"])
    app.include_router(external_router, prefix="/api", tags=["External"])
    app.include_router(merge_router, prefix="/api", tags=["Merge"])
    app.include_router(health_router)

    setup_dishka(container, app)
    app.state.di_container = container
    app.state.settings = settings

    return app

