"""Passthrough fetch of caller-supplied URLs."""

from __future__ import annotations

from datetime import UTC, datetime

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from training_service_libs.logging_utils import create_service_logger

from services.training_demo_service.api_models import ErrorResponse, ExternalFetchResponse
from services.training_demo_service.config import TrainingDemoSettings
from services.training_demo_service.exceptions import ExternalFetchError
from services.training_demo_service.protocols import ExternalFetcherProtocol

router = APIRouter()
logger = create_service_logger("training_demo.external_routes")


def iso_utc_now() -> str:
    """Current UTC instant as ISO-8601 with milliseconds and a trailing Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/external",
    response_model=ExternalFetchResponse,
    responses={500: {"model": ErrorResponse}},
)
@inject
async def fetch_external(
    fetcher: FromDishka[ExternalFetcherProtocol],
    settings: FromDishka[TrainingDemoSettings],
    url: str | None = Query(None, description="URL to fetch; defaults to a placeholder post"),
) -> JSONResponse:
    """Fetch ``url`` server-side and relay its JSON body.

    The URL is not validated and no timeout applies.
    """
    target = url or settings.DEFAULT_EXTERNAL_URL

    try:
        data = await fetcher.fetch_json(target)
    except ExternalFetchError as e:
        return JSONResponse(status_code=500, content={"error": e.message})

    # Serialized directly: model validation caps the nesting depth of JSON values
    return JSONResponse(content={"status": "success", "data": data, "timestamp": iso_utc_now()})
