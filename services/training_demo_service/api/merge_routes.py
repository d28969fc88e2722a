"""Deep-merge endpoint."""

from __future__ import annotations

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from training_service_libs.logging_utils import create_service_logger

from services.training_demo_service.api_models import (
    MERGE_SUCCESS_MESSAGE,
    ErrorResponse,
    MergeResponse,
)
from services.training_demo_service.protocols import JsonMergerProtocol

router = APIRouter()
logger = create_service_logger("training_demo.merge_routes")


@router.post(
    "/merge",
    response_model=MergeResponse,
    responses={415: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@inject
async def merge_data(
    request: Request,
    merger: FromDishka[JsonMergerProtocol],
) -> JSONResponse:
    """Deep-merge the request body into an empty mapping and return the result.

    The body is the one parsed by JsonBodyMiddleware. A body sent with a
    non-JSON content type is answered with 415; no body merges nothing.
    """
    if getattr(request.state, "unparsed_body", False):
        return JSONResponse(status_code=415, content={"error": "Request body must be JSON"})

    body = getattr(request.state, "json_body", None)
    try:
        result = merger.merge({}, body)
    except Exception as e:
        logger.error(f"Merge failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})

    # Serialized directly: model validation caps the nesting depth of JSON values
    return JSONResponse(content={"message": MERGE_SUCCESS_MESSAGE, "result": result})
