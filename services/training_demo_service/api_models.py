"""Response models for the Training Demo Service HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field, JsonValue


class InfoResponse(BaseModel):
    """Index payload: welcome text, local time and the demo dependency table."""

    message: str
    timestamp: str = Field(..., description="Local time formatted YYYY-MM-DD HH:mm:ss")
    vulnerable_packages: dict[str, str]
    warning: str


class ExternalFetchResponse(BaseModel):
    """Successful passthrough of an external JSON document."""

    status: str = "success"
    data: JsonValue
    timestamp: str = Field(..., description="UTC instant in ISO-8601 with milliseconds")


MERGE_SUCCESS_MESSAGE = "Data merged successfully"


class MergeResponse(BaseModel):
    """Result of deep-merging the request body into an empty mapping."""

    message: str = MERGE_SUCCESS_MESSAGE
    result: dict[str, JsonValue]


class ErrorResponse(BaseModel):
    """Route-level error payload."""

    error: str
