"""
Training Demo Service behavioral contracts and protocols.

This module defines the protocols (interfaces) that service components
must implement, enabling dependency injection and testability.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import JsonValue


class ExternalFetcherProtocol(Protocol):
    """Protocol for the outbound fetch behind /api/external."""

    async def fetch_json(self, url: str) -> JsonValue:
        """
        Fetch a URL with a single GET and parse the body as JSON.

        Args:
            url: Caller-supplied URL, fetched as-is

        Returns:
            The parsed JSON body, whatever the upstream status code

        Raises:
            ExternalTransportError: If the request could not be completed
            ExternalParseError: If the body is not valid JSON
        """
        ...


@runtime_checkable
class JsonMergerProtocol(Protocol):
    """Protocol for the deep-merge primitive shared by the pipeline and /api/merge."""

    def merge(self, target: dict[str, JsonValue], *sources: JsonValue) -> dict[str, JsonValue]:
        """
        Deep-merge each source into target, in order.

        Args:
            target: Mapping that receives the merged keys (mutated in place)
            sources: JSON values to merge; non-container values are skipped

        Returns:
            The target mapping
        """
        ...
