"""Dependency Injection providers for the Training Demo Service.

Provides Dishka DI container setup with APP-scoped infrastructure.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, Scope, provide

from services.training_demo_service.config import TrainingDemoSettings
from services.training_demo_service.implementations.external_fetcher import (
    HttpxExternalFetcher,
)
from services.training_demo_service.implementations.json_merger import DeepJsonMerger
from services.training_demo_service.protocols import (
    ExternalFetcherProtocol,
    JsonMergerProtocol,
)


class TrainingDemoProvider(Provider):
    """Infrastructure provider for the Training Demo Service.

    Provides APP-scoped dependencies: config, HTTP client, fetcher, merger.
    """

    scope = Scope.APP

    def __init__(self, settings: TrainingDemoSettings) -> None:
        super().__init__()
        self._settings = settings

    @provide
    def get_config(self) -> TrainingDemoSettings:
        """Provide the settings the app was built with."""
        return self._settings

    @provide(scope=Scope.APP)
    async def get_http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client without timeouts, following redirects."""
        async with httpx.AsyncClient(timeout=None, follow_redirects=True) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_external_fetcher(self, http_client: httpx.AsyncClient) -> ExternalFetcherProtocol:
        """Provide external fetcher singleton."""
        return HttpxExternalFetcher(http_client)

    @provide(scope=Scope.APP)
    def provide_json_merger(self) -> JsonMergerProtocol:
        """Provide deep-merge implementation."""
        return DeepJsonMerger()

