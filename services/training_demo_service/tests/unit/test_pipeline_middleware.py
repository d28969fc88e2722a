"""Tests for the request pipeline: body parsing, static files, inspection, correlation IDs."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from services.training_demo_service.implementations.json_merger import DeepJsonMerger


class TestJsonBodyParsing:
    """JSON body stage."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", ['{"a": ', "not json", '{"a": NaN}', '{"a": 1}}'])
    async def test_malformed_json_is_rejected(self, client: AsyncClient, payload: str) -> None:
        """Test malformed JSON never reaches a route."""
        response = await client.post(
            "/api/merge", content=payload, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", ['"text"', "42", "null", "true"])
    async def test_scalar_top_level_is_rejected(self, client: AsyncClient, payload: str) -> None:
        """Test only objects and arrays are accepted at the top level."""
        response = await client.post(
            "/api/merge", content=payload, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "object or an array" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_rejected(self, client: AsyncClient) -> None:
        """Test bodies that are not UTF-8 fail parsing."""
        response = await client.post(
            "/api/merge", content=b'{"a": "\xff"}', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_json_suffix_media_type_is_parsed(self, client: AsyncClient) -> None:
        """Test +json media types are treated as JSON."""
        response = await client.post(
            "/api/merge",
            content='{"kind": "vnd"}',
            headers={"Content-Type": "application/vnd.api+json; charset=utf-8"},
        )

        assert response.status_code == 200
        assert response.json()["result"] == {"kind": "vnd"}

    @pytest.mark.asyncio
    async def test_oversized_body_is_rejected(
        self, app_factory: Callable[..., FastAPI]
    ) -> None:
        """Test bodies above the configured limit fail with 413."""
        app = app_factory(JSON_BODY_LIMIT_BYTES=32)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post("/api/merge", json={"padding": "x" * 64})
        await app.state.di_container.close()

        assert response.status_code == 413

    @pytest.mark.asyncio
    async def test_malformed_json_fails_before_static_lookup(self, client: AsyncClient) -> None:
        """Test body parsing runs ahead of static serving."""
        response = await client.request(
            "GET",
            "/hello.txt",
            content="{oops",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestStaticFiles:
    """Static file stage."""

    @pytest.mark.asyncio
    async def test_serves_file_with_inferred_content_type(
        self, client: AsyncClient, static_files: dict[str, str]
    ) -> None:
        """Test files in the public directory are served directly."""
        response = await client.get("/styles.css")

        assert response.status_code == 200
        assert response.text == static_files["styles.css"]
        assert response.headers["content-type"].startswith("text/css")

    @pytest.mark.asyncio
    async def test_serves_nested_file(self, client: AsyncClient) -> None:
        """Test files in subdirectories are served."""
        response = await client.get("/nested/data.json")

        assert response.status_code == 200
        assert response.json() == {"nested": True}
        assert response.headers["content-type"].startswith("application/json")

    @pytest.mark.asyncio
    async def test_static_file_bypasses_routes(
        self, client: AsyncClient, static_files: dict[str, str]
    ) -> None:
        """Test a file matching a route path wins over the route."""
        response = await client.get("/healthz")

        assert response.status_code == 200
        assert response.text == static_files["healthz"]

    @pytest.mark.asyncio
    async def test_missing_file_returns_404(self, client: AsyncClient) -> None:
        """Test unknown paths fall through to routing and 404."""
        response = await client.get("/missing.txt")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_directory_index_is_not_served(self, client: AsyncClient) -> None:
        """Test directories are not listed or served."""
        response = await client.get("/nested")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_only_get_and_head_are_served(self, client: AsyncClient) -> None:
        """Test other methods are not answered from the public directory."""
        response = await client.post("/hello.txt", json={"a": 1})

        assert response.status_code != 200

    @pytest.mark.asyncio
    async def test_missing_public_directory_is_tolerated(
        self, app_factory: Callable[..., FastAPI], tmp_path: Path
    ) -> None:
        """Test the service runs without a public directory."""
        app = app_factory(STATIC_DIR=tmp_path / "does-not-exist")
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            info = await ac.get("/")
            missing = await ac.get("/hello.txt")
        await app.state.di_container.close()

        assert info.status_code == 200
        assert missing.status_code == 404


class TestMergeInspection:
    """Merge inspection stage."""

    @pytest.mark.asyncio
    async def test_inspection_merges_object_bodies(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test every object-like body is merged before routing, for any route."""
        seen: list[object] = []
        original = DeepJsonMerger.merge

        def _spy(self: DeepJsonMerger, target: dict, *sources: object) -> dict:
            seen.extend(sources)
            return original(self, target, *sources)

        monkeypatch.setattr(DeepJsonMerger, "merge", _spy)

        response = await client.request(
            "GET", "/", content='{"sample": 1}', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 200
        assert seen == [{"sample": 1}]

    @pytest.mark.asyncio
    async def test_inspection_failure_reaches_error_handler(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test an inspection error becomes the terminal 500."""

        def _explode(self: DeepJsonMerger, target: dict, *sources: object) -> dict:
            raise RuntimeError("merge blew up")

        monkeypatch.setattr(DeepJsonMerger, "merge", _explode)

        response = await client.request(
            "GET", "/", content='{"sample": 1}', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_inspection_handles_deeply_nested_bodies(self, client: AsyncClient) -> None:
        """Test a body nested hundreds of levels deep passes inspection untouched."""
        depth = 500
        payload = "[" * depth + "{\"k\": 1}" + "]" * depth

        response = await client.request(
            "GET", "/", content=payload, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome to FOSSA CLI Training Demo"


class TestCorrelationId:
    """Correlation ID propagation."""

    @pytest.mark.asyncio
    async def test_valid_correlation_id_is_echoed(self, client: AsyncClient) -> None:
        """Test a valid incoming correlation ID is kept."""
        correlation_id = str(uuid4())

        response = await client.get("/", headers={"X-Correlation-ID": correlation_id})

        assert response.headers["X-Correlation-ID"] == correlation_id

    @pytest.mark.asyncio
    async def test_invalid_correlation_id_is_replaced(self, client: AsyncClient) -> None:
        """Test an invalid incoming correlation ID is replaced by a UUID."""
        response = await client.get("/", headers={"X-Correlation-ID": "not-a-uuid"})

        generated = response.headers["X-Correlation-ID"]
        assert generated != "not-a-uuid"
        UUID(generated)

    @pytest.mark.asyncio
    async def test_error_responses_carry_correlation_id(
        self, client: AsyncClient, app: FastAPI
    ) -> None:
        """Test the terminal handler response still gets the header."""

        @app.get("/explode")
        async def explode() -> None:
            raise RuntimeError("boom")

        response = await client.get("/explode")

        assert response.status_code == 500
        assert "X-Correlation-ID" in response.headers
