"""Integration tests for the health and preview endpoints.

Uses the real FastAPI app through httpx ASGITransport and the process-wide
preview registry.
"""

from httpx import AsyncClient

from multirag.ingestion.files import ingest_file
from multirag.ingestion.previews import get_preview_registry
from tests.conftest import FakeRawFile


class TestHealth:
    """Tests for GET /health."""

    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "multirag-cases"}


class TestPreviews:
    """Tests for GET /previews/{token}."""

    async def test_serves_ingested_file(self, async_client: AsyncClient) -> None:
        """Ingested file is served with its original media type."""
        registry = get_preview_registry()
        case_file = await ingest_file(FakeRawFile("dot.png", b"\x89PNG", "image/png"), registry)

        try:
            response = await async_client.get(case_file.preview_ref)

            assert response.status_code == 200
            assert response.content == b"\x89PNG"
            assert response.headers["content-type"] == "image/png"
        finally:
            registry.release(case_file.preview_ref)

    async def test_released_preview_is_gone(self, async_client: AsyncClient) -> None:
        """Released references return 404."""
        registry = get_preview_registry()
        ref = registry.allocate(b"x", "text/plain")
        registry.release(ref)

        response = await async_client.get(ref)

        assert response.status_code == 404

    async def test_unknown_preview(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/previews/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Preview not found"

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        """Response includes CORS headers for cross-origin requests."""
        response = await async_client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert "access-control-allow-origin" in response.headers
