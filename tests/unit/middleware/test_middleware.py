"""Unit tests for middleware."""

import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.middleware.logging import RequestContextMiddleware


def _create_app_with_middleware() -> FastAPI:
    """Create a minimal FastAPI app with the request context middleware."""
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    @app.get("/context")
    async def _context():
        return structlog.contextvars.get_contextvars()

    return app


async def _get(path: str, headers: dict[str, str] | None = None):
    transport = ASGITransport(app=_create_app_with_middleware())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path, headers=headers)


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        """Response includes a generated X-Request-ID header."""
        response = await _get("/test")

        assert response.status_code == 200
        assert len(response.headers["x-request-id"]) > 0

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        """Provided X-Request-ID is propagated to response."""
        response = await _get("/test", headers={"X-Request-ID": "custom-req-123"})

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_generated_ids_differ(self):
        first = await _get("/test")
        second = await _get("/test")

        assert first.headers["x-request-id"] != second.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_binds_log_context(self):
        """Request id, route and caller are bound for every log line."""
        response = await _get("/context", headers={"X-Request-ID": "req-1", "X-User-ID": "surfer-42"})

        context = response.json()
        assert context["request_id"] == "req-1"
        assert context["method"] == "GET"
        assert context["path"] == "/context"
        assert context["caller_user_id"] == "surfer-42"
