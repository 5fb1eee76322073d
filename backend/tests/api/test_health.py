"""GET /health: liveness probe independent of container state."""

from fastapi import Request
from httpx import ASGITransport, AsyncClient

from accounts.api.router import create_app


async def test_health_returns_ok(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.text == "ok"


async def test_health_ignores_handler_state():
    """A handler whose use case is unusable does not affect /health."""
    app = create_app(auth_handler=_UnusableHandler())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        res = await c.get("/health")
    assert res.status_code == 200
    assert res.text == "ok"


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


class _UnusableHandler:
    async def sign_up(self, request: Request):
        raise RuntimeError("no use case")
