import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from reserve.main import request_id_middleware
from reserve.utils.request_id import REQUEST_ID_HEADER, bound_request_id, generate_request_id, get_request_id


def test_bound_request_id_sets_and_restores() -> None:
    assert get_request_id() is None
    with bound_request_id("req-abc") as value:
        assert value == "req-abc"
        assert get_request_id() == "req-abc"
    assert get_request_id() is None


def test_bound_request_id_generates_when_missing() -> None:
    with bound_request_id(None) as value:
        assert value
        assert get_request_id() == value


def test_generate_request_id_is_not_empty() -> None:
    value = generate_request_id()
    assert isinstance(value, str)
    assert len(value) > 0


def _app() -> FastAPI:
    app = FastAPI()

    @app.get("/check")
    async def check() -> dict[str, str]:
        return {"rid": get_request_id() or ""}

    app.middleware("http")(request_id_middleware)
    return app


@pytest.mark.asyncio
async def test_request_id_middleware_generates_and_sets_header() -> None:
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/check")
    assert resp.status_code == 200
    assert resp.headers.get(REQUEST_ID_HEADER)
    assert resp.json()["rid"] == resp.headers[REQUEST_ID_HEADER]


@pytest.mark.asyncio
async def test_request_id_middleware_uses_incoming_header() -> None:
    incoming = "req-custom-123"
    transport = ASGITransport(app=_app())
    async with AsyncClient(transport=transport, base_url="http://test", headers={REQUEST_ID_HEADER: incoming}) as client:
        resp = await client.get("/check")
    assert resp.status_code == 200
    assert resp.headers[REQUEST_ID_HEADER] == incoming
    assert resp.json()["rid"] == incoming
