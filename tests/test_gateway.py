"""
TaskLedger Backend — Gateway Tests
===================================

What:  Drives small route tables through the full FastAPI app (middleware,
       exception handlers, catch-all endpoint) with no database access.

What we test:
    ✅ Raw URI reconstruction from the ASGI scope
    ✅ Exact 404 body for unknown paths and unsupported methods
    ✅ Handlers receive a RequestContext and raw string parameters
    ✅ Handler exceptions are rendered by the global exception handlers
    ✅ A bad route definition aborts create_app()
"""

from unittest.mock import patch

import pytest
from httpx import AsyncClient, ASGITransport
from starlette.responses import JSONResponse

from taskledger.context import RequestContext
from taskledger.exceptions import NotFoundError, RouteDefinitionError, ValidationError
from taskledger.gateway import raw_request_uri
from taskledger.main import create_app
from taskledger.routing import RouteTable


async def echo(ctx: RequestContext, *params):
    return JSONResponse(
        {
            "params": list(params),
            "has_session": ctx.db is not None,
            "method": ctx.request.method,
        }
    )


async def raise_validation(ctx):
    raise ValidationError(message="Bad input", field="title")


async def raise_not_found(ctx):
    raise NotFoundError(resource="task", resource_id="9")


async def raise_unexpected(ctx):
    raise RuntimeError("boom: secret internals")


def build_client(table: RouteTable, headers=None) -> AsyncClient:
    transport = ASGITransport(app=create_app(table), raise_app_exceptions=False)
    return AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=headers or {},
    )


def sample_table() -> RouteTable:
    table = RouteTable()
    table.get("/echo/{value}", echo)
    table.get("/range/{start}/{end}", echo)
    table.post("/echo", echo)
    table.get("/errors/validation", raise_validation)
    table.get("/errors/not-found", raise_not_found)
    table.get("/errors/unexpected", raise_unexpected)
    return table


class TestRawRequestUri:

    def test_uses_raw_path_and_query(self):
        scope = {"raw_path": b"/tasks/a%20b", "path": "/tasks/a b", "query_string": b"x=1"}
        assert raw_request_uri(scope) == "/tasks/a%20b?x=1"

    def test_falls_back_to_path(self):
        scope = {"path": "/tasks", "query_string": b""}
        assert raw_request_uri(scope) == "/tasks"


class TestGatewayDispatch:

    @pytest.mark.asyncio
    async def test_handler_receives_context_and_params(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.get("/range/2024-01-01/2024-02-01?ignored=1")

        assert response.status_code == 200
        assert response.json() == {
            "params": ["2024-01-01", "2024-02-01"],
            "has_session": True,
            "method": "GET",
        }

    @pytest.mark.asyncio
    async def test_params_are_not_url_decoded(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.get("/echo/a%20b")

        assert response.json()["params"] == ["a%20b"]

    @pytest.mark.asyncio
    async def test_unknown_path_returns_exact_404_body(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    @pytest.mark.asyncio
    async def test_unsupported_method_is_404_not_405(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.patch("/echo/1", json={})

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    @pytest.mark.asyncio
    async def test_registered_path_with_other_method_is_404(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.delete("/echo/1")

        assert response.status_code == 404


class TestGatewayErrors:

    @pytest.mark.asyncio
    async def test_validation_error_envelope(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.get("/errors/validation")

        body = response.json()
        assert response.status_code == 400
        assert body["status"] == 400
        assert body["error"] is True
        assert body["data"]["error"] == "Bad input"
        assert body["data"]["details"] == {"field": "title"}

    @pytest.mark.asyncio
    async def test_not_found_error_envelope(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.get("/errors/not-found")

        body = response.json()
        assert response.status_code == 404
        assert body["data"] == {"error": "Task with ID '9' was not found"}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self, api_headers):
        async with build_client(sample_table(), api_headers) as client:
            response = await client.get("/errors/unexpected")

        assert response.status_code == 500
        assert "secret internals" not in response.text
        assert response.json()["error"] is True


class TestBoot:

    def test_bad_route_definition_aborts_create_app(self):
        def broken_route_table():
            table = RouteTable()
            table.get("/tasks/{id", echo)
            return table.freeze()

        with patch("taskledger.main.build_route_table", side_effect=broken_route_table):
            with pytest.raises(RouteDefinitionError):
                create_app()

    def test_create_app_freezes_the_table(self):
        table = RouteTable()
        table.get("/echo/{value}", echo)
        app = create_app(table)

        assert app.state.route_table is table
        assert table.frozen
