"""Tests for the httpx base executor and end-to-end pipelines."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi import FastAPI, Request

from fetch_pipeline.src.middleware import (
    accept_json,
    bearer_token,
    get_json,
    json,
    params,
    request_info,
    trace,
)
from fetch_pipeline.src.pipeline import compose, create_fetch
from fetch_pipeline.src.transport import create_httpx_fetch


def build_echo_app():
    """FastAPI app echoing back what it received."""
    app = FastAPI()

    @app.api_route("/echo", methods=["GET", "POST", "PUT"])
    async def echo(request: Request):
        body = await request.body()
        return {
            "method": request.method,
            "query": dict(request.query_params),
            "headers": {k: v for k, v in request.headers.items()},
            "body": body.decode("utf-8"),
        }

    return app


class TestCreateHttpxFetch:
    """Test cases for create_httpx_fetch with a caller-owned client."""

    @pytest.mark.asyncio
    async def test_maps_options_to_request(self):
        """Test that method, headers and body reach httpx."""
        captured = {}

        def handler(request: httpx.Request):
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["body"] = request.content
            return httpx.Response(200, json={"ok": True})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetch = create_httpx_fetch(client)
            response = await fetch(
                "http://api.test/items",
                {"method": "put", "headers": {"X-Count": 3}, "body": "payload"},
            )

        assert response.status_code == 200
        assert captured["method"] == "PUT"
        assert captured["url"] == "http://api.test/items"
        assert captured["headers"]["X-Count"] == "3"
        assert captured["body"] == b"payload"

    @pytest.mark.asyncio
    async def test_defaults_to_get_without_options(self):
        """Test that a missing options dict sends a bodiless GET."""
        seen = []

        def handler(request: httpx.Request):
            seen.append(request.method)
            return httpx.Response(204)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await create_httpx_fetch(client)("http://api.test/")

        assert seen == ["GET"]
        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_non_2xx_resolves(self):
        """Test that HTTP error statuses are returned, not raised."""
        transport = httpx.MockTransport(lambda request: httpx.Response(500))

        async with httpx.AsyncClient(transport=transport) as client:
            response = await create_httpx_fetch(client)("http://api.test/", {})

        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_raises_unchanged(self):
        """Test that a transport error propagates through the pipeline as-is."""
        error = httpx.ConnectError("connection refused")

        def handler(request):
            raise error

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetch = compose(create_httpx_fetch(client), [request_info(), trace()])
            with pytest.raises(httpx.ConnectError) as exc_info:
                await fetch("http://api.test/", {})

        assert exc_info.value is error
        assert error.request_url == "http://api.test/"
        assert "X-Trace-ID" in error.request_options["headers"]

    @pytest.mark.asyncio
    async def test_passes_timeout_option(self):
        """Test that passthrough options are forwarded as keyword arguments."""
        client = MagicMock()
        client.request = AsyncMock(return_value="response")

        await create_httpx_fetch(client)("http://x", {"timeout": 5, "ignored": 1})

        client.request.assert_awaited_once_with(
            "GET", "http://x", headers={}, timeout=5
        )

    @pytest.mark.asyncio
    async def test_opens_short_lived_client_without_one(self):
        """Test that a client is opened per request when none is supplied."""
        session = MagicMock()
        session.request = AsyncMock(return_value="response")

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value = session
            result = await create_httpx_fetch()("http://x", {"method": "HEAD"})

        assert result == "response"
        mock_client.assert_called_once()
        session.request.assert_awaited_once_with("HEAD", "http://x", headers={})


class TestEndToEnd:
    """Integration tests running pipelines against an in-process FastAPI app."""

    def setup_method(self):
        """Set up test method."""
        self.app = build_echo_app()

    def client(self):
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=self.app), base_url="http://testserver"
        )

    @pytest.mark.asyncio
    async def test_get_with_params_and_auth(self):
        """Test a GET pipeline with query params, auth and JSON decoding."""
        async with self.client() as client:
            fetch = create_fetch(
                accept_json(),
                bearer_token("token-123"),
                params({"page": 2, "q": "books"}),
                get_json(),
                fetch=create_httpx_fetch(client),
            )
            response = await fetch("http://testserver/echo", {})

        echoed = response.json_string
        assert response.status_code == 200
        assert echoed["method"] == "GET"
        assert echoed["query"] == {"page": "2", "q": "books"}
        assert echoed["headers"]["authorization"] == "Bearer token-123"
        assert echoed["headers"]["accept"] == "application/json"
        assert echoed["body"] == ""

    @pytest.mark.asyncio
    async def test_post_with_form_params(self):
        """Test that params switches to a form body for POST."""
        async with self.client() as client:
            fetch = create_fetch(
                params({"a": 1, "b": "two"}), get_json(), fetch=create_httpx_fetch(client)
            )
            response = await fetch("http://testserver/echo", {"method": "POST"})

        echoed = response.json_string
        assert echoed["query"] == {}
        assert echoed["body"] == "a=1&b=two"
        assert echoed["headers"]["content-type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_put_with_json_body_and_trace(self):
        """Test a JSON body and trace header reaching the server."""
        async with self.client() as client:
            fetch = create_fetch(
                trace(),
                json({"name": "widget"}),
                get_json(),
                fetch=create_httpx_fetch(client),
            )
            response = await fetch("http://testserver/echo", {"method": "PUT"})

        echoed = response.json_string
        assert echoed["body"] == '{"name": "widget"}'
        assert echoed["headers"]["content-type"] == "application/json"
        assert echoed["headers"]["x-trace-id"] == response.trace_id
