"""
Tests for the header-setting middlewares.
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import SecretStr

from fetch_compose_middleware import (
    HeaderTransport,
    basic_auth,
    bearer_token,
    compose_sync_transport,
    header,
    user_agent,
)


def b64(s):
    return base64.b64encode(s.encode()).decode()


def send(middleware, request=None):
    """Send a request through one middleware and return what the base saw."""
    seen = {}

    def handler(req):
        seen["headers"] = req.headers
        return httpx.Response(200)

    transport = compose_sync_transport(httpx.MockTransport(handler), middleware)
    transport.handle_request(request or httpx.Request("POST", "http://example.com/foo?bar=yes"))
    return seen["headers"]


class TestHeader:
    """Tests for header()."""

    def test_sets_header(self):
        """Should set the header on every request."""
        assert send(header("X-Foo", "bar"))["X-Foo"] == "bar"

    def test_replaces_existing_value(self):
        """Should replace a value already on the request."""
        request = httpx.Request("GET", "https://example.com/", headers={"X-Foo": "old"})
        headers = send(header("X-Foo", "new"), request)
        assert headers.get_list("X-Foo") == ["new"]

    def test_passes_inner_errors_through(self):
        """Should not swallow errors from the inner transport."""
        inner = MagicMock(spec=httpx.HTTPTransport)
        inner.handle_request.side_effect = httpx.ConnectError("network error")
        transport = HeaderTransport(inner, "X-Foo", "bar")

        with pytest.raises(httpx.ConnectError):
            transport.handle_request(httpx.Request("GET", "https://example.com/"))

    @pytest.mark.asyncio
    async def test_sets_header_async(self):
        """Should set the header on the async path."""
        inner = AsyncMock(spec=httpx.AsyncHTTPTransport)
        inner.handle_async_request.return_value = httpx.Response(200)
        transport = header("X-Foo", "bar")(inner)
        request = httpx.Request("GET", "https://example.com/")

        await transport.handle_async_request(request)

        assert request.headers["X-Foo"] == "bar"
        inner.handle_async_request.assert_awaited_once_with(request)


class TestBearerToken:
    """Tests for bearer_token()."""

    def test_sets_authorization(self):
        """Should set `Authorization: Bearer <token>`."""
        assert send(bearer_token("abc123"))["Authorization"] == "Bearer abc123"

    def test_accepts_secret_str(self):
        """Should accept a pydantic SecretStr token."""
        assert send(bearer_token(SecretStr("abc123")))["Authorization"] == "Bearer abc123"

    def test_repr_masks_token(self):
        """Should not expose the token in the transport repr."""
        transport = bearer_token("abc123")(MagicMock(spec=httpx.HTTPTransport))
        assert "abc123" not in repr(transport)
        assert "Authorization" in repr(transport)


class TestBasicAuth:
    """Tests for basic_auth()."""

    def test_sets_authorization(self):
        """Should set `Authorization: Basic <base64(username:password)>`."""
        headers = send(basic_auth("username", "password"))
        assert headers["Authorization"] == "Basic dXNlcm5hbWU6cGFzc3dvcmQ="

    def test_encodes_utf8(self):
        """Should encode non-ASCII credentials as UTF-8."""
        headers = send(basic_auth("jürgen", SecretStr("päss")))
        assert headers["Authorization"] == f"Basic {b64('jürgen:päss')}"

    def test_repr_masks_credentials(self):
        """Should not expose the encoded credentials in the transport repr."""
        transport = basic_auth("username", "password")(MagicMock(spec=httpx.HTTPTransport))
        assert "dXNlcm5hbWU6cGFzc3dvcmQ=" not in repr(transport)


class TestUserAgent:
    """Tests for user_agent()."""

    def test_sets_user_agent(self):
        """Should set the User-Agent header."""
        agent = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
        assert send(user_agent(agent))["User-Agent"] == agent

    def test_repr_shows_plain_values(self):
        """Should show non-sensitive values in the repr."""
        transport = user_agent("my-app/1.0")(MagicMock(spec=httpx.HTTPTransport))
        assert "my-app/1.0" in repr(transport)
