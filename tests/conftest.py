"""
Shared fixtures for fetch_compose_middleware tests.
"""
import pytest

import httpx


class TrackingStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body that records whether it was consumed and closed."""

    def __init__(self, body: bytes = b"", fail_with: Exception = None):
        self.body = body
        self.fail_with = fail_with
        self.consumed = False
        self.closed = False

    def __iter__(self):
        self.consumed = True
        if self.fail_with:
            raise self.fail_with
        yield self.body

    async def __aiter__(self):
        self.consumed = True
        if self.fail_with:
            raise self.fail_with
        yield self.body

    def close(self):
        self.closed = True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def make_stream():
    """Factory for TrackingStream response bodies."""
    return TrackingStream


@pytest.fixture
def post_request():
    """POST request used across the middleware tests."""
    return httpx.Request("POST", "http://example.com/foo?bar=yes")


@pytest.fixture
def get_request():
    """GET request used across the middleware tests."""
    return httpx.Request("GET", "https://example.com/test")
