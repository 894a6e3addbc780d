"""
Base transport wrapper shared by every middleware
"""
import httpx

from .types import Transport


class WrappingTransport(httpx.BaseTransport, httpx.AsyncBaseTransport):
    """
    Transport that owns exactly one inner transport and delegates to it.

    Implements both the sync and async httpx transport interfaces, so a single
    chain can back either an httpx.Client or an httpx.AsyncClient. Subclasses
    that only touch the outgoing request override prepare_request; subclasses
    with their own control flow override handle_request and
    handle_async_request.
    """

    def __init__(self, inner: Transport) -> None:
        self._inner = inner

    @property
    def inner(self) -> Transport:
        return self._inner

    def prepare_request(self, request: httpx.Request) -> None:
        """Hook to mutate the request before it is delegated."""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.prepare_request(request)
        return self._inner.handle_request(request)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.prepare_request(request)
        return await self._inner.handle_async_request(request)

    def close(self) -> None:
        """Close the inner transport"""
        self._inner.close()

    async def aclose(self) -> None:
        """Close the inner transport"""
        await self._inner.aclose()
