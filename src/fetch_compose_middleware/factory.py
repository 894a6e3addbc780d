"""
Factory functions for composing middleware chains and clients
"""
from typing import Any, Optional

import httpx

from .types import Middleware, Transport


def _compose(base: Transport, middlewares: tuple[Middleware, ...]) -> Transport:
    # Wrap innermost first so the first middleware ends up outermost
    transport = base
    for middleware in reversed(middlewares):
        transport = middleware(transport)
    return transport


def compose_transport(
    base: Optional[httpx.AsyncBaseTransport],
    *middlewares: Middleware,
) -> httpx.AsyncBaseTransport:
    """
    Compose middlewares around a base transport.

    The first middleware is the outermost layer: it sees the request first
    and the response last.

    Args:
        base: The base transport to wrap. None creates an httpx.AsyncHTTPTransport
        *middlewares: Middlewares to apply, outermost first

    Returns:
        Composed transport, or base unchanged when no middlewares are given

    Example:
        transport = compose_transport(
            httpx.AsyncHTTPTransport(proxy="http://proxy:8080"),
            request_logger(logging.getLogger("http").info),
            retry(3, 0.5, RETRYABLE_STATUS_CODES),
        )
        client = httpx.AsyncClient(transport=transport)
    """
    if base is None:
        base = httpx.AsyncHTTPTransport()
    return _compose(base, middlewares)


def compose_sync_transport(
    base: Optional[httpx.BaseTransport],
    *middlewares: Middleware,
) -> httpx.BaseTransport:
    """
    Compose middlewares around a sync base transport.

    Args:
        base: The base transport to wrap. None creates an httpx.HTTPTransport
        *middlewares: Middlewares to apply, outermost first

    Returns:
        Composed transport with all middlewares applied
    """
    if base is None:
        base = httpx.HTTPTransport()
    return _compose(base, middlewares)


def default_transport(*middlewares: Middleware) -> httpx.AsyncBaseTransport:
    """Compose middlewares around a new httpx.AsyncHTTPTransport."""
    return compose_transport(None, *middlewares)


def default_sync_transport(*middlewares: Middleware) -> httpx.BaseTransport:
    """Compose middlewares around a new httpx.HTTPTransport."""
    return compose_sync_transport(None, *middlewares)


def create_client(
    *middlewares: Middleware,
    base: Optional[httpx.AsyncBaseTransport] = None,
    base_url: Optional[str] = None,
    timeout: float = 5.0,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """
    Create an async HTTP client whose transport runs through the middlewares.

    Args:
        *middlewares: Middlewares to apply, outermost first
        base: Base transport. Default: httpx.AsyncHTTPTransport
        base_url: Base URL for requests
        timeout: Request timeout in seconds. Default: 5.0
        **client_kwargs: Additional arguments for httpx.AsyncClient

    Returns:
        Async HTTP client

    Example:
        client = create_client(
            bearer_token(token),
            retry(3, 0.5, RETRYABLE_STATUS_CODES),
            base_url="https://api.example.com",
        )
        response = await client.get("/data")
    """
    return httpx.AsyncClient(
        transport=compose_transport(base, *middlewares),
        base_url=base_url or "",
        timeout=timeout,
        **client_kwargs,
    )


def create_sync_client(
    *middlewares: Middleware,
    base: Optional[httpx.BaseTransport] = None,
    base_url: Optional[str] = None,
    timeout: float = 5.0,
    **client_kwargs: Any,
) -> httpx.Client:
    """
    Create a sync HTTP client whose transport runs through the middlewares.

    Args:
        *middlewares: Middlewares to apply, outermost first
        base: Base transport. Default: httpx.HTTPTransport
        base_url: Base URL for requests
        timeout: Request timeout in seconds. Default: 5.0
        **client_kwargs: Additional arguments for httpx.Client

    Returns:
        Sync HTTP client
    """
    return httpx.Client(
        transport=compose_sync_transport(base, *middlewares),
        base_url=base_url or "",
        timeout=timeout,
        **client_kwargs,
    )
