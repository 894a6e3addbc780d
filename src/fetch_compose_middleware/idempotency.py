"""
Idempotency-Key middleware for non-idempotent requests
"""
import logging
import secrets
from typing import Iterable

import httpx

from .transport import WrappingTransport
from .types import (
    IDEMPOTENCY_KEY_HEADER,
    NON_IDEMPOTENT_METHODS,
    Middleware,
    Transport,
)

logger = logging.getLogger(__name__)


def generate_idempotency_key() -> str:
    """Return 128 bits of cryptographically secure randomness, hex-encoded."""
    return secrets.token_hex(16)


class IdempotencyKeyTransport(WrappingTransport):
    """
    Sets a freshly generated Idempotency-Key header on POST and PATCH requests.

    A new key is generated every time a request passes through, so placement
    relative to RetryTransport matters: wrapped outside the retry transport,
    all attempts of one call share a key; wrapped inside, every attempt gets
    its own key.
    """

    def __init__(
        self,
        inner: Transport,
        *,
        header_name: str = IDEMPOTENCY_KEY_HEADER,
        methods: Iterable[str] = NON_IDEMPOTENT_METHODS,
    ) -> None:
        super().__init__(inner)
        self._header_name = header_name
        self._methods = frozenset(m.upper() for m in methods)

    def prepare_request(self, request: httpx.Request) -> None:
        if request.method.upper() not in self._methods:
            return
        key = generate_idempotency_key()
        request.headers[self._header_name] = key
        logger.debug(f"Set {self._header_name}={key} for {request.method} {request.url}")


def idempotency_key(
    *,
    header_name: str = IDEMPOTENCY_KEY_HEADER,
    methods: Iterable[str] = NON_IDEMPOTENT_METHODS,
) -> Middleware:
    """
    Generate a random key for POST and PATCH requests and set it as a header.

    To reuse one key across retried attempts, list this middleware before
    retry() when composing, so it wraps the retry transport.

    Args:
        header_name: Header to set. Default: Idempotency-Key
        methods: Methods that get a key. Default: POST, PATCH

    Returns:
        Middleware wrapping the next transport
    """

    def wrapper(inner: Transport) -> IdempotencyKeyTransport:
        return IdempotencyKeyTransport(inner, header_name=header_name, methods=methods)

    return wrapper
