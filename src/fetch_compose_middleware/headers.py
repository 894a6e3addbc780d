"""
Header-setting middlewares: static headers, bearer/basic auth, user agent
"""
import base64
from typing import Union

import httpx
from pydantic import SecretStr

from .transport import WrappingTransport
from .types import Middleware, Transport


Credential = Union[str, SecretStr]


def _secret_value(value: Credential) -> str:
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


class HeaderTransport(WrappingTransport):
    """
    Sets one header to a fixed value on every request.

    Example:
        base = httpx.HTTPTransport()
        transport = HeaderTransport(base, "X-Api-Version", "2")
    """

    def __init__(
        self,
        inner: Transport,
        key: str,
        value: Credential,
        *,
        sensitive: bool = False,
    ) -> None:
        super().__init__(inner)
        self._key = key
        # Credentials stay wrapped so they never show up in a repr
        if sensitive or isinstance(value, SecretStr):
            self._value: Credential = SecretStr(_secret_value(value))
        else:
            self._value = value

    @property
    def key(self) -> str:
        return self._key

    def prepare_request(self, request: httpx.Request) -> None:
        request.headers[self._key] = _secret_value(self._value)

    def __repr__(self) -> str:
        return f"HeaderTransport(key={self._key!r}, value={self._value!r})"


def header(key: str, value: Credential, *, sensitive: bool = False) -> Middleware:
    """
    Set a header field on every request to the given value.

    Args:
        key: Header name
        value: Header value
        sensitive: Mask the value in reprs

    Returns:
        Middleware wrapping the next transport
    """

    def wrapper(inner: Transport) -> HeaderTransport:
        return HeaderTransport(inner, key, value, sensitive=sensitive)

    return wrapper


def bearer_token(token: Credential) -> Middleware:
    """Set the Authorization header on every request to `Bearer <token>`."""
    return header("Authorization", f"Bearer {_secret_value(token)}", sensitive=True)


def basic_auth(username: str, password: Credential) -> Middleware:
    """
    Set the Authorization header on every request to `Basic <base64(username:password)>`.

    The credentials are encoded once, when the middleware is created.
    """
    encoded = _base64_encode(f"{username}:{_secret_value(password)}")
    return header("Authorization", f"Basic {encoded}", sensitive=True)


def user_agent(agent: str) -> Middleware:
    """Set the User-Agent header on every request."""
    return header("User-Agent", agent)
