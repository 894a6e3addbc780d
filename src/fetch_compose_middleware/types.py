"""
Type definitions for fetch_compose_middleware
"""
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

import httpx


Transport = Union[httpx.BaseTransport, httpx.AsyncBaseTransport]

# A middleware wraps the next transport and returns a new one
Middleware = Callable[[Any], Any]

# printf-style log function, e.g. logging.Logger.info
LogFunc = Callable[..., None]


# HTTP status codes that are considered temporary and can be retried
RETRYABLE_STATUS_CODES = frozenset(
    int(code)
    for code in (
        httpx.codes.REQUEST_TIMEOUT,
        httpx.codes.TOO_EARLY,
        httpx.codes.TOO_MANY_REQUESTS,
        httpx.codes.INTERNAL_SERVER_ERROR,
        httpx.codes.BAD_GATEWAY,
        httpx.codes.SERVICE_UNAVAILABLE,
        httpx.codes.GATEWAY_TIMEOUT,
    )
)

# Non-idempotent methods that get an Idempotency-Key
NON_IDEMPOTENT_METHODS = ("POST", "PATCH")

IDEMPOTENCY_KEY_HEADER = "Idempotency-Key"


@dataclass
class RetryAttempt:
    """Outcome of a single attempt made by the retry transport"""

    number: int
    """Attempt number (1-indexed)"""

    response: Optional[httpx.Response] = None
    """Response returned by the inner transport, if any"""

    error: Optional[Exception] = None
    """Error raised by the inner transport, if any"""

    timestamp: float = field(default_factory=time.monotonic)
    """Monotonic time at which the attempt completed"""

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def status_code(self) -> Optional[int]:
        if self.response is None:
            return None
        return self.response.status_code


# Called before waiting for the next attempt: (attempt, delay_seconds)
RetryCallback = Callable[[RetryAttempt, float], None]
