"""
Retry transport wrapper for httpx
"""
import asyncio
import logging
import time
from typing import Iterable, Optional

import httpx

from .config import Delay, RetryConfig, StatusCodes, merge_config
from .transport import WrappingTransport
from .types import Middleware, RetryAttempt, RetryCallback, Transport

logger = logging.getLogger(__name__)


def drain_response(response: httpx.Response) -> None:
    """Read and close a response so its connection can be reused."""
    try:
        response.read()
    except Exception as error:
        logger.debug(f"Failed to drain response body: {error}")
    finally:
        response.close()


async def adrain_response(response: httpx.Response) -> None:
    """Read and close an async response so its connection can be reused."""
    try:
        await response.aread()
    except Exception as error:
        logger.debug(f"Failed to drain response body: {error}")
    finally:
        await response.aclose()


class RetryTransport(WrappingTransport):
    """
    Retry transport wrapper for httpx.

    Sends the request up to `attempts` times with a fixed delay in between.
    An attempt is retried when the inner transport raises, or when the
    response status is in the configured set. Retryable responses are drained
    and closed before waiting. After the last attempt its outcome is returned
    as is: the response, or the raised error.

    Cancellation (asyncio.CancelledError, KeyboardInterrupt) is not an
    Exception and always propagates without a retry.

    Example:
        base = httpx.HTTPTransport()
        transport = RetryTransport(base, config=RetryConfig(attempts=3, delay_seconds=0.5))
        client = httpx.Client(transport=transport)
    """

    def __init__(
        self,
        inner: Transport,
        *,
        config: Optional[RetryConfig] = None,
        on_retry: Optional[RetryCallback] = None,
    ) -> None:
        """
        Create a new RetryTransport.

        Args:
            inner: The wrapped transport to delegate requests to
            config: Retry config. Default: DEFAULT_RETRY_CONFIG
            on_retry: Callback before each wait, receives the attempt and delay
        """
        super().__init__(inner)
        self._config = merge_config(config)
        self._on_retry = on_retry

    @property
    def config(self) -> RetryConfig:
        return self._config

    def _should_retry(self, attempt: RetryAttempt) -> bool:
        """Whether another attempt follows the given one."""
        if attempt.number >= self._config.attempts:
            return False
        if attempt.failed:
            return True
        return self._config.is_retryable_status(attempt.status_code)

    def _before_wait(self, request: httpx.Request, attempt: RetryAttempt) -> float:
        delay = self._config.delay_seconds
        outcome = f"error: {attempt.error}" if attempt.failed else f"HTTP {attempt.status_code}"
        logger.debug(
            f"{request.method} {request.url} attempt {attempt.number}/{self._config.attempts} "
            f"failed ({outcome}), retrying in {delay:.3f}s"
        )
        if self._on_retry:
            self._on_retry(attempt, delay)
        return delay

    def _log_exhausted(self, request: httpx.Request, attempt: RetryAttempt) -> None:
        if attempt.number > 1:
            logger.debug(f"{request.method} {request.url} gave up after {attempt.number} attempts")

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Handle a sync HTTP request with retry logic"""
        if not self._config.is_retryable_method(request.method):
            return self._inner.handle_request(request)

        for number in range(1, self._config.attempts + 1):
            try:
                response = self._inner.handle_request(request)
            except Exception as error:
                attempt = RetryAttempt(number=number, error=error)
                if not self._should_retry(attempt):
                    self._log_exhausted(request, attempt)
                    raise
            else:
                attempt = RetryAttempt(number=number, response=response)
                if not self._should_retry(attempt):
                    if self._config.is_retryable_status(response.status_code):
                        self._log_exhausted(request, attempt)
                    return response
                drain_response(response)

            time.sleep(self._before_wait(request, attempt))

        raise RuntimeError("Retry failed")  # pragma: no cover

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an async HTTP request with retry logic"""
        if not self._config.is_retryable_method(request.method):
            return await self._inner.handle_async_request(request)

        for number in range(1, self._config.attempts + 1):
            try:
                response = await self._inner.handle_async_request(request)
            except Exception as error:
                attempt = RetryAttempt(number=number, error=error)
                if not self._should_retry(attempt):
                    self._log_exhausted(request, attempt)
                    raise
            else:
                attempt = RetryAttempt(number=number, response=response)
                if not self._should_retry(attempt):
                    if self._config.is_retryable_status(response.status_code):
                        self._log_exhausted(request, attempt)
                    return response
                await adrain_response(response)

            await asyncio.sleep(self._before_wait(request, attempt))

        raise RuntimeError("Retry failed")  # pragma: no cover


def retry(
    attempts: int,
    delay: Delay,
    *status_codes: StatusCodes,
    methods: Optional[Iterable[str]] = None,
    on_retry: Optional[RetryCallback] = None,
) -> Middleware:
    """
    Retry a failed request a given number of times with a fixed delay in between.

    Errors raised by the inner transport are always retried. Responses are
    retried only when their status code is one of `status_codes`. Codes may be
    given one by one or as sets, e.g. `RETRYABLE_STATUS_CODES | {520}`.

    Args:
        attempts: Total number of attempts, at least 1
        delay: Wait between attempts, in seconds or as a timedelta
        *status_codes: HTTP status codes, or sets of them, that count as failures
        methods: Restrict retrying to these methods. Default: all methods
        on_retry: Callback before each wait

    Returns:
        Middleware wrapping the next transport

    Raises:
        ValueError: If attempts is less than 1 or delay is negative

    Example:
        transport = compose_sync_transport(
            None,
            bearer_token(token),
            retry(3, 0.05, RETRYABLE_STATUS_CODES),
        )
    """
    config = RetryConfig.create(attempts, delay, status_codes, methods)

    def wrapper(inner: Transport) -> RetryTransport:
        return RetryTransport(inner, config=config, on_retry=on_retry)

    return wrapper
