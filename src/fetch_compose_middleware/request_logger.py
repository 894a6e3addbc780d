"""
Request logging middleware
"""
import json
import time

import httpx

from .transport import WrappingTransport
from .types import LogFunc, Middleware, Transport


SUCCESS_FORMAT = "%s %s - %s - %s"
ERROR_FORMAT = "%s %s - error:%s - %s"


def format_elapsed(seconds: float) -> str:
    """
    Render a duration for log output.

    Examples: 850.00µs, 12.34ms, 1.50s
    """
    if seconds < 1e-3:
        return f"{seconds * 1e6:.2f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.2f}ms"
    return f"{seconds:.2f}s"


def status_text(response: httpx.Response) -> str:
    """Return the status line text, e.g. `200 OK`."""
    reason = response.reason_phrase
    if not reason:
        return str(response.status_code)
    return f"{response.status_code} {reason}"


def _quote(message: str) -> str:
    return json.dumps(message, ensure_ascii=False)


class RequestLoggerTransport(WrappingTransport):
    """
    Logs one line per request with method, URL, outcome and elapsed time.

    Output examples:
        POST http://example.com/endpoint?key=value - 200 OK - 12.34ms
        POST http://example.com/endpoint?key=value - error:"network error" - 12.34ms

    The response body is never read. Errors are logged and re-raised.
    """

    def __init__(self, inner: Transport, log: LogFunc) -> None:
        super().__init__(inner)
        self._log = log

    def _log_response(self, request: httpx.Request, response: httpx.Response, start: float) -> None:
        elapsed = format_elapsed(time.perf_counter() - start)
        self._log(SUCCESS_FORMAT, request.method, str(request.url), status_text(response), elapsed)

    def _log_error(self, request: httpx.Request, error: Exception, start: float) -> None:
        elapsed = format_elapsed(time.perf_counter() - start)
        self._log(ERROR_FORMAT, request.method, str(request.url), _quote(str(error)), elapsed)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        start = time.perf_counter()
        try:
            response = self._inner.handle_request(request)
        except Exception as error:
            self._log_error(request, error, start)
            raise
        self._log_response(request, response, start)
        return response

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        start = time.perf_counter()
        try:
            response = await self._inner.handle_async_request(request)
        except Exception as error:
            self._log_error(request, error, start)
            raise
        self._log_response(request, response, start)
        return response


def request_logger(log: LogFunc) -> Middleware:
    """
    Log every request using a printf-style function.

    Any callable with the signature `log(format, *values)` fits, for example
    `logging.getLogger("http").info`. List it before retry() to log one line
    per logical call, after retry() to log every attempt.

    Raises:
        ValueError: If log is None or not callable
    """
    if log is None or not callable(log):
        raise ValueError("request_logger: log function is required")

    def wrapper(inner: Transport) -> RequestLoggerTransport:
        return RequestLoggerTransport(inner, log)

    return wrapper
