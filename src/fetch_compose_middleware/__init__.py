"""
Composable middleware for httpx transports: headers, auth, idempotency keys,
request logging and fixed-delay retries.
"""
from .types import (
    Middleware,
    LogFunc,
    RetryAttempt,
    RetryCallback,
    RETRYABLE_STATUS_CODES,
    NON_IDEMPOTENT_METHODS,
    IDEMPOTENCY_KEY_HEADER,
)
from .config import (
    RetryConfig,
    DEFAULT_RETRY_CONFIG,
    merge_config,
    flatten_status_codes,
    to_seconds,
)
from .transport import WrappingTransport
from .headers import (
    HeaderTransport,
    header,
    bearer_token,
    basic_auth,
    user_agent,
)
from .idempotency import (
    IdempotencyKeyTransport,
    idempotency_key,
    generate_idempotency_key,
)
from .request_logger import (
    RequestLoggerTransport,
    request_logger,
    format_elapsed,
)
from .retry import (
    RetryTransport,
    retry,
    drain_response,
    adrain_response,
)
from .factory import (
    compose_transport,
    compose_sync_transport,
    default_transport,
    default_sync_transport,
    create_client,
    create_sync_client,
)


__all__ = [
    # Types
    "Middleware",
    "LogFunc",
    "RetryAttempt",
    "RetryCallback",
    "RETRYABLE_STATUS_CODES",
    "NON_IDEMPOTENT_METHODS",
    "IDEMPOTENCY_KEY_HEADER",
    # Config
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "merge_config",
    "flatten_status_codes",
    "to_seconds",
    # Transports
    "WrappingTransport",
    "HeaderTransport",
    "IdempotencyKeyTransport",
    "RequestLoggerTransport",
    "RetryTransport",
    # Middlewares
    "header",
    "bearer_token",
    "basic_auth",
    "user_agent",
    "idempotency_key",
    "request_logger",
    "retry",
    # Helpers
    "generate_idempotency_key",
    "format_elapsed",
    "drain_response",
    "adrain_response",
    # Factory functions
    "compose_transport",
    "compose_sync_transport",
    "default_transport",
    "default_sync_transport",
    "create_client",
    "create_sync_client",
]

__version__ = "1.0.0"
