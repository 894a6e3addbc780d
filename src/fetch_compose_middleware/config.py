"""
Configuration for the retry transport
"""
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Optional, Union

from .types import RETRYABLE_STATUS_CODES


Delay = Union[float, int, timedelta]

StatusCodes = Union[int, Iterable[int]]


def to_seconds(delay: Delay) -> float:
    """
    Normalize a delay to seconds.

    Args:
        delay: Seconds as a number, or a timedelta

    Returns:
        Delay in seconds
    """
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


def flatten_status_codes(status_codes: Iterable[StatusCodes]) -> frozenset[int]:
    """
    Collect status codes given one by one or as sets.

    Both `(502, 503)` and `(RETRYABLE_STATUS_CODES, {520})` are accepted.

    Args:
        status_codes: Status codes, or iterables of status codes

    Returns:
        Flat set of status codes
    """
    codes: set[int] = set()
    for item in status_codes:
        if isinstance(item, int):
            codes.add(int(item))
        else:
            codes.update(int(code) for code in item)
    return frozenset(codes)


@dataclass
class RetryConfig:
    """Retry configuration"""

    attempts: int = 3
    """Total number of attempts, including the first one. Default: 3"""

    delay_seconds: float = 0.0
    """Fixed wait between consecutive attempts (seconds). Default: 0"""

    retry_on_status: frozenset[int] = field(default_factory=frozenset)
    """HTTP status codes that should trigger retry. Default: none"""

    retry_methods: Optional[frozenset[str]] = None
    """HTTP methods to retry. None retries every method"""

    def __post_init__(self) -> None:
        if isinstance(self.attempts, bool) or not isinstance(self.attempts, int):
            raise ValueError(f"attempts must be an integer, got {self.attempts!r}")
        if self.attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {self.attempts}")

        self.delay_seconds = to_seconds(self.delay_seconds)
        if self.delay_seconds < 0:
            raise ValueError(f"delay must not be negative, got {self.delay_seconds}")

        self.retry_on_status = frozenset(int(code) for code in self.retry_on_status)
        if self.retry_methods is not None:
            self.retry_methods = frozenset(m.upper() for m in self.retry_methods)

    @classmethod
    def create(
        cls,
        attempts: int,
        delay: Delay,
        status_codes: Iterable[StatusCodes] = (),
        methods: Optional[Iterable[str]] = None,
    ) -> "RetryConfig":
        """Build a config from loosely typed arguments."""
        return cls(
            attempts=attempts,
            delay_seconds=delay,
            retry_on_status=flatten_status_codes(status_codes),
            retry_methods=frozenset(methods) if methods is not None else None,
        )

    def is_retryable_status(self, status: int) -> bool:
        return status in self.retry_on_status

    def is_retryable_method(self, method: str) -> bool:
        if self.retry_methods is None:
            return True
        return method.upper() in self.retry_methods


# Default retry configuration
DEFAULT_RETRY_CONFIG = RetryConfig(
    attempts=3,
    delay_seconds=1.0,
    retry_on_status=RETRYABLE_STATUS_CODES,
)


def merge_config(config: Optional[RetryConfig] = None) -> RetryConfig:
    """
    Merge configuration with defaults.

    Args:
        config: User-provided configuration

    Returns:
        Complete configuration with defaults
    """
    if config is None:
        return DEFAULT_RETRY_CONFIG
    return config
