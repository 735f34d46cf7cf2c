"""Retry policy shared by all outbound calls."""

from typing import Callable, TypeVar

from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from marketlens.errors import UpstreamError

T = TypeVar("T")


def _is_retryable(exc: BaseException) -> bool:
    """Transport failures and 5xx are retried; 4xx are not."""
    if not isinstance(exc, UpstreamError):
        return False
    return exc.upstream_status is None or exc.upstream_status >= 500


def call_with_retry(fn: Callable[[], T], *, attempts: int = 1, backoff_max: float = 8.0) -> T:
    """Run fn under an exponential-backoff policy. attempts=1 means a single try."""
    retrying = Retrying(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=1, max=backoff_max),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    )
    return retrying(fn)
