"""Retry decorators and utilities using tenacity."""

from collections.abc import Callable
from typing import Any, TypeVar

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from book_search.config.schema import LoadingConfig

F = TypeVar("F", bound=Callable[..., Any])

# Errors worth retrying when reading chapter files
TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    OSError,
    TimeoutError,
    ConnectionError,
)


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 4.0,
    retry_on: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
) -> Callable[[F], F]:
    """Create a customized retry decorator.

    Works on plain functions and on coroutine functions alike; tenacity
    awaits between attempts for the latter.

    Args:
        max_attempts: Maximum number of attempts (1 disables retrying).
        min_wait: Minimum wait time between retries (seconds).
        max_wait: Maximum wait time between retries (seconds).
        retry_on: Tuple of exception types to retry on.

    Returns:
        A retry decorator with the specified configuration.

    Usage:
        @with_retry(max_attempts=5, min_wait=0.1)
        async def read_chapter(path: Path) -> str:
            return path.read_text()
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )


def chapter_load_retry(config: LoadingConfig | None = None) -> Callable[[F], F]:
    """Retry decorator for chapter reads, driven by loading config.

    Args:
        config: Loading configuration. Defaults are used if None.

    Returns:
        A retry decorator for transient I/O errors.
    """
    config = config or LoadingConfig()
    return with_retry(
        max_attempts=config.retry_attempts,
        min_wait=config.retry_min_wait,
        max_wait=config.retry_max_wait,
    )
