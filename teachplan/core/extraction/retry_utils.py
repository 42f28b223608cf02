"""
Retry utilities for handling API throttling and transient failures.

Exponential backoff for LLM calls, bounded by an overall timeout so
one slow chunk cannot stall the fan-in.
"""
import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Optional, Set, TypeVar

from .llm_config import LLM_SETTINGS

logger = logging.getLogger(__name__)

T = TypeVar("T")


# Error names worth retrying (Bedrock service + botocore transport)
RETRYABLE_ERRORS = {
    "ThrottlingException",
    "ServiceUnavailableException",
    "InternalServerException",
    "ModelTimeoutException",
    "ReadTimeoutError",
    "ConnectTimeoutError",
}

_THROTTLE_INDICATORS = ("throttl", "rate limit", "too many requests", "capacity", "quota")


def is_retryable_error(error: Exception, retryable_types: Optional[Set[str]] = None) -> bool:
    """
    Check if an error is retryable.

    Args:
        error: The exception to check
        retryable_types: Error type names to retry (defaults to RETRYABLE_ERRORS)

    Returns:
        True if error should be retried
    """
    if retryable_types is None:
        retryable_types = RETRYABLE_ERRORS

    if type(error).__name__ in retryable_types:
        return True

    # Adapters wrap provider errors, so the message is often all we have
    error_str = str(error).lower()
    if any(indicator in error_str for indicator in _THROTTLE_INDICATORS):
        return True

    # boto3 ClientError
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        error_code = response.get("Error", {}).get("Code", "")
        if error_code in retryable_types:
            return True

    return False


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args,
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retryable_check: Optional[Callable[[Exception], bool]] = None,
    **kwargs: Any,
) -> T:
    """
    Await an async function with exponential backoff retry.

    Args:
        func: Async function to execute
        *args: Positional arguments for func
        max_retries: Maximum number of retry attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries
        exponential_base: Base for exponential backoff calculation
        jitter: Add random jitter to prevent thundering herd
        retryable_check: Custom function to check if error is retryable
        **kwargs: Keyword arguments for func

    Returns:
        Result of func

    Raises:
        Last exception if all retries exhausted or the error is not retryable
    """
    if retryable_check is None:
        retryable_check = is_retryable_error

    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if attempt >= max_retries or not retryable_check(e):
                logger.error(f"Giving up after {attempt + 1} attempts: {e}")
                raise

            delay = min(base_delay * (exponential_base ** attempt), max_delay)
            if jitter:
                delay = delay * (1 + random.random() * 0.5)

            logger.warning(
                f"Retry attempt {attempt + 1}/{max_retries} after {delay:.1f}s: {e}"
            )
            await asyncio.sleep(delay)


async def with_timeout(awaitable: Awaitable[T], timeout: Optional[float]) -> T:
    """Await with an upper bound; None disables the bound.

    Raises:
        asyncio.TimeoutError: When the bound is exceeded
    """
    if timeout is None:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout)


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter

    @classmethod
    def for_bedrock(cls) -> "RetryConfig":
        """Standard retry config for AWS Bedrock API calls."""
        return cls(
            max_retries=LLM_SETTINGS.max_retries,
            base_delay=LLM_SETTINGS.base_delay,
            max_delay=LLM_SETTINGS.max_delay,
            exponential_base=2.0,
            jitter=True,
        )

    @classmethod
    def disabled(cls) -> "RetryConfig":
        """Single attempt, no backoff."""
        return cls(max_retries=0, base_delay=0.0, max_delay=0.0, jitter=False)
