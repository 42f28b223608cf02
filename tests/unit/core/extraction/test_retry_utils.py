"""Tests for retry_utils module."""
import asyncio
import pytest
from teachplan.core.extraction.retry_utils import (
    RETRYABLE_ERRORS,
    RetryConfig,
    is_retryable_error,
    retry_with_backoff,
    with_timeout,
)


class TestIsRetryableError:
    """Tests for is_retryable_error function."""

    def test_throttling_exception_is_retryable(self):
        class ThrottlingException(Exception):
            pass

        assert is_retryable_error(ThrottlingException("Rate exceeded")) is True

    def test_throttle_message_is_retryable(self):
        assert is_retryable_error(Exception("Request throttled due to high load")) is True

    def test_generic_error_not_retryable(self):
        assert is_retryable_error(ValueError("Invalid input")) is False

    def test_client_error_code_is_retryable(self):
        """boto3 ClientError carries the code in its response dict."""
        error = Exception("An error occurred")
        error.response = {"Error": {"Code": "ServiceUnavailableException"}}
        assert is_retryable_error(error) is True

    def test_custom_retryable_types(self):
        class CustomError(Exception):
            pass

        assert is_retryable_error(CustomError("x"), {"CustomError"}) is True
        assert is_retryable_error(CustomError("x"), {"OtherError"}) is False

    def test_defaults_cover_bedrock_throttling(self):
        assert "ThrottlingException" in RETRYABLE_ERRORS


class TestRetryWithBackoff:
    """Tests for retry_with_backoff function."""

    @pytest.mark.asyncio
    async def test_succeeds_without_retry(self):
        calls = []

        async def func(value):
            calls.append(value)
            return value * 2

        assert await retry_with_backoff(func, 21) == 42
        assert calls == [21]

    @pytest.mark.asyncio
    async def test_retries_retryable_errors(self):
        attempts = []

        async def func():
            attempts.append(1)
            if len(attempts) < 3:
                raise Exception("throttled")
            return "ok"

        result = await retry_with_backoff(func, max_retries=3, base_delay=0.0, jitter=False)

        assert result == "ok"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        attempts = []

        async def func():
            attempts.append(1)
            raise Exception("throttled")

        with pytest.raises(Exception, match="throttled"):
            await retry_with_backoff(func, max_retries=2, base_delay=0.0, jitter=False)
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_non_retryable_raises_immediately(self):
        attempts = []

        async def func():
            attempts.append(1)
            raise ValueError("bad request")

        with pytest.raises(ValueError):
            await retry_with_backoff(func, max_retries=3, base_delay=0.0)
        assert len(attempts) == 1


class TestWithTimeout:
    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def quick():
            return "done"

        assert await with_timeout(quick(), 1.0) == "done"

    @pytest.mark.asyncio
    async def test_raises_on_timeout(self):
        with pytest.raises(asyncio.TimeoutError):
            await with_timeout(asyncio.sleep(5), 0.01)

    @pytest.mark.asyncio
    async def test_none_disables_bound(self):
        async def quick():
            return 1

        assert await with_timeout(quick(), None) == 1


class TestRetryConfig:
    def test_for_bedrock(self):
        config = RetryConfig.for_bedrock()
        assert config.max_retries == 3
        assert config.max_delay == 30.0

    def test_disabled(self):
        assert RetryConfig.disabled().max_retries == 0
