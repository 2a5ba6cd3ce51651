"""Unit tests for retry utilities."""

from unittest.mock import AsyncMock, Mock

import pytest

from book_search.config.schema import LoadingConfig
from book_search.utils.retry import chapter_load_retry, with_retry


class TestWithRetry:
    """Tests for the with_retry factory."""

    def test_success_first_try(self) -> None:
        """Test successful call on first try."""
        mock_func = Mock(return_value="immediate success")

        @with_retry(max_attempts=3, min_wait=0, max_wait=0)
        def test_func() -> str:
            return mock_func()

        assert test_func() == "immediate success"
        assert mock_func.call_count == 1

    def test_retries_os_errors(self) -> None:
        """Test that transient I/O errors are retried."""
        mock_func = Mock(side_effect=[OSError("busy"), "success"])

        @with_retry(max_attempts=3, min_wait=0, max_wait=0)
        def test_func() -> str:
            return mock_func()

        assert test_func() == "success"
        assert mock_func.call_count == 2

    def test_max_attempts_exceeded(self) -> None:
        """Test that max attempts are respected and the error re-raised."""
        mock_func = Mock(side_effect=TimeoutError("slow disk"))

        @with_retry(max_attempts=4, min_wait=0, max_wait=0)
        def test_func() -> str:
            return mock_func()

        with pytest.raises(TimeoutError):
            test_func()

        assert mock_func.call_count == 4

    def test_non_retriable_error_not_retried(self) -> None:
        """Test that other errors are not retried."""
        mock_func = Mock(side_effect=ValueError("Bad value"))

        @with_retry(max_attempts=3, min_wait=0, max_wait=0)
        def test_func() -> str:
            return mock_func()

        with pytest.raises(ValueError):
            test_func()

        assert mock_func.call_count == 1

    def test_custom_exceptions(self) -> None:
        """Test retry on custom exception types."""
        mock_func = Mock(side_effect=[KeyError("Missing key"), "success"])

        @with_retry(min_wait=0, max_wait=0, retry_on=(KeyError,))
        def test_func() -> str:
            return mock_func()

        assert test_func() == "success"
        assert mock_func.call_count == 2

    @pytest.mark.asyncio
    async def test_coroutine_function(self) -> None:
        """Test that coroutine functions are retried too."""
        mock_func = AsyncMock(side_effect=[OSError("busy"), "content"])

        @with_retry(max_attempts=2, min_wait=0, max_wait=0)
        async def read() -> str:
            return await mock_func()

        assert await read() == "content"
        assert mock_func.await_count == 2


class TestChapterLoadRetry:
    """Tests for chapter_load_retry."""

    def test_default_config_does_not_retry(self) -> None:
        """Test that the default loading config makes a single attempt."""
        mock_func = Mock(side_effect=OSError("gone"))
        decorated = chapter_load_retry()(mock_func)

        with pytest.raises(OSError):
            decorated()

        assert mock_func.call_count == 1

    def test_configured_attempts(self) -> None:
        """Test that the loading config sets the attempt count."""
        mock_func = Mock(side_effect=OSError("gone"))
        config = LoadingConfig(retry_attempts=3, retry_min_wait=0, retry_max_wait=0)
        decorated = chapter_load_retry(config)(mock_func)

        with pytest.raises(OSError):
            decorated()

        assert mock_func.call_count == 3
