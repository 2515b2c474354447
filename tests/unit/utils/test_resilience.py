"""Unit tests for resilience utilities."""

from unittest.mock import AsyncMock

import pytest

from weather_cache.utils import resilience
from weather_cache.utils.resilience import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitOpenError,
    CircuitState,
    with_retries,
)


@pytest.mark.asyncio
class TestWithRetries:
    """Test with_retries retry functionality."""

    async def test_retry_success_first_attempt(self):
        mock_func = AsyncMock(return_value="success")

        result = await with_retries(mock_func, attempts=3)

        assert result == "success"
        assert mock_func.call_count == 1

    async def test_retry_transient_failure_then_success(self):
        call_count = 0

        async def func_with_failures():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise Exception(f"Temporary error {call_count}")
            return "success"

        result = await with_retries(func_with_failures, attempts=3, backoff_ms=[1, 1, 1])

        assert result == "success"
        assert call_count == 3

    async def test_retry_max_attempts_exceeded(self):
        mock_func = AsyncMock(side_effect=Exception("Persistent error"))

        with pytest.raises(Exception, match="Persistent error"):
            await with_retries(mock_func, attempts=3, backoff_ms=[1, 1])

        assert mock_func.call_count == 3

    async def test_backoff_sequence(self, monkeypatch):
        delays = []

        async def fake_sleep(seconds):
            delays.append(seconds)

        monkeypatch.setattr(resilience.asyncio, "sleep", fake_sleep)
        mock_func = AsyncMock(side_effect=[Exception("a"), Exception("b"), Exception("c"), "ok"])

        assert await with_retries(mock_func, attempts=4, backoff_ms=[50, 100]) == "ok"
        assert delays == [0.05, 0.1, 0.1]

    async def test_non_retryable_error_propagates_immediately(self):
        mock_func = AsyncMock(side_effect=KeyError("nope"))

        with pytest.raises(KeyError):
            await with_retries(mock_func, attempts=3, backoff_ms=[1], retry_on=(ValueError,))

        assert mock_func.call_count == 1

    @pytest.mark.parametrize("attempts", [0, -1])
    async def test_attempts_below_one_rejected(self, attempts):
        mock_func = AsyncMock(return_value="never")

        with pytest.raises(ValueError, match="attempts"):
            await with_retries(mock_func, attempts=attempts)

        mock_func.assert_not_called()


@pytest.mark.asyncio
class TestCircuitBreaker:
    """Test CircuitBreaker functionality."""

    async def test_circuit_initially_closed(self):
        breaker = CircuitBreaker(CircuitBreakerConfig(failure_threshold=3))
        mock_func = AsyncMock(return_value="result")

        assert await breaker.run(mock_func) == "result"
        assert breaker.state == CircuitState.CLOSED

    async def test_circuit_opens_after_threshold(self):
        breaker = CircuitBreaker(CircuitBreakerConfig(failure_threshold=3, reset_timeout_seconds=10))
        failing_func = AsyncMock(side_effect=Exception("fail"))

        for _ in range(3):
            with pytest.raises(Exception, match="fail"):
                await breaker.run(failing_func)

        with pytest.raises(CircuitOpenError, match="circuit_open"):
            await breaker.run(failing_func)
        assert failing_func.call_count == 3

    async def test_half_open_after_timeout(self, monkeypatch):
        now = {"t": 100.0}
        monkeypatch.setattr(resilience.time, "monotonic", lambda: now["t"])
        breaker = CircuitBreaker(CircuitBreakerConfig(failure_threshold=1, reset_timeout_seconds=5))

        with pytest.raises(Exception):
            await breaker.run(AsyncMock(side_effect=Exception("fail")))
        assert breaker.state == CircuitState.OPEN

        now["t"] += 5
        assert await breaker.run(AsyncMock(return_value="ok")) == "ok"
        assert breaker.state == CircuitState.CLOSED

    async def test_half_open_failure_reopens(self, monkeypatch):
        now = {"t": 100.0}
        monkeypatch.setattr(resilience.time, "monotonic", lambda: now["t"])
        breaker = CircuitBreaker(CircuitBreakerConfig(failure_threshold=2, reset_timeout_seconds=5))
        failing = AsyncMock(side_effect=Exception("fail"))

        for _ in range(2):
            with pytest.raises(Exception):
                await breaker.run(failing)
        now["t"] += 5
        with pytest.raises(Exception, match="fail"):
            await breaker.run(failing)

        assert breaker.state == CircuitState.OPEN
        with pytest.raises(CircuitOpenError):
            await breaker.run(failing)
