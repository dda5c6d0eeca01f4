"""Shared fixtures for smart_retry tests."""

from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest

from smart_retry.configuration import get_settings
from smart_retry.retry import (
    FailureRecord,
    InMemoryFailureStore,
    JsonFileFailureStore,
    RequestContext,
    RetryConfig,
)


class FakeHttpError(Exception):
    """Error carrying a request context, as an HTTP adapter would raise."""

    def __init__(self, message: str = "request failed", **context: Any):
        super().__init__(message)
        self.request_context = RequestContext(**context)


@pytest.fixture
def http_error_factory():
    """Factory for errors implementing HasRequestContext."""

    def _factory(message: str = "request failed", **context: Any) -> FakeHttpError:
        return FakeHttpError(message, **context)

    return _factory


@pytest.fixture
def retry_config_factory():
    """Factory for creating RetryConfig instances with no real delay."""

    def _factory(
        max_retries: int = 3,
        delay: float = 0,
        backoff: str = "exponential",
        **kwargs: Any,
    ) -> RetryConfig:
        return RetryConfig(
            max_retries=max_retries, delay=delay, backoff=backoff, **kwargs
        )

    return _factory


@pytest.fixture
def failure_record_factory():
    """Factory for creating FailureRecord instances."""

    def _factory(**overrides: Any) -> FailureRecord:
        values: Dict[str, Any] = {
            "url": "https://api.example.com/orders",
            "method": "POST",
            "error": "Service Unavailable",
            "status_code": 503,
            "attempts": 3,
            "total_duration_ms": 6000,
        }
        values.update(overrides)
        return FailureRecord(**values)

    return _factory


@pytest.fixture
def log_path(tmp_path):
    """Location of a JSON failure log inside the test's temp dir."""
    return tmp_path / "logs" / "smart-retry-log.json"


@pytest.fixture
def json_store(log_path):
    """Create a fresh JsonFileFailureStore in a temp directory."""
    return JsonFileFailureStore(log_path)


@pytest.fixture
def memory_store():
    """Create a fresh InMemoryFailureStore."""
    return InMemoryFailureStore()


@pytest.fixture
def mock_sleep(monkeypatch):
    """Replace the executor's backoff sleep with an AsyncMock."""
    mock = AsyncMock()
    monkeypatch.setattr("smart_retry.retry.executor.sleep", mock)
    return mock


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "SMART_RETRY_MAX_RETRIES",
        "SMART_RETRY_DELAY_MS",
        "SMART_RETRY_BACKOFF",
        "SMART_RETRY_STORE_BACKEND",
        "SMART_RETRY_LOG_PATH",
        "LOG_LEVEL",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
