"""Unit tests for the package-level helpers."""

import pytest

import smart_retry
from smart_retry import create_retry_executor, execute_with_retry
from smart_retry.retry.store import JsonFileFailureStore


@pytest.mark.asyncio
async def test_execute_with_retry(clean_settings, tmp_path, retry_config_factory):
    async def operation():
        return 42

    outcome = await execute_with_retry(operation, retry_config_factory())

    assert outcome.success is True
    assert outcome.data == 42
    assert outcome.attempts == 1


@pytest.mark.asyncio
async def test_execute_with_retry_logs_failure_in_working_directory(
    clean_settings, tmp_path, retry_config_factory
):
    async def operation():
        raise RuntimeError("boom")

    outcome = await execute_with_retry(operation, retry_config_factory(max_retries=2))

    assert outcome.success is False
    assert outcome.attempts == 2
    store = JsonFileFailureStore(tmp_path / "smart-retry-log.json")
    assert [r.id for r in await store.load_all()] == [outcome.failure_id]


def test_create_retry_executor(clean_settings, log_path):
    executor = create_retry_executor(store_path=log_path)

    assert executor.config.max_retries == 3
    assert executor.config.delay == 2000
    assert executor.store.file_path == log_path


def test_public_api():
    for name in smart_retry.__all__:
        assert hasattr(smart_retry, name)
