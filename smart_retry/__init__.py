"""smart_retry - retry async operations and log the ones that never succeed.

Example:
    from smart_retry import RetryConfig, execute_with_retry

    outcome = await execute_with_retry(fetch_orders, RetryConfig(max_retries=5))
"""

import os
from typing import TypeVar

from smart_retry.errors import FailureStoreError, SmartRetryError
from smart_retry.integrations import HttpRequestError, HttpRetryClient
from smart_retry.retry import (
    BackoffStrategy,
    FailureRecord,
    FailureStore,
    HasRequestContext,
    InMemoryFailureStore,
    JsonFileFailureStore,
    RequestContext,
    RetryConfig,
    RetryExecutor,
    RetryOutcome,
    calculate_delay,
    create_failure_store,
    default_should_retry,
)
from smart_retry.retry.executor import Operation

T = TypeVar("T")


async def execute_with_retry(
    operation: Operation[T], config: RetryConfig | None = None
) -> RetryOutcome[T]:
    """Run an operation once through a fresh executor.

    Args:
        operation: Zero-argument coroutine function performing the work
        config: Optional RetryConfig, defaults come from settings

    Returns:
        RetryOutcome of the call
    """
    return await RetryExecutor(config).execute(operation)


def create_retry_executor(
    config: RetryConfig | None = None,
    store_path: str | os.PathLike | None = None,
) -> RetryExecutor:
    """Create an executor, optionally logging failures to store_path."""
    return RetryExecutor(config, store_path=store_path)


__all__ = [
    "BackoffStrategy",
    "FailureRecord",
    "FailureStore",
    "FailureStoreError",
    "HasRequestContext",
    "HttpRequestError",
    "HttpRetryClient",
    "InMemoryFailureStore",
    "JsonFileFailureStore",
    "RequestContext",
    "RetryConfig",
    "RetryExecutor",
    "RetryOutcome",
    "SmartRetryError",
    "calculate_delay",
    "create_failure_store",
    "create_retry_executor",
    "default_should_retry",
    "execute_with_retry",
]
