"""Retry execution with a durable log of terminal failures.

Architecture:
- RetryConfig: Immutable retry policy (attempts, delay, backoff, predicate, observer)
- RetryExecutor: Runs an async operation under the retry loop
- RetryOutcome: Structured result returned by execute()
- FailureRecord: Persisted description of a call that gave up
- FailureStore: Storage interface with JSON file and in-memory implementations

Usage:
    from smart_retry.retry import RetryConfig, RetryExecutor

    executor = RetryExecutor(RetryConfig(max_retries=5, delay=500))
    outcome = await executor.execute(fetch_orders)

    if not outcome.success:
        print(outcome.error, outcome.failure_id)
"""

from smart_retry.retry.backoff import BackoffStrategy, calculate_delay
from smart_retry.retry.classifiers import (
    HasRequestContext,
    RequestContext,
    default_should_retry,
    extract_failure_fields,
    get_request_context,
)
from smart_retry.retry.config import RetryConfig
from smart_retry.retry.executor import RetryExecutor
from smart_retry.retry.factory import create_failure_store
from smart_retry.retry.models import FailureRecord, RetryOutcome
from smart_retry.retry.store import (
    FailureStore,
    InMemoryFailureStore,
    JsonFileFailureStore,
)

__all__ = [
    # Models
    "FailureRecord",
    "RetryOutcome",
    # Configuration
    "RetryConfig",
    "BackoffStrategy",
    "calculate_delay",
    # Classification
    "HasRequestContext",
    "RequestContext",
    "default_should_retry",
    "extract_failure_fields",
    "get_request_context",
    # Store
    "FailureStore",
    "JsonFileFailureStore",
    "InMemoryFailureStore",
    "create_failure_store",
    # Executor
    "RetryExecutor",
]
