"""Retry executor.

Runs an async operation under a bounded retry loop and records operations
that ultimately fail in a FailureStore.
"""

import os
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from smart_retry.configuration import get_settings
from smart_retry.errors import FailureStoreError
from smart_retry.logging import get_module_logger
from smart_retry.retry.backoff import calculate_delay, sleep
from smart_retry.retry.classifiers import extract_failure_fields
from smart_retry.retry.config import RetryConfig
from smart_retry.retry.factory import create_failure_store
from smart_retry.retry.models import FailureRecord, RetryOutcome
from smart_retry.retry.store import FailureStore

logger = get_module_logger()

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class RetryExecutor:
    """Executes async operations with retries and backoff.

    Attempts are strictly sequential. A failure is retried while the
    predicate accepts it and attempts remain; otherwise the call gives up,
    writes one FailureRecord and returns a failed RetryOutcome. Operation
    errors are never raised from execute().

    Attributes:
        config: RetryConfig controlling attempts, backoff and classification
        store: FailureStore receiving records of failed calls
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        store: FailureStore | None = None,
        store_path: str | os.PathLike | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            config: Optional RetryConfig. If not provided, built from settings.
            store: Optional FailureStore. Takes precedence over store_path.
            store_path: Optional JSON log location for the default file store.
        """
        self._config = config or RetryConfig.from_settings(get_settings().retry)
        if store is None:
            store = create_failure_store(
                backend="file" if store_path else None, file_path=store_path
            )
        self._store = store
        self.log = logger.bind(
            max_retries=self._config.max_retries,
            backoff=self._config.backoff.value,
        )

    @property
    def config(self) -> RetryConfig:
        return self._config

    @property
    def store(self) -> FailureStore:
        return self._store

    @property
    def log_file_path(self) -> Optional[Path]:
        """Location of the JSON failure log, or None for stores kept elsewhere."""
        return getattr(self._store, "file_path", None)

    async def execute(self, operation: Operation[T]) -> RetryOutcome[T]:
        """Run an operation, retrying failures according to the config.

        Args:
            operation: Zero-argument coroutine function performing the work

        Returns:
            RetryOutcome with attempts and total duration populated. On
            failure, error holds the last exception and failure_id the id of
            the persisted FailureRecord.

        Example:
            outcome = await executor.execute(lambda: client.get(url))
            if outcome.success:
                response = outcome.data
        """
        config = self._config
        start = time.monotonic()
        attempts = 0
        last_error: Optional[Exception] = None

        while attempts < config.max_retries:
            attempts += 1

            try:
                data = await operation()
            except Exception as e:
                last_error = e
            else:
                return RetryOutcome.succeeded(data, attempts, _elapsed_ms(start))

            if not config.should_retry(last_error):
                self.log.info(
                    "retry_not_retryable",
                    attempt=attempts,
                    error=str(last_error),
                    error_type=type(last_error).__name__,
                )
                break

            if attempts < config.max_retries:
                delay = calculate_delay(config.delay, attempts, config.backoff)
                self.log.warning(
                    "retry_attempt_failed",
                    attempt=attempts,
                    next_delay_ms=delay,
                    error=str(last_error),
                    error_type=type(last_error).__name__,
                )
                config.on_retry(attempts, last_error)
                await sleep(delay)

        total_duration_ms = _elapsed_ms(start)
        return await self._give_up(last_error, attempts, total_duration_ms)

    async def _give_up(
        self, error: Optional[Exception], attempts: int, total_duration_ms: int
    ) -> RetryOutcome[Any]:
        """Persist a FailureRecord for a call that failed terminally."""
        record = FailureRecord(
            **extract_failure_fields(error),
            attempts=attempts,
            total_duration_ms=total_duration_ms,
        )

        self.log.error(
            "retry_failed_terminal",
            record_id=record.id,
            url=record.url,
            method=record.method,
            status_code=record.status_code,
            attempts=attempts,
            total_duration_ms=total_duration_ms,
            error=record.error,
        )

        try:
            await self._store.save(record)
        except (OSError, FailureStoreError) as e:
            self.log.error(
                "failure_record_persist_failed",
                record_id=record.id,
                error=str(e),
                exc_info=True,
            )
            return RetryOutcome.failed(
                error, attempts, total_duration_ms, persistence_error=e
            )

        return RetryOutcome.failed(
            error, attempts, total_duration_ms, failure_id=record.id
        )

    async def get_failures(self) -> List[FailureRecord]:
        """Return every recorded failure, oldest first."""
        return await self._store.load_all()

    async def get_failure(self, record_id: str) -> Optional[FailureRecord]:
        """Return a recorded failure by id, or None."""
        return await self._store.find_by_id(record_id)

    async def remove_failure(self, record_id: str) -> bool:
        """Delete a recorded failure; returns False if the id is unknown."""
        return await self._store.remove(record_id)

    async def clear_failures(self) -> None:
        await self._store.clear()

    async def count_failures(self) -> int:
        return await self._store.count()
