"""Retry executor configuration.

This module defines the immutable policy an executor runs with.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from smart_retry.configuration import RetrySettings
from smart_retry.retry.backoff import BackoffStrategy
from smart_retry.retry.classifiers import default_should_retry

RetryPredicate = Callable[[Any], bool]
RetryObserver = Callable[[int, Any], None]


def _noop_on_retry(attempt: int, error: Any) -> None:
    return None


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_retries: Total number of attempts, including the first one
        delay: Base delay between attempts in milliseconds
        backoff: How the delay grows (exponential, linear or none)
        should_retry: Predicate deciding whether a failure is worth another attempt
        on_retry: Called with (attempt, error) before each backoff sleep.
            Exceptions raised here are not caught and abort execute().

    Example:
        # Default configuration: 3 attempts, 2s exponential backoff
        config = RetryConfig()

        # Custom configuration
        config = RetryConfig(
            max_retries=5,
            delay=500,
            backoff="linear",
            on_retry=lambda attempt, error: print(attempt, error),
        )
    """

    max_retries: int = 3
    delay: float = 2000
    backoff: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    should_retry: RetryPredicate = field(default=default_should_retry)
    on_retry: RetryObserver = field(default=_noop_on_retry)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError("max_retries must be an integer")
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must be >= 0")
        try:
            backoff = BackoffStrategy(self.backoff)
        except ValueError:
            raise ValueError(
                f"backoff must be one of: {', '.join(s.value for s in BackoffStrategy)}"
            ) from None
        object.__setattr__(self, "backoff", backoff)

    @classmethod
    def from_settings(cls, settings: RetrySettings, **overrides: Any) -> "RetryConfig":
        """Build a config from environment-backed settings.

        Args:
            settings: RetrySettings instance
            **overrides: Field values that take precedence over settings

        Returns:
            RetryConfig populated from settings
        """
        values: dict[str, Any] = {
            "max_retries": settings.max_retries,
            "delay": settings.delay_ms,
            "backoff": settings.backoff,
        }
        values.update(overrides)
        return cls(**values)
