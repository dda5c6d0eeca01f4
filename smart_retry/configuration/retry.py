"""Retry executor settings."""

from pydantic import Field, field_validator

from smart_retry.configuration.base import LibrarySettings

BACKOFF_CHOICES = ("exponential", "linear", "none")
STORE_BACKENDS = ("file", "memory")


class RetrySettings(LibrarySettings):
    """Environment-backed defaults for the retry executor.

    Values here are only defaults: an explicit RetryConfig passed to the
    executor always wins.

    Environment Variables:
        SMART_RETRY_MAX_RETRIES: Total attempts including the first (default: 3)
        SMART_RETRY_DELAY_MS: Base backoff delay in milliseconds (default: 2000)
        SMART_RETRY_BACKOFF: 'exponential', 'linear' or 'none'
        SMART_RETRY_STORE_BACKEND: 'file' or 'memory' (default: file)
        SMART_RETRY_LOG_PATH: Failure log location (default: ./smart-retry-log.json)

    Example:
        ```python
        from smart_retry.configuration import get_settings

        settings = get_settings()
        config = RetryConfig.from_settings(settings.retry)
        ```
    """

    max_retries: int = Field(
        default=3,
        alias="SMART_RETRY_MAX_RETRIES",
        description="Total attempts including the first",
    )
    delay_ms: int = Field(
        default=2000,
        alias="SMART_RETRY_DELAY_MS",
        description="Base delay between attempts (milliseconds)",
    )
    backoff: str = Field(
        default="exponential",
        alias="SMART_RETRY_BACKOFF",
        description="Backoff strategy: 'exponential', 'linear' or 'none'",
    )
    store_backend: str = Field(
        default="file",
        alias="SMART_RETRY_STORE_BACKEND",
        description="Failure store backend: 'file' or 'memory'",
    )
    log_path: str = Field(
        default="",
        alias="SMART_RETRY_LOG_PATH",
        description="Path of the JSON failure log; empty means the working directory",
    )

    @field_validator("max_retries")
    @classmethod
    def _check_max_retries(cls, value: int) -> int:
        if value < 1:
            raise ValueError("SMART_RETRY_MAX_RETRIES must be at least 1")
        return value

    @field_validator("delay_ms")
    @classmethod
    def _check_delay(cls, value: int) -> int:
        if value < 0:
            raise ValueError("SMART_RETRY_DELAY_MS must be >= 0")
        return value

    @field_validator("backoff")
    @classmethod
    def _check_backoff(cls, value: str) -> str:
        value = value.lower()
        if value not in BACKOFF_CHOICES:
            raise ValueError(
                f"SMART_RETRY_BACKOFF must be one of {', '.join(BACKOFF_CHOICES)}"
            )
        return value

    @field_validator("store_backend")
    @classmethod
    def _check_store_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in STORE_BACKENDS:
            raise ValueError(
                f"SMART_RETRY_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}"
            )
        return value
