"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    get_settings: Cached Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    RetrySettings: Retry executor settings class

Example:
    ```python
    from smart_retry.configuration import get_settings

    settings = get_settings()
    delay = settings.retry.delay_ms
    ```
"""

from functools import lru_cache

from smart_retry.configuration.retry import RetrySettings
from smart_retry.configuration.settings import Settings


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.
    Tests that change the environment should call get_settings.cache_clear().

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


__all__ = ["Settings", "RetrySettings", "get_settings"]
