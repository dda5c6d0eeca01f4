"""smart_retry configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from smart_retry.configuration.retry import RetrySettings


class Settings(BaseSettings):
    """smart_retry configuration settings.

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ENVIRONMENT: Deployment environment name; 'production' switches
            logging to JSON output

    Example:
        ```python
        from smart_retry.configuration import get_settings

        settings = get_settings()

        if settings.is_production:
            # Production-specific logic...

        max_retries = settings.retry.max_retries
        ```
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    retry: RetrySettings

    @property
    def is_production(self) -> bool:
        """Check if the library is running in production.

        Returns:
            True if ENVIRONMENT is 'production', False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        if "retry" not in kwargs:
            kwargs["retry"] = RetrySettings()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
