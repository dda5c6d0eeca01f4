"""Unit tests for environment-backed settings."""

import pytest
from pydantic import ValidationError

from smart_retry.configuration import RetrySettings, Settings, get_settings


class TestRetrySettings:
    """Tests for RetrySettings."""

    def test_defaults(self, clean_settings):
        settings = RetrySettings()

        assert settings.max_retries == 3
        assert settings.delay_ms == 2000
        assert settings.backoff == "exponential"
        assert settings.store_backend == "file"
        assert settings.log_path == ""

    def test_reads_environment(self, clean_settings):
        clean_settings.setenv("SMART_RETRY_MAX_RETRIES", "7")
        clean_settings.setenv("SMART_RETRY_DELAY_MS", "150")
        clean_settings.setenv("SMART_RETRY_BACKOFF", "LINEAR")

        settings = RetrySettings()

        assert settings.max_retries == 7
        assert settings.delay_ms == 150
        assert settings.backoff == "linear"

    def test_reads_env_file(self, clean_settings, tmp_path):
        (tmp_path / ".env").write_text("SMART_RETRY_DELAY_MS=42\n", encoding="utf-8")

        assert RetrySettings().delay_ms == 42

    @pytest.mark.parametrize(
        "name, value",
        [
            ("SMART_RETRY_MAX_RETRIES", "0"),
            ("SMART_RETRY_DELAY_MS", "-1"),
            ("SMART_RETRY_BACKOFF", "fibonacci"),
            ("SMART_RETRY_STORE_BACKEND", "redis"),
        ],
    )
    def test_rejects_invalid_values(self, clean_settings, name, value):
        clean_settings.setenv(name, value)

        with pytest.raises(ValidationError):
            RetrySettings()


class TestSettings:
    """Tests for the Settings aggregator."""

    def test_builds_retry_settings(self, clean_settings):
        settings = Settings()

        assert isinstance(settings.retry, RetrySettings)
        assert settings.LOG_LEVEL == "INFO"
        assert settings.is_production is False

    def test_is_production(self, clean_settings):
        clean_settings.setenv("ENVIRONMENT", "Production")

        assert Settings().is_production is True

    def test_accepts_retry_override(self, clean_settings):
        retry = RetrySettings(SMART_RETRY_MAX_RETRIES=9)

        assert Settings(retry=retry).retry.max_retries == 9

    def test_get_settings_is_cached(self, clean_settings):
        assert get_settings() is get_settings()
