"""Client adapters that run their calls through a RetryExecutor."""

from smart_retry.integrations.http import HttpRequestError, HttpRetryClient

__all__ = ["HttpRequestError", "HttpRetryClient"]
