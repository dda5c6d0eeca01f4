"""HTTP client that retries requests through a RetryExecutor.

Each request is wrapped in a zero-argument coroutine and handed to the
executor. Responses with a 4xx/5xx status are raised as HttpRequestError so
the default predicate can classify them; transport errors from httpx are
classified directly. When the executor gives up, the last error is raised to
the caller and a FailureRecord has already been written.

Usage:
    from smart_retry.integrations.http import HttpRetryClient

    async with HttpRetryClient(RetryConfig(max_retries=5)) as client:
        response = await client.post(
            "https://api.example.com/orders",
            json={"sku": "A-100", "quantity": 2},
        )
        data = response.json()
"""

import os
from typing import Any, Optional

import httpx

from smart_retry.logging import get_module_logger
from smart_retry.retry.classifiers import RequestContext, response_request_context
from smart_retry.retry.config import RetryConfig
from smart_retry.retry.executor import RetryExecutor

logger = get_module_logger()


class HttpRequestError(Exception):
    """An HTTP response with an error status.

    Attributes:
        response: The httpx response that carried the error status
        request_context: Request details used for classification and logging
    """

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"HTTP {response.status_code}: {response.reason_phrase}")
        self.response = response
        self.request_context: RequestContext = response_request_context(response)

    @property
    def status_code(self) -> int:
        return self.response.status_code


class HttpRetryClient:
    """Async HTTP client whose requests are retried on failure.

    Attributes:
        executor: RetryExecutor running every request
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        store_path: str | os.PathLike | None = None,
        client: httpx.AsyncClient | None = None,
        executor: RetryExecutor | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional RetryConfig for the internal executor
            store_path: Optional failure log location for the internal executor
            client: Optional httpx.AsyncClient. If not provided, one is created
                and closed by aclose().
            executor: Optional pre-built executor; config and store_path are
                ignored when given
        """
        self._executor = executor or RetryExecutor(config, store_path=store_path)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    @property
    def executor(self) -> RetryExecutor:
        return self._executor

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, retrying according to the executor's config.

        Args:
            method: HTTP method
            url: Request URL
            **kwargs: Passed through to httpx.AsyncClient.request

        Returns:
            The successful response

        Raises:
            HttpRequestError: The last response had an error status
            httpx.RequestError: The last attempt failed at the transport level
        """

        async def send() -> httpx.Response:
            response = await self._client.request(method, url, **kwargs)
            if response.is_error:
                await response.aread()
                raise HttpRequestError(response)
            return response

        outcome = await self._executor.execute(send)
        if not outcome.success:
            logger.warning(
                "http_request_failed",
                method=method.upper(),
                url=url,
                attempts=outcome.attempts,
                failure_id=outcome.failure_id,
            )
            raise outcome.error  # type: ignore[misc]
        return outcome.data  # type: ignore[return-value]

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, json: Optional[Any] = None, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, json=json, **kwargs)

    async def put(self, url: str, json: Optional[Any] = None, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, json=json, **kwargs)

    async def patch(self, url: str, json: Optional[Any] = None, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, json=json, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpRetryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
