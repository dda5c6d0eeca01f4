"""Error classification for the retry executor.

Decides whether a failure is worth another attempt and extracts the request
details recorded in a FailureRecord. Errors describe themselves through the
HasRequestContext protocol; errors from known libraries (httpx, OS-level
socket errors) are adapted to a RequestContext here instead of probing
arbitrary attributes.

Key Functions:
- get_request_context(): error -> RequestContext | None
- default_should_retry(): the default retryability predicate
- extract_failure_fields(): error -> FailureRecord field values

Usage:
    from smart_retry.retry.classifiers import default_should_retry

    try:
        await operation()
    except Exception as exc:
        if default_should_retry(exc):
            ...
"""

import asyncio
import errno
import json
import socket
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx

# Low-level network failures that are always worth retrying
NETWORK_ERROR_CODES = frozenset({"ECONNREFUSED", "ETIMEDOUT", "ENOTFOUND", "ECONNRESET"})

RETRYABLE_STATUS_CODES = frozenset({408, 429})

SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)
REDACTED = "***REDACTED***"

_ERRNO_CODES = {
    errno.ECONNREFUSED: "ECONNREFUSED",
    errno.ETIMEDOUT: "ETIMEDOUT",
    errno.ECONNRESET: "ECONNRESET",
}


@dataclass(frozen=True)
class RequestContext:
    """Request details attached to a failure.

    Attributes:
        url: Full URL of the request
        method: HTTP method
        path: Low-level request path, used when the URL is unknown
        headers: Request headers
        body: Request body (decoded JSON or text)
        status_code: HTTP status of the response, if one was received
        status_text: HTTP reason phrase of the response
        code: Low-level error code (e.g. ECONNREFUSED)
    """

    url: Optional[str] = None
    method: Optional[str] = None
    path: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    body: Optional[Any] = None
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    code: Optional[str] = None


@runtime_checkable
class HasRequestContext(Protocol):
    """Capability of errors that know which request they belong to.

    Example:
        class ApiError(Exception):
            def __init__(self, status: int):
                super().__init__(f"HTTP {status}")
                self.request_context = RequestContext(status_code=status)
    """

    request_context: RequestContext


def _redact_headers(headers: httpx.Headers) -> Dict[str, str]:
    return {
        key: REDACTED if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def _request_body(request: httpx.Request) -> Optional[Any]:
    try:
        content = request.content
    except httpx.RequestNotRead:
        return None
    if not content:
        return None
    text = content.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def _os_error_code(exc: BaseException) -> Optional[str]:
    """Map an OS-level exception to a network error code."""
    if isinstance(exc, socket.gaierror):
        return "ENOTFOUND"
    if isinstance(exc, ConnectionRefusedError):
        return "ECONNREFUSED"
    if isinstance(exc, ConnectionResetError):
        return "ECONNRESET"
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return "ETIMEDOUT"
    if isinstance(exc, OSError) and exc.errno in _ERRNO_CODES:
        return _ERRNO_CODES[exc.errno]
    return None


def _cause_error_code(exc: BaseException) -> Optional[str]:
    """Search the exception chain for an OS-level network error."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        code = _os_error_code(current)
        if code:
            return code
        current = current.__cause__ or current.__context__
    return None


def _httpx_error_code(exc: httpx.RequestError) -> Optional[str]:
    if isinstance(exc, httpx.TimeoutException):
        return "ETIMEDOUT"
    if isinstance(exc, httpx.ConnectError):
        return _cause_error_code(exc) or "ECONNREFUSED"
    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError)):
        return _cause_error_code(exc) or "ECONNRESET"
    return _cause_error_code(exc)


def _httpx_request_context(request: httpx.Request, **extra: Any) -> RequestContext:
    return RequestContext(
        url=str(request.url),
        method=request.method,
        path=request.url.raw_path.decode("ascii", errors="replace"),
        headers=_redact_headers(request.headers),
        body=_request_body(request),
        **extra,
    )


def response_request_context(response: httpx.Response) -> RequestContext:
    """Build a RequestContext from an httpx response with an error status."""
    extra = {
        "status_code": response.status_code,
        "status_text": response.reason_phrase or None,
    }
    try:
        request = response.request
    except RuntimeError:
        return RequestContext(**extra)
    return _httpx_request_context(request, **extra)


def get_request_context(error: Any) -> Optional[RequestContext]:
    """Adapt an error to a RequestContext.

    Handles, in order:
    - errors implementing HasRequestContext
    - httpx.HTTPStatusError (response received with an error status)
    - httpx.RequestError (transport failure, no response)
    - OSError / TimeoutError raised by sockets

    Args:
        error: Any exception (or None)

    Returns:
        RequestContext, or None if nothing is known about the request
    """
    if error is None:
        return None

    if isinstance(error, HasRequestContext):
        return error.request_context

    if isinstance(error, httpx.HTTPStatusError):
        return response_request_context(error.response)

    if isinstance(error, httpx.RequestError):
        code = _httpx_error_code(error)
        try:
            request = error.request
        except RuntimeError:
            # Raised by httpx when the error was created without a request
            return RequestContext(code=code)
        return _httpx_request_context(request, code=code)

    if isinstance(error, BaseException):
        code = _os_error_code(error)
        if code:
            return RequestContext(code=code)

    return None


def get_error_code(error: Any) -> Optional[str]:
    """Return the low-level error code of an error, if it has one."""
    context = get_request_context(error)
    return context.code if context else None


def get_status_code(error: Any) -> Optional[int]:
    """Return the HTTP status carried by an error, if any."""
    context = get_request_context(error)
    return context.status_code if context else None


def get_error_message(error: Any) -> str:
    """Human-readable message for a failure.

    Prefers the HTTP reason phrase, then the exception message, then the
    representation of the error.
    """
    context = get_request_context(error)
    if context and context.status_text:
        return context.status_text
    message = str(error)
    if message:
        return message
    return repr(error)


def default_should_retry(error: Any) -> bool:
    """Default retryability predicate.

    Classification:
    - None: not retryable
    - ECONNREFUSED, ETIMEDOUT, ENOTFOUND, ECONNRESET: retryable
    - HTTP 408, 429 and 5xx: retryable
    - Any other HTTP status: not retryable
    - No status at all: retryable (unknown cause, assume transient)

    Args:
        error: Exception raised by the operation

    Returns:
        True if the operation should be attempted again
    """
    if error is None:
        return False

    context = get_request_context(error)
    if context is None:
        return True

    if context.code in NETWORK_ERROR_CODES:
        return True

    status = context.status_code
    if status is None:
        return True

    return status in RETRYABLE_STATUS_CODES or 500 <= status < 600


def extract_failure_fields(error: Any) -> Dict[str, Any]:
    """Extract the FailureRecord fields describing the failed request.

    Args:
        error: Last exception raised by the operation

    Returns:
        Dictionary with url, method, headers, body, error and status_code
    """
    context = get_request_context(error) or RequestContext()

    return {
        "url": context.url or context.path or "unknown",
        "method": context.method.upper() if context.method else "GET",
        "headers": context.headers,
        "body": context.body,
        "error": get_error_message(error),
        "status_code": context.status_code,
    }
