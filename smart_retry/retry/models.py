"""Failure record and outcome models.

FailureRecord is the persisted entity, serialized with the camelCase keys
of the on-disk log format. RetryOutcome is what execute() hands back.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FailureRecord(BaseModel):
    """Durable record of one execute() call that gave up.

    Records are created once, when the retry loop stops without success,
    and never modified afterwards.

    Attributes:
        id: Unique identifier (UUID4)
        url: URL of the failed call, "unknown" when it cannot be determined
        method: HTTP method of the failed call, "GET" by default
        headers: Request headers captured from the error, if any
        body: Request body captured from the error, if any
        error: Human-readable error message
        status_code: HTTP status of the last failure, if it carried one
        attempts: Number of attempts made before giving up
        total_duration_ms: Wall-clock duration of the whole execute() call
        timestamp: ISO 8601 creation time (UTC)
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    url: str = "unknown"
    method: str = "GET"
    headers: Optional[Dict[str, str]] = None
    body: Optional[Any] = None
    error: str
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    attempts: int = Field(ge=1)
    total_duration_ms: int = Field(ge=0, alias="totalDuration")
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO 8601 timestamp (UTC)",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "5f0c7b8e-2f55-4a51-9d0e-6b8f3f0f1c2a",
                "url": "https://api.example.com/orders",
                "method": "POST",
                "error": "Service Unavailable",
                "statusCode": 503,
                "attempts": 3,
                "totalDuration": 6042,
                "timestamp": "2025-01-08T12:00:00+00:00",
            }
        },
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk form (camelCase keys, absent fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class RetryOutcome(Generic[T]):
    """Result of RetryExecutor.execute().

    Attributes:
        success: True if some attempt returned a value
        attempts: Number of attempts made
        total_duration_ms: Wall-clock duration of the execute() call
        data: Value returned by the successful attempt
        error: Exception raised by the last failed attempt
        failure_id: Id of the FailureRecord written for this call, if any
        persistence_error: Error raised while writing the FailureRecord, if any
    """

    success: bool
    attempts: int
    total_duration_ms: int
    data: Optional[T] = None
    error: Optional[BaseException] = None
    failure_id: Optional[str] = None
    persistence_error: Optional[BaseException] = None

    @classmethod
    def succeeded(
        cls, data: T, attempts: int, total_duration_ms: int
    ) -> "RetryOutcome[T]":
        """Create a successful outcome."""
        return cls(
            success=True,
            data=data,
            attempts=attempts,
            total_duration_ms=total_duration_ms,
        )

    @classmethod
    def failed(
        cls,
        error: Optional[BaseException],
        attempts: int,
        total_duration_ms: int,
        failure_id: Optional[str] = None,
        persistence_error: Optional[BaseException] = None,
    ) -> "RetryOutcome[T]":
        """Create a failed outcome.

        Args:
            error: Last error raised by the operation
            attempts: Number of attempts made
            total_duration_ms: Wall-clock duration of the execute() call
            failure_id: Id of the persisted FailureRecord
            persistence_error: Store error, if the record could not be written

        Returns:
            RetryOutcome with success=False
        """
        return cls(
            success=False,
            error=error,
            attempts=attempts,
            total_duration_ms=total_duration_ms,
            failure_id=failure_id,
            persistence_error=persistence_error,
        )
