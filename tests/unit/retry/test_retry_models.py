"""Unit tests for failure record and outcome models."""

import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from smart_retry.retry.models import FailureRecord, RetryOutcome


class TestFailureRecord:
    """Tests for FailureRecord."""

    def test_generates_id_and_timestamp(self, failure_record_factory):
        record = failure_record_factory()

        assert uuid.UUID(record.id).version == 4
        assert datetime.fromisoformat(record.timestamp).tzinfo is not None

    def test_ids_are_unique(self, failure_record_factory):
        ids = {failure_record_factory().id for _ in range(50)}
        assert len(ids) == 50

    def test_defaults(self):
        record = FailureRecord(error="boom", attempts=1, total_duration_ms=0)

        assert record.url == "unknown"
        assert record.method == "GET"
        assert record.headers is None
        assert record.body is None
        assert record.status_code is None

    def test_to_dict_uses_wire_names(self, failure_record_factory):
        record = failure_record_factory(headers={"x-trace": "abc"}, body={"sku": "A-1"})

        data = record.to_dict()

        assert data["statusCode"] == 503
        assert data["totalDuration"] == 6000
        assert data["headers"] == {"x-trace": "abc"}
        assert data["body"] == {"sku": "A-1"}
        assert "status_code" not in data
        assert "total_duration_ms" not in data

    def test_to_dict_omits_absent_optional_fields(self):
        data = FailureRecord(error="boom", attempts=1, total_duration_ms=12).to_dict()

        assert set(data) == {
            "id",
            "url",
            "method",
            "error",
            "attempts",
            "totalDuration",
            "timestamp",
        }

    def test_validate_wire_form(self, failure_record_factory):
        record = failure_record_factory()

        assert FailureRecord.model_validate(record.to_dict()) == record

    def test_attempts_must_be_positive(self):
        with pytest.raises(ValidationError):
            FailureRecord(error="boom", attempts=0, total_duration_ms=0)

    def test_record_is_frozen(self, failure_record_factory):
        record = failure_record_factory()

        with pytest.raises(ValidationError):
            record.attempts = 5


class TestRetryOutcome:
    """Tests for RetryOutcome constructors."""

    def test_succeeded(self):
        outcome = RetryOutcome.succeeded({"ok": True}, attempts=2, total_duration_ms=40)

        assert outcome.success is True
        assert outcome.data == {"ok": True}
        assert outcome.error is None
        assert outcome.attempts == 2
        assert outcome.total_duration_ms == 40
        assert outcome.failure_id is None

    def test_failed(self):
        error = RuntimeError("boom")

        outcome = RetryOutcome.failed(error, attempts=3, total_duration_ms=90, failure_id="abc")

        assert outcome.success is False
        assert outcome.data is None
        assert outcome.error is error
        assert outcome.failure_id == "abc"
        assert outcome.persistence_error is None
