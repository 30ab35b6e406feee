"""Unit tests for the Payrix error taxonomy.

Tests cover:
- Errors are data (not exceptions) carrying ErrorCode values
- Transient vs permanent classification
- Upstream error entries exposed through `messages`
- Dispute workflow errors
"""

import pytest

from payrix.core.enums import ErrorCode
from payrix.core.errors import DomainError
from payrix.domain.errors import (
    ApiRejected,
    DecodeFailure,
    EvidenceInvalid,
    InvalidDisputeAction,
    PayrixError,
    RateLimitExceeded,
    ResourceNotFound,
    ServiceUnavailable,
    TransportFailure,
    Unauthorized,
)
from payrix.domain.value_objects import ApiErrorSet


@pytest.mark.unit
class TestPayrixErrorBase:
    """Shared behavior."""

    def test_is_domain_error_not_exception(self):
        error = ApiRejected(code=ErrorCode.API_REQUEST_REJECTED, message="no")

        assert isinstance(error, DomainError)
        assert isinstance(error, PayrixError)
        assert not isinstance(error, Exception)

    def test_defaults(self):
        error = Unauthorized(code=ErrorCode.AUTHENTICATION_FAILED, message="bad key")

        assert error.status_code is None
        assert error.attempts == 1
        assert not error.errors
        assert error.messages == []
        assert str(error) == "authentication_failed: bad key"

    def test_messages_come_from_upstream_entries(self):
        error = ApiRejected(
            code=ErrorCode.API_REQUEST_REJECTED,
            message="rejected",
            errors=ApiErrorSet.from_wire([{"msg": "duplicate"}]),
            embedded=True,
        )

        assert error.messages == ["duplicate"]
        assert error.embedded is True


@pytest.mark.unit
class TestTransientClassification:
    """is_transient per error type."""

    @pytest.mark.parametrize(
        "error",
        [
            RateLimitExceeded(
                code=ErrorCode.RATE_LIMIT_EXCEEDED, message="", retry_after=10.0
            ),
            TransportFailure(
                code=ErrorCode.TRANSPORT_FAILED, message="", cause=OSError("reset")
            ),
            ServiceUnavailable(code=ErrorCode.SERVICE_UNAVAILABLE, message=""),
        ],
    )
    def test_transient(self, error):
        assert error.is_transient is True

    @pytest.mark.parametrize(
        "error",
        [
            ApiRejected(code=ErrorCode.API_REQUEST_REJECTED, message=""),
            ResourceNotFound(code=ErrorCode.RESOURCE_NOT_FOUND, message=""),
            Unauthorized(code=ErrorCode.AUTHENTICATION_FAILED, message=""),
            DecodeFailure(
                code=ErrorCode.DECODE_FAILED,
                message="",
                field_path="customers.id",
                expected="identifier",
            ),
        ],
    )
    def test_permanent(self, error):
        assert error.is_transient is False

    def test_not_found_is_a_rejection(self):
        error = ResourceNotFound(code=ErrorCode.RESOURCE_NOT_FOUND, message="")

        assert isinstance(error, ApiRejected)


@pytest.mark.unit
class TestDisputeErrors:
    """Workflow-level errors."""

    def test_invalid_dispute_action(self):
        error = InvalidDisputeAction(
            code=ErrorCode.DISPUTE_ACTION_NOT_ALLOWED,
            message="not allowed",
            chargeback_id="t1_chb_1",
            state="representment",
            action="represent",
        )

        assert error.state == "representment"
        assert error.is_transient is False

    def test_evidence_invalid(self):
        error = EvidenceInvalid(
            code=ErrorCode.EVIDENCE_INVALID,
            message="too many",
            reason="too_many_documents",
        )

        assert error.reason == "too_many_documents"
