"""Payrix error taxonomy.

Every failure a logical operation can surface is one of these values,
returned inside Failure(...) rather than raised. Callers decide what to do
from the error type and `is_transient`:

    RateLimitExceeded    transient   retry budget exhausted while throttled
    TransportFailure     transient   no response (connect/read/timeout)
    ServiceUnavailable   transient   retryable 5xx persisted
    ApiRejected          permanent   the upstream refused the request
      ResourceNotFound   permanent   404
    Unauthorized         permanent   401/403, fix the credentials
    DecodeFailure        permanent   payload did not match the record schema

Usage:
    from payrix.domain.errors import ApiRejected, PayrixError

    match result:
        case Failure(error=ApiRejected() as error):
            print(error.errors.messages)
        case Failure(error=error) if error.is_transient:
            schedule_retry()
"""

from dataclasses import dataclass, field
from typing import Any

from payrix.core.errors import DomainError
from payrix.domain.value_objects import ApiErrorSet


@dataclass(frozen=True, slots=True, kw_only=True)
class PayrixError(DomainError):
    """Base Payrix client error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        status_code: HTTP status of the last attempt, when one was received.
        attempts: Physical attempts made for the logical call.
        errors: Error entries reported by the upstream (may be empty).
        details: Additional context (operation, path, body excerpt).
    """

    status_code: int | None = None
    attempts: int = 1
    errors: ApiErrorSet = field(default_factory=ApiErrorSet)

    @property
    def is_transient(self) -> bool:
        """Whether trying again later may succeed."""
        return False

    @property
    def messages(self) -> list[str]:
        return self.errors.messages


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitExceeded(PayrixError):
    """Upstream kept throttling after every retry was spent.

    Attributes:
        retry_after: Last server-provided wait hint in seconds, if any.
    """

    retry_after: float | None = None

    @property
    def is_transient(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, kw_only=True)
class TransportFailure(PayrixError):
    """No response was received (connection, read or timeout error).

    Attributes:
        cause: Exception raised by the HTTP client on the last attempt.
    """

    cause: BaseException | None = None

    @property
    def is_transient(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, kw_only=True)
class ServiceUnavailable(PayrixError):
    """Retryable server error (500/502/503/504) persisted."""

    @property
    def is_transient(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, kw_only=True)
class ApiRejected(PayrixError):
    """The upstream refused the request.

    Attributes:
        embedded: True when the rejection arrived inside a 2xx response.
    """

    embedded: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceNotFound(ApiRejected):
    """The addressed record or endpoint does not exist (HTTP 404)."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Unauthorized(PayrixError):
    """Credentials were rejected (HTTP 401/403).

    Recovery: check the API key and the selected environment; keys are not
    shared between test and production.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class DecodeFailure(PayrixError):
    """A success payload could not be decoded into the declared record.

    Signals a library or upstream defect; never retried.

    Attributes:
        field_path: Dotted path of the offending field.
        expected: Declared kind of the field.
        observed: Raw wire value (repr, truncated).
    """

    field_path: str
    expected: str
    observed: Any = None
