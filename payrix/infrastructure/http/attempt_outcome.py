"""Outcome of one physical HTTP attempt.

The response classifier maps every attempt to exactly one of these variants;
the retry executor branches on them with `match`. Outcomes live for one
attempt and are never stored.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from payrix.domain.value_objects import ApiErrorSet


@dataclass(frozen=True, slots=True, kw_only=True)
class AttemptSuccess:
    """2xx response without embedded errors.

    Attributes:
        status_code: HTTP status.
        payload: Primary payload (`response` object when present, else the
            whole document); None when the body was not JSON.
        raw_text: Response body text.
    """

    status_code: int
    payload: Any
    raw_text: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class AttemptRateLimited:
    """Upstream throttled the attempt.

    Attributes:
        retry_after: Wait hint in seconds.
        source: "header" (Retry-After), "default" (429 without a hint) or
            "body" (temporary-block code inside a 200 response).
        status_code: HTTP status of the throttled response.
    """

    retry_after: float
    source: Literal["header", "default", "body"]
    status_code: int = 429
    errors: ApiErrorSet = field(default_factory=ApiErrorSet)


@dataclass(frozen=True, slots=True, kw_only=True)
class AttemptServerError:
    """Upstream reported a failure.

    Attributes:
        status_code: HTTP status.
        errors: Parsed error entries (synthesized from the status line when
            the body had none).
        raw_body: Truncated response body.
        embedded: True when the failure was embedded in a 2xx response.
    """

    status_code: int
    errors: ApiErrorSet
    raw_body: str = ""
    embedded: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class AttemptTransportError:
    """No response was received.

    Attributes:
        cause: Exception raised by the HTTP client.
    """

    cause: Exception


type AttemptOutcome = (
    AttemptSuccess | AttemptRateLimited | AttemptServerError | AttemptTransportError
)
