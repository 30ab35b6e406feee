"""Classification of HTTP exchanges into attempt outcomes.

The upstream does not reliably use status codes for failure: a 200 response
may carry an error list, either at the top level of the document or nested
under the primary `response` key, and throttling can arrive as a 429 or as
a temporary-block error code inside a 200. `classify` is total: every
response maps to exactly one AttemptOutcome.

Rules, in order:
    1. 429 -> AttemptRateLimited (Retry-After header, else default hint).
    2. 2xx -> embedded errors? rate-limit code -> AttemptRateLimited,
       otherwise AttemptServerError(embedded=True). No errors ->
       AttemptSuccess with the primary payload.
    3. Any other status -> AttemptServerError with parsed or synthesized
       error entries.
    4. No response -> AttemptTransportError (see classify_exception).
"""

from collections.abc import Iterable
from typing import Any

import httpx

from payrix.core.constants import (
    RATE_LIMIT_BODY_ERROR_CODE,
    RESPONSE_BODY_MAX_LENGTH,
    RETRY_BASE_DELAY_SECONDS_DEFAULT,
)
from payrix.domain.value_objects import ApiErrorSet
from payrix.infrastructure.http.attempt_outcome import (
    AttemptOutcome,
    AttemptRateLimited,
    AttemptServerError,
    AttemptSuccess,
    AttemptTransportError,
)

_NO_JSON = object()


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in delta seconds."""
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return seconds


def _json_or_missing(response: httpx.Response) -> Any:
    if not response.content:
        return _NO_JSON
    try:
        return response.json()
    except ValueError:
        return _NO_JSON


def extract_errors(document: Any) -> ApiErrorSet:
    """Collect error entries from the two locations the upstream uses."""
    if not isinstance(document, dict):
        return ApiErrorSet()

    errors = ApiErrorSet.from_wire(document.get("errors"))
    if errors:
        return errors

    nested = document.get("response")
    if isinstance(nested, dict):
        errors = ApiErrorSet.from_wire(nested.get("errors"))
        if errors:
            return errors
    return ApiErrorSet()


class ResponseClassifier:
    """Maps completed HTTP exchanges to AttemptOutcome variants.

    Args:
        default_retry_after: Wait hint used when throttling carries none.
        rate_limit_codes: Embedded error codes that mean "throttled".
    """

    def __init__(
        self,
        *,
        default_retry_after: float = RETRY_BASE_DELAY_SECONDS_DEFAULT,
        rate_limit_codes: Iterable[str] = (RATE_LIMIT_BODY_ERROR_CODE,),
    ) -> None:
        self._default_retry_after = default_retry_after
        self._rate_limit_codes = frozenset(rate_limit_codes)

    def _is_rate_limit(self, errors: ApiErrorSet) -> bool:
        return any(errors.has_code(code) for code in self._rate_limit_codes)

    def classify(self, response: httpx.Response) -> AttemptOutcome:
        """Classify a received response."""
        status = response.status_code

        if status == 429:
            hint = parse_retry_after(response.headers.get("Retry-After"))
            document = _json_or_missing(response)
            return AttemptRateLimited(
                retry_after=self._default_retry_after if hint is None else hint,
                source="default" if hint is None else "header",
                status_code=status,
                errors=extract_errors(document),
            )

        document = _json_or_missing(response)

        if 200 <= status < 300:
            if document is _NO_JSON:
                return AttemptSuccess(
                    status_code=status, payload=None, raw_text=response.text
                )

            errors = extract_errors(document)
            if errors and self._is_rate_limit(errors):
                return AttemptRateLimited(
                    retry_after=self._default_retry_after,
                    source="body",
                    status_code=status,
                    errors=errors,
                )
            if errors:
                return AttemptServerError(
                    status_code=status,
                    errors=errors,
                    raw_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                    embedded=True,
                )

            payload = document
            if isinstance(document, dict) and "response" in document:
                payload = document["response"]
            return AttemptSuccess(
                status_code=status, payload=payload, raw_text=response.text
            )

        errors = ApiErrorSet()
        if document is not _NO_JSON:
            errors = extract_errors(document)
            if not errors and isinstance(document, dict) and "message" in document:
                errors = ApiErrorSet.from_wire(document)
        if not errors:
            errors = ApiErrorSet.from_status(status, response.reason_phrase)

        return AttemptServerError(
            status_code=status,
            errors=errors,
            raw_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
        )

    def classify_exception(self, exc: Exception) -> AttemptTransportError:
        """Classify a failure to obtain any response."""
        return AttemptTransportError(cause=exc)
