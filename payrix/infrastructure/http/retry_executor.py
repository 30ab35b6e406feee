"""Retrying HTTP executor for one logical Payrix call.

A logical call runs as one or more physical attempts:

    Pending -> Attempting -> Succeeded
                          -> Failed-Permanent
                          -> Retrying -> Attempting ...

Before each attempt the rate gate is awaited; after each attempt the
response classifier decides the branch. Throttling, transport errors and
retryable 5xx statuses are retried with exponential backoff until the
policy's budget is spent; everything else ends the call immediately.

Architecture:
    - Infrastructure layer (adapter for the Payrix REST API)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for upstream errors)
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, replace
from types import TracebackType
from typing import Any, Self, TypeVar

import httpx
import structlog

from payrix.core.constants import (
    API_KEY_HEADER,
    REQUEST_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
    SEARCH_HEADER,
)
from payrix.core.enums import ErrorCode
from payrix.core.errors import ConfigurationError
from payrix.core.result import Failure, Result
from payrix.domain.errors import (
    ApiRejected,
    DecodeFailure,
    PayrixError,
    RateLimitExceeded,
    ResourceNotFound,
    ServiceUnavailable,
    TransportFailure,
    Unauthorized,
)
from payrix.domain.protocols import RateGateProtocol
from payrix.domain.value_objects import RetryPolicy
from payrix.infrastructure.http.attempt_outcome import (
    AttemptOutcome,
    AttemptRateLimited,
    AttemptServerError,
    AttemptSuccess,
    AttemptTransportError,
)
from payrix.infrastructure.http.response_classifier import ResponseClassifier

T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class PayrixRequest:
    """One logical request.

    Attributes:
        method: HTTP method.
        path: Path relative to the base URL (e.g. "customers/t1_cus_1").
        operation: Operation name for logging.
        params: Query parameters.
        json: JSON request body.
        search: Search expression for the `search` header.
    """

    method: str
    path: str
    operation: str
    params: Mapping[str, str] | None = None
    json: Mapping[str, Any] | None = None
    search: str | None = None


class RetryExecutor:
    """Runs logical requests with throttling, classification and backoff.

    Usable as an async context manager to share one connection pool across
    calls; otherwise each attempt opens a short-lived client.

    Args:
        api_key: Private API key sent in the APIKEY header.
        base_url: API base URL.
        rate_gate: Admission control awaited before every attempt.
        classifier: Response classifier.
        policy: Retry policy.
        timeout: Per-attempt timeout in seconds.
        http_client: Externally managed client (tests, custom transports).
        sleep: Coroutine function used for backoff waits.

    Raises:
        ConfigurationError: If api_key or base_url is empty.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        rate_gate: RateGateProtocol,
        classifier: ResponseClassifier | None = None,
        policy: RetryPolicy | None = None,
        timeout: float = REQUEST_TIMEOUT_DEFAULT,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ConfigurationError("API key cannot be empty", setting="api_key")
        if not base_url:
            raise ConfigurationError("Base URL cannot be empty", setting="base_url")

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._rate_gate = rate_gate
        self._classifier = classifier or ResponseClassifier()
        self._policy = policy or RetryPolicy()
        self._timeout = timeout
        self._client = http_client
        self._owns_client = False
        self._sleep = sleep
        self._logger = structlog.get_logger("payrix_api")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def __aenter__(self) -> Self:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pool if this executor opened it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    def _headers(self, request: PayrixRequest) -> dict[str, str]:
        headers = {
            API_KEY_HEADER: self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if request.search:
            headers[SEARCH_HEADER] = request.search
        return headers

    async def _send(self, request: PayrixRequest) -> AttemptOutcome:
        url = f"{self._base_url}/{request.path.lstrip('/')}"
        kwargs: dict[str, Any] = {
            "method": request.method,
            "url": url,
            "headers": self._headers(request),
            "params": dict(request.params) if request.params else None,
            "json": dict(request.json) if request.json is not None else None,
        }
        try:
            if self._client is not None:
                response = await self._client.request(**kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(**kwargs)
        except httpx.RequestError as e:
            return self._classifier.classify_exception(e)
        return self._classifier.classify(response)

    async def execute(
        self,
        request: PayrixRequest,
        decode: Callable[[Any], Result[T, DecodeFailure]],
    ) -> Result[T, PayrixError]:
        """Run one logical request.

        Args:
            request: Request description.
            decode: Turns the success payload into the caller's value.

        Returns:
            Success(value) from `decode`, or Failure(PayrixError).
        """
        attempt = 0
        previous_wait = 0.0

        while True:
            attempt += 1
            await self._rate_gate.acquire()
            outcome = await self._send(request)
            exhausted = attempt > self._policy.max_retries

            match outcome:
                case AttemptSuccess(payload=payload, status_code=status):
                    self._logger.debug(
                        "payrix_api_succeeded",
                        operation=request.operation,
                        attempt=attempt,
                        status_code=status,
                    )
                    result = decode(payload)
                    if isinstance(result, Failure):
                        self._logger.error(
                            "payrix_api_decode_failed",
                            operation=request.operation,
                            field_path=result.error.field_path,
                            expected=result.error.expected,
                        )
                        return Failure(
                            error=replace(
                                result.error, status_code=status, attempts=attempt
                            )
                        )
                    return result

                case AttemptRateLimited() if exhausted:
                    error = self._rate_limit_error(request, outcome, attempt)
                    return Failure(error=error)

                case AttemptRateLimited(retry_after=hint, source=source):
                    wait = self._policy.delay_for(
                        attempt, hint=hint, previous=previous_wait
                    )
                    self._log_retry(
                        request, attempt, "rate_limited", wait, source=source
                    )

                case AttemptTransportError() if exhausted:
                    error = self._transport_error(request, outcome, attempt)
                    return Failure(error=error)

                case AttemptTransportError(cause=cause):
                    wait = self._policy.delay_for(attempt, previous=previous_wait)
                    self._log_retry(
                        request,
                        attempt,
                        "transport_error",
                        wait,
                        error_type=type(cause).__name__,
                    )

                case AttemptServerError(status_code=status, embedded=False) if (
                    self._policy.is_retryable_status(status)
                ):
                    if exhausted:
                        return Failure(
                            error=self._unavailable_error(request, outcome, attempt)
                        )
                    wait = self._policy.delay_for(attempt, previous=previous_wait)
                    self._log_retry(
                        request, attempt, "server_error", wait, status_code=status
                    )

                case AttemptServerError():
                    error = self._permanent_error(request, outcome, attempt)
                    return Failure(error=error)

            await self._sleep(wait)
            previous_wait = wait

    # -------------------------------------------------------------------------
    # Error construction
    # -------------------------------------------------------------------------

    def _log_retry(
        self,
        request: PayrixRequest,
        attempt: int,
        outcome: str,
        wait: float,
        **context: Any,
    ) -> None:
        self._logger.warning(
            "payrix_api_retry_scheduled",
            operation=request.operation,
            attempt=attempt,
            outcome=outcome,
            wait_seconds=wait,
            **context,
        )

    def _details(self, request: PayrixRequest, **extra: Any) -> dict[str, Any]:
        return {
            "operation": request.operation,
            "method": request.method,
            "path": request.path,
            **extra,
        }

    def _rate_limit_error(
        self, request: PayrixRequest, outcome: AttemptRateLimited, attempts: int
    ) -> RateLimitExceeded:
        self._logger.error(
            "payrix_api_retries_exhausted",
            operation=request.operation,
            outcome="rate_limited",
            attempts=attempts,
        )
        return RateLimitExceeded(
            code=ErrorCode.RATE_LIMIT_EXCEEDED,
            message=f"Payrix rate limit exceeded after {attempts} attempts",
            status_code=outcome.status_code,
            attempts=attempts,
            errors=outcome.errors,
            retry_after=outcome.retry_after,
            details=self._details(request, source=outcome.source),
        )

    def _transport_error(
        self, request: PayrixRequest, outcome: AttemptTransportError, attempts: int
    ) -> TransportFailure:
        self._logger.error(
            "payrix_api_retries_exhausted",
            operation=request.operation,
            outcome="transport_error",
            attempts=attempts,
            error_type=type(outcome.cause).__name__,
            error_message=str(outcome.cause),
        )
        return TransportFailure(
            code=ErrorCode.TRANSPORT_FAILED,
            message=f"Payrix API unreachable: {outcome.cause}",
            attempts=attempts,
            cause=outcome.cause,
            details=self._details(request, error_type=type(outcome.cause).__name__),
        )

    def _unavailable_error(
        self, request: PayrixRequest, outcome: AttemptServerError, attempts: int
    ) -> ServiceUnavailable:
        self._logger.error(
            "payrix_api_retries_exhausted",
            operation=request.operation,
            outcome="server_error",
            attempts=attempts,
            status_code=outcome.status_code,
        )
        return ServiceUnavailable(
            code=ErrorCode.SERVICE_UNAVAILABLE,
            message=f"Payrix API server error: {outcome.status_code}",
            status_code=outcome.status_code,
            attempts=attempts,
            errors=outcome.errors,
            details=self._details(request, response_body=outcome.raw_body),
        )

    def _permanent_error(
        self, request: PayrixRequest, outcome: AttemptServerError, attempts: int
    ) -> PayrixError:
        status = outcome.status_code
        details = self._details(
            request, response_body=outcome.raw_body[:RESPONSE_BODY_MAX_LENGTH]
        )
        self._logger.warning(
            "payrix_api_rejected",
            operation=request.operation,
            attempt=attempts,
            status_code=status,
            embedded=outcome.embedded,
            messages=outcome.errors.messages,
        )

        if status in (401, 403):
            return Unauthorized(
                code=ErrorCode.AUTHENTICATION_FAILED,
                message=f"Payrix rejected the API key: {outcome.errors}",
                status_code=status,
                attempts=attempts,
                errors=outcome.errors,
                details=details,
            )
        if status == 404:
            return ResourceNotFound(
                code=ErrorCode.RESOURCE_NOT_FOUND,
                message=f"Payrix resource not found: {request.path}",
                status_code=status,
                attempts=attempts,
                errors=outcome.errors,
                embedded=outcome.embedded,
                details=details,
            )
        return ApiRejected(
            code=ErrorCode.API_REQUEST_REJECTED,
            message=f"Payrix rejected the request: {outcome.errors}",
            status_code=status,
            attempts=attempts,
            errors=outcome.errors,
            embedded=outcome.embedded,
            details=details,
        )
