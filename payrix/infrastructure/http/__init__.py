"""HTTP infrastructure for the Payrix REST API.

Usage:
    from payrix.infrastructure.http import PayrixTransport, SearchBuilder
"""

from payrix.infrastructure.http.attempt_outcome import (
    AttemptOutcome,
    AttemptRateLimited,
    AttemptServerError,
    AttemptSuccess,
    AttemptTransportError,
)
from payrix.infrastructure.http.query_builder import (
    SearchBuilder,
    SearchOperator,
    build_expand_query,
    format_payrix_date,
    make_search_field,
    make_search_field_multi,
    parse_payrix_date,
)
from payrix.infrastructure.http.response_classifier import ResponseClassifier
from payrix.infrastructure.http.retry_executor import PayrixRequest, RetryExecutor
from payrix.infrastructure.http.transport import PayrixTransport

__all__ = [
    "AttemptOutcome",
    "AttemptRateLimited",
    "AttemptServerError",
    "AttemptSuccess",
    "AttemptTransportError",
    "PayrixRequest",
    "PayrixTransport",
    "ResponseClassifier",
    "RetryExecutor",
    "SearchBuilder",
    "SearchOperator",
    "build_expand_query",
    "format_payrix_date",
    "make_search_field",
    "make_search_field_multi",
    "parse_payrix_date",
]
