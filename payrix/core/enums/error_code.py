"""Machine-readable error codes.

Error codes follow the ENTITY_ACTION_REASON naming convention and travel
inside PayrixError values (Result types, railway-oriented programming).

Categories:
- Throttling (RATE_LIMIT_*)
- Connectivity (TRANSPORT_*, SERVICE_*)
- Upstream rejections (API_*, RESOURCE_*, AUTHENTICATION_*)
- Payload shape (DECODE_*)
- Configuration (CONFIGURATION_*)
- Dispute workflow (DISPUTE_*, EVIDENCE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Payrix client error codes (machine-readable)."""

    # Throttling
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"

    # Connectivity
    TRANSPORT_FAILED = "transport_failed"
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Upstream rejections
    API_REQUEST_REJECTED = "api_request_rejected"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Payload shape
    DECODE_FAILED = "decode_failed"

    # Configuration
    CONFIGURATION_INVALID = "configuration_invalid"

    # Dispute workflow
    DISPUTE_ACTION_NOT_ALLOWED = "dispute_action_not_allowed"
    EVIDENCE_INVALID = "evidence_invalid"
