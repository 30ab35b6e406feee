"""Domain errors package.

Usage:
    from payrix.domain.errors import ApiRejected, PayrixError, RateLimitExceeded
"""

from payrix.domain.errors.dispute_error import EvidenceInvalid, InvalidDisputeAction
from payrix.domain.errors.payrix_error import (
    ApiRejected,
    DecodeFailure,
    PayrixError,
    RateLimitExceeded,
    ResourceNotFound,
    ServiceUnavailable,
    TransportFailure,
    Unauthorized,
)

__all__ = [
    "ApiRejected",
    "DecodeFailure",
    "EvidenceInvalid",
    "InvalidDisputeAction",
    "PayrixError",
    "RateLimitExceeded",
    "ResourceNotFound",
    "ServiceUnavailable",
    "TransportFailure",
    "Unauthorized",
]
