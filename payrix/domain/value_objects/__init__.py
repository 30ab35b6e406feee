"""Domain value objects.

Usage:
    from payrix.domain.value_objects import PayrixDate, RetryPolicy
"""

from payrix.domain.value_objects.api_error import ApiErrorEntry, ApiErrorSet
from payrix.domain.value_objects.decode_anomaly import DecodeAnomaly
from payrix.domain.value_objects.entity_reference import (
    EntityReference,
    validate_identifier,
)
from payrix.domain.value_objects.field_spec import FieldSpec
from payrix.domain.value_objects.pagination import (
    Page,
    PageInfo,
    PaginationCursor,
    PaginationFields,
)
from payrix.domain.value_objects.payrix_date import PayrixDate
from payrix.domain.value_objects.rate_window import RateWindow
from payrix.domain.value_objects.retry_policy import RetryPolicy
from payrix.domain.value_objects.unrecognized_variant import UnrecognizedVariant

__all__ = [
    "ApiErrorEntry",
    "ApiErrorSet",
    "DecodeAnomaly",
    "EntityReference",
    "FieldSpec",
    "Page",
    "PageInfo",
    "PaginationCursor",
    "PaginationFields",
    "PayrixDate",
    "RateWindow",
    "RetryPolicy",
    "UnrecognizedVariant",
    "validate_identifier",
]
