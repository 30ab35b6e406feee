"""Soft decode anomaly kinds.

Anomalies are observations worth surfacing to operators that do not fail
decoding: the value was accepted, but the upstream behaved unexpectedly.
"""

from enum import Enum


class AnomalyKind(str, Enum):
    """Kind of soft decode anomaly."""

    FRACTIONAL_CENT = "fractional_cent"  # Amount in cents carried a fraction
    REQUIRED_FIELD_ABSENT = "required_field_absent"  # Null/missing required field
    EMPTY_IDENTIFIER = "empty_identifier"  # "" where an id was expected
    UNRECOGNIZED_VARIANT = "unrecognized_variant"  # Enum value outside known set
