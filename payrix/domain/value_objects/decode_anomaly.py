"""Soft decode observation."""

from dataclasses import dataclass
from typing import Any

from payrix.domain.enums import AnomalyKind, FieldKind


@dataclass(frozen=True, slots=True, kw_only=True)
class DecodeAnomaly:
    """Something unexpected that did not fail decoding.

    Attributes:
        path: Dotted field path, e.g. `chargebacks.total`.
        kind: What was observed.
        field_kind: Declared kind of the field.
        raw: Raw wire value (None when the field was absent).
    """

    path: str
    kind: AnomalyKind
    field_kind: FieldKind
    raw: Any = None
