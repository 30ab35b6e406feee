"""Accepted wire encodings per field kind.

The upstream's field types drift by endpoint, verb and API version: integers
arrive as strings or floats, amounts as floats, dates as bare years, full
timestamps or integers. Every accepted encoding is listed here as a rule;
the codec tries the rules of a field's kind in order and the first one that
applies wins. A value no rule applies to is a decode failure.

A rule takes the wire value and the field's FieldSpec and returns a
WireMatch, or None when it does not apply.
"""

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from payrix.core.constants import IDENTIFIER_MAX_LENGTH
from payrix.domain.enums import AnomalyKind, FieldKind
from payrix.domain.value_objects import FieldSpec, PayrixDate, UnrecognizedVariant

_INT_STRING = re.compile(r"^[+-]?\d+$")
_FLOAT_STRING = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


@dataclass(frozen=True, slots=True)
class WireMatch:
    """Canonical value produced by a rule, plus an optional soft anomaly."""

    value: Any
    anomaly: AnomalyKind | None = None


type WireRule = Callable[[Any, FieldSpec], WireMatch | None]


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


# INTEGER


def _native_int(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return WireMatch(value)
    return None


def _int_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, str) and _INT_STRING.match(value.strip()):
        return WireMatch(int(value.strip()))
    return None


def _integral_float(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, float) and value.is_integer():
        return WireMatch(int(value))
    return None


# AMOUNT / FLOAT


def _amount_number(value: Any, spec: FieldSpec) -> WireMatch | None:
    if not _is_number(value) or not math.isfinite(value):
        return None
    amount = float(value)
    if not amount.is_integer():
        return WireMatch(amount, AnomalyKind.FRACTIONAL_CENT)
    return WireMatch(amount)


def _amount_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, str) and _FLOAT_STRING.match(value.strip()):
        return _amount_number(float(value.strip()), spec)
    return None


def _float_number(value: Any, spec: FieldSpec) -> WireMatch | None:
    if _is_number(value) and math.isfinite(value):
        return WireMatch(float(value))
    return None


def _float_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, str) and _FLOAT_STRING.match(value.strip()):
        return WireMatch(float(value.strip()))
    return None


# TIMESTAMP


def _date_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if not isinstance(value, str):
        return None
    try:
        return WireMatch(PayrixDate.from_wire(value))
    except ValueError:
        return None


def _date_integer(value: Any, spec: FieldSpec) -> WireMatch | None:
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    if len(str(value)) not in (8, 12):
        return None
    try:
        return WireMatch(PayrixDate.from_wire(value))
    except ValueError:
        return None


# IDENTIFIER / RELATION


def _empty_identifier(value: Any, spec: FieldSpec) -> WireMatch | None:
    if value == "":
        return WireMatch(None, AnomalyKind.EMPTY_IDENTIFIER)
    return None


def _identifier_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, str) and 0 < len(value) <= IDENTIFIER_MAX_LENGTH:
        return WireMatch(value)
    return None


def _relation_object(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, Mapping):
        return WireMatch(dict(value))
    return None


def _relation_list(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, list) and all(
        isinstance(item, Mapping | str) for item in value
    ):
        return WireMatch(list(value))
    return None


# ENUM


def _enum_members(spec: FieldSpec) -> list[Enum]:
    return list(spec.enum) if spec.enum is not None else []


def _enum_exact(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, bool):
        return None
    for member in _enum_members(spec):
        if type(member.value) is type(value) and member.value == value:
            return WireMatch(member)
    return None


def _enum_digit_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if not isinstance(value, str) or not _INT_STRING.match(value.strip()):
        return None
    number = int(value.strip())
    for member in _enum_members(spec):
        if isinstance(member.value, int) and member.value == number:
            return WireMatch(member)
    return None


def _enum_unrecognized(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, str | int | float) and not isinstance(value, bool):
        name = spec.enum.__name__ if spec.enum is not None else "Enum"
        return WireMatch(
            UnrecognizedVariant(name, value), AnomalyKind.UNRECOGNIZED_VARIANT
        )
    return None


# TEXT


def _text_string(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, str):
        return WireMatch(value)
    return None


def _text_number(value: Any, spec: FieldSpec) -> WireMatch | None:
    # Numeric-looking text (postal codes, phone numbers) arrives as numbers
    if isinstance(value, int) and not isinstance(value, bool):
        return WireMatch(str(value))
    return None


# BOOLEAN


def _native_bool(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, bool):
        return WireMatch(value)
    return None


def _int_flag(value: Any, spec: FieldSpec) -> WireMatch | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return WireMatch(value != 0)
    return None


def _string_flag(value: Any, spec: FieldSpec) -> WireMatch | None:
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    if lowered in ("1", "true"):
        return WireMatch(True)
    if lowered in ("0", "false"):
        return WireMatch(False)
    return None


WIRE_RULES: Mapping[FieldKind, tuple[WireRule, ...]] = {
    FieldKind.INTEGER: (_native_int, _int_string, _integral_float),
    FieldKind.AMOUNT: (_amount_number, _amount_string),
    FieldKind.FLOAT: (_float_number, _float_string),
    FieldKind.TIMESTAMP: (_date_string, _date_integer),
    FieldKind.IDENTIFIER: (_empty_identifier, _identifier_string),
    FieldKind.ENUM: (_enum_exact, _enum_digit_string, _enum_unrecognized),
    FieldKind.TEXT: (_text_string, _text_number),
    FieldKind.BOOLEAN: (_native_bool, _int_flag, _string_flag),
    FieldKind.RELATION: (
        _empty_identifier,
        _identifier_string,
        _relation_object,
        _relation_list,
    ),
}
"""FieldKind -> accepted wire encodings, in priority order."""
