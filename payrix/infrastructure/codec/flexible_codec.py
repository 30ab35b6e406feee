"""Tolerant decode/encode between wire JSON and typed records.

Decoding walks a record type's FIELDS declaration, applies the wire rules of
each field's kind (see wire_rules) and constructs the record. Drift the
rules accept is normalized silently; surprising-but-accepted values are
reported as DecodeAnomaly through the `on_anomaly` sink; a value no rule
accepts fails the whole record with DecodeFailure.

Encoding maps attribute names to wire names and canonical values back to
wire form for request bodies.

Usage:
    codec = FlexibleCodec()
    match codec.decode_record(Chargeback, payload):
        case Success(value=chargeback):
            ...
        case Failure(error=DecodeFailure() as error):
            print(error.field_path, error.expected, error.observed)
"""

from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

import structlog

from payrix.core.constants import RAW_VALUE_MAX_LENGTH
from payrix.core.enums import ErrorCode
from payrix.core.result import Failure, Result, Success
from payrix.domain.enums import AnomalyKind, FieldKind
from payrix.domain.errors import DecodeFailure
from payrix.domain.value_objects import (
    DecodeAnomaly,
    FieldSpec,
    PayrixDate,
    UnrecognizedVariant,
)
from payrix.infrastructure.codec.wire_rules import WIRE_RULES, WireRule

R = TypeVar("R")

_MISSING = object()


def _observed(value: Any) -> str:
    text = repr(value)
    if len(text) > RAW_VALUE_MAX_LENGTH:
        return text[:RAW_VALUE_MAX_LENGTH] + "..."
    return text


class FlexibleCodec:
    """Decode wire mappings into records and encode records for requests.

    Args:
        rules: FieldKind -> wire rules table. Defaults to WIRE_RULES.
        on_anomaly: Sink for soft anomalies. Defaults to a structlog warning.
    """

    def __init__(
        self,
        *,
        rules: Mapping[FieldKind, tuple[WireRule, ...]] = WIRE_RULES,
        on_anomaly: Callable[[DecodeAnomaly], None] | None = None,
    ) -> None:
        self._rules = rules
        self._logger = structlog.get_logger("payrix_codec")
        self._on_anomaly = on_anomaly or self._log_anomaly

    def _log_anomaly(self, anomaly: DecodeAnomaly) -> None:
        self._logger.warning(
            "payrix_codec_anomaly",
            path=anomaly.path,
            anomaly=anomaly.kind.value,
            field_kind=anomaly.field_kind.value,
            raw=_observed(anomaly.raw),
        )

    def _failure(self, path: str, expected: str, value: Any) -> Failure[DecodeFailure]:
        observed = _observed(value)
        return Failure(
            error=DecodeFailure(
                code=ErrorCode.DECODE_FAILED,
                message=f"Cannot decode {path}: expected {expected}, got {observed}",
                field_path=path,
                expected=expected,
                observed=observed,
            )
        )

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode_field(
        self,
        spec: FieldSpec,
        value: Any,
        *,
        path: str,
    ) -> Result[Any, DecodeFailure]:
        """Decode one wire value according to its field declaration.

        Args:
            spec: Field declaration.
            value: Wire value; `None` for both null and absent keys.
            path: Dotted field path for diagnostics.

        Returns:
            Success with the canonical value (None for null/absent), or
            Failure(DecodeFailure) when no rule accepts the value.
        """
        if value is None or value is _MISSING:
            if spec.required:
                self._on_anomaly(
                    DecodeAnomaly(
                        path=path,
                        kind=AnomalyKind.REQUIRED_FIELD_ABSENT,
                        field_kind=spec.kind,
                    )
                )
            return Success(value=None)

        for rule in self._rules.get(spec.kind, ()):
            matched = rule(value, spec)
            if matched is None:
                continue
            if matched.anomaly is not None:
                self._on_anomaly(
                    DecodeAnomaly(
                        path=path,
                        kind=matched.anomaly,
                        field_kind=spec.kind,
                        raw=value,
                    )
                )
            if spec.kind is FieldKind.RELATION and spec.record is not None:
                return self._decode_relation(spec.record, matched.value, path)
            return Success(value=matched.value)

        return self._failure(path, spec.kind.value, value)

    def _decode_relation(
        self, record_type: type[Any], value: Any, path: str
    ) -> Result[Any, DecodeFailure]:
        if isinstance(value, dict):
            return self.decode_record(record_type, value, path=path)
        if isinstance(value, list):
            decoded = []
            for index, item in enumerate(value):
                if not isinstance(item, dict):
                    decoded.append(item)
                    continue
                result = self.decode_record(record_type, item, path=f"{path}[{index}]")
                if isinstance(result, Failure):
                    return result
                decoded.append(result.value)
            return Success(value=decoded)
        return Success(value=value)

    def decode_record(
        self,
        record_type: type[R],
        raw: Any,
        *,
        path: str | None = None,
    ) -> Result[R, DecodeFailure]:
        """Decode a wire mapping into `record_type`.

        Keys the record does not declare are ignored (they remain available
        through the record's `raw` mapping).
        """
        base = path or record_type.ENTITY.value  # type: ignore[attr-defined]
        if not isinstance(raw, Mapping):
            return self._failure(base, "object", raw)

        values: dict[str, Any] = {}
        fields: Mapping[str, FieldSpec] = getattr(record_type, "FIELDS")
        for name, spec in fields.items():
            wire_name = spec.wire_name or name
            result = self.decode_field(
                spec, raw.get(wire_name, _MISSING), path=f"{base}.{wire_name}"
            )
            if isinstance(result, Failure):
                return result
            values[name] = result.value

        return Success(value=record_type(**values, raw=dict(raw)))

    def decode_records(
        self,
        record_type: type[R],
        items: Any,
        *,
        path: str | None = None,
    ) -> Result[list[R], DecodeFailure]:
        """Decode a list of wire mappings, failing on the first bad record."""
        base = path or record_type.ENTITY.value  # type: ignore[attr-defined]
        if items is None:
            return Success(value=[])
        if isinstance(items, Mapping):
            items = [items]
        if not isinstance(items, list):
            return self._failure(base, "list", items)

        records: list[R] = []
        for index, item in enumerate(items):
            result = self.decode_record(record_type, item, path=f"{base}[{index}]")
            if isinstance(result, Failure):
                return result
            records.append(result.value)
        return Success(value=records)

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def encode_value(self, value: Any) -> Any:
        """Convert one canonical value to its wire form."""
        match value:
            case bool():
                return 1 if value else 0
            case PayrixDate():
                return value.to_wire()
            case datetime():
                return value.strftime("%Y-%m-%d %H:%M:%S")
            case date():
                return value.strftime("%Y%m%d")
            case Enum():
                return value.value
            case UnrecognizedVariant():
                return value.raw
            case list() | tuple():
                return [self.encode_value(item) for item in value]
            case _ if hasattr(value, "FIELDS"):
                # Related record: reference it by id
                return getattr(value, "id", None)
            case _:
                return value

    def encode_fields(
        self, record_type: type[Any], values: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Encode attribute values into a request body.

        Declared attributes are renamed to their wire names; undeclared keys
        pass through unchanged. None values are omitted.
        """
        fields: Mapping[str, FieldSpec] = getattr(record_type, "FIELDS", {})
        body: dict[str, Any] = {}
        for name, value in values.items():
            if value is None or name == "raw":
                continue
            spec = fields.get(name)
            wire_name = (spec.wire_name or name) if spec is not None else name
            body[wire_name] = self.encode_value(value)
        return body

    def encode_record(self, record: Any) -> dict[str, Any]:
        """Encode every declared, non-None attribute of a record instance."""
        fields: Mapping[str, FieldSpec] = type(record).FIELDS
        values = {name: getattr(record, name) for name in fields}
        return self.encode_fields(type(record), values)
