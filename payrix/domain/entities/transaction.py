"""Transaction record.

Amounts are in cents. The published contract types them as integers but the
live API returns floats for some endpoints, so they decode as AMOUNT (float).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from payrix.domain.enums import (
    EntityType,
    FieldKind,
    TransactionStatus,
    TransactionType,
)
from payrix.domain.value_objects import FieldSpec, PayrixDate, UnrecognizedVariant


@dataclass(frozen=True, slots=True, kw_only=True)
class Transaction:
    """Payment transaction (`/txns`)."""

    ENTITY: ClassVar[EntityType] = EntityType.TXNS
    FIELDS: ClassVar[Mapping[str, FieldSpec]] = {
        "id": FieldSpec(FieldKind.IDENTIFIER, required=True),
        "merchant": FieldSpec(FieldKind.RELATION),
        "token": FieldSpec(FieldKind.TEXT),
        "fortxn": FieldSpec(FieldKind.RELATION),
        "batch": FieldSpec(FieldKind.RELATION),
        "subscription": FieldSpec(FieldKind.RELATION),
        "txn_type": FieldSpec(
            FieldKind.ENUM, wire_name="type", required=True, enum=TransactionType
        ),
        "status": FieldSpec(FieldKind.ENUM, enum=TransactionStatus),
        "total": FieldSpec(FieldKind.AMOUNT),
        "approved": FieldSpec(FieldKind.AMOUNT),
        "refunded": FieldSpec(FieldKind.AMOUNT),
        "settled_total": FieldSpec(FieldKind.AMOUNT, wire_name="settledTotal"),
        "tax": FieldSpec(FieldKind.AMOUNT),
        "fee": FieldSpec(FieldKind.AMOUNT),
        "currency": FieldSpec(FieldKind.TEXT),
        "auth_date": FieldSpec(FieldKind.TIMESTAMP, wire_name="authDate"),
        "captured": FieldSpec(FieldKind.TIMESTAMP),
        "settled": FieldSpec(FieldKind.TIMESTAMP),
        "funded": FieldSpec(FieldKind.TIMESTAMP),
        "auth_code": FieldSpec(FieldKind.TEXT, wire_name="authCode"),
        "order": FieldSpec(FieldKind.TEXT),
        "description": FieldSpec(FieldKind.TEXT),
        "first": FieldSpec(FieldKind.TEXT),
        "last": FieldSpec(FieldKind.TEXT),
        "email": FieldSpec(FieldKind.TEXT),
        "trace_number": FieldSpec(FieldKind.INTEGER, wire_name="traceNumber"),
        "created": FieldSpec(FieldKind.TIMESTAMP),
        "modified": FieldSpec(FieldKind.TIMESTAMP),
        "inactive": FieldSpec(FieldKind.BOOLEAN),
        "frozen": FieldSpec(FieldKind.BOOLEAN),
    }

    id: str | None = None
    merchant: str | Mapping[str, Any] | None = None
    token: str | None = None
    fortxn: str | Mapping[str, Any] | None = None
    batch: str | Mapping[str, Any] | None = None
    subscription: str | Mapping[str, Any] | None = None
    txn_type: TransactionType | UnrecognizedVariant | None = None
    status: TransactionStatus | UnrecognizedVariant | None = None
    total: float | None = None
    approved: float | None = None
    refunded: float | None = None
    settled_total: float | None = None
    tax: float | None = None
    fee: float | None = None
    currency: str | None = None
    auth_date: PayrixDate | None = None
    captured: PayrixDate | None = None
    settled: PayrixDate | None = None
    funded: PayrixDate | None = None
    auth_code: str | None = None
    order: str | None = None
    description: str | None = None
    first: str | None = None
    last: str | None = None
    email: str | None = None
    trace_number: int | None = None
    created: PayrixDate | None = None
    modified: PayrixDate | None = None
    inactive: bool | None = None
    frozen: bool | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def total_dollars(self) -> float | None:
        if self.total is None:
            return None
        return self.total / 100
