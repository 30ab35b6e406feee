"""Chargeback dispute records.

Chargeback carries the dispute stage (`cycle`) and status the dispute
workflow derives its state from. Messages and documents are what the
merchant posts against a chargeback to act on it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from payrix.domain.entities.transaction import Transaction
from payrix.domain.enums import (
    ChargebackCycle,
    ChargebackDocumentType,
    ChargebackMessageType,
    ChargebackStatus,
    EntityType,
    FieldKind,
)
from payrix.domain.value_objects import FieldSpec, PayrixDate, UnrecognizedVariant


@dataclass(frozen=True, slots=True, kw_only=True)
class Chargeback:
    """Chargeback case (`/chargebacks`).

    Attributes:
        id: Chargeback id.
        merchant: Merchant id.
        txn: Disputed transaction id, or the Transaction when expanded.
        total: Disputed amount in cents.
        represented_total: Amount represented in cents.
        cycle: Current dispute stage.
        status: Overall status.
        reason, reason_code: Card network reason.
        issued, received: Dates the dispute was issued and received.
        reply: Reply deadline.
        actionable: Whether the upstream accepts a response right now.
    """

    ENTITY: ClassVar[EntityType] = EntityType.CHARGEBACKS
    FIELDS: ClassVar[Mapping[str, FieldSpec]] = {
        "id": FieldSpec(FieldKind.IDENTIFIER, required=True),
        "merchant": FieldSpec(FieldKind.RELATION),
        "txn": FieldSpec(FieldKind.RELATION, record=Transaction),
        "mid": FieldSpec(FieldKind.TEXT),
        "description": FieldSpec(FieldKind.TEXT),
        "total": FieldSpec(FieldKind.AMOUNT),
        "represented_total": FieldSpec(
            FieldKind.AMOUNT, wire_name="representedTotal"
        ),
        "cycle": FieldSpec(FieldKind.ENUM, enum=ChargebackCycle),
        "status": FieldSpec(FieldKind.ENUM, enum=ChargebackStatus),
        "currency": FieldSpec(FieldKind.TEXT),
        "platform": FieldSpec(FieldKind.TEXT),
        "reference": FieldSpec(FieldKind.TEXT, wire_name="ref"),
        "reason": FieldSpec(FieldKind.TEXT),
        "reason_code": FieldSpec(FieldKind.TEXT, wire_name="reasonCode"),
        "issued": FieldSpec(FieldKind.TIMESTAMP),
        "received": FieldSpec(FieldKind.TIMESTAMP),
        "reply": FieldSpec(FieldKind.TIMESTAMP),
        "bank_ref": FieldSpec(FieldKind.TEXT, wire_name="bankRef"),
        "chargeback_ref": FieldSpec(FieldKind.TEXT, wire_name="chargebackRef"),
        "last_status_change": FieldSpec(
            FieldKind.RELATION, wire_name="lastStatusChange"
        ),
        "actionable": FieldSpec(FieldKind.BOOLEAN),
        "shadow": FieldSpec(FieldKind.BOOLEAN),
        "created": FieldSpec(FieldKind.TIMESTAMP),
        "modified": FieldSpec(FieldKind.TIMESTAMP),
        "inactive": FieldSpec(FieldKind.BOOLEAN),
        "frozen": FieldSpec(FieldKind.BOOLEAN),
    }

    id: str | None = None
    merchant: str | Mapping[str, Any] | None = None
    txn: str | Transaction | Mapping[str, Any] | None = None
    mid: str | None = None
    description: str | None = None
    total: float | None = None
    represented_total: float | None = None
    cycle: ChargebackCycle | UnrecognizedVariant | None = None
    status: ChargebackStatus | UnrecognizedVariant | None = None
    currency: str | None = None
    platform: str | None = None
    reference: str | None = None
    reason: str | None = None
    reason_code: str | None = None
    issued: PayrixDate | None = None
    received: PayrixDate | None = None
    reply: PayrixDate | None = None
    bank_ref: str | None = None
    chargeback_ref: str | None = None
    last_status_change: str | Mapping[str, Any] | None = None
    actionable: bool | None = None
    shadow: bool | None = None
    created: PayrixDate | None = None
    modified: PayrixDate | None = None
    inactive: bool | None = None
    frozen: bool | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_actionable(self) -> bool:
        """True when the upstream flags the case actionable and it is open."""
        return bool(self.actionable) and self.status is ChargebackStatus.OPEN

    @property
    def transaction(self) -> Transaction | None:
        """Return the expanded transaction, if `txn` was expanded."""
        return self.txn if isinstance(self.txn, Transaction) else None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChargebackMessage:
    """Message posted against a chargeback (`/chargebackMessages`)."""

    ENTITY: ClassVar[EntityType] = EntityType.CHARGEBACK_MESSAGES
    FIELDS: ClassVar[Mapping[str, FieldSpec]] = {
        "id": FieldSpec(FieldKind.IDENTIFIER, required=True),
        "chargeback": FieldSpec(FieldKind.RELATION, required=True),
        "login": FieldSpec(FieldKind.RELATION),
        "message_type": FieldSpec(
            FieldKind.ENUM, wire_name="type", enum=ChargebackMessageType
        ),
        "status": FieldSpec(FieldKind.TEXT),
        "subject": FieldSpec(FieldKind.TEXT),
        "message": FieldSpec(FieldKind.TEXT),
        "sender": FieldSpec(FieldKind.TEXT),
        "read": FieldSpec(FieldKind.BOOLEAN),
        "created": FieldSpec(FieldKind.TIMESTAMP),
        "modified": FieldSpec(FieldKind.TIMESTAMP),
        "inactive": FieldSpec(FieldKind.BOOLEAN),
        "frozen": FieldSpec(FieldKind.BOOLEAN),
    }

    id: str | None = None
    chargeback: str | Mapping[str, Any] | None = None
    login: str | Mapping[str, Any] | None = None
    message_type: ChargebackMessageType | UnrecognizedVariant | None = None
    status: str | None = None
    subject: str | None = None
    message: str | None = None
    sender: str | None = None
    read: bool | None = None
    created: PayrixDate | None = None
    modified: PayrixDate | None = None
    inactive: bool | None = None
    frozen: bool | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ChargebackDocument:
    """Evidence document attached to a chargeback (`/chargebackDocuments`).

    `data` is only sent on create (base64 content) and is not returned.
    """

    ENTITY: ClassVar[EntityType] = EntityType.CHARGEBACK_DOCUMENTS
    FIELDS: ClassVar[Mapping[str, FieldSpec]] = {
        "id": FieldSpec(FieldKind.IDENTIFIER, required=True),
        "chargeback": FieldSpec(FieldKind.RELATION, required=True),
        "chargeback_message": FieldSpec(
            FieldKind.RELATION, wire_name="chargebackMessage"
        ),
        "name": FieldSpec(FieldKind.TEXT),
        "document_type": FieldSpec(
            FieldKind.ENUM, wire_name="type", enum=ChargebackDocumentType
        ),
        "mime_type": FieldSpec(FieldKind.TEXT, wire_name="mimeType"),
        "size": FieldSpec(FieldKind.INTEGER),
        "description": FieldSpec(FieldKind.TEXT),
        "data": FieldSpec(FieldKind.TEXT),
        "created": FieldSpec(FieldKind.TIMESTAMP),
        "modified": FieldSpec(FieldKind.TIMESTAMP),
        "inactive": FieldSpec(FieldKind.BOOLEAN),
        "frozen": FieldSpec(FieldKind.BOOLEAN),
    }

    id: str | None = None
    chargeback: str | Mapping[str, Any] | None = None
    chargeback_message: str | Mapping[str, Any] | None = None
    name: str | None = None
    document_type: ChargebackDocumentType | UnrecognizedVariant | None = None
    mime_type: str | None = None
    size: int | None = None
    description: str | None = None
    data: str | None = field(default=None, repr=False)
    created: PayrixDate | None = None
    modified: PayrixDate | None = None
    inactive: bool | None = None
    frozen: bool | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
