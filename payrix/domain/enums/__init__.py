"""Domain enums package.

Usage:
    from payrix.domain.enums import EntityType, FieldKind
"""

from payrix.domain.enums.anomaly_kind import AnomalyKind
from payrix.domain.enums.chargeback_cycle import ChargebackCycle
from payrix.domain.enums.chargeback_document_type import ChargebackDocumentType
from payrix.domain.enums.chargeback_message_type import ChargebackMessageType
from payrix.domain.enums.chargeback_status import ChargebackStatus
from payrix.domain.enums.date_precision import DatePrecision
from payrix.domain.enums.entity_type import EntityType
from payrix.domain.enums.field_kind import FieldKind
from payrix.domain.enums.transaction_status import TransactionStatus
from payrix.domain.enums.transaction_type import TransactionType

__all__ = [
    "AnomalyKind",
    "ChargebackCycle",
    "ChargebackDocumentType",
    "ChargebackMessageType",
    "ChargebackStatus",
    "DatePrecision",
    "EntityType",
    "FieldKind",
    "TransactionStatus",
    "TransactionType",
]
