"""Representative Payrix records.

Each record declares its endpoint (`ENTITY`) and wire schema (`FIELDS`);
any other record shape following the same contract works with the
transport unchanged.
"""

from payrix.domain.entities.chargeback import (
    Chargeback,
    ChargebackDocument,
    ChargebackMessage,
)
from payrix.domain.entities.customer import Customer
from payrix.domain.entities.transaction import Transaction

__all__ = [
    "Chargeback",
    "ChargebackDocument",
    "ChargebackMessage",
    "Customer",
    "Transaction",
]
