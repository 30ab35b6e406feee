"""Transaction type codes (integers on the wire)."""

from enum import IntEnum


class TransactionType(IntEnum):
    """Kind of payment operation a transaction represents."""

    CREDIT_CARD_SALE = 1
    CREDIT_CARD_AUTH = 2
    CREDIT_CARD_CAPTURE = 3
    CREDIT_CARD_REVERSE_AUTH = 4
    CREDIT_CARD_REFUND = 5
    ECHECK_SALE = 7
    ECHECK_REFUND = 8
    ECHECK_REDEPOSIT = 11
    ECHECK_ACCOUNT_VERIFICATION = 12
    INCREMENTAL_AUTHORIZATION = 14
