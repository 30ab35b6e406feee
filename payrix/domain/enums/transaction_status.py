"""Transaction status codes.

The contract declares an integer; GET responses have been observed to
carry the same codes as strings ("1"), which the codec accepts.
"""

from enum import IntEnum


class TransactionStatus(IntEnum):
    """Processing status of a transaction."""

    PENDING = 0
    APPROVED = 1
    FAILED = 2
    CAPTURED = 3
    SETTLED = 4
    RETURNED = 5
