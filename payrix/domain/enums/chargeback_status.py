"""Chargeback status values (lowercase strings on the wire)."""

from enum import Enum


class ChargebackStatus(str, Enum):
    """Overall chargeback status."""

    OPEN = "open"
    CLOSED = "closed"
    WON = "won"
    LOST = "lost"

    @classmethod
    def terminal(cls) -> frozenset["ChargebackStatus"]:
        """Return statuses of closed disputes."""
        return frozenset({cls.CLOSED, cls.WON, cls.LOST})
