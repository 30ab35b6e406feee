"""Chargeback message types (camelCase strings on the wire).

Only the types the dispute workflow sends are listed; others decode to
UnrecognizedVariant.
"""

from enum import Enum


class ChargebackMessageType(str, Enum):
    """Kind of message posted against a chargeback."""

    ASSIGN = "assign"
    NOTATE = "notate"
    ACCEPT_LIABILITY = "acceptLiability"
    REPRESENT = "represent"
    RESPOND = "respond"
    REQUEST_ARBITRATION = "requestArbitration"
