"""Chargeback cycle (dispute stage) values.

Wire values are camelCase strings. The list follows live API observations
rather than the published contract, which omits the pre-arbitration
sub-stages.
"""

from enum import Enum


class ChargebackCycle(str, Enum):
    """Dispute stage reported by the upstream."""

    RETRIEVAL = "retrieval"
    FIRST = "first"
    REPRESENTMENT = "representment"
    PRE_ARBITRATION = "preArbitration"
    ARBITRATION = "arbitration"
    REVERSAL = "reversal"
    ARBITRATION_LOST = "arbitrationLost"
    ARBITRATION_SPLIT = "arbitrationSplit"
    ARBITRATION_WON = "arbitrationWon"
    ISSUER_ACCEPT_PRE_ARBITRATION = "issuerAcceptPreArbitration"
    ISSUER_DECLINED_PRE_ARBITRATION = "issuerDeclinedPreArbitration"
    RESPONSE_TO_ISSUER_PRE_ARBITRATION = "responseToIssuerPreArbitration"
    MERCHANT_ACCEPTED_PRE_ARBITRATION = "merchantAcceptedPreArbitration"
    MERCHANT_DECLINED_PRE_ARBITRATION = "merchantDeclinedPreArbitration"
    PRE_COMPLIANCE = "preCompliance"
    COMPLIANCE = "compliance"

    @classmethod
    def terminal(cls) -> frozenset["ChargebackCycle"]:
        """Return cycles after which no dispute action is possible."""
        return frozenset(
            {
                cls.ARBITRATION_WON,
                cls.ARBITRATION_LOST,
                cls.ARBITRATION_SPLIT,
                cls.REVERSAL,
            }
        )
