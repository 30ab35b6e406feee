"""Dispute workflow errors.

Returned by the chargeback dispute workflow, which sits on top of the
transport. Core transport errors pass through the workflow unchanged.
"""

from dataclasses import dataclass

from payrix.domain.errors.payrix_error import PayrixError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidDisputeAction(PayrixError):
    """The action is not permitted for the dispute's current state.

    Attributes:
        chargeback_id: Chargeback the action was attempted on.
        state: Dispute state of the freshly loaded record.
        action: Attempted action.
    """

    chargeback_id: str
    state: str
    action: str


@dataclass(frozen=True, slots=True, kw_only=True)
class EvidenceInvalid(PayrixError):
    """Evidence failed validation before anything was sent.

    Attributes:
        reason: Short machine-friendly reason (too_many_documents, ...).
    """

    reason: str
