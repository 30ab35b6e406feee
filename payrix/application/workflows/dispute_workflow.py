"""Chargeback dispute workflow.

A chargeback moves through dispute stages (the upstream `cycle`). What a
merchant may do depends on the stage, so every loaded chargeback is
dispatched into a state-specific handle that only exposes the actions that
stage permits:

    State             Actions
    RETRIEVAL         (none, answer the retrieval request out of band)
    FIRST             represent, accept_liability
    REPRESENTMENT     (none, waiting on the issuer)
    PRE_ARBITRATION   represent, accept_liability, request_arbitration
    ARBITRATION       (none, waiting on the card network)
    TERMINAL          (none)

State is derived only from a freshly loaded record. Every action re-checks
the capability table and the `actionable` flag, posts a ChargebackMessage
(plus ChargebackDocuments for evidence), then reloads the chargeback and
returns a new handle for whatever stage the upstream moved it to.

Usage:
    workflow = create_dispute_workflow()
    match await workflow.load_dispute("t1_chb_123"):
        case Success(value=FirstChargebackDispute() as dispute):
            result = await dispute.represent(evidence)
        case Success(value=dispute):
            print(dispute.state, "has no actions")
        case Failure(error=error):
            print(error.message)
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, ClassVar

import structlog

from payrix.application.workflows.evidence import Evidence, EvidenceDocument
from payrix.core.enums import ErrorCode
from payrix.core.result import Failure, Result, Success
from payrix.domain.entities import Chargeback, ChargebackDocument, ChargebackMessage
from payrix.domain.enums import ChargebackCycle, ChargebackMessageType, ChargebackStatus
from payrix.domain.errors import InvalidDisputeAction, PayrixError, ResourceNotFound
from payrix.domain.protocols import LoggerProtocol
from payrix.infrastructure.http import PayrixTransport, SearchBuilder


class DisputeState(str, Enum):
    """Dispute stage as far as merchant actions are concerned."""

    RETRIEVAL = "retrieval"
    FIRST = "first"
    REPRESENTMENT = "representment"
    PRE_ARBITRATION = "pre_arbitration"
    ARBITRATION = "arbitration"
    TERMINAL = "terminal"


class DisputeAction(str, Enum):
    """Merchant response to a chargeback."""

    REPRESENT = "represent"
    ACCEPT_LIABILITY = "accept_liability"
    REQUEST_ARBITRATION = "request_arbitration"


CAPABILITIES: Mapping[DisputeState, frozenset[DisputeAction]] = {
    DisputeState.RETRIEVAL: frozenset(),
    DisputeState.FIRST: frozenset(
        {DisputeAction.REPRESENT, DisputeAction.ACCEPT_LIABILITY}
    ),
    DisputeState.REPRESENTMENT: frozenset(),
    DisputeState.PRE_ARBITRATION: frozenset(
        {
            DisputeAction.REPRESENT,
            DisputeAction.ACCEPT_LIABILITY,
            DisputeAction.REQUEST_ARBITRATION,
        }
    ),
    DisputeState.ARBITRATION: frozenset(),
    DisputeState.TERMINAL: frozenset(),
}

_CYCLE_STATES: Mapping[ChargebackCycle, DisputeState] = {
    ChargebackCycle.RETRIEVAL: DisputeState.RETRIEVAL,
    ChargebackCycle.FIRST: DisputeState.FIRST,
    ChargebackCycle.REPRESENTMENT: DisputeState.REPRESENTMENT,
    ChargebackCycle.PRE_ARBITRATION: DisputeState.PRE_ARBITRATION,
    ChargebackCycle.ISSUER_DECLINED_PRE_ARBITRATION: DisputeState.PRE_ARBITRATION,
    ChargebackCycle.RESPONSE_TO_ISSUER_PRE_ARBITRATION: DisputeState.PRE_ARBITRATION,
    ChargebackCycle.MERCHANT_DECLINED_PRE_ARBITRATION: DisputeState.PRE_ARBITRATION,
    ChargebackCycle.ARBITRATION: DisputeState.ARBITRATION,
    ChargebackCycle.PRE_COMPLIANCE: DisputeState.ARBITRATION,
    ChargebackCycle.COMPLIANCE: DisputeState.ARBITRATION,
}


def dispute_state(chargeback: Chargeback) -> DisputeState:
    """Derive the dispute state of a loaded chargeback.

    Closed, won or lost status and the final cycles are terminal. Other
    cycles map to their stage; an absent or unrecognized cycle counts as a
    first chargeback.
    """
    if chargeback.status in ChargebackStatus.terminal():
        return DisputeState.TERMINAL
    if chargeback.cycle in ChargebackCycle.terminal():
        return DisputeState.TERMINAL
    if isinstance(chargeback.cycle, ChargebackCycle):
        return _CYCLE_STATES.get(chargeback.cycle, DisputeState.FIRST)
    return DisputeState.FIRST


class DisputeHandle:
    """A loaded chargeback in a known dispute state.

    Subclasses fix STATE and add methods for the actions that state allows.
    Handles are immutable snapshots; actions return a new handle.
    """

    STATE: ClassVar[DisputeState]

    def __init__(self, chargeback: Chargeback, workflow: "DisputeWorkflow") -> None:
        self._chargeback = chargeback
        self._workflow = workflow

    @property
    def chargeback(self) -> Chargeback:
        return self._chargeback

    @property
    def id(self) -> str:
        return self._chargeback.id or ""

    @property
    def state(self) -> DisputeState:
        return self.STATE

    @property
    def allowed_actions(self) -> frozenset[DisputeAction]:
        return CAPABILITIES[self.STATE]

    @property
    def is_terminal(self) -> bool:
        return self.STATE is DisputeState.TERMINAL

    @property
    def is_active(self) -> bool:
        return not self.is_terminal

    async def refresh(self) -> Result["DisputeHandle", PayrixError]:
        """Reload the chargeback and return a handle for its current state."""
        return await self._workflow.load_dispute(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, state={self.STATE.value})"


class _Representable(DisputeHandle):
    async def represent(
        self, evidence: Evidence
    ) -> Result[DisputeHandle, PayrixError]:
        """Contest the chargeback with evidence.

        Evidence is validated before any request is sent.
        """
        validation = evidence.validate()
        if isinstance(validation, Failure):
            return validation
        return await self._workflow.perform(
            self,
            DisputeAction.REPRESENT,
            message_type=ChargebackMessageType.REPRESENT,
            subject="Representment",
            message=evidence.message,
            documents=evidence.documents,
        )


class _LiabilityAcceptable(DisputeHandle):
    async def accept_liability(self) -> Result[DisputeHandle, PayrixError]:
        """Accept the chargeback; the dispute closes in the issuer's favor."""
        return await self._workflow.perform(
            self,
            DisputeAction.ACCEPT_LIABILITY,
            message_type=ChargebackMessageType.ACCEPT_LIABILITY,
            subject="Accept Liability",
            message="Merchant accepts liability for this chargeback",
        )


class RetrievalDispute(DisputeHandle):
    STATE = DisputeState.RETRIEVAL


class FirstChargebackDispute(_Representable, _LiabilityAcceptable):
    STATE = DisputeState.FIRST


class RepresentmentDispute(DisputeHandle):
    STATE = DisputeState.REPRESENTMENT


class PreArbitrationDispute(_Representable, _LiabilityAcceptable):
    STATE = DisputeState.PRE_ARBITRATION

    async def request_arbitration(self) -> Result[DisputeHandle, PayrixError]:
        """Escalate to the card network for a binding decision.

        Networks usually charge a fee, refunded when the merchant wins.
        """
        return await self._workflow.perform(
            self,
            DisputeAction.REQUEST_ARBITRATION,
            message_type=ChargebackMessageType.REQUEST_ARBITRATION,
            subject="Request Arbitration",
            message="Merchant requests card network arbitration",
        )


class ArbitrationDispute(DisputeHandle):
    STATE = DisputeState.ARBITRATION


class TerminalDispute(DisputeHandle):
    STATE = DisputeState.TERMINAL


_HANDLES: Mapping[DisputeState, type[DisputeHandle]] = {
    DisputeState.RETRIEVAL: RetrievalDispute,
    DisputeState.FIRST: FirstChargebackDispute,
    DisputeState.REPRESENTMENT: RepresentmentDispute,
    DisputeState.PRE_ARBITRATION: PreArbitrationDispute,
    DisputeState.ARBITRATION: ArbitrationDispute,
    DisputeState.TERMINAL: TerminalDispute,
}


class DisputeWorkflow:
    """Load chargebacks as dispute handles and carry out dispute actions.

    Args:
        transport: Transport used for every upstream call.
        logger: Structured logger; defaults to a structlog logger.
    """

    def __init__(
        self,
        *,
        transport: PayrixTransport,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._transport = transport
        self._logger = logger or structlog.get_logger("payrix_dispute")

    def handle(self, chargeback: Chargeback) -> DisputeHandle:
        """Dispatch a loaded chargeback into the handle for its state.

        Use for records obtained elsewhere (a listing or a webhook payload
        decoded by the codec).
        """
        return _HANDLES[dispute_state(chargeback)](chargeback, self)

    async def load_dispute(
        self, chargeback_id: str
    ) -> Result[DisputeHandle, PayrixError]:
        """Fetch a chargeback and dispatch it into its state handle.

        Raises:
            ValueError: If chargeback_id is not a valid id.
        """
        result = await self._transport.get_one(Chargeback, chargeback_id)
        if isinstance(result, Failure):
            return result
        if result.value is None:
            return Failure(
                error=ResourceNotFound(
                    code=ErrorCode.RESOURCE_NOT_FOUND,
                    message=f"Chargeback {chargeback_id} not found",
                    status_code=404,
                )
            )
        return Success(value=self.handle(result.value))

    async def perform(
        self,
        handle: DisputeHandle,
        action: DisputeAction,
        *,
        message_type: ChargebackMessageType,
        subject: str,
        message: str,
        documents: Sequence[EvidenceDocument] = (),
    ) -> Result[DisputeHandle, PayrixError]:
        """Post one dispute action and return the reloaded dispute.

        Documents are uploaded after the message, in order; the first
        failing upload stops the action and is returned.
        """
        chargeback = handle.chargeback
        state = dispute_state(chargeback)
        if action not in CAPABILITIES[state]:
            return self._not_allowed(
                handle,
                state,
                action,
                f"{action.value} is not allowed in {state.value}",
            )
        if not chargeback.actionable:
            return self._not_allowed(
                handle, state, action, "Chargeback is not currently actionable"
            )

        posted = await self._transport.create(
            ChargebackMessage,
            {
                "chargeback": handle.id,
                "message_type": message_type,
                "subject": subject,
                "message": message,
            },
        )
        if isinstance(posted, Failure):
            return posted

        for document in documents:
            uploaded = await self._transport.create(
                ChargebackDocument,
                self._document_values(handle, posted.value, document),
            )
            if isinstance(uploaded, Failure):
                self._logger.error(
                    "payrix_dispute_document_upload_failed",
                    chargeback_id=handle.id,
                    document=document.name,
                    error_code=uploaded.error.code.value,
                )
                return uploaded

        self._logger.info(
            "payrix_dispute_action_posted",
            chargeback_id=handle.id,
            action=action.value,
            state=state.value,
            documents=len(documents),
        )
        return await self.load_dispute(handle.id)

    def _not_allowed(
        self,
        handle: DisputeHandle,
        state: DisputeState,
        action: DisputeAction,
        message: str,
    ) -> Failure[InvalidDisputeAction]:
        self._logger.warning(
            "payrix_dispute_action_rejected",
            chargeback_id=handle.id,
            action=action.value,
            state=state.value,
        )
        return Failure(
            error=InvalidDisputeAction(
                code=ErrorCode.DISPUTE_ACTION_NOT_ALLOWED,
                message=message,
                chargeback_id=handle.id,
                state=state.value,
                action=action.value,
            )
        )

    @staticmethod
    def _document_values(
        handle: DisputeHandle,
        posted: ChargebackMessage,
        document: EvidenceDocument,
    ) -> dict[str, Any]:
        return {
            "chargeback": handle.id,
            "chargeback_message": posted.id,
            "name": document.name,
            "document_type": document.document_type,
            "mime_type": document.mime_type,
            "data": document.encoded(),
        }

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def _search(
        self, search: SearchBuilder
    ) -> Result[list[DisputeHandle], PayrixError]:
        result = await self._transport.search(Chargeback, search)
        if isinstance(result, Failure):
            return result
        return Success(value=[self.handle(chargeback) for chargeback in result.value])

    async def get_actionable_disputes(
        self, merchant_id: str
    ) -> Result[list[DisputeHandle], PayrixError]:
        """List open, actionable chargebacks of a merchant."""
        return await self._search(
            SearchBuilder()
            .equals("merchant", merchant_id)
            .equals("status", ChargebackStatus.OPEN)
            .equals("actionable", True)
        )

    async def get_disputes_by_cycle(
        self, merchant_id: str, cycle: ChargebackCycle
    ) -> Result[list[DisputeHandle], PayrixError]:
        """List a merchant's chargebacks in one cycle.

        Final cycles (arbitration won/lost/split, reversal) return an empty
        list without a request.
        """
        if cycle in ChargebackCycle.terminal():
            return Success(value=[])
        return await self._search(
            SearchBuilder().equals("merchant", merchant_id).equals("cycle", cycle)
        )

    async def get_disputes_for_transaction(
        self, transaction_id: str
    ) -> Result[list[DisputeHandle], PayrixError]:
        """List every chargeback raised against a transaction."""
        return await self._search(SearchBuilder().equals("txn", transaction_id))
