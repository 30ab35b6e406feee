"""Unit tests for the chargeback dispute workflow.

Tests cover:
- State derivation from cycle and status
- Handle dispatch and per-state capabilities
- Actions re-check capability and the actionable flag before posting
- Represent posts a message, then one document per evidence file, then
  reloads the chargeback
- Upload failures stop the action
- Query helpers build the expected searches

Architecture:
- Transport replaced with AsyncMock; no HTTP
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from payrix.application.workflows import (
    CAPABILITIES,
    ArbitrationDispute,
    DisputeAction,
    DisputeState,
    DisputeWorkflow,
    Evidence,
    EvidenceDocument,
    FirstChargebackDispute,
    PreArbitrationDispute,
    RepresentmentDispute,
    RetrievalDispute,
    TerminalDispute,
    dispute_state,
)
from payrix.core.enums import ErrorCode
from payrix.core.result import Failure, Success
from payrix.domain.entities import Chargeback, ChargebackDocument, ChargebackMessage
from payrix.domain.enums import (
    ChargebackCycle,
    ChargebackDocumentType,
    ChargebackMessageType,
    ChargebackStatus,
)
from payrix.domain.errors import (
    ApiRejected,
    InvalidDisputeAction,
    ResourceNotFound,
)
from payrix.domain.value_objects import UnrecognizedVariant


def _chargeback(
    cycle=ChargebackCycle.FIRST,
    status=ChargebackStatus.OPEN,
    actionable=True,
) -> Chargeback:
    return Chargeback(id="t1_chb_1", cycle=cycle, status=status, actionable=actionable)


@pytest.fixture
def transport() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def workflow(transport, logger) -> DisputeWorkflow:
    return DisputeWorkflow(transport=transport, logger=logger)


def _search_of(transport: AsyncMock) -> str:
    entity, search = transport.search.await_args.args
    assert entity is Chargeback
    return search.build()


@pytest.mark.unit
class TestDisputeState:
    """Cycle and status to state."""

    @pytest.mark.parametrize(
        ("cycle", "state"),
        [
            (ChargebackCycle.RETRIEVAL, DisputeState.RETRIEVAL),
            (ChargebackCycle.FIRST, DisputeState.FIRST),
            (ChargebackCycle.REPRESENTMENT, DisputeState.REPRESENTMENT),
            (ChargebackCycle.PRE_ARBITRATION, DisputeState.PRE_ARBITRATION),
            (
                ChargebackCycle.ISSUER_DECLINED_PRE_ARBITRATION,
                DisputeState.PRE_ARBITRATION,
            ),
            (ChargebackCycle.ARBITRATION, DisputeState.ARBITRATION),
            (ChargebackCycle.COMPLIANCE, DisputeState.ARBITRATION),
            (ChargebackCycle.ARBITRATION_WON, DisputeState.TERMINAL),
            (ChargebackCycle.REVERSAL, DisputeState.TERMINAL),
            (None, DisputeState.FIRST),
            (UnrecognizedVariant("ChargebackCycle", "newStage"), DisputeState.FIRST),
        ],
    )
    def test_cycle_mapping(self, cycle, state):
        assert dispute_state(_chargeback(cycle=cycle)) is state

    @pytest.mark.parametrize(
        "status", [ChargebackStatus.CLOSED, ChargebackStatus.WON, ChargebackStatus.LOST]
    )
    def test_closed_status_is_terminal(self, status):
        chargeback = _chargeback(cycle=ChargebackCycle.FIRST, status=status)

        assert dispute_state(chargeback) is DisputeState.TERMINAL


@pytest.mark.unit
class TestHandles:
    """Dispatch and capabilities."""

    @pytest.mark.parametrize(
        ("cycle", "handle_type"),
        [
            (ChargebackCycle.RETRIEVAL, RetrievalDispute),
            (ChargebackCycle.FIRST, FirstChargebackDispute),
            (ChargebackCycle.REPRESENTMENT, RepresentmentDispute),
            (ChargebackCycle.PRE_ARBITRATION, PreArbitrationDispute),
            (ChargebackCycle.ARBITRATION, ArbitrationDispute),
            (ChargebackCycle.ARBITRATION_LOST, TerminalDispute),
        ],
    )
    def test_dispatch(self, workflow, cycle, handle_type):
        handle = workflow.handle(_chargeback(cycle=cycle))

        assert type(handle) is handle_type
        assert handle.allowed_actions == CAPABILITIES[handle.state]

    def test_action_methods_follow_capabilities(self, workflow):
        first = workflow.handle(_chargeback(cycle=ChargebackCycle.FIRST))
        pre_arb = workflow.handle(_chargeback(cycle=ChargebackCycle.PRE_ARBITRATION))
        waiting = workflow.handle(_chargeback(cycle=ChargebackCycle.REPRESENTMENT))

        assert hasattr(first, "represent") and hasattr(first, "accept_liability")
        assert not hasattr(first, "request_arbitration")
        assert hasattr(pre_arb, "request_arbitration")
        assert not hasattr(waiting, "represent")
        assert waiting.allowed_actions == frozenset()

    def test_terminal_flags(self, workflow):
        handle = workflow.handle(_chargeback(status=ChargebackStatus.WON))

        assert handle.is_terminal is True
        assert handle.is_active is False
        assert repr(handle) == "TerminalDispute(id='t1_chb_1', state=terminal)"

    def test_pre_arbitration_allows_everything(self):
        assert CAPABILITIES[DisputeState.PRE_ARBITRATION] == frozenset(DisputeAction)


@pytest.mark.unit
class TestLoadDispute:
    """Loading by id."""

    async def test_loads_and_dispatches(self, workflow, transport):
        transport.get_one.return_value = Success(value=_chargeback())

        result = await workflow.load_dispute("t1_chb_1")

        assert isinstance(result.value, FirstChargebackDispute)
        transport.get_one.assert_awaited_once_with(Chargeback, "t1_chb_1")

    async def test_missing_is_not_found(self, workflow, transport):
        transport.get_one.return_value = Success(value=None)

        result = await workflow.load_dispute("t1_chb_404")

        assert isinstance(result.error, ResourceNotFound)
        assert result.error.status_code == 404

    async def test_failure_passes_through(self, workflow, transport):
        failure = Failure(
            error=ApiRejected(code=ErrorCode.API_REQUEST_REJECTED, message="x")
        )
        transport.get_one.return_value = failure

        assert await workflow.load_dispute("t1_chb_1") is failure

    async def test_refresh_reloads(self, workflow, transport):
        transport.get_one.return_value = Success(
            value=_chargeback(cycle=ChargebackCycle.REPRESENTMENT)
        )
        handle = workflow.handle(_chargeback())

        result = await handle.refresh()

        assert isinstance(result.value, RepresentmentDispute)


@pytest.mark.unit
class TestActions:
    """Posting dispute actions."""

    async def test_represent_posts_message_documents_and_reloads(
        self, workflow, transport, logger
    ):
        transport.create.side_effect = [
            Success(value=ChargebackMessage(id="t1_chm_1")),
            Success(value=ChargebackDocument(id="t1_chd_1")),
            Success(value=ChargebackDocument(id="t1_chd_2")),
        ]
        transport.get_one.return_value = Success(
            value=_chargeback(cycle=ChargebackCycle.REPRESENTMENT)
        )
        evidence = Evidence(
            message="Delivered, tracking 1Z999",
            documents=(
                EvidenceDocument(
                    name="receipt.pdf", content=b"pdf", mime_type="application/pdf"
                ),
                EvidenceDocument(name="pod.png", content=b"png", mime_type="image/png"),
            ),
        )
        handle = workflow.handle(_chargeback())

        result = await handle.represent(evidence)

        assert isinstance(result.value, RepresentmentDispute)
        message_call, first_doc, second_doc = transport.create.await_args_list
        assert message_call.args == (
            ChargebackMessage,
            {
                "chargeback": "t1_chb_1",
                "message_type": ChargebackMessageType.REPRESENT,
                "subject": "Representment",
                "message": "Delivered, tracking 1Z999",
            },
        )
        assert first_doc.args[0] is ChargebackDocument
        assert first_doc.args[1] == {
            "chargeback": "t1_chb_1",
            "chargeback_message": "t1_chm_1",
            "name": "receipt.pdf",
            "document_type": ChargebackDocumentType.PDF,
            "mime_type": "application/pdf",
            "data": "cGRm",
        }
        assert second_doc.args[1]["document_type"] is ChargebackDocumentType.IMAGE
        logger.info.assert_called_once()
        assert logger.info.call_args.args[0] == "payrix_dispute_action_posted"

    async def test_invalid_evidence_sends_nothing(self, workflow, transport):
        handle = workflow.handle(_chargeback())

        result = await handle.represent(Evidence(message=" "))

        assert result.error.code is ErrorCode.EVIDENCE_INVALID
        transport.create.assert_not_awaited()

    async def test_accept_liability(self, workflow, transport):
        transport.create.return_value = Success(value=ChargebackMessage(id="m"))
        transport.get_one.return_value = Success(
            value=_chargeback(status=ChargebackStatus.LOST)
        )
        handle = workflow.handle(_chargeback(cycle=ChargebackCycle.PRE_ARBITRATION))

        result = await handle.accept_liability()

        assert isinstance(result.value, TerminalDispute)
        values = transport.create.await_args.args[1]
        assert values["message_type"] is ChargebackMessageType.ACCEPT_LIABILITY
        assert values["subject"] == "Accept Liability"

    async def test_request_arbitration(self, workflow, transport):
        transport.create.return_value = Success(value=ChargebackMessage(id="m"))
        transport.get_one.return_value = Success(
            value=_chargeback(cycle=ChargebackCycle.ARBITRATION)
        )
        handle = workflow.handle(_chargeback(cycle=ChargebackCycle.PRE_ARBITRATION))

        result = await handle.request_arbitration()

        assert isinstance(result.value, ArbitrationDispute)
        values = transport.create.await_args.args[1]
        assert values["message_type"] is ChargebackMessageType.REQUEST_ARBITRATION

    @pytest.mark.parametrize("actionable", [False, None])
    async def test_not_actionable_is_rejected(
        self, workflow, transport, logger, actionable
    ):
        handle = workflow.handle(_chargeback(actionable=actionable))

        result = await handle.accept_liability()

        assert isinstance(result.error, InvalidDisputeAction)
        assert result.error.code is ErrorCode.DISPUTE_ACTION_NOT_ALLOWED
        assert result.error.state == "first"
        assert result.error.action == "accept_liability"
        transport.create.assert_not_awaited()
        assert logger.warning.call_args.args[0] == "payrix_dispute_action_rejected"

    async def test_capability_rechecked_on_perform(self, workflow, transport):
        handle = workflow.handle(_chargeback(cycle=ChargebackCycle.REPRESENTMENT))

        result = await workflow.perform(
            handle,
            DisputeAction.REPRESENT,
            message_type=ChargebackMessageType.REPRESENT,
            subject="Representment",
            message="late",
        )

        assert isinstance(result.error, InvalidDisputeAction)
        assert result.error.message == "represent is not allowed in representment"
        transport.create.assert_not_awaited()

    async def test_message_failure_stops_action(self, workflow, transport):
        failure = Failure(
            error=ApiRejected(code=ErrorCode.API_REQUEST_REJECTED, message="no")
        )
        transport.create.return_value = failure
        handle = workflow.handle(_chargeback())

        assert await handle.accept_liability() is failure
        transport.get_one.assert_not_awaited()

    async def test_document_failure_stops_uploads(self, workflow, transport, logger):
        failure = Failure(
            error=ApiRejected(code=ErrorCode.API_REQUEST_REJECTED, message="too big")
        )
        transport.create.side_effect = [
            Success(value=ChargebackMessage(id="t1_chm_1")),
            failure,
        ]
        documents = tuple(
            EvidenceDocument(name=f"{i}.pdf", content=b"x", mime_type="application/pdf")
            for i in range(3)
        )
        handle = workflow.handle(_chargeback())

        result = await handle.represent(Evidence(message="m", documents=documents))

        assert result is failure
        assert transport.create.await_count == 2
        transport.get_one.assert_not_awaited()
        assert logger.error.call_args.args[0] == (
            "payrix_dispute_document_upload_failed"
        )


@pytest.mark.unit
class TestQueries:
    """Listing helpers."""

    async def test_actionable_disputes(self, workflow, transport):
        transport.search.return_value = Success(
            value=[_chargeback(), _chargeback(cycle=ChargebackCycle.PRE_ARBITRATION)]
        )

        result = await workflow.get_actionable_disputes("t1_mer_1")

        assert [type(h) for h in result.value] == [
            FirstChargebackDispute,
            PreArbitrationDispute,
        ]
        assert _search_of(transport) == (
            "merchant[equals]=t1_mer_1&status[equals]=open&actionable[equals]=1"
        )

    async def test_by_cycle(self, workflow, transport):
        transport.search.return_value = Success(value=[])

        await workflow.get_disputes_by_cycle(
            "t1_mer_1", ChargebackCycle.PRE_ARBITRATION
        )

        assert _search_of(transport) == (
            "merchant[equals]=t1_mer_1&cycle[equals]=preArbitration"
        )

    async def test_terminal_cycle_skips_request(self, workflow, transport):
        result = await workflow.get_disputes_by_cycle(
            "t1_mer_1", ChargebackCycle.ARBITRATION_WON
        )

        assert result == Success(value=[])
        transport.search.assert_not_awaited()

    async def test_for_transaction(self, workflow, transport):
        transport.search.return_value = Success(value=[])

        await workflow.get_disputes_for_transaction("t1_txn_1")

        assert _search_of(transport) == "txn[equals]=t1_txn_1"

    async def test_search_failure_passes_through(self, workflow, transport):
        failure = Failure(
            error=ApiRejected(code=ErrorCode.API_REQUEST_REJECTED, message="x")
        )
        transport.search.return_value = failure

        assert await workflow.get_disputes_for_transaction("t1_txn_1") is failure
