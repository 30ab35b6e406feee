"""Chargeback dispute workflow.

Usage:
    from payrix.application.workflows import DisputeWorkflow, Evidence
"""

from payrix.application.workflows.dispute_workflow import (
    CAPABILITIES,
    ArbitrationDispute,
    DisputeAction,
    DisputeHandle,
    DisputeState,
    DisputeWorkflow,
    FirstChargebackDispute,
    PreArbitrationDispute,
    RepresentmentDispute,
    RetrievalDispute,
    TerminalDispute,
    dispute_state,
)
from payrix.application.workflows.evidence import (
    MAX_DOCUMENT_SIZE,
    MAX_DOCUMENTS,
    MAX_TOTAL_SIZE,
    SUPPORTED_MIME_TYPES,
    Evidence,
    EvidenceDocument,
)

__all__ = [
    "CAPABILITIES",
    "MAX_DOCUMENTS",
    "MAX_DOCUMENT_SIZE",
    "MAX_TOTAL_SIZE",
    "SUPPORTED_MIME_TYPES",
    "ArbitrationDispute",
    "DisputeAction",
    "DisputeHandle",
    "DisputeState",
    "DisputeWorkflow",
    "Evidence",
    "EvidenceDocument",
    "FirstChargebackDispute",
    "PreArbitrationDispute",
    "RepresentmentDispute",
    "RetrievalDispute",
    "TerminalDispute",
    "dispute_state",
]
