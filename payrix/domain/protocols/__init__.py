"""Domain protocols (ports).

Usage:
    from payrix.domain.protocols import LoggerProtocol, RateGateProtocol
"""

from payrix.domain.protocols.logger_protocol import LoggerProtocol
from payrix.domain.protocols.rate_gate_protocol import RateGateProtocol
from payrix.domain.protocols.record_protocol import RecordProtocol

__all__ = ["LoggerProtocol", "RateGateProtocol", "RecordProtocol"]
