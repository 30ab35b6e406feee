"""Rate limiting infrastructure.

Usage:
    from payrix.infrastructure.rate_limit import SlidingWindowRateGate
"""

from payrix.infrastructure.rate_limit.sliding_window_gate import SlidingWindowRateGate

__all__ = ["SlidingWindowRateGate"]
