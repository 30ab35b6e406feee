"""Wire codec.

Usage:
    from payrix.infrastructure.codec import FlexibleCodec
"""

from payrix.infrastructure.codec.flexible_codec import FlexibleCodec
from payrix.infrastructure.codec.wire_rules import WIRE_RULES, WireMatch, WireRule

__all__ = ["FlexibleCodec", "WIRE_RULES", "WireMatch", "WireRule"]
