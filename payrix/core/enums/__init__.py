"""Core enums package.

Usage:
    from payrix.core.enums import ErrorCode, Environment
"""

from payrix.core.enums.environment import Environment
from payrix.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
