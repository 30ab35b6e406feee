"""Logging adapters.

Usage:
    from payrix.infrastructure.logging import ConsoleAdapter
"""

from payrix.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
