"""Core errors package.

Usage:
    from payrix.core.errors import ConfigurationError, DomainError
"""

from payrix.core.errors.configuration_error import ConfigurationError
from payrix.core.errors.domain_error import DomainError

__all__ = ["ConfigurationError", "DomainError"]
