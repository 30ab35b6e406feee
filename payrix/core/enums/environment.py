"""Payrix API environments.

The upstream exposes two independent deployments. Credentials are not
shared between them, so the environment is fixed at client construction.

Environments:
- TEST: Sandbox deployment (test-api.payrix.com)
- PRODUCTION: Live deployment (api.payrix.com)
"""

from enum import Enum

from payrix.core.constants import PRODUCTION_BASE_URL, TEST_BASE_URL


class Environment(str, Enum):
    """Payrix API deployment selector."""

    TEST = "test"
    PRODUCTION = "production"

    @property
    def base_url(self) -> str:
        """Return the API base URL for this environment (with trailing slash)."""
        if self is Environment.PRODUCTION:
            return PRODUCTION_BASE_URL
        return TEST_BASE_URL
