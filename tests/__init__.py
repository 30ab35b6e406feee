"""Test suite for the Payrix client.

Test structure:
- unit/: Unit tests - components in isolation, no network
- integration/: HTTP-level tests against a mocked Payrix API (pytest-httpx)
  and real structlog output

Backoff sleeps and rate gate clocks are injected, so no test waits.
"""
