"""
Static metrics fixtures and the store that serves them.
"""

from .store import DEFAULT_FIXTURES_DIR, DOMAINS, FixtureError, FixtureStore

__all__ = ["DEFAULT_FIXTURES_DIR", "DOMAINS", "FixtureError", "FixtureStore"]
