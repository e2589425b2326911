"""
REST API for the engineering metrics dashboard

Provides read-only access to metrics fixtures via HTTP endpoints.
"""

from .app import create_app

__all__ = ["create_app"]
