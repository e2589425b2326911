"""
Query error taxonomy

Expected, user-facing outcomes of a metrics query. Route handlers translate
these into HTTP responses; anything else escaping a handler is treated as an
internal fault.

    MetricsError
    ├── NotFoundError          -> 404 (unknown metric, team, author, id)
    │   └── FixtureNotFoundError
    └── InvalidParameterError  -> 400 (malformed export or integrated parameters)

Non-GET requests never reach a handler; the router rejects them with 405.
"""


class MetricsError(Exception):
    """Base class for expected query failures."""


class NotFoundError(MetricsError):
    """The query referenced a metric, team, author or id that does not exist."""


class FixtureNotFoundError(NotFoundError):
    """No fixture is registered under the requested domain name."""


class InvalidParameterError(MetricsError):
    """A query parameter failed validation."""
