"""
Dashboard overview query
"""

from engmetrics.core import get_logger
from engmetrics.fixtures import FixtureStore

logger = get_logger(__name__)


def get_overview(
    store: FixtureStore,
    start_date: str | None = None,
    end_date: str | None = None,
    team_id: str | None = None,
) -> dict:
    """
    Return the overview fixture.

    The date and team parameters are accepted for API compatibility and logged,
    but the overview is always the organisation-wide snapshot.
    """
    if start_date or end_date or team_id:
        logger.debug(
            "Overview filters ignored",
            extra={"start_date": start_date, "end_date": end_date, "team_id": team_id},
        )
    return store.get("overview")
