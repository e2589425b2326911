"""
Issue tracker completion stats - story points planned vs. delivered per
team and member for the current sprint.
"""

from engmetrics.core import get_logger
from engmetrics.errors import NotFoundError
from engmetrics.fixtures import FixtureStore

logger = get_logger(__name__)


def find_member_stats(stats_by_team: dict, member_id: str) -> tuple[dict, dict]:
    """
    Locate a member's completion stats.

    Returns:
        (team stats, member stats) for the first team listing ``member_id``

    Raises:
        NotFoundError: If no team lists the member
    """
    for team_stats in stats_by_team.values():
        for member_stats in team_stats["memberStats"]:
            if member_stats["accountId"] == member_id:
                return team_stats, member_stats
    raise NotFoundError(f"Member with ID {member_id} not found")


def query_jira_stats(
    store: FixtureStore,
    team_id: str | None = None,
    member_id: str | None = None,
    sprint_id: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict | list:
    """
    Get completion stats for one team, one member, or every team.

    Args:
        store: Fixture store
        team_id: Team id (e.g. "team-beta"); takes precedence over ``member_id``
        member_id: Issue tracker account id (e.g. "team-beta-member-2")
        sprint_id, start_date, end_date: Accepted and logged, never filter

    Returns:
        Team stats, member stats, or the list of all team stats in fixture order

    Raises:
        NotFoundError: If the team or member is unknown
    """
    if sprint_id or start_date or end_date:
        logger.debug(
            "Jira stats filters ignored",
            extra={"sprint_id": sprint_id, "start_date": start_date, "end_date": end_date},
        )

    stats_by_team = store.get("jira_stats")

    if team_id:
        if team_id not in stats_by_team:
            raise NotFoundError(f"Team with ID {team_id} not found")
        return stats_by_team[team_id]

    if member_id:
        _, member_stats = find_member_stats(stats_by_team, member_id)
        return member_stats

    return list(stats_by_team.values())
