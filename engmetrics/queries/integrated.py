"""
Integrated metrics - issue tracker completion joined with git activity

Four views behind one endpoint, chosen by ``type``:
    - team: completion stats, git metrics and correlations for one team
    - member: the same for one member
    - insights: metric movements, optionally for one team
    - overview: organisation-wide totals and per-team summary

Completion stats are read from the ``jira_stats`` domain and joined at query
time, so both endpoints always agree.
"""

from engmetrics.core import get_logger
from engmetrics.errors import InvalidParameterError, NotFoundError
from engmetrics.fixtures import FixtureStore

from .jira_stats import find_member_stats

logger = get_logger(__name__)

INTEGRATED_TYPES = ("team", "member", "insights", "overview")


def story_point_to_commit_ratio(commit_count: int, total_story_points: int) -> float:
    """Commits per planned story point, 0.0 when nothing was planned."""
    if total_story_points <= 0:
        return 0.0
    return round(commit_count / total_story_points, 2)


def integrated_team(store: FixtureStore, team_id: str) -> dict:
    """
    Raises:
        NotFoundError: If the team has no integrated record
    """
    teams = store.get("integrated")["teams"]
    if team_id not in teams:
        raise NotFoundError(f"Team with ID {team_id} not found")

    record = teams[team_id]
    jira_metrics = store.get("jira_stats")[team_id]
    correlations = {
        "storyPointToCommitRatio": story_point_to_commit_ratio(
            record["gitMetrics"]["commitCount"], jira_metrics["totalStoryPoints"]
        ),
        **record["correlations"],
    }

    return {
        "teamId": team_id,
        "teamName": record["teamName"],
        "jiraMetrics": jira_metrics,
        "gitMetrics": record["gitMetrics"],
        "correlations": correlations,
        "date": record["date"],
    }


def integrated_member(store: FixtureStore, member_id: str) -> dict:
    """
    Raises:
        NotFoundError: If the member is unknown to the issue tracker or has no git record
    """
    team_stats, jira_metrics = find_member_stats(store.get("jira_stats"), member_id)

    members = store.get("integrated")["members"]
    if member_id not in members:
        logger.warning("Member has completion stats but no git record", extra={"member_id": member_id})
        raise NotFoundError(f"Member with ID {member_id} not found")

    record = members[member_id]
    correlations = {
        "storyPointToCommitRatio": story_point_to_commit_ratio(
            record["gitMetrics"]["commitCount"], jira_metrics["totalStoryPoints"]
        ),
        **record["correlations"],
    }

    return {
        "accountId": member_id,
        "displayName": jira_metrics["displayName"],
        "teamId": team_stats["teamId"],
        "teamName": team_stats["teamName"],
        "jiraMetrics": jira_metrics,
        "gitMetrics": record["gitMetrics"],
        "correlations": correlations,
        "date": team_stats["date"],
    }


def integrated_insights(store: FixtureStore, team_id: str | None = None) -> list[dict]:
    """
    Insights in fixture order, narrowed to ``team_id`` when given.

    Raises:
        NotFoundError: If ``team_id`` is not a known team
    """
    root = store.get("integrated")
    if not team_id:
        return root["insights"]

    if team_id not in root["teams"]:
        raise NotFoundError(f"Team with ID {team_id} not found")
    return [insight for insight in root["insights"] if insight["targetId"] == team_id]


def query_integrated(
    store: FixtureStore,
    metrics_type: str | None,
    team_id: str | None = None,
    member_id: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict | list:
    """
    Dispatch an integrated metrics request on its ``type``.

    Args:
        store: Fixture store
        metrics_type: One of INTEGRATED_TYPES
        team_id: Team id, required for ``team``, optional for ``insights``
        member_id: Account id, required for ``member``
        start_date, end_date: Accepted and logged, never filter

    Raises:
        InvalidParameterError: For an unknown type or a missing required id
        NotFoundError: If the team or member is unknown
    """
    if start_date or end_date:
        logger.debug("Integrated metrics date range ignored", extra={"start_date": start_date, "end_date": end_date})

    if metrics_type not in INTEGRATED_TYPES:
        raise InvalidParameterError("Invalid metrics type")

    if metrics_type == "team":
        if not team_id:
            raise InvalidParameterError("Team ID is required for team metrics")
        return integrated_team(store, team_id)

    if metrics_type == "member":
        if not member_id:
            raise InvalidParameterError("Member ID is required for member metrics")
        return integrated_member(store, member_id)

    if metrics_type == "insights":
        return integrated_insights(store, team_id)

    return store.get("integrated")["overview"]
