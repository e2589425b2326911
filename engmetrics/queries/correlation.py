"""
Correlation metrics queries - story points vs. commits, planning accuracy,
velocity, consistency and insights.

Unlike git metrics, a named correlation metric filtered by author keeps every
matching member entry and returns an empty sequence when none match.
"""

from typing import Any

from engmetrics.domain import Insight
from engmetrics.fixtures import FixtureStore

from .filters import BY_TEAM, AuthorMatch, MetricDefinition, MetricsQuery, SequenceTag


def _insight_involves(entry: dict, team_id: str) -> bool:
    return Insight.from_json(entry).involves(team_id)


CORRELATION_METRICS = (
    MetricDefinition(
        "storyPointToCommitRatio",
        team_sequences=(BY_TEAM, SequenceTag("members", "team")),
        author_sequences=(SequenceTag("members", "name"),),
    ),
    MetricDefinition("planningAccuracy"),
    MetricDefinition("velocity"),
    MetricDefinition("consistency", nested=("sprintData",)),
    MetricDefinition("insights", team_sequences=(), team_matcher=_insight_involves),
)

correlation_query = MetricsQuery("correlation", CORRELATION_METRICS, author_match=AuthorMatch.FILTER)


def query_correlation(
    store: FixtureStore,
    metric: str | None = None,
    team_id: str | None = None,
    author_id: str | None = None,
) -> Any:
    """Query the correlation domain; see ``query_git_metrics`` for argument semantics."""
    return correlation_query.run(store.get("correlation"), metric_name=metric, team_id=team_id, author_id=author_id)
