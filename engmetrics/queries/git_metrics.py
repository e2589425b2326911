"""
Git metrics queries - commits, pull requests, code reviews, repositories

Named metrics are narrowed to exactly one team or one author; asking for a
team or author the metric does not track is a NotFoundError.
"""

from typing import Any

from engmetrics.fixtures import FixtureStore

from .filters import BY_TEAM, AuthorMatch, MetricDefinition, MetricsQuery, SequenceTag

GIT_METRICS = (
    MetricDefinition(
        "commitActivity",
        team_sequences=(BY_TEAM, SequenceTag("byAuthor", "team")),
        author_sequences=(SequenceTag("byAuthor", "author"),),
    ),
    MetricDefinition(
        "pullRequests",
        team_sequences=(BY_TEAM, SequenceTag("byAuthor", "team")),
        author_sequences=(SequenceTag("byAuthor", "author"),),
        nested=("timeToMerge",),
    ),
    MetricDefinition(
        "codeReviews",
        team_sequences=(BY_TEAM, SequenceTag("byReviewer", "team")),
        author_sequences=(SequenceTag("byReviewer", "reviewer"),),
        nested=("responseTime",),
    ),
    MetricDefinition("repositories"),
)

git_query = MetricsQuery("git", GIT_METRICS, author_match=AuthorMatch.FIND)


def query_git_metrics(
    store: FixtureStore,
    metric: str | None = None,
    team_id: str | None = None,
    author_id: str | None = None,
) -> Any:
    """
    Query the git metrics domain.

    Args:
        store: Fixture store
        metric: Metric name (commitActivity, pullRequests, codeReviews, repositories)
        team_id: Team name, e.g. "Team Alpha"
        author_id: Author or reviewer name, e.g. "Alex Johnson"

    Returns:
        The metric view when ``metric`` is given, otherwise the filtered domain

    Raises:
        NotFoundError: Unknown metric, or team/author absent from the named metric
    """
    return git_query.run(store.get("git"), metric_name=metric, team_id=team_id, author_id=author_id)
