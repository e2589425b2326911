"""
Query layer - pure functions from fixtures to filtered views

Usage:
    from engmetrics.queries import query_git_metrics

    view = query_git_metrics(store, metric="codeReviews", team_id="Team Alpha")
"""

from .correlation import CORRELATION_METRICS, query_correlation
from .directory import get_by_id, list_members, list_teams
from .export import ExportParams, build_export, normalize_export_params
from .filters import AuthorMatch, MetricDefinition, MetricsQuery, SequenceTag
from .git_metrics import GIT_METRICS, query_git_metrics
from .integrated import INTEGRATED_TYPES, query_integrated
from .jira_stats import query_jira_stats
from .overview import get_overview

__all__ = [
    "AuthorMatch",
    "CORRELATION_METRICS",
    "ExportParams",
    "GIT_METRICS",
    "INTEGRATED_TYPES",
    "MetricDefinition",
    "MetricsQuery",
    "SequenceTag",
    "build_export",
    "get_by_id",
    "get_overview",
    "list_members",
    "list_teams",
    "normalize_export_params",
    "query_correlation",
    "query_git_metrics",
    "query_integrated",
    "query_jira_stats",
]
