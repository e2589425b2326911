"""
Tests for git metrics queries against the bundled fixtures
"""

import pytest

from engmetrics.errors import NotFoundError
from engmetrics.queries import GIT_METRICS, query_git_metrics
from engmetrics.queries.git_metrics import git_query

TEAMS_IN_GIT = ["Team Alpha", "Team Beta", "Team Gamma", "Team Delta", "Team Epsilon"]


class TestNamedMetricByTeam:
    """Named metric narrowed to one team"""

    @pytest.mark.parametrize("metric", [definition.name for definition in GIT_METRICS])
    @pytest.mark.parametrize("team", TEAMS_IN_GIT)
    def test_single_matching_entry(self, store, git_root, metric, team):
        view = query_git_metrics(store, metric=metric, team_id=team)

        expected = [entry for entry in git_root[metric]["byTeam"] if entry["team"] == team]
        assert view["byTeam"] == expected
        assert len(view["byTeam"]) == 1

    @pytest.mark.parametrize("metric", [definition.name for definition in GIT_METRICS])
    def test_absent_team_not_found(self, store, metric):
        with pytest.raises(NotFoundError):
            query_git_metrics(store, metric=metric, team_id="Team Zeta")

    def test_code_reviews_team_zeta_message(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            query_git_metrics(store, metric="codeReviews", team_id="Team Zeta")
        assert str(exc_info.value) == "Team 'Team Zeta' not found for metric 'codeReviews'"

    def test_nested_breakdowns_follow_team(self, store):
        view = query_git_metrics(store, metric="codeReviews", team_id="Team Delta")

        assert view["responseTime"] == {"average": 5.2, "byTeam": [{"team": "Team Delta", "average": 7.4}]}
        assert len(view["byReviewer"]) == 12
        assert view["reviewQuality"] == {"approved": 72, "changesRequested": 89, "commented": 22}

    def test_reapplying_filter_is_stable(self, store):
        view = query_git_metrics(store, metric="pullRequests", team_id="Team Beta")
        again = git_query.run({"pullRequests": view}, metric_name="pullRequests", team_id="Team Beta")
        assert again == view


class TestNamedMetricByAuthor:
    """Named metric narrowed to one author or reviewer"""

    def test_author(self, store):
        view = query_git_metrics(store, metric="commitActivity", author_id="Quinn Wilson")
        assert view["byAuthor"] == [{"author": "Quinn Wilson", "team": "Team Gamma", "count": 35}]
        assert len(view["byTeam"]) == 5

    def test_reviewer(self, store):
        view = query_git_metrics(store, metric="codeReviews", author_id="Riley Chen")
        assert view["byReviewer"] == [{"reviewer": "Riley Chen", "team": "Team Beta", "count": 10, "responseTime": 2.8}]

    def test_unknown_author(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            query_git_metrics(store, metric="pullRequests", author_id="Nobody")
        assert str(exc_info.value) == "Author/Reviewer 'Nobody' not found for metric 'pullRequests'"

    def test_metric_without_authors_passes_through(self, store, git_root):
        assert query_git_metrics(store, metric="repositories", author_id="Alex Johnson") == git_root["repositories"]


class TestDomainWideFilters:
    """Team and author filters without a metric name"""

    def test_no_filters_equals_fixture(self, store, git_root):
        assert query_git_metrics(store) == git_root

    def test_team_filters_every_metric(self, store, git_root):
        view = query_git_metrics(store, team_id="Team Beta")

        assert set(view) == set(git_root)
        assert view["commitActivity"]["byTeam"] == [{"team": "Team Beta", "count": 95}]
        assert {entry["author"] for entry in view["commitActivity"]["byAuthor"]} == {
            "Riley Chen",
            "Casey Kim",
            "Avery Patel",
        }
        assert view["commitActivity"]["byDay"] == git_root["commitActivity"]["byDay"]
        assert view["pullRequests"]["timeToMerge"]["byTeam"] == [{"team": "Team Beta", "average": 2.2}]
        assert len(view["codeReviews"]["byReviewer"]) == 3
        assert view["repositories"]["mostActive"] == git_root["repositories"]["mostActive"]

    def test_absent_team_yields_empty_breakdowns(self, store):
        view = query_git_metrics(store, team_id="Team Zeta")
        assert view["codeReviews"]["byTeam"] == []
        assert view["codeReviews"]["total"] == 183

    def test_author_keeps_only_authored_metrics(self, store):
        view = query_git_metrics(store, author_id="Jamie Rodriguez")

        assert set(view) == {"commitActivity", "pullRequests", "codeReviews"}
        assert [entry["count"] for entry in view["codeReviews"]["byReviewer"]] == [18]

    def test_unknown_metric(self, store):
        with pytest.raises(NotFoundError, match="Metric 'velocity' not found"):
            query_git_metrics(store, metric="velocity")

    def test_results_do_not_leak_into_store(self, store, git_root):
        view = query_git_metrics(store, metric="commitActivity")
        view["byTeam"].clear()
        assert store.get("git") == git_root
