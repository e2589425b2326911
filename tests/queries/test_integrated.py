"""
Tests for integrated metrics queries against the bundled fixtures
"""

import pytest

from engmetrics.errors import InvalidParameterError, NotFoundError
from engmetrics.queries import INTEGRATED_TYPES, query_integrated
from engmetrics.queries.integrated import story_point_to_commit_ratio


class TestStoryPointToCommitRatio:
    """Commits per planned story point"""

    def test_rounded_to_two_places(self):
        assert story_point_to_commit_ratio(180, 135) == 1.33

    def test_nothing_planned(self):
        assert story_point_to_commit_ratio(40, 0) == 0.0


class TestTeamMetrics:
    """type=team"""

    @pytest.mark.parametrize(
        "team_id,ratio",
        [
            ("team-alpha", 1.33),
            ("team-beta", 1.13),
            ("team-gamma", 1.56),
            ("team-delta", 0.87),
            ("team-epsilon", 1.75),
        ],
    )
    def test_ratio_joins_completion_stats(self, store, team_id, ratio):
        assert query_integrated(store, "team", team_id=team_id)["correlations"]["storyPointToCommitRatio"] == ratio

    def test_embeds_completion_stats(self, store):
        view = query_integrated(store, "team", team_id="team-beta")

        assert view["jiraMetrics"] == store.get("jira_stats")["team-beta"]
        assert view["correlations"]["planningAccuracy"] == 80.0

    def test_team_id_required(self, store):
        with pytest.raises(InvalidParameterError, match="Team ID is required for team metrics"):
            query_integrated(store, "team", member_id="team-alpha-member-1")

    def test_unknown_team(self, store):
        with pytest.raises(NotFoundError, match="Team with ID team-zeta not found"):
            query_integrated(store, "team", team_id="team-zeta")


class TestMemberMetrics:
    """type=member"""

    def test_member_view(self, store):
        view = query_integrated(store, "member", member_id="team-alpha-member-1")

        assert view["accountId"] == "team-alpha-member-1"
        assert view["displayName"] == "Alex Johnson"
        assert view["teamName"] == "Team Alpha"
        assert view["jiraMetrics"]["totalStoryPoints"] == 35
        assert view["correlations"] == {
            "storyPointToCommitRatio": 1.49,
            "reviewQuality": 82.5,
            "contribution": 24.0,
            "velocityIndex": 88.0,
        }

    def test_member_id_required(self, store):
        with pytest.raises(InvalidParameterError, match="Member ID is required for member metrics"):
            query_integrated(store, "member")

    def test_unknown_member(self, store):
        with pytest.raises(NotFoundError, match="Member with ID user-5 not found"):
            query_integrated(store, "member", member_id="user-5")


class TestInsightsAndOverview:
    """type=insights and type=overview"""

    def test_all_insights(self, store):
        assert len(query_integrated(store, "insights")) == 7

    def test_team_insights(self, store):
        insights = query_integrated(store, "insights", team_id="team-delta")

        assert [insight["severity"] for insight in insights] == ["critical"]

    def test_insights_for_unknown_team(self, store):
        with pytest.raises(NotFoundError, match="Team with ID team-omega not found"):
            query_integrated(store, "insights", team_id="team-omega")

    def test_overview_ignores_dates(self, store):
        view = query_integrated(store, "overview", start_date="2023-01-01", end_date="2023-03-31")

        assert view["activeTeams"] == 5
        assert view["totalCommits"] == 896


class TestTypeDispatch:
    """Unknown and missing types"""

    @pytest.mark.parametrize("metrics_type", [None, "", "sprint", "TEAM"])
    def test_invalid_type(self, store, metrics_type):
        with pytest.raises(InvalidParameterError, match="Invalid metrics type"):
            query_integrated(store, metrics_type, team_id="team-alpha")

    def test_declared_types(self):
        assert INTEGRATED_TYPES == ("team", "member", "insights", "overview")
