"""
Tests for the Insight domain model
"""

import pytest

from engmetrics.domain import Insight, TargetedInsight


def make_record(**overrides):
    record = {
        "id": "insight-4",
        "type": "recommendation",
        "category": "consistency",
        "title": "Consistency Improvement Opportunity for Team Delta",
        "description": "Team Delta has the lowest consistency score.",
        "relevance": "medium",
        "teams": ["Team Delta"],
    }
    record.update(overrides)
    return record


class TestInsight:
    """Test Insight validation and team membership"""

    def test_from_json(self):
        insight = Insight.from_json(make_record())

        assert insight.type == "recommendation"
        assert insight.teams == frozenset({"Team Delta"})

    def test_involves(self):
        insight = Insight.from_json(make_record(teams=["Team Alpha", "Team Epsilon"]))

        assert insight.involves("Team Epsilon")
        assert not insight.involves("Team Delta")

    def test_teams_default_empty(self):
        record = make_record()
        del record["teams"]
        assert Insight.from_json(record).teams == frozenset()

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="unknown insight type"):
            Insight.from_json(make_record(type="rumour"))

    def test_unknown_relevance(self):
        with pytest.raises(ValueError, match="unknown relevance tier"):
            Insight.from_json(make_record(relevance="urgent"))


def make_targeted_record(**overrides):
    record = {
        "id": "insight-0-team-delta",
        "type": "team",
        "targetId": "team-delta",
        "targetName": "Team Delta",
        "insightText": "Team Delta completed fewer story points than planned.",
        "metricName": "Completion Rate",
        "metricValue": 62,
        "trend": "down",
        "trendPercentage": 9,
        "severity": "critical",
    }
    record.update(overrides)
    return record


class TestTargetedInsight:
    """Test TargetedInsight validation and targeting"""

    def test_from_json(self):
        insight = TargetedInsight.from_json(make_targeted_record())

        assert insight.severity == "critical"
        assert insight.targets("team-delta")
        assert not insight.targets("team-alpha")

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"type": "sprint"}, "unknown insight target type"),
            ({"trend": "sideways"}, "unknown trend"),
            ({"severity": "urgent"}, "unknown severity"),
        ],
    )
    def test_invalid_values(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            TargetedInsight.from_json(make_targeted_record(**overrides))
