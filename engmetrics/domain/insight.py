"""
Insight domain model - Narrative findings from correlation analysis
"""

from dataclasses import dataclass, field

INSIGHT_TYPES = ("observation", "anomaly", "trend", "recommendation")
RELEVANCE_TIERS = ("low", "medium", "high")


@dataclass(frozen=True)
class Insight:
    """
    A finding produced by correlation analysis.

    Attributes:
        id: Stable identifier (e.g. "insight-2")
        type: One of INSIGHT_TYPES
        category: Free-form grouping (planning, execution, velocity, ...)
        title: One-line headline
        description: Full explanation
        relevance: One of RELEVANCE_TIERS
        teams: Names of the teams the finding concerns

    Example:
        insight = Insight.from_json(record)
        if insight.involves("Team Gamma"):
            print(insight.title)
    """

    id: str
    type: str
    category: str
    title: str
    description: str
    relevance: str
    teams: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.type not in INSIGHT_TYPES:
            raise ValueError(f"unknown insight type for {self.id}: {self.type}")
        if self.relevance not in RELEVANCE_TIERS:
            raise ValueError(f"unknown relevance tier for {self.id}: {self.relevance}")

    def involves(self, team_name: str) -> bool:
        """True if the insight concerns ``team_name``."""
        return team_name in self.teams

    @classmethod
    def from_json(cls, data: dict) -> "Insight":
        return cls(
            id=data["id"],
            type=data["type"],
            category=data["category"],
            title=data["title"],
            description=data["description"],
            relevance=data["relevance"],
            teams=frozenset(data.get("teams", [])),
        )


TARGET_TYPES = ("team", "member", "organization")
SEVERITIES = ("info", "warning", "critical", "positive")
TRENDS = ("up", "down", "stable")


@dataclass(frozen=True)
class TargetedInsight:
    """
    A metric movement observed for one team, member or the organization.

    Attributes:
        id: Stable identifier
        type: One of TARGET_TYPES
        target_id: Team or member id the finding is about
        metric_name: Metric that moved (Velocity, Review Quality, ...)
        trend: One of TRENDS
        severity: One of SEVERITIES
    """

    id: str
    type: str
    target_id: str
    metric_name: str
    trend: str
    severity: str

    def __post_init__(self) -> None:
        if self.type not in TARGET_TYPES:
            raise ValueError(f"unknown insight target type for {self.id}: {self.type}")
        if self.trend not in TRENDS:
            raise ValueError(f"unknown trend for {self.id}: {self.trend}")
        if self.severity not in SEVERITIES:
            raise ValueError(f"unknown severity for {self.id}: {self.severity}")

    def targets(self, target_id: str) -> bool:
        return self.target_id == target_id

    @classmethod
    def from_json(cls, data: dict) -> "TargetedInsight":
        return cls(
            id=data["id"],
            type=data["type"],
            target_id=data["targetId"],
            metric_name=data["metricName"],
            trend=data["trend"],
            severity=data["severity"],
        )
