"""
Member domain models - Individual contributor metrics
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MemberMetrics:
    """
    Contribution counters for one team member.

    Attributes:
        story_points: Story points delivered
        commits: Commits authored
        pull_requests: Pull requests opened
        reviews: Reviews given
        response_time_hours: Mean review response time in hours
    """

    story_points: int
    commits: int
    pull_requests: int
    reviews: int
    response_time_hours: float

    @classmethod
    def from_json(cls, data: dict) -> "MemberMetrics":
        return cls(
            story_points=data["storyPoints"],
            commits=data["commits"],
            pull_requests=data["pullRequests"],
            reviews=data["reviews"],
            response_time_hours=data["responseTime"],
        )


@dataclass(frozen=True)
class Member:
    """
    Team member summary.

    ``team_name`` is the team's display name copied onto the member, not a
    reference to a Team record.
    """

    id: str
    name: str
    team_name: str
    metrics: MemberMetrics

    def belongs_to(self, team_name: str) -> bool:
        """True if the member is listed under ``team_name``."""
        return self.team_name == team_name

    @classmethod
    def from_json(cls, data: dict) -> "Member":
        """
        Deserialize a member summary record.

        Raises:
            KeyError: If required fields are missing
        """
        return cls(
            id=data["id"],
            name=data["name"],
            team_name=data["teamName"],
            metrics=MemberMetrics.from_json(data["metrics"]),
        )
