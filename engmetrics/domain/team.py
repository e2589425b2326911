"""
Team domain models - Delivery summary per team

Represents the per-team summary served by the teams endpoint:
    - Story point completion (completed vs. committed)
    - Commit and pull request volume
    - Delivery efficiency
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoryPoints:
    """
    Story point pair for a team.

    Attributes:
        completed: Points delivered
        total: Points committed

    Raises:
        ValueError: If either count is negative or completed exceeds total
    """

    completed: int
    total: int

    def __post_init__(self) -> None:
        if self.completed < 0 or self.total < 0:
            raise ValueError(f"story points must not be negative: {self.completed}/{self.total}")
        if self.completed > self.total:
            raise ValueError(f"completed story points exceed total: {self.completed} > {self.total}")


@dataclass(frozen=True)
class Team:
    """
    Team delivery summary.

    Attributes:
        id: Stable identifier (e.g. "team-alpha")
        name: Display name, also used as the team tag in metric breakdowns
        story_points: Completed/total story points
        commits: Commit count for the period
        pull_requests: Pull request count for the period
        efficiency: Delivery efficiency ratio in [0, 1]

    Example:
        team = Team.from_json({
            "id": "team-gamma",
            "name": "Team Gamma",
            "storyPoints": {"completed": 65, "total": 70},
            "commits": 110,
            "pullRequests": 15,
            "efficiency": 0.93,
        })
        print(f"{team.name}: {team.story_points.completed}/{team.story_points.total} points")
    """

    id: str
    name: str
    story_points: StoryPoints
    commits: int
    pull_requests: int
    efficiency: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.efficiency <= 1.0:
            raise ValueError(f"efficiency must be within [0, 1] for {self.id}: {self.efficiency}")

    @classmethod
    def from_json(cls, data: dict) -> "Team":
        """
        Deserialize a team summary record.

        Raises:
            KeyError: If required fields are missing
            ValueError: If the record breaks a team invariant
        """
        return cls(
            id=data["id"],
            name=data["name"],
            story_points=StoryPoints(
                completed=data["storyPoints"]["completed"],
                total=data["storyPoints"]["total"],
            ),
            commits=data["commits"],
            pull_requests=data["pullRequests"],
            efficiency=data["efficiency"],
        )
