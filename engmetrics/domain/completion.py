"""
Sprint completion domain models - Story point delivery per team and member

Represents the issue-tracker completion snapshot served by the Jira stats
endpoint and embedded in integrated team/member metrics.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MemberCompletion:
    """
    Story point completion for one team member in a sprint.

    Attributes:
        account_id: Issue tracker account id (e.g. "team-alpha-member-2")
        display_name: Member display name
        total_story_points: Points assigned
        completed_story_points: Points delivered
        completion_percentage: Rounded delivered share, 0-100
    """

    account_id: str
    display_name: str
    total_story_points: int
    completed_story_points: int
    completion_percentage: int

    def __post_init__(self) -> None:
        if not 0 <= self.completed_story_points <= self.total_story_points:
            raise ValueError(
                f"completed story points out of range for {self.account_id}: "
                f"{self.completed_story_points}/{self.total_story_points}"
            )

    @classmethod
    def from_json(cls, data: dict) -> "MemberCompletion":
        return cls(
            account_id=data["accountId"],
            display_name=data["displayName"],
            total_story_points=data["totalStoryPoints"],
            completed_story_points=data["completedStoryPoints"],
            completion_percentage=data["completionPercentage"],
        )


@dataclass(frozen=True)
class CompletionStats:
    """
    Sprint completion snapshot for a team.

    Team totals must equal the sum of the member figures.

    Example:
        stats = CompletionStats.from_json(record)
        member = stats.member("team-beta-member-3")
    """

    team_id: str
    team_name: str
    sprint_name: str
    total_story_points: int
    completed_story_points: int
    members: tuple[MemberCompletion, ...]

    def __post_init__(self) -> None:
        total = sum(member.total_story_points for member in self.members)
        completed = sum(member.completed_story_points for member in self.members)
        if (total, completed) != (self.total_story_points, self.completed_story_points):
            raise ValueError(
                f"team totals for {self.team_id} do not match member stats: "
                f"{self.completed_story_points}/{self.total_story_points} vs {completed}/{total}"
            )

    def member(self, account_id: str) -> MemberCompletion | None:
        """Member with ``account_id``, or None."""
        for member in self.members:
            if member.account_id == account_id:
                return member
        return None

    @classmethod
    def from_json(cls, data: dict) -> "CompletionStats":
        """
        Deserialize a team completion record.

        Raises:
            KeyError: If required fields are missing
            ValueError: If totals are inconsistent
        """
        return cls(
            team_id=data["teamId"],
            team_name=data["teamName"],
            sprint_name=data["sprintName"],
            total_story_points=data["totalStoryPoints"],
            completed_story_points=data["completedStoryPoints"],
            members=tuple(MemberCompletion.from_json(member) for member in data["memberStats"]),
        )
