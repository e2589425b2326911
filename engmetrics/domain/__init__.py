"""
Domain Models - Type-safe records behind the metrics fixtures

This package contains dataclasses representing business domain concepts:
    - team: StoryPoints, Team
    - member: MemberMetrics, Member
    - insight: Insight, TargetedInsight
    - completion: MemberCompletion, CompletionStats

The fixture store validates its records through these models at load time,
so an invariant violation (e.g. completed > total story points) is caught at
startup instead of surfacing in a response.

Usage:
    from engmetrics.domain import CompletionStats

    stats = CompletionStats.from_json(record)
    print(stats.member("team-alpha-member-1"))
"""

from .completion import CompletionStats, MemberCompletion
from .insight import Insight, TargetedInsight
from .member import Member, MemberMetrics
from .team import StoryPoints, Team

__all__ = [
    "CompletionStats",
    "Insight",
    "Member",
    "MemberCompletion",
    "MemberMetrics",
    "StoryPoints",
    "TargetedInsight",
    "Team",
]
