"""
Team and member directory

Summary lists and per-id detail records. Detail records are returned whole,
including their nested sprint and activity series.
"""

from engmetrics.domain import Member
from engmetrics.errors import NotFoundError
from engmetrics.fixtures import FixtureStore

# kind -> (detail domain, label used in not-found messages)
DETAIL_KINDS = {
    "team": ("team_details", "Team"),
    "member": ("member_details", "Member"),
}


def list_teams(store: FixtureStore) -> list[dict]:
    """All team summaries, in fixture order."""
    return store.get("teams")


def list_members(store: FixtureStore, team_id: str | None = None) -> list[dict]:
    """
    All member summaries, or only those of one team.

    Args:
        store: Fixture store
        team_id: Team name to match against each member's ``teamName``

    Returns:
        Member summaries; empty when the team has no members
    """
    members = store.get("members")
    if not team_id:
        return members
    return [record for record in members if Member.from_json(record).belongs_to(team_id)]


def get_by_id(store: FixtureStore, kind: str, record_id: str) -> dict:
    """
    Look up a team or member detail record.

    Args:
        store: Fixture store
        kind: "team" or "member"
        record_id: e.g. "team-gamma", "user-5"

    Raises:
        ValueError: If kind is not a known record kind
        NotFoundError: If no detail record exists for the id
    """
    if kind not in DETAIL_KINDS:
        raise ValueError(f"Unknown record kind: {kind}")

    domain, label = DETAIL_KINDS[kind]
    details = store.get(domain)
    if record_id not in details:
        raise NotFoundError(f"{label} with ID {record_id} not found")
    return details[record_id]
