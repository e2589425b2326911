"""
Fixture Store

Loads the static metrics fixtures (one JSON document per domain), validates
them against the domain models and serves read-only copies to the query
layer.

Every value returned by ``FixtureStore.get`` is a deep copy, so a caller can
reshape it freely without touching what the next request sees.
"""

import copy
import json
import pathlib
import threading
from typing import Any

from engmetrics.core import get_logger
from engmetrics.domain import CompletionStats, Insight, Member, TargetedInsight, Team
from engmetrics.errors import FixtureNotFoundError

logger = get_logger(__name__)

DEFAULT_FIXTURES_DIR = pathlib.Path(__file__).parent / "data"

DOMAINS = (
    "overview",
    "teams",
    "team_details",
    "members",
    "member_details",
    "git",
    "correlation",
    "export",
    "jira_stats",
    "integrated",
)


class FixtureError(ValueError):
    """Raised when a fixture file is missing, malformed or breaks a domain invariant."""


def _validate_teams(root: Any) -> None:
    for record in root:
        Team.from_json(record)


def _validate_team_details(root: Any) -> None:
    for team_id, record in root.items():
        team = Team.from_json(record)
        if team.id != team_id:
            raise ValueError(f"team detail keyed {team_id} describes {team.id}")
        for member in record.get("members", []):
            Member.from_json(member)


def _validate_members(root: Any) -> None:
    for record in root:
        Member.from_json(record)


def _validate_member_details(root: Any) -> None:
    for member_id, record in root.items():
        member = Member.from_json(record)
        if member.id != member_id:
            raise ValueError(f"member detail keyed {member_id} describes {member.id}")


def _validate_correlation(root: Any) -> None:
    for record in root.get("insights", []):
        Insight.from_json(record)


def _validate_jira_stats(root: Any) -> None:
    for team_id, record in root.items():
        stats = CompletionStats.from_json(record)
        if stats.team_id != team_id:
            raise ValueError(f"jira stats keyed {team_id} describe {stats.team_id}")


def _validate_integrated(root: Any) -> None:
    for team_id, record in root["teams"].items():
        if record["teamId"] != team_id or record["gitMetrics"]["teamId"] != team_id:
            raise ValueError(f"integrated team keyed {team_id} describes {record['teamId']}")
    for account_id, record in root["members"].items():
        if record["gitMetrics"]["accountId"] != account_id:
            raise ValueError(f"integrated member keyed {account_id} describes {record['gitMetrics']['accountId']}")
    for record in root["insights"]:
        TargetedInsight.from_json(record)


_VALIDATORS = {
    "teams": _validate_teams,
    "team_details": _validate_team_details,
    "members": _validate_members,
    "member_details": _validate_member_details,
    "correlation": _validate_correlation,
    "jira_stats": _validate_jira_stats,
    "integrated": _validate_integrated,
}


class FixtureStore:
    """Process-wide, read-only fixture registry."""

    def __init__(self, fixtures_dir: pathlib.Path | None = None):
        """
        Initialize store.

        Args:
            fixtures_dir: Directory holding ``<domain>.json`` files (default: bundled fixtures)
        """
        self.fixtures_dir = fixtures_dir or DEFAULT_FIXTURES_DIR
        self._roots: dict[str, Any] = {}
        self._lock = threading.Lock()

    def load(self) -> "FixtureStore":
        """
        Load and validate every domain up front.

        Returns:
            The store itself, for chaining

        Raises:
            FixtureError: If any fixture is missing or invalid
        """
        for domain in DOMAINS:
            self._root(domain)

        logger.info(
            "Fixtures loaded",
            extra={"fixtures_dir": str(self.fixtures_dir), "domain_count": len(self._roots)},
        )
        return self

    def get(self, domain: str) -> Any:
        """
        Get a private copy of a domain's root value.

        Args:
            domain: One of DOMAINS

        Returns:
            Deep copy of the fixture root

        Raises:
            FixtureNotFoundError: If the domain is not registered
            FixtureError: If the fixture cannot be loaded
        """
        if domain not in DOMAINS:
            raise FixtureNotFoundError(f"Fixture domain '{domain}' not found")

        return copy.deepcopy(self._root(domain))

    def status(self) -> dict[str, bool]:
        """
        Report which domains load cleanly.

        Returns:
            Mapping of domain name to load success
        """
        result = {}
        for domain in DOMAINS:
            try:
                self._root(domain)
                result[domain] = True
            except FixtureError:
                result[domain] = False
        return result

    def _root(self, domain: str) -> Any:
        with self._lock:
            if domain not in self._roots:
                self._roots[domain] = self._read(domain)
            return self._roots[domain]

    def _read(self, domain: str) -> Any:
        fixture_file = self.fixtures_dir / f"{domain}.json"

        if not fixture_file.exists():
            logger.error("Fixture file not found", extra={"domain": domain, "file_path": str(fixture_file)})
            raise FixtureError(f"Fixture not found: {fixture_file}")

        try:
            with open(fixture_file, encoding="utf-8") as f:
                root = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in fixture file", extra={"domain": domain}, exc_info=True)
            raise FixtureError(f"Invalid JSON in fixture {fixture_file}: {e}")

        validator = _VALIDATORS.get(domain)
        if validator is not None:
            try:
                validator(root)
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                logger.error("Fixture failed validation", extra={"domain": domain, "error": str(e)})
                raise FixtureError(f"Invalid {domain} fixture: {e}")

        logger.debug("Fixture loaded", extra={"domain": domain})
        return root
