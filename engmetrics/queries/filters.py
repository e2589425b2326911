"""
Metric filtering engine

Selects and reshapes nested metric records by metric name, team and author.

A metrics domain (git, correlation) is a mapping of metric name to metric
record. Each ``MetricDefinition`` in the domain's dispatch table declares
which sequences inside the record carry a team or author tag, and which nested
sub-records must be narrowed in lockstep with the parent's ``byTeam``.

All functions here are pure: they build new containers and never modify the
value they are given. Applying the same filter twice yields the same view.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

from engmetrics.core import get_logger
from engmetrics.errors import NotFoundError

logger = get_logger(__name__)


@dataclass(frozen=True)
class SequenceTag:
    """
    A list-valued key inside a metric record, and the entry field that tags it.

    Example:
        SequenceTag("byReviewer", "reviewer") matches
        {"byReviewer": [{"reviewer": "Riley Chen", ...}, ...]}
    """

    key: str
    field: str


BY_TEAM = SequenceTag("byTeam", "team")


class AuthorMatch(Enum):
    """How a named metric is narrowed to one author."""

    FIND = "find"  # exactly one entry, NotFoundError when absent
    FILTER = "filter"  # zero or more entries, empty when absent


@dataclass(frozen=True)
class MetricDefinition:
    """
    Shape of one metric record.

    Attributes:
        name: Metric key within its domain (e.g. "codeReviews")
        team_sequences: Sequences whose entries carry a team tag
        author_sequences: Sequences whose entries carry an author tag
        nested: Sub-record keys filtered by team alongside ``byTeam``
        team_matcher: For list-valued metrics, predicate (entry, team_id) keeping an entry
    """

    name: str
    team_sequences: tuple[SequenceTag, ...] = (BY_TEAM,)
    author_sequences: tuple[SequenceTag, ...] = ()
    nested: tuple[str, ...] = ()
    team_matcher: Callable[[dict, str], bool] | None = None

    def present(self, record: Any, tags: Iterable[SequenceTag]) -> list[SequenceTag]:
        """Tags from ``tags`` whose key holds a list in ``record``."""
        if not isinstance(record, dict):
            return []
        return [tag for tag in tags if isinstance(record.get(tag.key), list)]


def find_entry(entries: list, tag_field: str, value: str) -> dict | None:
    """First entry whose ``tag_field`` equals ``value``, or None."""
    for entry in entries:
        if isinstance(entry, dict) and entry.get(tag_field) == value:
            return entry
    return None


def filter_entries(entries: list, tag_field: str, value: str) -> list:
    """All entries whose ``tag_field`` equals ``value``, in fixture order."""
    return [entry for entry in entries if isinstance(entry, dict) and entry.get(tag_field) == value]


def _narrow_sub_record(value: Any, team_id: str) -> Any:
    # Nested sub-records only ever carry byTeam; anything else passes through.
    if isinstance(value, dict):
        if isinstance(value.get(BY_TEAM.key), list):
            view = dict(value)
            view[BY_TEAM.key] = filter_entries(value[BY_TEAM.key], BY_TEAM.field, team_id)
            return view
        return value
    if isinstance(value, list):
        return [_narrow_sub_record(item, team_id) for item in value]
    return value


def select_team(record: dict, team_id: str, definition: MetricDefinition) -> dict:
    """
    Narrow a named metric to the single ``byTeam`` entry for ``team_id``.

    Declared nested sub-records are narrowed in lockstep; every other field
    passes through unchanged.

    Raises:
        NotFoundError: If no ``byTeam`` entry is tagged with ``team_id``
    """
    entry = find_entry(record[BY_TEAM.key], BY_TEAM.field, team_id)
    if entry is None:
        raise NotFoundError(f"Team '{team_id}' not found for metric '{definition.name}'")

    view = dict(record)
    view[BY_TEAM.key] = [entry]
    for key in definition.nested:
        if key in record:
            view[key] = _narrow_sub_record(record[key], team_id)
    return view


def select_members(record: dict, team_id: str, tag: SequenceTag, definition: MetricDefinition) -> dict:
    """
    Narrow a record without ``byTeam`` by the team tag of a member sequence.

    Raises:
        NotFoundError: If no entry belongs to ``team_id``
    """
    entries = filter_entries(record[tag.key], tag.field, team_id)
    if not entries:
        raise NotFoundError(f"No {tag.key} found for team '{team_id}' in metric '{definition.name}'")

    view = dict(record)
    view[tag.key] = entries
    return view


def select_author(record: dict, author_id: str, definition: MetricDefinition, match: AuthorMatch) -> dict:
    """
    Narrow a named metric's author sequence to ``author_id``.

    With ``AuthorMatch.FIND`` the sequence becomes the one matching entry; with
    ``AuthorMatch.FILTER`` it keeps every match, possibly none.

    Raises:
        NotFoundError: With ``AuthorMatch.FIND``, if no entry matches
    """
    tag = definition.present(record, definition.author_sequences)[0]
    view = dict(record)

    if match is AuthorMatch.FIND:
        entry = find_entry(record[tag.key], tag.field, author_id)
        if entry is None:
            raise NotFoundError(f"Author/Reviewer '{author_id}' not found for metric '{definition.name}'")
        view[tag.key] = [entry]
    else:
        view[tag.key] = filter_entries(record[tag.key], tag.field, author_id)

    return view


def filter_by_team(value: Any, team_id: str, definition: MetricDefinition) -> Any:
    """
    Keep only the parts of a metric that belong to ``team_id``.

    Every declared team sequence is filtered by its team tag, declared nested
    sub-records likewise, and list-valued metrics keep the entries accepted by
    ``team_matcher``. Never raises for a missing team.
    """
    if isinstance(value, list):
        if definition.team_matcher is None:
            return value
        return [entry for entry in value if isinstance(entry, dict) and definition.team_matcher(entry, team_id)]

    if not isinstance(value, dict):
        return value

    view = dict(value)
    for tag in definition.present(value, definition.team_sequences):
        view[tag.key] = filter_entries(value[tag.key], tag.field, team_id)
    for key in definition.nested:
        if key in value:
            view[key] = _narrow_sub_record(value[key], team_id)
    return view


def filter_by_author(value: Any, author_id: str, definition: MetricDefinition) -> dict | None:
    """
    Keep only the author entries of a metric, or None if it has no author sequence.
    """
    tags = definition.present(value, definition.author_sequences)
    if not tags:
        return None

    view = dict(value)
    for tag in tags:
        view[tag.key] = filter_entries(value[tag.key], tag.field, author_id)
    return view


@dataclass
class MetricsQuery:
    """
    Dispatch table for one metrics domain.

    Example:
        query = MetricsQuery("git", GIT_METRICS, author_match=AuthorMatch.FIND)
        view = query.run(root, metric_name="codeReviews", team_id="Team Alpha")
    """

    domain: str
    definitions: tuple[MetricDefinition, ...]
    author_match: AuthorMatch = AuthorMatch.FIND
    _by_name: dict[str, MetricDefinition] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_name = {definition.name: definition for definition in self.definitions}
        if len(self._by_name) != len(self.definitions):
            raise ValueError(f"duplicate metric definition in {self.domain}")

    def definition(self, metric_name: str) -> MetricDefinition:
        """
        Resolve a metric name through the dispatch table.

        Raises:
            NotFoundError: If the domain defines no such metric
        """
        try:
            return self._by_name[metric_name]
        except KeyError:
            raise NotFoundError(f"Metric '{metric_name}' not found") from None

    def run(
        self,
        root: dict,
        metric_name: str | None = None,
        team_id: str | None = None,
        author_id: str | None = None,
    ) -> Any:
        """
        Apply metric, team and author filters to a domain root.

        Args:
            root: Domain root (metric name -> record)
            metric_name: Restrict to one metric
            team_id: Team name; takes precedence over ``author_id``
            author_id: Author or reviewer name

        Returns:
            The named metric's view when ``metric_name`` is given, otherwise a
            new domain mapping

        Raises:
            NotFoundError: For an unknown metric, or a team/author missing from a named metric
        """
        if metric_name:
            return self._run_metric(root, metric_name, team_id, author_id)

        if team_id:
            return {
                name: filter_by_team(value, team_id, self._by_name[name]) if name in self._by_name else value
                for name, value in root.items()
            }

        if author_id:
            views = {}
            for name, value in root.items():
                definition = self._by_name.get(name)
                if definition is None:
                    continue
                view = filter_by_author(value, author_id, definition)
                if view is not None:
                    views[name] = view
            return views

        return root

    def _run_metric(self, root: dict, metric_name: str, team_id: str | None, author_id: str | None) -> Any:
        definition = self.definition(metric_name)
        if metric_name not in root:
            logger.warning(
                "Metric defined but absent from fixture",
                extra={"domain": self.domain, "metric": metric_name},
            )
            raise NotFoundError(f"Metric '{metric_name}' not found")

        record = root[metric_name]
        if not isinstance(record, dict):
            return record

        if team_id and isinstance(record.get(BY_TEAM.key), list):
            return select_team(record, team_id, definition)

        if team_id:
            member_tags = [tag for tag in definition.present(record, definition.team_sequences) if tag != BY_TEAM]
            if member_tags:
                return select_members(record, team_id, member_tags[0], definition)

        if author_id and definition.present(record, definition.author_sequences):
            return select_author(record, author_id, definition, self.author_match)

        return record
