"""
Export queries

Validates export parameters and selects the requested data sources from the
export fixture, optionally narrowed to one team.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from engmetrics.core import get_logger
from engmetrics.errors import InvalidParameterError
from engmetrics.fixtures import FixtureStore

logger = get_logger(__name__)

EXPORT_TYPES = ("csv", "json", "pdf")
DATA_SOURCES = ("all", "jira", "git", "teams", "members")
DATE_RANGES = ("week", "month", "quarter", "sprint", "custom")


@dataclass(frozen=True)
class ExportParams:
    """
    Normalized export request.

    Attributes:
        type: Output format (csv, json, pdf)
        dataSource: Which data source to export, or "all"
        dateRange: Reporting window
        teamId: Team id or team name to narrow the export to
        startDate: ISO date, required for a custom range
        endDate: ISO date, required for a custom range
    """

    type: str = "csv"
    dataSource: str = "all"
    dateRange: str = "month"
    teamId: str | None = None
    startDate: str | None = None
    endDate: str | None = None

    def to_dict(self) -> dict:
        return {key: value for key, value in asdict(self).items() if value is not None}


def _choice(name: str, value: str, allowed: tuple[str, ...]) -> str:
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise InvalidParameterError(f"Invalid {name} '{value}'. Must be one of: {', '.join(allowed)}")
    return normalized


def _iso_date(name: str, value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidParameterError(f"Invalid {name} '{value}'. Expected YYYY-MM-DD") from None


def normalize_export_params(
    type: str | None = None,
    data_source: str | None = None,
    date_range: str | None = None,
    team_id: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> ExportParams:
    """
    Validate raw export query parameters.

    Args:
        type: csv, json or pdf (default csv)
        data_source: all, jira, git, teams or members (default all)
        date_range: week, month, quarter, sprint or custom (default month)
        team_id: Optional team id or name
        start_date: ISO date; required when date_range is custom
        end_date: ISO date; required when date_range is custom

    Returns:
        ExportParams with lower-cased choices

    Raises:
        InvalidParameterError: If any parameter is out of range
    """
    export_type = _choice("type", type or "csv", EXPORT_TYPES)
    source = _choice("dataSource", data_source or "all", DATA_SOURCES)
    window = _choice("dateRange", date_range or "month", DATE_RANGES)

    if window == "custom" and not (start_date and end_date):
        raise InvalidParameterError("Custom date range requires startDate and endDate")

    start = _iso_date("startDate", start_date) if start_date else None
    end = _iso_date("endDate", end_date) if end_date else None
    if start and end and start > end:
        raise InvalidParameterError("startDate must not be after endDate")

    return ExportParams(
        type=export_type,
        dataSource=source,
        dateRange=window,
        teamId=team_id or None,
        startDate=start.isoformat() if start else None,
        endDate=end.isoformat() if end else None,
    )


def _belongs_to(item: Any, team_id: str) -> bool:
    return isinstance(item, dict) and (item.get("id") == team_id or item.get("team") == team_id)


def _narrow_source(value: Any, team_id: str) -> Any:
    if isinstance(value, list):
        return [item for item in value if _belongs_to(item, team_id)]
    if isinstance(value, dict):
        return {
            key: [item for item in child if _belongs_to(item, team_id)] if isinstance(child, list) else child
            for key, child in value.items()
        }
    return value


def build_export(store: FixtureStore, params: ExportParams) -> dict:
    """
    Assemble the export payload.

    Lists are narrowed to items whose ``id`` or ``team`` equals ``params.teamId``,
    both at the top of a data source and one level inside it.

    Returns:
        {"exportParams": {...}, "data": {source: ...}}
    """
    export_root = store.get("export")

    if params.dataSource == "all":
        data = export_root
    else:
        data = {params.dataSource: export_root.get(params.dataSource)}

    if params.teamId:
        data = {source: _narrow_source(value, params.teamId) for source, value in data.items()}

    logger.info(
        "Export assembled",
        extra={"export_type": params.type, "data_source": params.dataSource, "team_id": params.teamId},
    )
    return {"exportParams": params.to_dict(), "data": data}
