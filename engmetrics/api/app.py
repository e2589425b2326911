"""
FastAPI Application - Engineering Metrics REST API

Read-only access to team, member, git and correlation metrics for the
engineering dashboard.

Usage:
    # Development
    uvicorn engmetrics.api.app:app --reload --port 8000

    # Production
    uvicorn engmetrics.api.app:app --host 0.0.0.0 --port 8000 --workers 4

API Documentation:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from engmetrics import __version__
from engmetrics.api.middleware import CacheControlMiddleware, RequestIDMiddleware
from engmetrics.config import ApiConfig, get_config
from engmetrics.core import get_logger, setup_logging
from engmetrics.errors import InvalidParameterError, NotFoundError
from engmetrics.fixtures import FixtureStore
from engmetrics.queries import (
    build_export,
    get_by_id,
    get_overview,
    list_members,
    list_teams,
    normalize_export_params,
    query_correlation,
    query_git_metrics,
    query_integrated,
    query_jira_stats,
)

logger = get_logger(__name__)

INTERNAL_ERROR = "Internal server error"


def get_store(request: Request) -> FixtureStore:
    """Fixture store attached to the running application."""
    store: FixtureStore = request.app.state.store
    return store


Store = Annotated[FixtureStore, Depends(get_store)]


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _internal_error(message: str, **context: Any) -> HTTPException:
    logger.error(message, extra=context, exc_info=True)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)


def create_app(config: ApiConfig | None = None, store: FixtureStore | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        config: API configuration (default: loaded from environment)
        store: Fixture store (default: built from ``config.fixtures_dir``)
    """
    config = config or get_config()
    setup_logging(level=config.log_level, log_file=config.log_file, json_output=config.json_logs)

    store = store or FixtureStore(config.fixtures_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Engineering Metrics API starting up", extra={"version": __version__})
        app.state.store.load()
        yield
        logger.info("Engineering Metrics API shutting down")

    app = FastAPI(
        title="Engineering Metrics API",
        description="Read-only team, member, git and correlation metrics for the engineering dashboard",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.config = config

    # Add middleware (order matters - last added is executed first)
    app.add_middleware(CacheControlMiddleware, max_age=config.cache_max_age)  # Cache headers (innermost)
    app.add_middleware(RequestIDMiddleware)  # Request tracking (outermost)

    # ============================================================
    # Error Rendering
    # ============================================================

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Render every HTTP error as {"error": message}."""
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Method not allowed"
        else:
            message = str(exc.detail)

        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    # ============================================================
    # Health Check
    # ============================================================

    @app.get("/health", tags=["Health"])
    async def health_check(store: Store):
        """
        Health check endpoint for monitoring.

        Returns:
            Status of the API and whether each fixture domain loads
        """
        fixtures = store.status()

        health_status: dict[str, Any] = {
            "status": "healthy" if all(fixtures.values()) else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "fixtures": fixtures,
        }

        status_code = 200 if health_status["status"] == "healthy" else 503

        return JSONResponse(content=health_status, status_code=status_code)

    # ============================================================
    # Dashboard Metrics Endpoints
    # ============================================================

    @app.get("/api/metrics/overview", tags=["Metrics"])
    async def metrics_overview(
        store: Store,
        start_date: Annotated[str | None, Query(alias="startDate")] = None,
        end_date: Annotated[str | None, Query(alias="endDate")] = None,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
    ):
        """
        Get the organisation-wide overview.

        Returns:
            Story point, git and team totals with weekly trends
        """
        try:
            return get_overview(store, start_date=start_date, end_date=end_date, team_id=team_id)
        except Exception:
            raise _internal_error("Failed to load overview")

    @app.get("/api/metrics/teams", tags=["Metrics"])
    async def metrics_teams(store: Store, team_id: Annotated[str | None, Query(alias="id")] = None):
        """
        List teams, or get one team's detail record.

        Args:
            id: Team id (e.g. "team-gamma")

        Returns:
            Team summaries, or the team detail with sprint data and members
        """
        try:
            if team_id:
                return get_by_id(store, "team", team_id)
            return list_teams(store)
        except NotFoundError as e:
            logger.info("Team not found", extra={"team_id": team_id})
            raise _not_found(e)
        except Exception:
            raise _internal_error("Failed to load teams", team_id=team_id)

    @app.get("/api/metrics/members", tags=["Metrics"])
    async def metrics_members(
        store: Store,
        member_id: Annotated[str | None, Query(alias="id")] = None,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
    ):
        """
        List members (optionally of one team), or get one member's detail record.

        Args:
            id: Member id (e.g. "user-5")
            teamId: Team name (e.g. "Team Beta")
        """
        try:
            if member_id:
                return get_by_id(store, "member", member_id)
            return list_members(store, team_id=team_id)
        except NotFoundError as e:
            logger.info("Member not found", extra={"member_id": member_id})
            raise _not_found(e)
        except Exception:
            raise _internal_error("Failed to load members", member_id=member_id, team_id=team_id)

    # ============================================================
    # Filtered Metrics Endpoints
    # ============================================================

    @app.get("/api/git/metrics", tags=["Git Metrics"])
    async def git_metrics(
        store: Store,
        metric: str | None = None,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
        author_id: Annotated[str | None, Query(alias="authorId")] = None,
    ):
        """
        Get git metrics, optionally narrowed to one metric, team or author.

        Args:
            metric: commitActivity, pullRequests, codeReviews or repositories
            teamId: Team name; takes precedence over authorId
            authorId: Author or reviewer name
        """
        try:
            view = query_git_metrics(store, metric=metric, team_id=team_id, author_id=author_id)
            return {metric: view} if metric else view
        except NotFoundError as e:
            logger.info(
                "Git metric lookup missed",
                extra={"metric": metric, "team_id": team_id, "author_id": author_id, "reason": str(e)},
            )
            raise _not_found(e)
        except Exception:
            raise _internal_error("Failed to query git metrics", metric=metric, team_id=team_id, author_id=author_id)

    @app.get("/api/metrics/correlation", tags=["Correlation Metrics"])
    async def correlation_metrics(
        store: Store,
        metric: str | None = None,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
        author_id: Annotated[str | None, Query(alias="authorId")] = None,
    ):
        """
        Get correlation metrics and insights, optionally narrowed.

        Args:
            metric: storyPointToCommitRatio, planningAccuracy, velocity, consistency or insights
            teamId: Team name; takes precedence over authorId
            authorId: Member name
        """
        try:
            view = query_correlation(store, metric=metric, team_id=team_id, author_id=author_id)
            return {metric: view} if metric else view
        except NotFoundError as e:
            logger.info(
                "Correlation metric lookup missed",
                extra={"metric": metric, "team_id": team_id, "author_id": author_id, "reason": str(e)},
            )
            raise _not_found(e)
        except Exception:
            raise _internal_error(
                "Failed to query correlation metrics", metric=metric, team_id=team_id, author_id=author_id
            )

    # ============================================================
    # Integrated Metrics Endpoints
    # ============================================================

    @app.get("/api/metrics/integrated", tags=["Integrated Metrics"])
    async def integrated_metrics(
        store: Store,
        metrics_type: Annotated[str | None, Query(alias="type")] = None,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
        member_id: Annotated[str | None, Query(alias="memberId")] = None,
        start_date: Annotated[str | None, Query(alias="startDate")] = None,
        end_date: Annotated[str | None, Query(alias="endDate")] = None,
    ):
        """
        Get issue tracker and git metrics joined per team or member.

        Args:
            type: team, member, insights or overview
            teamId: Team id (e.g. "team-alpha"); required for team
            memberId: Account id (e.g. "team-alpha-member-1"); required for member
        """
        try:
            return query_integrated(
                store, metrics_type, team_id=team_id, member_id=member_id, start_date=start_date, end_date=end_date
            )
        except InvalidParameterError as e:
            logger.warning("Invalid integrated metrics request", extra={"type": metrics_type, "reason": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except NotFoundError as e:
            logger.info(
                "Integrated metrics lookup missed",
                extra={"type": metrics_type, "team_id": team_id, "member_id": member_id},
            )
            raise _not_found(e)
        except Exception:
            raise _internal_error(
                "Failed to query integrated metrics", type=metrics_type, team_id=team_id, member_id=member_id
            )

    @app.get("/api/jira/stats", tags=["Integrated Metrics"])
    async def jira_stats(
        store: Store,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
        sprint_id: Annotated[str | None, Query(alias="sprintId")] = None,
        member_id: Annotated[str | None, Query(alias="memberId")] = None,
        start_date: Annotated[str | None, Query(alias="startDate")] = None,
        end_date: Annotated[str | None, Query(alias="endDate")] = None,
    ):
        """
        Get sprint completion stats for a team, a member, or every team.

        Args:
            teamId: Team id; takes precedence over memberId
            memberId: Account id
        """
        try:
            return query_jira_stats(
                store,
                team_id=team_id,
                member_id=member_id,
                sprint_id=sprint_id,
                start_date=start_date,
                end_date=end_date,
            )
        except NotFoundError as e:
            logger.info("Jira stats lookup missed", extra={"team_id": team_id, "member_id": member_id})
            raise _not_found(e)
        except Exception:
            raise _internal_error("Failed to load jira stats", team_id=team_id, member_id=member_id)

    # ============================================================
    # Export Endpoint
    # ============================================================

    @app.get("/api/export", tags=["Export"])
    async def export_data(
        store: Store,
        export_type: Annotated[str | None, Query(alias="type")] = None,
        data_source: Annotated[str | None, Query(alias="dataSource")] = None,
        date_range: Annotated[str | None, Query(alias="dateRange")] = None,
        team_id: Annotated[str | None, Query(alias="teamId")] = None,
        start_date: Annotated[str | None, Query(alias="startDate")] = None,
        end_date: Annotated[str | None, Query(alias="endDate")] = None,
    ):
        """
        Export dashboard data.

        Returns:
            {"exportParams": {...}, "data": {...}}
        """
        try:
            params = normalize_export_params(
                export_type, data_source, date_range, team_id, start_date, end_date
            )
            return build_export(store, params)
        except InvalidParameterError as e:
            logger.warning("Invalid export parameters", extra={"reason": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except Exception:
            raise _internal_error("Failed to build export", data_source=data_source, team_id=team_id)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("=" * 60)
    logger.info("Engineering Metrics API")
    logger.info("=" * 60)
    logger.info("Starting server...")
    logger.info("API Docs: http://localhost:8000/docs")
    logger.info("Health Check: http://localhost:8000/health")
    logger.info("=" * 60)

    uvicorn.run("engmetrics.api.app:app", host="127.0.0.1", port=8000, reload=True, log_level="info")
