from __future__ import annotations

# Standard library
import datetime
import logging as _logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Final

# Third-party
import strawberry
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from strawberry.fastapi import GraphQLRouter

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

# Local application imports
from application.gain_plan.orchestrators.user_locks import UserLocks  # noqa: E402
from gql.context import GraphQLContext, create_context  # noqa: E402
from gql.resolvers.gain_plan import GainPlanMutations, GainPlanQueries  # noqa: E402
from infrastructure.config import (  # noqa: E402
    get_app_version,
    get_log_level,
    get_repository_backend,
    get_snapshot_stale_hours,
)
from infrastructure.persistence.factory import (  # noqa: E402
    get_adaptation_repository,
    get_body_stats_repository,
    get_mongo_database,
    get_profile_repository,
    get_snapshot_repository,
    get_workout_repository,
    reset_repositories,
)
from infrastructure.persistence.mongodb.indexes import ensure_indexes  # noqa: E402

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = get_log_level()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

APP_VERSION = get_app_version()

# Shared across requests so per-user serialisation spans the whole process.
_user_locks = UserLocks()


@strawberry.type
class Query:
    @strawberry.field
    def server_time(self) -> str:
        return datetime.datetime.now(datetime.timezone.utc).isoformat()

    @strawberry.field
    def health(self) -> str:
        return "ok"

    @strawberry.field(description="Weight-gain plan queries")  # type: ignore[misc]
    def gain_plan(self) -> GainPlanQueries:
        """Calorie plan, macro, food and adaptation read operations.

        Example:
            query {
              gainPlan {
                computeCaloriePlan(userId: "user123") { targetCalories }
                foods(query: "dairy") { key name }
              }
            }
        """
        return GainPlanQueries()


@strawberry.type
class Mutation:
    @strawberry.field(description="Weight-gain plan mutations (CQRS commands)")  # type: ignore[misc]
    def gain_plan(self) -> GainPlanMutations:
        """Profile updates, history logging and adaptation commands.

        Example:
            mutation {
              gainPlan {
                analyzeAndAdapt(userId: "user123") { trigger calorieAdjustment }
              }
            }
        """
        return GainPlanMutations()


from gql.schema import create_schema  # noqa: E402

schema = create_schema()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Application lifecycle: index setup on startup, client cleanup on shutdown."""
    logger = _logging.getLogger("startup")
    backend = get_repository_backend()
    logger.info(
        "lifespan.startup",
        extra={"repository_backend": backend, "version": APP_VERSION},
    )

    if backend == "mongodb":
        await ensure_indexes(get_mongo_database())

    logger.info("lifespan.ready", extra={"status": "serving"})
    yield

    logger.info("lifespan.shutdown", extra={"status": "cleanup"})
    reset_repositories()


app = FastAPI(
    title="Gain Plan Backend",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


def get_graphql_context(request: Request) -> GraphQLContext:
    """Create GraphQL context with all dependencies.

    Repositories are process-wide singletons from the persistence factory;
    the stateless domain services are cheap to build per request.
    """
    return create_context(
        profile_repository=get_profile_repository(),
        snapshot_repository=get_snapshot_repository(),
        body_stats_repository=get_body_stats_repository(),
        workout_repository=get_workout_repository(),
        adaptation_repository=get_adaptation_repository(),
        stale_hours=get_snapshot_stale_hours(),
        locks=_user_locks,
        request=request,
    )


graphql_app: Final[GraphQLRouter[Any, Any]] = GraphQLRouter(
    schema, context_getter=get_graphql_context
)
app.include_router(graphql_app, prefix="/graphql")
