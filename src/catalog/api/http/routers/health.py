"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.catalog.api.http.deps import get_app_dependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "catalog-api"}


@router.get("/ready", response_model=None)
def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    app_deps = get_app_dependencies(request)
    config = app_deps.config

    db_healthy = app_deps.database_service.health_check()
    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": "sqlite" if config.database.is_sqlite else "sql",
                "pool": app_deps.database_service.get_pool_status(),
            },
            "uploads": {
                "status": "healthy" if app_deps.image_storage.folder.is_dir() else "missing",
                "directory": str(app_deps.image_storage.folder),
            },
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
