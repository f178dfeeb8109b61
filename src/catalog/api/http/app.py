"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.routers.client import STATIC_DIR
from src.catalog.api.http.routers.client import router as client_router
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.http.routers.service.product import router as product_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.exceptions import CatalogError
from src.catalog.core.services import (
    DbManageService,
    DbSessionService,
    ImageStorageService,
)
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]


# --- Lifecycle hooks ---
def startup(app: FastAPI) -> ApplicationDependencies:
    config: ConfigData = app.state.config
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config)
    image_storage = ImageStorageService(config.uploads)
    image_storage.ensure_directory()

    # A broken store must not keep the API from starting
    try:
        db_manage_service = DbManageService(database_service)
        db_manage_service.create_all()
        if config.database.seed_sample_data:
            db_manage_service.seed_sample_data()
    except Exception:
        logger.exception("Database initialization failed; continuing without it")

    deps = ApplicationDependencies(
        config=config,
        database_service=database_service,
        image_storage=image_storage,
    )
    app.state.app_dependencies = deps
    return deps


def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup(app)
    try:
        yield
    finally:
        shutdown(app)


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    start = time.perf_counter()

    # Everything that logs within this block inherits the request context
    with logger.contextualize(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_ip=client_ip,
    ):
        try:
            logger.info("request.start {} {}", request.method, request.url.path)
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end {} in {:.1f} ms", response.status_code, duration_ms)

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"message": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    logger.info("{} on {}: {}", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


# --- FastAPI app setup ---
def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application for ``config`` (the active context's by default)."""
    config = config or get_config()
    configure_logging(config)

    is_production = config.app.environment == "production"
    app = FastAPI(
        title=config.app.title,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.config = config

    # --- CORS configuration ---
    cors = config.app.cors
    if is_production and cors.allow_credentials and "*" in cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
        expose_headers=cors.expose_headers,
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(CatalogError, handle_catalog_error)

    # --- Router registration ---
    app.include_router(product_router, prefix="/api/products", tags=["products"])
    app.include_router(health_router)
    app.include_router(client_router)

    # The upload directory is created on startup
    app.mount(
        config.uploads.public_path,
        StaticFiles(directory=config.uploads.directory, check_dir=False),
        name="uploads",
    )
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
