"""
Regulations Service - Main Application
======================================

FastAPI application exposing EPA regulation details and search.

Version: 0.1.0
"""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.regulations import routes
from services.regulations.client import EPAClient
from services.regulations.details import DetailsFetcher
from services.regulations.errors import UpstreamError
from services.regulations.lookup import CatalogRegulationLookup
from services.regulations.search import SearchOrchestrator
from shared.config import settings
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse


# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="regulations",
)

logger = get_logger(__name__)


def load_lookup() -> CatalogRegulationLookup:
    """Load the program catalog, or an empty one if none is configured."""
    path = settings.lookup.catalog_path
    if not path.exists():
        logger.warning("lookup_catalog_missing", path=str(path))
        return CatalogRegulationLookup()
    return CatalogRegulationLookup.from_file(path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    logger.info(
        "regulations_service_starting",
        environment=settings.environment.value,
        port=settings.port,
        api_base_url=settings.epa.api_base_url,
    )

    client = EPAClient(settings.epa)
    lookup = load_lookup()

    app.state.client = client
    app.state.lookup = lookup
    app.state.details_fetcher = DetailsFetcher(client, lookup)
    app.state.search_orchestrator = SearchOrchestrator(client, lookup)

    yield

    logger.info("regulations_service_shutting_down")
    await client.close()


app = FastAPI(
    title="EPA Regulations Service",
    description="Regulation details and search over EPA rulemaking documents",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id and path to every log line of the request."""
    clear_context()
    bind_context(
        request_id=request.headers.get("X-Request-ID", uuid.uuid4().hex),
        path=request.url.path,
    )
    try:
        return await call_next(request)
    finally:
        clear_context()


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request) -> HealthResponse:
    """Service health check."""
    lookup = getattr(request.app.state, "lookup", None)
    programs = len(lookup.programs) if lookup is not None else 0

    return HealthResponse(
        status="healthy" if programs else "degraded",
        service="regulations",
        version="0.1.0",
        components={
            "lookup_catalog": {
                "status": "healthy" if programs else "empty",
                "programs": programs,
            },
        },
    )


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    routes.router,
    prefix="/api/v1/regulations",
    tags=["Regulations"],
)


# ============================================================================
# Error Handlers
# ============================================================================


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Relay structured upstream errors with their status."""
    logger.warning(
        "upstream_exception",
        status_code=exc.status,
        detail=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status,
        content=ErrorResponse(error=exc.message, status_code=exc.status).model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> Any:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ).model_dump(mode="json"),
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.regulations.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
