# oauth_gateway/main.py (async version)

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.inbound.api.responses import identified_client_headers
from oauth_gateway.adapters.outbound.persistence.database import engine, get_db_context
from oauth_gateway.adapters.outbound.persistence.models import Base
from oauth_gateway.adapters.outbound.persistence.seeds import run_all_seeds
from oauth_gateway.domain.exceptions import GatewayException

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup and shutdown of the service: schema creation and scope seed.
    """
    logger.info("Application starting up...")

    # Create database tables if they don't exist
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_db_context() as db:
        await run_all_seeds(db)

    yield

    logger.info("Application shutting down...")
    await engine.dispose()


# Create FastAPI instance
app = FastAPI(
    title="OAuth Gateway",
    description="OAuth2 client governance: client credentials tokens, scopes and request quotas",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(GatewayException)
async def gateway_exception_handler(request: Request, exc: GatewayException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.error, "description": exc.detail},
        headers={**(exc.headers or {}), **identified_client_headers(request)},
    )


# Middlewares
from oauth_gateway.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
)

app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)

# Routers
from oauth_gateway.adapters.inbound.api.v1.router import api_router as api_v1_router
from oauth_gateway.adapters.inbound.api.v1.endpoints import oauth_endpoint

app.include_router(oauth_endpoint.router, prefix="/oauth")
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def redirect_to_docs():
    return RedirectResponse(url="/docs")


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    spec = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Remove unwanted schemas and 422 responses
    for schema in ("HTTPValidationError", "ValidationError"):
        spec.get("components", {}).get("schemas", {}).pop(schema, None)

    for path in spec.get("paths", {}).values():
        for op in path.values():
            op.get("responses", {}).pop("422", None)

    app.openapi_schema = spec
    return spec


app.openapi = custom_openapi
