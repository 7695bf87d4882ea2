"""
Digital Asset Registry API - Main Application Entry Point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import get_settings
from app.core.exceptions import RegistryException
from app.core.responses import create_error_response
from app.api.v1.router import api_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Creates development tables and records the registry authority on startup.
    """
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"Dev mode (bypass auth): {settings.DEV_MODE}")

    from app.db.session import AsyncSessionLocal, engine, is_using_sqlite_fallback
    from app.services.registry_service import RegistryService

    if is_using_sqlite_fallback():
        logger.warning("[DEV MODE] Using SQLite fallback database")
        logger.info("Creating SQLite development tables...")
        from app.db.base import Base
        # Import all models to register them
        from app.models import AssetRecord, PermissionEntry, RegistryState  # noqa: F401
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    else:
        logger.info("Database: PostgreSQL")

    async with AsyncSessionLocal() as session:
        state = await RegistryService(session, authority=settings.registry_authority).initialize()
        await session.commit()
        logger.info(
            f"Registry ready: authority='{state.authority}', "
            f"assets minted={state.asset_counter}, block height={state.block_height}"
        )

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## Digital Asset Registry API

Single-authority registry for digital asset records.

### Features
- **Registration**: mint a new asset id owned by the caller
- **Ownership**: only the owner may modify, transfer or delete an asset
- **Authorization**: records are readable by their owner or explicitly authorized principals
- **Metrics**: registry counter, authority and logical clock
    """,
    version=__version__,
    openapi_tags=[
        {"name": "assets", "description": "Asset registration, mutation and queries"},
        {"name": "registry", "description": "Registry-wide information"},
        {"name": "health", "description": "Service health checks"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RegistryException)
async def registry_exception_handler(request: Request, exc: RegistryException) -> JSONResponse:
    """Return registry errors in the standard error format."""
    return create_error_response(
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests are reported as validation_failed (400)."""
    return create_error_response(
        error="validation_failed",
        message="Request validation failed",
        status_code=400,
        details={"errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error but returns a sanitized response.
    """
    logger.exception(f"Unexpected error: {exc}")
    return create_error_response(
        error="internal_error",
        message="An unexpected error occurred",
        status_code=500,
    )


app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/", include_in_schema=False)
async def root():
    """Service information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
        "api": settings.API_V1_PREFIX,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
