"""
FastAPI Application Entry Point

Wacdo catalog backend: users and roles, categories, products, product
options and their values, menus.

Endpoints:
    - POST /users, POST /users/login: Public registration and login
    - /users, /roles, /categories, /products, /options, /menus: Bearer-protected CRUD
    - GET /: API information
    - GET /health: System health check
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Windows-specific event loop policy
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from wacdo.api import routers
from wacdo.core.config import Settings, get_settings, setup_logging
from wacdo.core.exceptions import register_exception_handlers
from wacdo.database import Database, get_db
from wacdo.schemas import HealthResponse
from wacdo.services.catalog import RoleService
from wacdo.services.rate_limit import RateLimitMiddleware, TokenBucket
from wacdo.services.tokens import TokenService

logger = logging.getLogger(__name__)

CORS_MAX_AGE = 12 * 60 * 60


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (defaults to the cached environment settings)
        database: Database to use (defaults to one built from ``settings.database_url``)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    database = database or Database(settings.database_url, echo=settings.database_echo)

    # =========================================================================
    # APPLICATION LIFECYCLE
    # =========================================================================

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {settings.app_name}")
        logger.info(f"   Version: {settings.app_version}")
        logger.info(f"   Environment: {settings.env_mode.value}")
        logger.info(f"   Database: {settings.database_backend}")
        logger.info(f"   CORS origins: {settings.cors_origins_list}")
        logger.info("=" * 60)

        await database.init_db()
        logger.info("✅ Database initialized")

        if settings.default_role:
            async with database.session_maker() as session:
                await RoleService(session).ensure_default(settings.default_role)

        insecure = settings.validate_production_config()
        if insecure:
            logger.warning(f"⚠️ Insecure production config: {insecure}")

        yield

        logger.info("Shutting down...")
        await database.dispose()
        logger.info("✅ Cleanup complete")

    # =========================================================================
    # APPLICATION INSTANCE
    # =========================================================================

    app = FastAPI(
        title=settings.app_name,
        description="Catalog backend for a fast-food ordering system.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.database = database
    app.state.token_service = TokenService.from_settings(settings)

    # Middleware added last runs first: CORS wraps the rate limiter
    if settings.rate_limit_rps > 0:
        bucket = TokenBucket(rate=settings.rate_limit_rps, burst=settings.rate_limit_rps)
        app.add_middleware(RateLimitMiddleware, bucket=bucket)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Authorization", "Content-Type"],
        max_age=CORS_MAX_AGE,
    )

    register_exception_handlers(app, settings)

    for router in routers:
        app.include_router(router)

    # =========================================================================
    # ROOT & HEALTH ENDPOINTS
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, Any]:
        """API root with navigation links."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.env_mode.value,
            "documentation": "/docs",
            "health": "/health",
        }

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="System Health Check",
    )
    async def health_check(db: AsyncSession = Depends(get_db)) -> HealthResponse:
        db_status = "healthy"
        try:
            await db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            db_status = f"unhealthy: {e}"
            logger.error(f"Database health check failed: {e}")

        return HealthResponse(
            status="operational" if db_status == "healthy" else "degraded",
            database=db_status,
            timestamp=datetime.now(),
        )

    return app


setup_logging()
app = create_app()
