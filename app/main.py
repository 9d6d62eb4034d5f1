"""FastAPI application entry point."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import router as api_router
from app.core.config import Settings, get_settings
from app.core.container import build_container
from app.core.database import SessionLocal, init_db
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import init_logging
from app.core.middleware import TraceIdMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and the bootstrap super admin before serving."""
    container = app.state.container
    init_db()
    db = SessionLocal()
    try:
        container.admin_auth_service.ensure_bootstrap_admin(db, container.settings)
    finally:
        db.close()
    logger.info(f"[APP] ✓ {container.settings.app_name} started (env={container.settings.app_env})")
    yield
    logger.info("[APP] Shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    init_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    Storefront catalog service

    ## Storefront
    - `POST /auth/signup`, `POST /auth/signin`, `POST /auth/google` - account access
    - `GET /products` - filtered, paginated catalog browsing
    - `GET /products/{idOrSlug}` - product detail (counts a view)
    - `GET /categories` - active categories

    ## Back office
    - `/admin/auth/*` - admin signin, profile, admin accounts
    - `/admin/categories`, `/admin/brands`, `/admin/products` - catalog management
    - `/upload/single`, `/upload/multiple` - media upload proxy
    """,
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TraceIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "version": settings.app_version}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
