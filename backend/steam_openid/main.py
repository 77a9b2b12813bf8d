"""
FastAPI Main Application
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from steam_openid.api import api_router
from steam_openid.common.exceptions import register_exception_handlers
from steam_openid.common.logging import LoggingMiddleware, setup_logging
from steam_openid.core.openid import get_provider_config
from steam_openid.core.settings import settings

setup_logging(level=settings.log_level, log_dir=settings.log_dir)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application Lifecycle"""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"   Environment: {settings.environment}")
    logger.info(f"   Debug: {settings.debug}")

    provider = get_provider_config()
    logger.info(f"   Steam OpenID endpoint: {provider.login_url}")
    if settings.steam_api_key:
        logger.info("   Steam Web API profile lookup: enabled")
    else:
        logger.info("   Steam Web API profile lookup: disabled (STEAM_API_KEY not set)")

    if settings.environment == "production" and provider.login_url.startswith("http://"):
        logger.warning("   Steam OpenID endpoint is not HTTPS in production")

    yield

    logger.info("Application shutdown")


# Create application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## Steam OpenID Gateway
Verifies Steam logins (OpenID 2.0) and returns the authenticated Steam id.
    """,
    docs_url="/docs" if settings.debug or settings.environment == "development" else None,
    redoc_url="/redoc" if settings.debug or settings.environment == "development" else None,
    lifespan=lifespan,
)


# Exception handling
register_exception_handlers(app)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.get("/", tags=["Root"])
async def root():
    """Root path, health check"""
    return {
        "status": "ok",
        "message": f"{settings.app_name} is running",
        "login": "/api/v1/auth/steam",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "steam_openid.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=settings.workers,
        # X-Forwarded-Proto decides the scheme of return_to behind a proxy
        proxy_headers=True,
    )
