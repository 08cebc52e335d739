"""Main application module.

This module sets up the FastAPI application and its dependencies.

Run with:
    uvicorn storyswap.main:create_app --factory  (uvicorn installed separately)
"""

import logging
from typing import Optional

from fastapi import FastAPI

from storyswap.api.v1 import router as api_v1_router
from storyswap.api.v1.auth.router import PUBLIC_PATHS
from storyswap.config import Settings, get_settings
from storyswap.logger import setup_logger
from storyswap.middleware import setup_middleware
from storyswap.services.token_service import TokenService

logger = logging.getLogger(__name__)

def create_app(
    settings: Optional[Settings] = None,
    token_service: Optional[TokenService] = None
) -> FastAPI:
    """Create the FastAPI application.

    The token service is built here, once, so missing or unsafe secrets stop
    the process before it serves a request.

    Args:
        settings: Application settings; loaded from the environment if omitted
        token_service: Pre-built token service, mainly for tests

    Raises:
        ConfigurationError: If the token secrets are empty or identical
    """
    settings = settings or get_settings()
    setup_logger(settings)

    if token_service is None:
        token_service = TokenService.from_settings(settings)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    app.state.settings = settings
    app.state.token_service = token_service

    exclude_paths = list(settings.AUTH_EXCLUDE_PATHS)
    exclude_paths.extend(f"{settings.API_PREFIX}/auth{path}" for path in PUBLIC_PATHS)
    setup_middleware(app, exclude_paths)

    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    logger.info(f"{settings.APP_NAME} started in {settings.APP_ENVIRONMENT} mode")
    return app
