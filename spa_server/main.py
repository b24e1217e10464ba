"""FastAPI application: health check, immutable assets and the SPA catch-all."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from spa_server.config import Settings, settings as default_settings
from spa_server.headers import CommonHeadersMiddleware, ResponseBranch, apply_cache_headers
from spa_server.resolver import Resolver
from spa_server.routers import health, spa
from spa_server.routers.assets import ASSETS_PREFIX, AssetFiles

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given configuration.

    Registration order is the dispatch order: ``/healthz``, then the
    ``/assets`` mount, then the catch-all route.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="SPA Static Server",
        description=(
            "Serves a client build directory and a public directory, "
            "falling back to index.html for client-side routes."
        ),
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.resolver = Resolver.from_settings(settings)

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_methods=["GET", "HEAD", "OPTIONS"],
            allow_headers=["*"],
        )
    # Added last so it wraps CORS preflight responses too
    app.add_middleware(CommonHeadersMiddleware, server_name=settings.SERVER_NAME)

    @app.exception_handler(StarletteHTTPException)
    async def no_store_errors(request: Request, exc: StarletteHTTPException):
        """Error answers from any route, mount or the router itself are never cached."""
        response = await http_exception_handler(request, exc)
        apply_cache_headers(response.headers, ResponseBranch.DYNAMIC, settings)
        return response

    app.include_router(health.router)
    app.mount(ASSETS_PREFIX, AssetFiles(settings), name="assets")
    app.include_router(spa.router)

    logger.debug(
        f"Serving client={app.state.resolver.client_root} "
        f"public={app.state.resolver.public_root} assets={settings.assets_root}"
    )
    return app


app = create_app()
