"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.routes import geographical, health, permits, routes
from .config import settings
from .errors import ValidationError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        root_path="",
    )
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Handlers catch ValueError themselves; this covers anything raised outside them.
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "version": __version__,
            "status": "running",
            "health": f"{settings.api_prefix}/health",
            "recommendations": f"{settings.api_prefix}/permits/recommendations",
            "route_planning": f"{settings.api_prefix}/routes/plan",
            "docs": "/docs",
        }

    for router in (health.router, permits.router, routes.router, geographical.router):
        app.include_router(router, prefix=settings.api_prefix)
    logger.info(f"{settings.app_name} {__version__} mounted under '{settings.api_prefix}'")
    return app


app = create_app()
