"""
FastAPI application factory.

Creates and configures the FastAPI application instance.  Each application
owns one channel registry, one aggregate tracker and the lock that serialises
writes to them.
"""

import logging
import math
from threading import RLock
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import Settings, settings
from app.equilibrium.registry import ChannelRegistry
from app.equilibrium.tracker import AggregatePanelTracker

logger = logging.getLogger(__name__)


def _json_safe_float(value: float):
    """JSON has no NaN or infinity; echo them back as strings."""
    return value if math.isfinite(value) else str(value)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Rejected NaN / inf inputs are echoed in the error detail.
    detail = jsonable_encoder(exc.errors(), custom_encoder={float: _json_safe_float})
    return JSONResponse(status_code=422, content={"detail": detail})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    cfg = app_settings or settings
    logging.basicConfig(level=cfg.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    application = FastAPI(
        title=cfg.PROJECT_NAME,
        version=cfg.VERSION,
        description="Temporal strain and equilibrium classification for bipolar balance metrics.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        debug=cfg.DEBUG)

    strain_config = cfg.strain_config()
    application.state.settings = cfg
    application.state.registry = ChannelRegistry(strain_config)
    application.state.tracker = AggregatePanelTracker(epsilon=strain_config.band, delta=cfg.CLASSIFIER_DELTA)
    application.state.lock = RLock()
    logger.info("Strain engine ready (band=%s, activation=%sms, recovery=%sms)", strain_config.band,
                strain_config.min_activation_ms, strain_config.min_recovery_ms)

    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API router
    application.include_router(api_router, prefix="/api/v1")

    @application.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": "Balance Equilibrium API",
            "version": cfg.VERSION,
            "status": "healthy"
        }

    @application.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "equilibrium-api",
            "version": cfg.VERSION,
            "channels": len(application.state.registry),
        }

    @application.get("/info")
    async def info():
        return {
            "project name": cfg.PROJECT_NAME,
            "version": cfg.VERSION,
            "authors": cfg.AUTHORS,
            "project url": cfg.PROJECT_URL
        }

    return application


app = create_app()
