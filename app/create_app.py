"""
FastAPI application factory following kkb_fastapi pattern.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import (
    analytics_router,
    appliances_router,
    meter_readings_router,
    profile_router,
)
from app.core.config import get_config
from app.database.base import apply_db_migration, get_db_url, get_engine_kw
from app.database.session_manager.db_session import Database

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def register_routers(app: FastAPI):
    """Register all API routers."""
    app.include_router(meter_readings_router)
    app.include_router(profile_router)
    app.include_router(appliances_router)
    app.include_router(analytics_router)


def register_exception_handlers(app: FastAPI):
    """Map exceptions to JSON error responses."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logging.error(f"HTTPException occurred: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": jsonable_encoder(exc.errors()),
                "message": "Validation error",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.error(f"Exception occurred: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error."},
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles database initialization and cleanup.
    """
    logging.info("Application startup")
    config = app.state.config

    if config.section("db").get("migrate_on_startup", False):
        await apply_db_migration(config)

    Database.init(get_db_url(config), engine_kw=get_engine_kw(config))
    logging.info("Initialized database")

    try:
        yield
    finally:
        await Database.dispose()
        logging.info("Application shutdown")


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)
    api_config = config.section("api")

    app = FastAPI(
        title=api_config.get("title", "Household Energy Tracker API"),
        description=api_config.get(
            "description", "Meter readings and baseline savings analytics"
        ),
        version=api_config.get("version", "1.0.0"),
        debug=api_config.get("debug", False),
        lifespan=lifespan,
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config

    register_routers(app)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.section("cors").get("origins", []),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": config.section("api").get("title", "Household Energy Tracker API"),
            "version": app.version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "household-energy-tracker"}

    return app
