#!/usr/bin/env python3
"""
AI Dev Platform - Main FastAPI Application

Application entry point
"""

import argparse
import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add the backend directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
backend_dir = os.path.dirname(current_dir)

if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

# Import application configurations and components
from app.config import Settings, get_settings
from app.config.logging_config import LoggingConfig
from app.core.ai_service import AIService
from app.db.session import Database
from app.utils.exceptions import register_exception_handlers

# Import API routers
from app.api import chat_router, health_router, project_router

# Initialize logging
LoggingConfig.from_settings(get_settings()).setup_logging()

# Initialize logger (after logging setup)
logger = logging.getLogger(__name__)


def create_app(
    database: Optional[Database] = None,
    ai_service: Optional[AIService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        database: Pre-built database; built from settings at startup when None
        ai_service: Pre-built AI gateway; built from settings at startup when None
        settings: Settings override, defaults to get_settings()

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: build missing instances, verify the database, create tables.
        Shutdown: dispose the engine if this app built it.
        """
        logger.info("=" * 80)
        logger.info(f"Starting {settings.app_name} ({settings.environment})...")
        logger.info("=" * 80)

        owns_database = app.state.database is None
        if owns_database:
            # Missing DB settings raise ConfigurationError and abort startup
            app.state.database = Database.from_settings(settings)
            await app.state.database.ping()
            logger.info("Database connection verified")

        if settings.db_create_tables:
            await app.state.database.create_tables()
            logger.info("Database tables ensured")

        if app.state.ai_service is None:
            app.state.ai_service = AIService.from_settings(settings)

        app.state.started_at = time.monotonic()

        logger.info("Application startup complete")
        logger.info(f"Server URL: http://{settings.host}:{settings.port}")
        logger.info(f"Documentation: http://{settings.host}:{settings.port}/docs")
        logger.info(f"Health Check: http://{settings.host}:{settings.port}/health")
        logger.info("=" * 80)

        yield

        logger.info("Shutting down application...")
        if owns_database:
            try:
                await app.state.database.dispose()
                logger.info("Database connections closed")
            except Exception as e:
                logger.error(f"Error closing database: {e}", exc_info=True)
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="AI-powered development platform: projects, files and Claude code generation",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.ai_service = ai_service
    app.state.version = settings.version
    app.state.environment = settings.environment
    app.state.default_user_id = settings.default_user_id
    app.state.started_at = time.monotonic()

    # Add CORS middleware (must be first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global exception handlers
    register_exception_handlers(app)

    app.include_router(project_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(health_router)

    return app


app = create_app()


def run_api(host: str, port: int, **kwargs):
    """
    Run the API server with the given configuration
    """
    try:
        uvicorn.run(
            "app.main:app",
            host=host,
            port=port,
            reload=kwargs.get("reload", False),
        )
    except Exception as e:
        logger.error(f"Failed to start API server: {e}")
        raise


def main() -> None:
    """
    AI Dev Platform entry point
    """
    settings = get_settings()

    parser = argparse.ArgumentParser(description=settings.app_name)
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument("--reload", action="store_true", default=settings.reload, help="Auto-reload on code changes")
    args = parser.parse_args()

    try:
        logger.info("=" * 80)
        logger.info("Server Information:")
        logger.info(f"  - Server URL: http://{args.host}:{args.port}")
        logger.info(f"  - Documentation: http://{args.host}:{args.port}/docs")
        logger.info(f"  - Health Check: http://{args.host}:{args.port}/health")
        logger.info("=" * 80)

        run_api(host=args.host, port=args.port, reload=args.reload)

    except KeyboardInterrupt:
        logger.info("Shutting down AI Dev Platform gracefully...")
    except Exception as e:
        error_msg = f"Error starting server: {e}"
        logger.error(error_msg)
        raise RuntimeError(error_msg) from e


if __name__ == "__main__":
    main()
