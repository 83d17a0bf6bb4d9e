"""
DevConnector API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configuration
- Database schema initialization
- CORS middleware for the React client
- Prometheus metrics
- Exception handlers and API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup)
    ├── CORS Middleware
    ├── Prometheus Middleware (/metrics)
    └── API Router (/api)
        ├── /users - Registration
        ├── /auth - Login and current user
        ├── /profiles - Profiles, experience, education, GitHub repos
        └── /posts - Posts feed
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from devconnector.config import get_settings
from devconnector.database import init_db
from devconnector.api import api_router
from devconnector.error_handlers import register_exception_handlers
from devconnector.middleware import setup_metrics

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database initialized")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="DevConnector API",
        description="User accounts, profiles and posts",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_metrics(app)
    register_exception_handlers(app)

    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "API Running"

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
