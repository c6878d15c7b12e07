"""
FastAPI application entry point.
Wires logging, CORS, error envelopes, metrics and routers; `run()` starts the server.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from marketplace.api.router import api_router
from marketplace.config import get_settings
from marketplace.core.exceptions import register_exception_handlers
from marketplace.core.logging import configure_logging, request_id_middleware
from marketplace.db.session import create_tables, dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: ensure tables when enabled. Shutdown: release pooled connections."""
    settings = get_settings()
    if settings.auto_create_tables:
        await create_tables()
    logger.info("%s started", settings.app_name)
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Classified-ads marketplace: accounts, listings and favorites.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)
    register_exception_handlers(app)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on the configured host/port."""
    settings = get_settings()
    uvicorn.run(
        "marketplace.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
