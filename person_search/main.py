"""
FastAPI application entry point.
Mounts routes, middleware (Prometheus, CORS) and the lifespan hooks (logging, ES client).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from person_search.api.v1.router import build_api_router
from person_search.config import Settings, get_settings
from person_search.logging_config import configure_logging, shutdown_logging
from person_search.search.elasticsearch_client import close_elasticsearch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging sinks. Shutdown: close the shared ES client and flush logs."""
    settings: Settings = app.state.settings
    listener = configure_logging(settings)
    logger.info("%s started (elasticsearch=%s)", settings.app_name, settings.elasticsearch_hosts)
    yield
    await close_elasticsearch()
    shutdown_logging(listener)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Generates fake persons and indexes, searches and purges them in Elasticsearch.",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(build_api_router(enable_name_search=settings.enable_name_search))

    return app


app = create_app()
