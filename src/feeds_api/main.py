"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from aggregate_feeds.config import Config, get_config
from aggregate_feeds.services import Services, build_services
from common.cli_helpers import setup_logging
from feeds_api.routers import feeds, health

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None, services: Services | None = None) -> FastAPI:
    """Build the app. Services are created at startup unless given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        nonlocal services
        if services is None:
            services = build_services(config or get_config())
        app.state.services = services

        scheduler_enabled = services.config.schedule.enabled
        if scheduler_enabled:
            services.scheduler.start()
        else:
            logger.info("Scheduled refresh disabled; feeds are built on request")

        yield

        if scheduler_enabled:
            services.scheduler.stop()

    app = FastAPI(
        title="Newswire RSS",
        description="Category RSS feeds aggregated from the news wire",
        version="1.0.0",
        lifespan=lifespan,
    )

    # /health must be registered before the /{category} catch-all
    app.include_router(health.router)
    app.include_router(feeds.router)
    return app


app = create_app()


def main():
    """Run the API server."""
    import uvicorn

    setup_logging()
    config = get_config()
    uvicorn.run(
        "feeds_api.main:app",
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
