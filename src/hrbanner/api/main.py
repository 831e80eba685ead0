"""FastAPI application factory."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from hrbanner.api.routes import banner
from hrbanner.config import get_settings
from hrbanner.fitbit.client import FitbitClient
from hrbanner.scheduler.jobs import build_scheduler
from hrbanner.service import BannerService

logger = logging.getLogger(__name__)


def create_app(
    service: Optional[BannerService] = None,
    start_scheduler: bool = True,
) -> FastAPI:
    """
    Build and return the FastAPI app.

    Args:
        service: BannerService to serve from. Defaults to one built from settings.
        start_scheduler: start the periodic banner refresh job on startup.
    """
    if service is None:
        settings = get_settings()
        service = BannerService(FitbitClient.from_settings(settings), settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler = build_scheduler(service) if start_scheduler else None
        if scheduler is not None:
            scheduler.start()
            logger.info(
                "Scheduler started (banner refresh every %ds)",
                service.settings.cache_invalidation_seconds,
            )
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown()

    app = FastAPI(
        title="Heart Rate Banner",
        description="Fitbit heart-rate SVG banner for README embeds",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.banner_service = service

    app.include_router(banner.router, tags=["banner"])

    return app
