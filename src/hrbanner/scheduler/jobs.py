"""
APScheduler job that keeps the banner warm.

Requests still regenerate a stale banner on demand; this job just means the
first request after a quiet period doesn't wait on Fitbit. Runs inside the
uvicorn process, started from the FastAPI lifespan.
"""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger(__name__)


def build_scheduler(service) -> AsyncIOScheduler:
    """
    Create and configure the APScheduler.

    Args:
        service: BannerService whose cache the job refreshes.

    Returns:
        Configured AsyncIOScheduler (not yet started).
    """
    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        _refresh_banner,
        trigger="interval",
        seconds=service.settings.cache_invalidation_seconds,
        id="refresh_banner",
        replace_existing=True,
        kwargs={"service": service},
    )

    return scheduler


async def _refresh_banner(service) -> None:
    """Periodic job: regenerate the cached banner."""
    try:
        await service.refresh()
        logger.info("Banner refreshed")
    except Exception as exc:
        logger.error("Banner refresh failed: %s", exc)
