"""
BannerService: runs the fetch → resolve → fill → render pipeline and caches
the resulting SVG.

The banner is regenerated when the cached copy is older than
`cache_invalidation_seconds`, either on request or from the scheduler. Any
failure in the pipeline is logged and the placeholder banner is cached
instead; the serving process never dies because Fitbit returned something odd.
"""
import asyncio
import logging
import time
from typing import Callable, Optional

from hrbanner.config import Settings
from hrbanner.fitbit.client import FitbitClient
from hrbanner.render.banner import default_banner, render_banner

logger = logging.getLogger(__name__)


class BannerService:
    """Caches the last rendered banner; one instance per process."""

    def __init__(
        self,
        client: FitbitClient,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            client: FitbitClient (or AsyncMock in tests).
            settings: banner size, theme and cache TTL.
            clock: monotonic seconds source, overridable in tests.
        """
        self.client = client
        self.settings = settings
        self._clock = clock
        self._lock = asyncio.Lock()
        self._svg = default_banner(settings)
        self._generated_at: Optional[float] = None

    @property
    def svg(self) -> str:
        return self._svg

    def is_stale(self) -> bool:
        if self._generated_at is None:
            return True
        age = self._clock() - self._generated_at
        return age > self.settings.cache_invalidation_seconds

    async def get_banner(self) -> str:
        """Return the cached banner, regenerating it first if stale."""
        async with self._lock:
            if self.is_stale():
                await self._refresh_locked()
            return self._svg

    async def refresh(self) -> str:
        """Regenerate unconditionally (scheduler entry point)."""
        async with self._lock:
            await self._refresh_locked()
            return self._svg

    async def _refresh_locked(self) -> None:
        try:
            series = await self.client.heart_rate_series()
            self._svg = render_banner(series, self.settings)
        except Exception as exc:
            logger.error("Banner generation failed: %s", exc)
            self._svg = default_banner(self.settings)
        self._generated_at = self._clock()
