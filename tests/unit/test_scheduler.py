"""Tests for APScheduler job configuration and the banner refresh job body."""
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from hrbanner.scheduler.jobs import _refresh_banner, build_scheduler


def mock_service(ttl=300):
    service = MagicMock()
    service.settings.cache_invalidation_seconds = ttl
    service.refresh = AsyncMock(return_value="<svg/>")
    return service


class TestBuildScheduler:
    def test_returns_scheduler(self):
        assert isinstance(build_scheduler(mock_service()), AsyncIOScheduler)

    def test_refresh_job_registered(self):
        scheduler = build_scheduler(mock_service())
        assert [job.id for job in scheduler.get_jobs()] == ["refresh_banner"]

    def test_refresh_is_interval(self):
        scheduler = build_scheduler(mock_service())
        job = scheduler.get_jobs()[0]
        assert job.trigger.__class__.__name__ == "IntervalTrigger"

    def test_interval_follows_cache_ttl(self):
        """The job runs once per cache lifetime."""
        scheduler = build_scheduler(mock_service(ttl=120))
        job = scheduler.get_jobs()[0]
        assert job.trigger.interval == timedelta(seconds=120)

    def test_scheduler_not_running_on_creation(self):
        """build_scheduler should not auto-start."""
        assert not build_scheduler(mock_service()).running


# ─── _refresh_banner job body ─────────────────────────────────────────────────

class TestRefreshBannerJob:
    @pytest.mark.asyncio
    async def test_calls_refresh(self):
        service = mock_service()
        await _refresh_banner(service)
        service.refresh.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_exception_does_not_propagate(self):
        """A failing refresh is logged, never raised into APScheduler."""
        service = mock_service()
        service.refresh.side_effect = RuntimeError("fitbit down")
        await _refresh_banner(service)

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, caplog):
        service = mock_service()
        service.refresh.side_effect = RuntimeError("fitbit down")
        with caplog.at_level("ERROR", logger="hrbanner.scheduler.jobs"):
            await _refresh_banner(service)
        assert "fitbit down" in caplog.text
