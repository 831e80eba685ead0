"""Tests for BannerService caching and fallback behaviour."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hrbanner.fitbit.auth import NoCredentialsError
from hrbanner.render.banner import default_banner
from hrbanner.service import BannerService


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def client(make_samples):
    mock = MagicMock()
    mock.heart_rate_series = AsyncMock(return_value=make_samples([0, 60, 120], [70, 71, 72]))
    return mock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(client, settings, clock):
    return BannerService(client, settings, clock=clock)


class TestInitialState:
    def test_starts_with_placeholder(self, service, settings):
        assert service.svg == default_banner(settings)

    def test_never_generated_is_stale(self, service):
        assert service.is_stale()


class TestGetBanner:
    async def test_first_call_generates(self, service, client):
        with patch("hrbanner.service.render_banner", return_value="<svg>hr</svg>") as render:
            assert await service.get_banner() == "<svg>hr</svg>"
        client.heart_rate_series.assert_awaited_once()
        render.assert_called_once_with(client.heart_rate_series.return_value, service.settings)

    async def test_fresh_banner_served_from_cache(self, service, client, clock):
        with patch("hrbanner.service.render_banner", return_value="<svg>hr</svg>"):
            await service.get_banner()
            clock.now += 299
            assert await service.get_banner() == "<svg>hr</svg>"
        assert client.heart_rate_series.await_count == 1

    async def test_stale_banner_regenerated(self, service, client, clock):
        with patch("hrbanner.service.render_banner", side_effect=["<svg>1</svg>", "<svg>2</svg>"]):
            assert await service.get_banner() == "<svg>1</svg>"
            clock.now += 301
            assert await service.get_banner() == "<svg>2</svg>"
        assert client.heart_rate_series.await_count == 2

    async def test_exactly_at_ttl_is_still_fresh(self, service, clock):
        with patch("hrbanner.service.render_banner", return_value="<svg/>"):
            await service.get_banner()
        clock.now += 300
        assert not service.is_stale()


class TestFailures:
    async def test_fetch_failure_serves_placeholder(self, service, client, settings):
        client.heart_rate_series.side_effect = NoCredentialsError("run setup")
        assert await service.get_banner() == default_banner(settings)

    async def test_render_failure_serves_placeholder(self, service, settings):
        with patch("hrbanner.service.render_banner", side_effect=ValueError("data set empty")):
            assert await service.get_banner() == default_banner(settings)

    async def test_placeholder_replaces_previous_banner(self, service, client, clock, settings):
        with patch("hrbanner.service.render_banner", return_value="<svg>hr</svg>"):
            await service.get_banner()
            client.heart_rate_series.side_effect = RuntimeError("boom")
            clock.now += 301
            assert await service.get_banner() == default_banner(settings)

    async def test_failure_is_cached_until_stale(self, service, client, clock):
        client.heart_rate_series.side_effect = RuntimeError("boom")
        await service.get_banner()
        clock.now += 10
        await service.get_banner()
        assert client.heart_rate_series.await_count == 1

    async def test_failure_is_logged(self, service, client, caplog):
        client.heart_rate_series.side_effect = RuntimeError("boom")
        with caplog.at_level("ERROR", logger="hrbanner.service"):
            await service.get_banner()
        assert "Banner generation failed: boom" in caplog.text


class TestRefresh:
    async def test_refresh_ignores_freshness(self, service, client):
        with patch("hrbanner.service.render_banner", return_value="<svg/>"):
            await service.get_banner()
            await service.refresh()
        assert client.heart_rate_series.await_count == 2

    async def test_refresh_resets_age(self, service, clock):
        with patch("hrbanner.service.render_banner", return_value="<svg/>"):
            await service.refresh()
        clock.now += 100
        assert not service.is_stale()
