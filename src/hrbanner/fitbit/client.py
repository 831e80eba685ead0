"""
Async client for Fitbit's intraday heart-rate endpoint.

One call fetches the last `lookback_hours` of 1-minute heart rate, resolves
the date of every sample (Fitbit only returns HH:MM:SS) and fills the gaps so
the renderer gets one sample per minute.

Token refresh is done here: a 401 "Access token expired" triggers exactly one
refresh + retry. FitbitAuth is synchronous; we run it in the thread pool
executor so it doesn't block the event loop.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from hrbanner.analysis.gap_fill import DEFAULT_GAP_INTERVAL_SECONDS, fill_gaps
from hrbanner.analysis.resolver import resolve_samples
from hrbanner.analysis.timeseries import QueryWindow, Sample, build_query_window
from hrbanner.config import Settings
from hrbanner.fitbit.auth import (
    FitbitAuth,
    TokenExpiredError,
    UserCredentials,
    error_messages,
    raise_for_fitbit_error,
)

logger = logging.getLogger(__name__)

API_BASE = "https://api.fitbit.com"
INTRADAY_PATH = "/1/user/{user_id}/activities/heart/date/{start_date}/{end_date}/1min/time/{start_time}/{end_time}.json"
EXPIRED_TOKEN_MESSAGE = "Access token expired"


def intraday_url(user_id: str, window: QueryWindow) -> str:
    return API_BASE + INTRADAY_PATH.format(
        user_id=user_id,
        start_date=window.start_date,
        end_date=window.end_date,
        start_time=window.start_time,
        end_time=window.end_time,
    )


class FitbitClient:
    """
    Thin async wrapper over the Fitbit Web API.

    Credentials are loaded from disk via FitbitAuth on every fetch so a token
    refreshed by another request is picked up.
    """

    def __init__(
        self,
        auth: FitbitAuth,
        utc_offset_hours: int = 0,
        lookback_hours: int = 4,
        gap_interval_seconds: int = DEFAULT_GAP_INTERVAL_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            auth: FitbitAuth holding the saved tokens.
            utc_offset_hours: zone the series is requested and displayed in.
            lookback_hours: length of the query window ending at now.
            gap_interval_seconds: spacing enforced by fill_gaps.
            transport: httpx transport override (tests pass httpx.MockTransport).
        """
        self._auth = auth
        self._zone = timezone(timedelta(hours=utc_offset_hours))
        self.lookback_hours = lookback_hours
        self.gap_interval_seconds = gap_interval_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "FitbitClient":
        auth = FitbitAuth(
            client_id=settings.fitbit_client_id,
            client_secret=settings.fitbit_client_secret,
            redirect_uri=settings.fitbit_redirect_uri,
            credentials_dir=settings.credentials_dir,
        )
        return cls(
            auth,
            utc_offset_hours=settings.utc_offset_hours,
            lookback_hours=settings.plot_range_hours,
            gap_interval_seconds=settings.gap_interval_seconds,
        )

    @property
    def auth(self) -> FitbitAuth:
        return self._auth

    def now(self) -> datetime:
        """Current instant in the configured zone."""
        return datetime.now(timezone.utc).astimezone(self._zone)

    async def _run(self, fn, *args, **kwargs):
        """Run a sync FitbitAuth call in the thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: fn(*args, **kwargs))

    async def get_intraday_heart_rate(
        self, credentials: UserCredentials, window: QueryWindow
    ) -> List[Dict[str, Any]]:
        """
        Fetch the raw intraday dataset: [{"time": "HH:MM:SS", "value": 72}, ...].

        Raises:
            TokenExpiredError: on 401 with Fitbit's "Access token expired" message.
            FitbitAPIError: on any other non-2xx response.
        """
        url = intraday_url(credentials.user_id, window)
        async with httpx.AsyncClient(transport=self._transport, timeout=30) as client:
            resp = await client.get(
                url, headers={"Authorization": f"Bearer {credentials.access_token}"}
            )

        if resp.status_code == 401:
            if any(EXPIRED_TOKEN_MESSAGE in m for m in error_messages(resp)):
                raise TokenExpiredError("token must be refreshed")
        raise_for_fitbit_error(resp)

        body = resp.json()
        return body.get("activities-heart-intraday", {}).get("dataset", [])

    async def heart_rate_series(self, now: Optional[datetime] = None) -> List[Sample]:
        """
        Fetch, date and gap-fill the heart-rate series for the window ending at `now`.

        Raises:
            NoCredentialsError: if setup has not been run.
            TokenExpiredError: if the token is still rejected after one refresh.
            FitbitAPIError: on vendor errors.
            ParseError / DataQualityError: on malformed vendor data.
        """
        window = build_query_window(now or self.now(), self.lookback_hours)
        credentials = await self._run(self._auth.load)

        try:
            raw = await self.get_intraday_heart_rate(credentials, window)
        except TokenExpiredError:
            logger.info("Fitbit access token expired; refreshing")
            credentials = await self._run(self._auth.refresh, credentials)
            raw = await self.get_intraday_heart_rate(credentials, window)

        samples = resolve_samples(raw, window)
        filled = fill_gaps(samples, self.gap_interval_seconds)
        logger.info(
            "Fetched %d samples (%d after gap fill) for %s %s → %s %s",
            len(samples), len(filled),
            window.start_date, window.start_time, window.end_date, window.end_time,
        )
        return filled
