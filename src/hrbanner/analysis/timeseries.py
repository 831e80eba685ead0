"""
Sample and QueryWindow dataclasses.

Sample is the universal in-memory representation used by the resolver, the
gap-fill engine and the renderer. It is a plain Python dataclass with no
pydantic and no HTTP dependencies. Analysis functions take List[Sample] and
return pure results.

QueryWindow describes the date/time range requested from Fitbit for one
fetch cycle. Fitbit's intraday endpoint takes a start/end date and a
start/end HH:MM, but answers with time-of-day only, so the window also keeps
the `now` it was built from for date resolution later on.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Tuple


@dataclass(frozen=True)
class Sample:
    """
    One heart-rate observation.
    Fitbit intraday data is 1 per minute at best; gaps are common whenever the
    tracker loses skin contact or hasn't synced.
    """

    clock_time: str       # "HH:MM" from Fitbit, "" when synthesized
    timestamp: datetime   # resolved date + time, the ordering key
    value: int            # bpm

    @property
    def synthesized(self) -> bool:
        return self.clock_time == ""

    @property
    def unix(self) -> int:
        return int(self.timestamp.timestamp())


@dataclass(frozen=True)
class QueryWindow:
    start_date: str       # YYYY-MM-DD
    start_time: str       # HH:MM
    end_date: str
    end_time: str
    now: datetime         # reference instant, already shifted to the requested zone
    lookback_hours: int

    @property
    def spans_midnight(self) -> bool:
        return self.start_date != self.end_date


def date_hour_min(t: datetime) -> Tuple[str, str]:
    """Return t as ("YYYY-MM-DD", "HH:MM")."""
    return t.strftime("%Y-%m-%d"), t.strftime("%H:%M")


def build_query_window(now: datetime, lookback_hours: int) -> QueryWindow:
    """
    Build the window covering the last `lookback_hours` ending at `now`.

    `now` must already be expressed in the zone the series is requested in;
    no conversion happens here.
    """
    end_date, end_time = date_hour_min(now)
    start_date, start_time = date_hour_min(now - timedelta(hours=lookback_hours))
    return QueryWindow(
        start_date=start_date,
        start_time=start_time,
        end_date=end_date,
        end_time=end_time,
        now=now,
        lookback_hours=lookback_hours,
    )


def to_xy(samples: List[Sample]) -> List[Tuple[int, int]]:
    """Flatten samples to (unix_seconds, bpm) pairs for plotting."""
    return [(s.unix, s.value) for s in samples]
