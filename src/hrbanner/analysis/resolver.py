"""
Date resolution for Fitbit intraday samples.

Fitbit's intraday endpoint returns `{"time": "HH:MM:SS", "value": 72}` with no
date component, even when the requested range crosses midnight. We infer the
date from the hour:

  - window within one calendar day → every sample is on `now`'s date
  - window spans two dates → hour > lookback_hours means the sample was taken
    "yesterday", otherwise "today"

The comparison is an hour against a duration. It only holds because the
look-back is a small whole number of hours ending at `now`; it breaks down for
windows of 24h or more.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Tuple

from hrbanner.analysis.gap_fill import DataQualityError
from hrbanner.analysis.timeseries import QueryWindow, Sample

CLOCK_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?", re.ASCII)


class ParseError(ValueError):
    """Raised when a clock time or raw dataset entry cannot be parsed."""


def parse_clock_time(clock_time: str) -> Tuple[int, int]:
    """
    Split "HH:MM" (or "HH:MM:SS") into (hour, minute).

    Raises:
        ParseError: on missing, non-numeric or out-of-range components.
    """
    match = CLOCK_TIME_RE.fullmatch(clock_time.strip()) if isinstance(clock_time, str) else None
    if match is None:
        raise ParseError(f"invalid clock time {clock_time!r}: expected HH:MM or HH:MM:SS")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise ParseError(f"invalid clock time {clock_time!r}: out of range")
    return hour, minute


def resolve_timestamp(clock_time: str, window: QueryWindow) -> datetime:
    """
    Attach the correct calendar date to a Fitbit clock time.

    The wall clock is kept as-is and tagged UTC so that unix-second arithmetic
    (tick boundaries at % 3600 and % 900) lines up with the displayed clock.
    """
    hour, minute = parse_clock_time(clock_time)

    day = window.now
    if window.spans_midnight and hour > window.lookback_hours:
        day = window.now - timedelta(hours=24)

    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


def resolve_samples(raw: List[Dict[str, Any]], window: QueryWindow) -> List[Sample]:
    """
    Convert Fitbit's raw dataset entries into dated Samples, preserving order.

    Raises:
        ParseError: if an entry lacks "time" or "value", or the value is not an integer.
        DataQualityError: if a value is a negative bpm.
    """
    samples: List[Sample] = []
    for i, entry in enumerate(raw):
        try:
            clock_time, value = entry["time"], entry["value"]
        except (KeyError, TypeError):
            raise ParseError(f"dataset entry {i} is missing 'time' or 'value': {entry!r}") from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParseError(f"dataset entry {i} has non-integer value {value!r}")
        if value < 0:
            raise DataQualityError(f"dataset entry {i} has negative bpm {value}", index=i)
        samples.append(Sample(
            clock_time=clock_time,
            timestamp=resolve_timestamp(clock_time, window),
            value=value,
        ))
    return samples
