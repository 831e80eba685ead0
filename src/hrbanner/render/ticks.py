"""
X-axis tick placement for the banner plot.

Ticks are taken from the data points themselves rather than from the axis
range, which is why the series must be gap-free and phase-aligned first.

  ≤ 2h of data:  first point + every quarter hour, all labelled
  > 2h of data:  labelled tick every hour, unlabelled minor tick every quarter hour
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Sequence

MAJOR_TICK_SECONDS = 3600
MINOR_TICK_SECONDS = 900
SHORT_RANGE_SECONDS = 2 * 3600

TICK_FORMAT = "%H:%M"


@dataclass(frozen=True)
class Tick:
    value: int      # unix seconds
    label: str      # "" == minor tick


def _label(unix: int) -> str:
    return datetime.fromtimestamp(unix, tz=timezone.utc).strftime(TICK_FORMAT)


def banner_ticks(xs: Sequence[int]) -> List[Tick]:
    """Compute ticks for the sorted unix-second x values of a gap-filled series."""
    if not xs:
        return []

    ticks: List[Tick] = []
    short_range = xs[-1] - xs[0] <= SHORT_RANGE_SECONDS
    for i, x in enumerate(xs):
        if short_range:
            if i == 0 or x % MINOR_TICK_SECONDS == 0:
                ticks.append(Tick(value=x, label=_label(x)))
            continue

        if x % MAJOR_TICK_SECONDS == 0:
            ticks.append(Tick(value=x, label=_label(x)))
        elif x % MINOR_TICK_SECONDS == 0:
            ticks.append(Tick(value=x, label=""))
    return ticks
