"""
Gap filling for minute-resolution heart-rate series.

Fitbit drops minutes whenever the tracker can't read a pulse (loose band,
charging, not synced yet). The banner's x-axis ticks are generated from the
data points themselves, testing `unix % 3600 == 0` for hour marks and
`unix % 900 == 0` for quarter-hour marks, so a missing 16:00 sample means a
missing 16:00 label. We make the series continuous:

  1. expected = first.timestamp + interval
  2. Scan the input left to right, appending to a fresh output list:
       - real sample at `expected`      → append it, move to the next input
       - real sample later than expected → append a synthesized sample at
                                           `expected` carrying forward the
                                           last appended value, re-check the
                                           same input sample
  3. `expected` advances one interval per step, so every output timestamp
     stays on the first sample's phase.

Synthesized samples have clock_time == "" and copy the previous value
(carry-forward, never interpolated).

A real sample that lands *before* `expected` (duplicate, out of order, or not
on the interval grid) can never be reached by stepping forward. That is a
data-quality problem, not something to loop on: we raise DataQualityError.
"""
import logging
from datetime import timedelta
from typing import List

from hrbanner.analysis.timeseries import Sample

logger = logging.getLogger(__name__)

DEFAULT_GAP_INTERVAL_SECONDS = 60


class DataQualityError(ValueError):
    """Raised when a series cannot be aligned to a uniform interval."""

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


def max_slots(samples: List[Sample], interval_seconds: int) -> int:
    """Upper bound on output length: span / interval + 1."""
    span = samples[-1].unix - samples[0].unix
    return span // interval_seconds + 1


def fill_gaps(
    samples: List[Sample],
    interval_seconds: int = DEFAULT_GAP_INTERVAL_SECONDS,
) -> List[Sample]:
    """
    Return a new list where adjacent samples are exactly `interval_seconds` apart.

    Args:
        samples: chronologically sorted samples. Not mutated.
        interval_seconds: expected spacing (Fitbit 1min detail level → 60).

    Returns:
        Gap-free copy of `samples`. Empty input gives an empty list; a single
        sample is returned unchanged.

    Raises:
        ValueError: if interval_seconds is not positive.
        DataQualityError: if a sample is off the interval grid, out of order,
            duplicated, or the scan exceeds span / interval + 1 slots.
    """
    if interval_seconds <= 0:
        raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
    if not samples:
        return []

    step = timedelta(seconds=interval_seconds)
    limit = max_slots(samples, interval_seconds)

    filled: List[Sample] = [samples[0]]
    expected = samples[0].timestamp + step
    i = 1
    while i < len(samples):
        if len(filled) >= limit:
            raise DataQualityError(
                f"gap fill exceeded {limit} slots at index {i} "
                f"({samples[i].timestamp.isoformat()})",
                index=i,
            )

        current = samples[i]
        if current.timestamp == expected:
            filled.append(current)
            i += 1
        elif current.timestamp > expected:
            filled.append(Sample(clock_time="", timestamp=expected, value=filled[-1].value))
        else:
            raise DataQualityError(
                f"sample at index {i} ({current.timestamp.isoformat()}) is before "
                f"expected slot {expected.isoformat()}; series is not aligned to "
                f"{interval_seconds}s",
                index=i,
            )
        expected += step

    inserted = len(filled) - len(samples)
    if inserted:
        logger.debug("Filled %d missing samples (%d → %d)", inserted, len(samples), len(filled))
    return filled
