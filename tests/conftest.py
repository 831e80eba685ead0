"""Shared test fixtures."""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pytest

from hrbanner.analysis.timeseries import Sample
from hrbanner.config import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _at(unix: int) -> datetime:
    return datetime.fromtimestamp(unix, tz=timezone.utc)


def _make_samples(unix_times: Sequence[int], values: Sequence[int] = ()) -> List[Sample]:
    values = list(values) or list(unix_times)
    return [
        Sample(clock_time=_at(t).strftime("%H:%M"), timestamp=_at(t), value=v)
        for t, v in zip(unix_times, values)
    ]


@pytest.fixture(name="make_samples")
def make_samples_fixture():
    """
    Factory for real (non-synthesized) samples at the given unix times.
    Values default to the times themselves.
    """
    return _make_samples


@pytest.fixture(name="afternoon_dataset")
def afternoon_dataset_fixture() -> List[Dict[str, Any]]:
    """Captured afternoon of Fitbit 1-minute data with dropouts and a 15-minute hole."""
    raw = json.loads((FIXTURES_DIR / "intraday_afternoon.json").read_text())
    return raw["activities-heart-intraday"]["dataset"]


@pytest.fixture(name="settings")
def settings_fixture(tmp_path) -> Settings:
    """Settings isolated from the developer's .env and home directory."""
    return Settings(
        _env_file=None,
        fitbit_client_id="23ABCD",
        fitbit_client_secret="s3cret",
        credentials_dir=tmp_path / "hrbanner",
        utc_offset_hours=0,
        timezone_abbrev="UTC",
        plot_range_hours=4,
        cache_invalidation_seconds=300,
    )
