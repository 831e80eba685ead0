from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    fitbit_client_id: str = ""
    fitbit_client_secret: str = ""
    fitbit_redirect_uri: str = "http://localhost:8090"
    credentials_dir: Path = Path.home() / ".hrbanner"

    utc_offset_hours: int = 0
    timezone_abbrev: str = "UTC"
    plot_range_hours: int = 4  # look-back window; must stay < 24 for date resolution
    gap_interval_seconds: int = 60  # Fitbit 1min detail level
    cache_invalidation_seconds: int = 300
    port: int = 8090

    banner_width: int = 495
    banner_height: int = 150
    banner_title: str = "Heart Rate"
    display_view_on_github: bool = False
    watermark_url: str = "https://github.com"

    theme_background: str = "rgba(13,17,23,255)"
    theme_text_ticks: str = "rgba(201,209,217,255)"
    theme_current_bpm: str = "rgba(201,209,217,255)"
    theme_title: str = "rgba(88,166,255,255)"
    theme_heart: str = "rgba(255,20,147,255)"
    theme_axes: str = "rgba(139,148,158,255)"
    theme_plot_line: str = "rgba(255,20,147,255)"
    theme_heart_number: str = "rgba(255,255,255,255)"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def validate_settings(settings: Settings) -> None:
    """Raise ValueError if the service can't run with these settings."""
    if not settings.fitbit_client_secret:
        raise ValueError("FITBIT_CLIENT_SECRET is empty")
    if not settings.fitbit_client_id:
        raise ValueError("FITBIT_CLIENT_ID is empty")
    if not 1 <= settings.plot_range_hours <= 23:
        raise ValueError(
            f"PLOT_RANGE_HOURS must be between 1 and 23, got {settings.plot_range_hours}"
        )
    if settings.gap_interval_seconds <= 0:
        raise ValueError("GAP_INTERVAL_SECONDS must be positive")
