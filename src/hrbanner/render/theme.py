"""Banner colour set and rgba() string parsing."""
import logging
from typing import Tuple

from pydantic import BaseModel

from hrbanner.config import Settings

logger = logging.getLogger(__name__)

RGBA = Tuple[float, float, float, float]

TRANSPARENT: RGBA = (0.0, 0.0, 0.0, 0.0)


class Theme(BaseModel):
    background: str
    text_ticks: str
    current_bpm: str
    title: str
    heart: str
    axes: str
    plot_line: str
    heart_number: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "Theme":
        return cls(
            background=settings.theme_background,
            text_ticks=settings.theme_text_ticks,
            current_bpm=settings.theme_current_bpm,
            title=settings.theme_title,
            heart=settings.theme_heart,
            axes=settings.theme_axes,
            plot_line=settings.theme_plot_line,
            heart_number=settings.theme_heart_number,
        )


def rgba_from_string(s: str) -> RGBA:
    """
    Parse "rgba(255,20,147,100)" into a matplotlib RGBA tuple in 0..1.

    Components are 0-255 integers, alpha included. A malformed colour is
    logged and rendered transparent rather than failing the whole banner.
    """
    start, end = s.find("("), s.find(")")
    if start == -1 or end == -1 or end < start:
        logger.warning("Invalid theme color: %s", s)
        return TRANSPARENT

    parts = s[start + 1:end].split(",")
    if len(parts) != 4:
        logger.warning("Invalid theme color: %s", s)
        return TRANSPARENT

    try:
        r, g, b, a = (int(p.strip()) for p in parts)
    except ValueError:
        logger.warning("Error converting theme color components: %s", s)
        return TRANSPARENT

    return tuple(min(max(c, 0), 255) / 255.0 for c in (r, g, b, a))
