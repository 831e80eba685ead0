"""
SVG banner generation.

Layout (width W, height H, both in pt):

  ┌──────────────────────────── title ────────────────────────────┐
  │  ♥ (pulsing, W/3)          │  HR plot (2W/3)                   │
  │  current bpm               │  x ticks from banner_ticks()      │
  └────────────────────────────────────────────────────────────────┘

The plot is drawn by matplotlib's SVG backend and spliced into a hand-written
outer <svg> so the heart animation and text survive as plain SVG. GitHub's
image proxy strips scripts but keeps SMIL animation.
"""
import io
import logging
from typing import List
from xml.sax.saxutils import escape

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from hrbanner.analysis.timeseries import Sample
from hrbanner.config import Settings
from hrbanner.render.theme import Theme, rgba_from_string
from hrbanner.render.ticks import banner_ticks
from hrbanner.tz import TimezoneLookupError, lookup_full_tz

logger = logging.getLogger(__name__)

# ─── Constants ────────────────────────────────────────────────────────────────

PADDING_TOP_BOTTOM = 20
TITLE_SIZE = 12
BPM_TEXT_SIZE = 19
PLOT_OFFSET_X = 166
HEART_OFFSET_Y = -22
POINTS_PER_INCH = 72.0

# Heart path from https://codepen.io/tutsplus/pen/MLBMRw, drawn in a 100x100 box
HEART_PATH = (
    "M92.71,7.27L92.71,7.27c-9.71-9.69-25.46-9.69-35.18,0L50,14.79l-7.54-7.52"
    "C32.75-2.42,17-2.42,7.29,7.27v0 c-9.71,9.69-9.71,25.41,0,35.1L50,85"
    "l42.71-42.63C102.43,32.68,102.43,16.96,92.71,7.27z"
)


class EmptySeriesError(ValueError):
    """Raised when there is nothing to plot."""


# ─── Public API ───────────────────────────────────────────────────────────────

def default_banner(settings: Settings) -> str:
    """Placeholder shown before setup, or when no data is in range."""
    theme = Theme.from_settings(settings)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" id="banner" '
        f'width="{settings.banner_width}pt" height="{settings.banner_height}pt">'
        f'<rect width="100%" height="100%" fill="{theme.background}" />'
        f'<text x="{settings.banner_width // 2}" y="{settings.banner_height // 2}" '
        f'fill="{theme.title}" style="font-family: sans-serif; font-weight:500;" '
        f'dominant-baseline="hanging" text-anchor="middle">'
        f"Banner not setup yet, or no data within range is available.</text>"
        f"</svg>"
    )


def render_banner(samples: List[Sample], settings: Settings) -> str:
    """
    Render a gap-filled series into the full banner SVG.

    The current bpm is the last sample's value.

    Raises:
        EmptySeriesError: if samples is empty.
    """
    if not samples:
        raise EmptySeriesError("data set empty")

    theme = Theme.from_settings(settings)
    bpm = samples[-1].value
    third_width = settings.banner_width // 3  # heart takes 1/3, plot 2/3
    plot_width = third_width * 2

    plot_svg = render_plot(samples, plot_width, settings.banner_height, theme)
    heart_svg = render_heart(bpm, third_width, theme.heart)

    width = settings.banner_width
    height = settings.banner_height
    total_height = height + TITLE_SIZE + PADDING_TOP_BOTTOM
    title = escape(settings.banner_title)
    zone = escape(timezone_label(settings))

    watermark = ""
    if settings.display_view_on_github:
        watermark = (
            f'<a href="{escape(settings.watermark_url)}">'
            f'<text id="watermark" dominant-baseline="hanging" '
            f"style=\"font: 600 8pt 'Arial', Sans-Serif; fill: {theme.title};\" "
            f'x="5pt">View on GitHub</text></a>'
        )

    return f"""
<svg xmlns="http://www.w3.org/2000/svg" id="banner" width="{width}pt" height="{total_height}pt">
	<rect width="100%" height="100%" fill="{theme.background}"/>
	<style> .text {{font: 600 9px "Arial", Sans-Serif; fill: {theme.text_ticks};}} </style>
	<g id="padding" transform="translate(0 {PADDING_TOP_BOTTOM // 2})">
		<text id="title" dominant-baseline="hanging" text-anchor="middle" style="font: 600 {TITLE_SIZE}pt 'Arial', Sans-Serif; fill: {theme.title}" x="{width // 2}pt">{title}</text>
		<text id="timezone" dominant-baseline="hanging" text-anchor="end" style="font: 600 7pt 'Arial', Sans-Serif; fill: {theme.text_ticks}" x="{width - 5}pt">{zone}</text>
		{watermark}
		<g id="main-content" transform="translate(0 {TITLE_SIZE + 6})">
			<g id="plot" transform="translate({PLOT_OFFSET_X},0)">
				{plot_svg}
			</g>
			<g id="heart">
				{heart_svg}
			</g>
			<g id="heart-text" transform="translate({third_width // 2} {height // 2})">
				<text id="current-bpm-text" class="text" text-anchor="middle" x="0" y="79">Current BPM</text>
				<text id="bpm-number" class="text" dominant-baseline="middle" text-anchor="middle" x="0" y="0">{bpm}</text>
				<style> #current-bpm-text {{font-size: {BPM_TEXT_SIZE}pt; fill: {theme.current_bpm};}}  #bpm-number {{font-size: 35px; fill: {theme.heart_number};}}</style>
			</g>
		</g>
	</g>
</svg>"""


def render_plot(samples: List[Sample], width: int, height: int, theme: Theme) -> str:
    """Draw the HR line with banner ticks and return it as an embeddable SVG fragment."""
    xs = [s.unix for s in samples]
    ys = [s.value for s in samples]
    ticks = banner_ticks(xs)

    axes_color = rgba_from_string(theme.axes)
    text_color = rgba_from_string(theme.text_ticks)
    bg_color = rgba_from_string(theme.background)

    with plt.rc_context({"svg.fonttype": "none"}):
        fig, ax = plt.subplots(figsize=(width / POINTS_PER_INCH, height / POINTS_PER_INCH))
        fig.patch.set_facecolor(bg_color)
        ax.set_facecolor(bg_color)

        ax.plot(xs, ys, color=rgba_from_string(theme.plot_line), linewidth=1.2)

        major = [t for t in ticks if t.label]
        minor = [t for t in ticks if not t.label]
        ax.set_xticks([t.value for t in major])
        ax.set_xticklabels([t.label for t in major])
        ax.set_xticks([t.value for t in minor], minor=True)
        if len(xs) > 1:
            ax.set_xlim(xs[0], xs[-1])

        for spine in ax.spines.values():
            spine.set_color(axes_color)
        ax.tick_params(axis="both", which="both", color=axes_color,
                       labelcolor=text_color, labelsize=7)

        buf = io.BytesIO()
        fig.savefig(buf, format="svg", facecolor=fig.get_facecolor(),
                    bbox_inches="tight", metadata={"Date": None})
        plt.close(fig)

    svg = buf.getvalue().decode("utf-8")
    # Only one XML prolog is allowed per document: keep from <svg onwards.
    svg = svg[svg.find("<svg"):]
    svg = svg.replace("<text", '<text class="text"')
    return f'<g transform="translate(0,0)"> {svg} </g>'


def render_heart(bpm: int, width: int, heart_color: str) -> str:
    """Pulsing heart; one beat every 60000/bpm ms."""
    view_box = width + width // 3
    offset = view_box // 2
    beat_ms = 60000 // max(bpm, 1)
    heart = f"""
	<svg width="{width}" height="{width}" viewBox="0 0 {view_box} {view_box}">
		<g transform="translate({offset} {offset})">
			<path transform="translate(-50 -50)" fill="{heart_color}" d="{HEART_PATH}"></path>
			<animateTransform
			  attributeName="transform"
			  type="scale"
			  values="1; 1.5; 1.25; 1;"
			  dur="{beat_ms}ms"
			  additive="sum"
			  repeatCount="indefinite">
			</animateTransform>
		</g>
	</svg>
	"""
    return f'<g transform="translate(0 {HEART_OFFSET_Y})"> {heart} </g>'


def timezone_label(settings: Settings) -> str:
    """Full zone name for the subtitle, falling back to the raw abbreviation."""
    try:
        return lookup_full_tz(settings.timezone_abbrev, settings.utc_offset_hours).full
    except TimezoneLookupError:
        logger.warning("Unknown timezone abbreviation %r", settings.timezone_abbrev)
        return settings.timezone_abbrev
