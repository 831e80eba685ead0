"""Tests for SVG banner rendering."""
from xml.etree import ElementTree

import pytest

from hrbanner.analysis.gap_fill import fill_gaps
from hrbanner.render.banner import (
    EmptySeriesError,
    default_banner,
    render_banner,
    render_heart,
    render_plot,
    timezone_label,
)
from hrbanner.render.theme import Theme

SVG_NS = "{http://www.w3.org/2000/svg}"
HOUR = 3600


@pytest.fixture
def series(make_samples):
    """3h of gap-filled minute data ending at 81 bpm."""
    xs = list(range(10 * HOUR, 13 * HOUR + 1, 60))
    values = [60 + (i % 30) for i in range(len(xs))]
    values[-1] = 81
    holey = [s for i, s in enumerate(make_samples(xs, values)) if i % 17 != 5]
    return fill_gaps(holey, 60)


def parse(svg: str) -> ElementTree.Element:
    return ElementTree.fromstring(svg.strip())


# ─── default_banner ───────────────────────────────────────────────────────────

class TestDefaultBanner:
    def test_is_valid_svg(self, settings):
        root = parse(default_banner(settings))
        assert root.tag == f"{SVG_NS}svg"

    def test_size_from_settings(self, settings):
        root = parse(default_banner(settings))
        assert root.get("width") == f"{settings.banner_width}pt"
        assert root.get("height") == f"{settings.banner_height}pt"

    def test_mentions_missing_data(self, settings):
        assert "no data within range" in default_banner(settings)


# ─── render_banner ────────────────────────────────────────────────────────────

class TestRenderBanner:
    def test_empty_series_raises(self, settings):
        with pytest.raises(EmptySeriesError):
            render_banner([], settings)

    def test_is_valid_svg(self, series, settings):
        root = parse(render_banner(series, settings))
        assert root.tag == f"{SVG_NS}svg"

    def test_current_bpm_is_last_value(self, series, settings):
        root = parse(render_banner(series, settings))
        bpm = root.find(f".//{SVG_NS}text[@id='bpm-number']")
        assert bpm.text == "81"

    def test_single_xml_prolog(self, series, settings):
        assert "<?xml" not in render_banner(series, settings)

    def test_title_escaped(self, series, settings):
        settings.banner_title = "Heart & <Soul>"
        svg = render_banner(series, settings)
        assert "Heart &amp; &lt;Soul&gt;" in svg
        parse(svg)

    def test_total_height_includes_title_and_padding(self, series, settings):
        root = parse(render_banner(series, settings))
        assert root.get("height") == f"{settings.banner_height + 12 + 20}pt"

    def test_watermark_only_when_enabled(self, series, settings):
        assert "View on GitHub" not in render_banner(series, settings)
        settings.display_view_on_github = True
        assert "View on GitHub" in render_banner(series, settings)

    def test_timezone_label_shown(self, series, settings):
        settings.timezone_abbrev = "PST"
        settings.utc_offset_hours = -8
        assert "Pacific Standard Time (North America)" in render_banner(series, settings)

    def test_single_sample(self, settings, make_samples):
        root = parse(render_banner(make_samples([10 * HOUR], [72]), settings))
        assert root.find(f".//{SVG_NS}text[@id='bpm-number']").text == "72"


# ─── Pieces ───────────────────────────────────────────────────────────────────

class TestRenderPlot:
    def test_hour_labels_present(self, series, settings):
        svg = render_plot(series, 330, 150, Theme.from_settings(settings))
        for label in ("10:00", "11:00", "12:00", "13:00"):
            assert label in svg

    def test_text_gets_class(self, series, settings):
        svg = render_plot(series, 330, 150, Theme.from_settings(settings))
        assert '<text class="text"' in svg


class TestRenderHeart:
    def test_beat_duration_from_bpm(self):
        assert 'dur="1000ms"' in render_heart(60, 165, "red")
        assert 'dur="500ms"' in render_heart(120, 165, "red")

    def test_zero_bpm_does_not_divide_by_zero(self):
        assert 'dur="60000ms"' in render_heart(0, 165, "red")

    def test_color(self):
        assert 'fill="rgba(255,20,147,255)"' in render_heart(70, 165, "rgba(255,20,147,255)")


class TestTimezoneLabel:
    def test_known(self, settings):
        settings.timezone_abbrev = "CDT"
        settings.utc_offset_hours = -4
        assert timezone_label(settings) == "Cuba Daylight Time"

    def test_unknown_falls_back_to_abbreviation(self, settings):
        settings.timezone_abbrev = "XYZT"
        assert timezone_label(settings) == "XYZT"
