"""
Unit tests for the Pillow snapshot renderer.
"""

import pytest
from PIL import Image, ImageColor

from roadmap_toolkit.core.models import Phase, Roadmap, Step, Task
from roadmap_toolkit.export.renderer import RoadmapViewRenderer, Snapshot, _safe_text
from roadmap_toolkit.settings.theme import get_theme


def test_snapshot_from_image_records_dimensions():
    snapshot = Snapshot.from_image(Image.new("RGB", (30, 40)))
    assert (snapshot.source.width_px, snapshot.source.height_px) == (30, 40)


def test_render_width_fixed_by_view_width_and_scale(sample_roadmap):
    snapshot = RoadmapViewRenderer(sample_roadmap, scale=2, view_width_px=900).render_snapshot()

    assert snapshot.image.mode == "RGB"
    assert snapshot.source.width_px == 1800
    assert snapshot.image.size == (snapshot.source.width_px, snapshot.source.height_px)


def test_render_height_matches_measure(sample_roadmap):
    renderer = RoadmapViewRenderer(sample_roadmap, scale=1)
    assert renderer.render_snapshot().source.height_px == renderer.measure_height()


def test_render_height_grows_with_tasks(sample_roadmap, tall_roadmap):
    short = RoadmapViewRenderer(sample_roadmap, scale=1).measure_height()
    tall = RoadmapViewRenderer(tall_roadmap, scale=1).measure_height()
    assert tall > short * 3


def test_render_height_scales_linearly(sample_roadmap):
    one = RoadmapViewRenderer(sample_roadmap, scale=1).measure_height()
    two = RoadmapViewRenderer(sample_roadmap, scale=2).measure_height()
    assert two == one * 2


def test_render_background_uses_theme(sample_roadmap):
    theme = get_theme("midnight")
    snapshot = RoadmapViewRenderer(sample_roadmap, theme=theme, scale=1).render_snapshot()

    assert snapshot.image.getpixel((1, 1)) == ImageColor.getrgb(theme.background)


def test_render_empty_roadmap():
    snapshot = RoadmapViewRenderer(Roadmap(), scale=1).render_snapshot()
    assert snapshot.source.height_px > 0


def test_render_long_titles_and_unknown_status():
    """Overlong titles are trimmed and unknown statuses still render."""
    roadmap = Roadmap(phases=(Phase("p1", "P" * 400, (
        Step("s1", "S" * 400, (Task("t1", "T" * 400, "on_hold"),)),
    )),))
    snapshot = RoadmapViewRenderer(roadmap, scale=1).render_snapshot()
    assert snapshot.source.width_px == 900


def test_renderer_when_scale_invalid_then_raises(sample_roadmap):
    with pytest.raises(ValueError, match="scale"):
        RoadmapViewRenderer(sample_roadmap, scale=0)


@pytest.mark.parametrize("raw,expected", [
    ("Program Status — Roadmap", "Program Status - Roadmap"),
    ("3 steps • 50%", "3 steps - 50%"),
    ("Café", "Café"),
    ("日本", "??"),
])
def test_safe_text(raw, expected):
    assert _safe_text(raw) == expected
