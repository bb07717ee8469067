"""
Module: export.renderer

Purpose:
    Rasterize the roadmap view into a bitmap snapshot with Pillow.
    The snapshot is the input to paginated PDF export and to PNG export.

Key Classes:
    - Snapshot: Rendered image plus its SourceBitmap dimensions
    - SnapshotRenderer: Abstract rendering collaborator
    - RoadmapViewRenderer: Draws title, phase list and active phase detail

View layout (top to bottom):
    - Title bar
    - "Phases" list: title, status badge and progress bar per phase
    - Active phase headline: title, badge, "N steps - P% complete"
    - One block per step: title, status chip, pct, then its tasks

Dependencies:
    - PIL: Image, ImageDraw, ImageFont
    - progress.aggregator: summarize_roadmap
    - settings.theme: Theme colors

Used By:
    - export.controller: Export pipeline
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from roadmap_toolkit.core.models import Aggregate, Roadmap, Status, Task, status_plain_label
from roadmap_toolkit.progress.aggregator import PhaseSummary, RoadmapSummary, summarize_roadmap
from roadmap_toolkit.settings.theme import DEFAULT_THEME, Theme, get_theme

from .models import SourceBitmap

logger = logging.getLogger(__name__)

# Layout constants in view units (multiplied by scale when drawing)
PAD = 24
TITLE_H = 44
SECTION_GAP = 20
SECTION_HEADER_H = 28
PHASE_ROW_H = 52
PHASE_ROW_GAP = 8
HEADLINE_H = 44
STEP_HEADER_H = 36
TASK_ROW_H = 28
STEP_PAD = 10
STEP_GAP = 12
EMPTY_H = 32
BAR_H = 6
BADGE_W = 110
BADGE_H = 22

TITLE_FONT_SIZE = 20
BODY_FONT_SIZE = 13
SMALL_FONT_SIZE = 11

_TEXT_REPLACEMENTS = str.maketrans({
    "—": "-",  # em dash
    "–": "-",  # en dash
    "•": "-",  # bullet
    "’": "'",
    "“": '"',
    "”": '"',
})


@dataclass(frozen=True)
class Snapshot:
    """
    Rendered view bitmap.

    Attributes:
        image: RGB PIL image
        source: Pixel dimensions of ``image``
    """

    image: Image.Image
    source: SourceBitmap

    @classmethod
    def from_image(cls, image: Image.Image) -> Snapshot:
        return cls(image=image, source=SourceBitmap(width_px=image.width, height_px=image.height))


class SnapshotRenderer(ABC):
    """Rendering collaborator: produces a bitmap of the current view."""

    @abstractmethod
    def render_snapshot(self) -> Snapshot:
        """
        Rasterize the view.

        Returns:
            Snapshot of the rendered view
        """


class RoadmapViewRenderer(SnapshotRenderer):
    """
    Draw a roadmap snapshot with Pillow.

    The width is fixed at ``view_width_px * scale``; the height grows
    with the number of phases, steps and tasks.

    Example:
        >>> renderer = RoadmapViewRenderer(roadmap, theme=get_theme("azure"), scale=2)
        >>> snapshot = renderer.render_snapshot()
        >>> snapshot.source.width_px
        1800
    """

    def __init__(
        self,
        roadmap: Roadmap,
        *,
        theme: Optional[Theme] = None,
        scale: int = 2,
        view_width_px: int = 900,
    ) -> None:
        if scale < 1:
            raise ValueError(f"scale must be >= 1: {scale}")
        self.roadmap = roadmap
        self.theme = theme or get_theme(DEFAULT_THEME)
        self.scale = scale
        self.view_width_px = view_width_px
        self._title_font = _load_font(TITLE_FONT_SIZE * scale)
        self._body_font = _load_font(BODY_FONT_SIZE * scale)
        self._small_font = _load_font(SMALL_FONT_SIZE * scale)

    # ─────────────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────────────

    def render_snapshot(self) -> Snapshot:
        summary = summarize_roadmap(self.roadmap)
        height = self.measure_height(summary)
        width = self.view_width_px * self.scale

        image = Image.new("RGB", (width, height), color=self.theme.background)
        draw = ImageDraw.Draw(image)

        y = self._s(PAD)
        y = self._draw_title(draw, y)
        y += self._s(SECTION_GAP)
        y = self._draw_phase_list(draw, y, summary.phases, summary.active_phase_id)
        y += self._s(SECTION_GAP)
        self._draw_active_phase(draw, y, summary.active)

        logger.info(f"Rendered roadmap snapshot {width}x{height}px")
        return Snapshot.from_image(image)

    def measure_height(self, summary: Optional[RoadmapSummary] = None) -> int:
        """Pixel height of the snapshot for the current roadmap."""
        summary = summary or summarize_roadmap(self.roadmap)
        units = PAD + TITLE_H + SECTION_GAP + SECTION_HEADER_H
        units += len(summary.phases) * (PHASE_ROW_H + PHASE_ROW_GAP)
        units += SECTION_GAP

        active = summary.active
        if active is None:
            units += EMPTY_H
        else:
            units += HEADLINE_H
            for step in active.steps:
                units += self._step_units(len(step.step.tasks))
        units += PAD
        return self._s(units)

    # ─────────────────────────────────────────────────────────────────────────
    # Sections
    # ─────────────────────────────────────────────────────────────────────────

    def _draw_title(self, draw: ImageDraw.ImageDraw, y: int) -> int:
        title = self.roadmap.meta.title or "Roadmap"
        self._text(draw, (self._s(PAD), y + self._s(8)), title, self._title_font, self.theme.text_primary,
                   max_width=self._content_width())
        y += self._s(TITLE_H)
        draw.line(
            [(self._s(PAD), y - self._s(4)), (self._right(), y - self._s(4))],
            fill=self.theme.divider,
            width=max(1, self.scale),
        )
        return y

    def _draw_phase_list(
        self,
        draw: ImageDraw.ImageDraw,
        y: int,
        phases: tuple[PhaseSummary, ...],
        active_id: Optional[str],
    ) -> int:
        self._text(draw, (self._s(PAD), y + self._s(6)), "Phases", self._body_font, self.theme.text_secondary)
        y += self._s(SECTION_HEADER_H)

        for summary in phases:
            box = (self._s(PAD), y, self._right(), y + self._s(PHASE_ROW_H))
            fill = self.theme.surface_active if summary.phase.id == active_id else self.theme.surface
            draw.rounded_rectangle(box, radius=self._s(6), fill=fill, outline=self.theme.border)

            inner_left = self._s(PAD + 12)
            badge_left = self._right() - self._s(12 + BADGE_W)
            self._text(draw, (inner_left, y + self._s(10)), summary.phase.title, self._body_font,
                       self.theme.text_primary, max_width=badge_left - inner_left - self._s(8))
            self._badge(draw, badge_left, y + self._s(8), summary.aggregate.status)
            self._progress_bar(
                draw,
                inner_left,
                y + self._s(PHASE_ROW_H - 14),
                self._right() - self._s(12),
                summary.aggregate,
            )
            y += self._s(PHASE_ROW_H + PHASE_ROW_GAP)

        return y

    def _draw_active_phase(self, draw: ImageDraw.ImageDraw, y: int, active: Optional[PhaseSummary]) -> int:
        if active is None:
            self._text(draw, (self._s(PAD), y + self._s(8)), "No phases yet.", self._body_font,
                       self.theme.text_secondary)
            return y + self._s(EMPTY_H)

        agg = active.aggregate
        meta_text = f"{len(active.steps)} steps - {agg.pct}% complete"
        meta_width = int(draw.textlength(meta_text, font=self._small_font))
        meta_left = self._right() - meta_width
        badge_left = meta_left - self._s(16 + BADGE_W)

        self._text(draw, (self._s(PAD), y + self._s(10)), active.phase.title, self._title_font,
                   self.theme.text_primary, max_width=badge_left - self._s(PAD + 8))
        self._badge(draw, badge_left, y + self._s(12), agg.status)
        self._text(draw, (meta_left, y + self._s(16)), meta_text, self._small_font, self.theme.text_secondary)
        y += self._s(HEADLINE_H)

        for step_summary in active.steps:
            y = self._draw_step(draw, y, step_summary.step.title, step_summary.step.tasks, step_summary.aggregate)
        return y

    def _draw_step(
        self,
        draw: ImageDraw.ImageDraw,
        y: int,
        title: str,
        tasks: tuple[Task, ...],
        agg: Aggregate,
    ) -> int:
        block_h = self._s(self._step_units(len(tasks)) - STEP_GAP)
        draw.rounded_rectangle(
            (self._s(PAD), y, self._right(), y + block_h),
            radius=self._s(6),
            fill=self.theme.surface,
            outline=self.theme.border,
        )

        inner_left = self._s(PAD + 12)
        inner_right = self._right() - self._s(12)
        top = y + self._s(STEP_PAD)

        pct_text = f"{agg.pct}%"
        pct_width = int(draw.textlength(pct_text, font=self._small_font))
        badge_left = inner_right - pct_width - self._s(8 + BADGE_W)
        self._text(draw, (inner_left, top + self._s(8)), title, self._body_font, self.theme.text_primary,
                   max_width=badge_left - inner_left - self._s(8))
        self._badge(draw, badge_left, top + self._s(6), agg.status)
        self._text(draw, (inner_right - pct_width, top + self._s(10)), pct_text, self._small_font,
                   self.theme.text_secondary)

        row_y = top + self._s(STEP_HEADER_H)
        draw.line([(inner_left, row_y - self._s(2)), (inner_right, row_y - self._s(2))],
                  fill=self.theme.divider, width=max(1, self.scale // 2))

        if not tasks:
            self._text(draw, (inner_left, row_y + self._s(6)), "No tasks", self._small_font,
                       self.theme.text_secondary)

        for task in tasks:
            status = task.known_status
            label = status_plain_label(status) if status is not None else str(task.status)
            color = self.theme.status_color(status) if status is not None else self.theme.text_secondary
            label_width = int(draw.textlength(label, font=self._small_font))
            self._text(draw, (inner_left + self._s(8), row_y + self._s(6)), task.title, self._body_font,
                       self.theme.text_primary, max_width=inner_right - label_width - inner_left - self._s(24))
            self._text(draw, (inner_right - label_width, row_y + self._s(8)), label, self._small_font, color)
            row_y += self._s(TASK_ROW_H)

        return y + block_h + self._s(STEP_GAP)

    # ─────────────────────────────────────────────────────────────────────────
    # Primitives
    # ─────────────────────────────────────────────────────────────────────────

    def _badge(self, draw: ImageDraw.ImageDraw, left: int, top: int, status: Status) -> None:
        box = (left, top, left + self._s(BADGE_W), top + self._s(BADGE_H))
        draw.rounded_rectangle(box, radius=self._s(BADGE_H // 2), fill=self.theme.status_color(status))
        label = status_plain_label(status)
        label_width = draw.textlength(label, font=self._small_font)
        x = left + (self._s(BADGE_W) - label_width) / 2
        self._text(draw, (int(x), top + self._s(5)), label, self._small_font, "#ffffff")

    def _progress_bar(self, draw: ImageDraw.ImageDraw, left: int, top: int, right: int, agg: Aggregate) -> None:
        bottom = top + self._s(BAR_H)
        draw.rectangle((left, top, right, bottom), fill=self.theme.bar_track)
        filled = left + int((right - left) * agg.pct / 100)
        if filled > left:
            draw.rectangle((left, top, filled, bottom), fill=self.theme.bar_fill)

    def _text(
        self,
        draw: ImageDraw.ImageDraw,
        xy: tuple[int, int],
        text: str,
        font,
        fill: str,
        *,
        max_width: Optional[int] = None,
    ) -> None:
        text = _safe_text(text)
        if max_width is not None:
            text = _ellipsize(draw, text, font, max_width)
        draw.text(xy, text, font=font, fill=fill)

    def _step_units(self, task_count: int) -> int:
        rows = max(task_count, 1)
        return STEP_PAD * 2 + STEP_HEADER_H + rows * TASK_ROW_H + STEP_GAP

    def _content_width(self) -> int:
        return self._right() - self._s(PAD)

    def _right(self) -> int:
        return self._s(self.view_width_px - PAD)

    def _s(self, units: int) -> int:
        return units * self.scale


def _load_font(size: int):
    """Pillow's bundled font at ``size`` pixels."""
    return ImageFont.load_default(size=size)


def _safe_text(text: str) -> str:
    """Replace characters the bundled font cannot draw."""
    text = str(text).translate(_TEXT_REPLACEMENTS)
    return text.encode("latin-1", "replace").decode("latin-1")


def _ellipsize(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> str:
    """Trim ``text`` with a trailing "..." until it fits ``max_width``."""
    if max_width <= 0:
        return ""
    if draw.textlength(text, font=font) <= max_width:
        return text
    while text and draw.textlength(text + "...", font=font) > max_width:
        text = text[:-1]
    return text + "..." if text else ""
