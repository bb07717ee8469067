"""
Module: export.config

Purpose:
    Configuration for snapshot rendering and paginated export.
    Defines page size, margin, render scale and theme.

Key Classes:
    - ExportConfig: Immutable export configuration

Dependencies:
    - reportlab.lib.pagesizes: Standard page sizes in points
    - dataclasses (std)

Used By:
    - export.controller: Pipeline orchestration
    - cli: export commands
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4, letter

from .models import PageGeometry


PAGE_SIZES: dict[str, tuple[float, float]] = {
    "letter": letter,
    "a4": A4,
}

DEFAULT_MARGIN_PT = 24
DEFAULT_SCALE = 2
DEFAULT_VIEW_WIDTH_PX = 900


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for export (immutable).

    Attributes:
        page_size: Named page size ("letter" or "a4")
        margin_pt: Uniform page margin in points
        scale: Render scale factor (pixels per view unit)
        view_width_px: Logical view width before scaling
        theme: Theme name used by the renderer

    Example:
        >>> config = ExportConfig()
        >>> config.geometry
        PageGeometry(page_width_pt=612.0, page_height_pt=792.0, margin_pt=24)
    """

    page_size: str = "letter"
    margin_pt: float = DEFAULT_MARGIN_PT
    scale: int = DEFAULT_SCALE
    view_width_px: int = DEFAULT_VIEW_WIDTH_PX
    theme: str = "azure"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_size not in PAGE_SIZES:
            raise ValueError(
                f"Unknown page_size {self.page_size!r} (expected one of {sorted(PAGE_SIZES)})"
            )
        if self.scale < 1:
            raise ValueError(f"scale must be >= 1: {self.scale}")
        if self.view_width_px <= 0:
            raise ValueError(f"view_width_px must be positive: {self.view_width_px}")

    @property
    def geometry(self) -> PageGeometry:
        """Page geometry for the configured size and margin."""
        width_pt, height_pt = PAGE_SIZES[self.page_size]
        return PageGeometry(
            page_width_pt=width_pt,
            page_height_pt=height_pt,
            margin_pt=self.margin_pt,
        )
