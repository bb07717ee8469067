"""
Module: export.models

Purpose:
    Data models for paginated export.
    Immutable dataclasses describing the source bitmap, the page, and how
    the bitmap is cut into per-page slices.

Key Classes:
    - SourceBitmap: Pixel dimensions of a rendered snapshot
    - PageGeometry: Page size and uniform margin in points
    - Slice: One page's share of the source bitmap
    - PagePlacement: A slice positioned on an output page
    - ExportLayout: Complete pagination result

Dependencies:
    - dataclasses (std)

Used By:
    - export.paginator: Creates ExportLayout
    - export.pdf_writer: Consumes PagePlacement
    - export.controller: Pipeline orchestration
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceBitmap:
    """
    Dimensions of a rasterized snapshot.

    Attributes:
        width_px: Bitmap width in pixels
        height_px: Bitmap height in pixels
    """

    width_px: int
    height_px: int


@dataclass(frozen=True)
class PageGeometry:
    """
    Output page size with a uniform margin, in PDF points (1/72 inch).

    Validation happens in the paginator, which reports bad values as
    GeometryError.

    Example:
        >>> geometry = PageGeometry(612, 792, 24)
        >>> geometry.usable_width_pt, geometry.usable_height_pt
        (564, 744)
    """

    page_width_pt: float
    page_height_pt: float
    margin_pt: float = 24

    @property
    def usable_width_pt(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width_pt - 2 * self.margin_pt

    @property
    def usable_height_pt(self) -> float:
        """Height available for content (excluding margins)."""
        return self.page_height_pt - 2 * self.margin_pt


@dataclass(frozen=True)
class Slice:
    """
    One page's contribution from the source bitmap.

    Attributes:
        source_offset_px: First source row (inclusive)
        source_height_px: Number of source rows
        dest_height_pt: Height of the slice once scaled onto the page

    Example:
        >>> s = Slice(source_offset_px=0, source_height_px=1319, dest_height_pt=743.9)
        >>> s.source_end_px
        1319
    """

    source_offset_px: int
    source_height_px: int
    dest_height_pt: float

    @property
    def source_end_px(self) -> int:
        """Row after the last source row (exclusive)."""
        return self.source_offset_px + self.source_height_px


@dataclass(frozen=True)
class PagePlacement:
    """
    A slice positioned on an output page.

    Coordinates are measured from the page's top-left corner; encoders
    with a bottom-left origin convert them.

    Attributes:
        page_index: Page number (0-indexed)
        slice: Source slice drawn on this page
        x_pt: Left edge in points
        y_pt: Top edge in points
        width_pt: Drawn width in points
        height_pt: Drawn height in points
    """

    page_index: int
    slice: Slice
    x_pt: float
    y_pt: float
    width_pt: float
    height_pt: float


@dataclass(frozen=True)
class ExportLayout:
    """
    Pagination result with the derived geometry.

    Attributes:
        source: Bitmap that was paginated
        geometry: Target page geometry
        placements: One placement per page, in page order
        ratio: Points per source pixel
        img_width_pt: Scaled image width (the usable page width)
        img_height_pt: Scaled height of the whole image
        slice_height_px: Source rows per full page (None for single page)

    Example:
        >>> layout.page_count
        3
    """

    source: SourceBitmap
    geometry: PageGeometry
    placements: tuple[PagePlacement, ...]
    ratio: float
    img_width_pt: float
    img_height_pt: float
    slice_height_px: int | None = None

    @property
    def slices(self) -> tuple[Slice, ...]:
        """Slices in page order."""
        return tuple(p.slice for p in self.placements)

    @property
    def page_count(self) -> int:
        """Number of output pages."""
        return len(self.placements)

    @property
    def is_single_page(self) -> bool:
        """True when the whole image fits on one page."""
        return self.slice_height_px is None
