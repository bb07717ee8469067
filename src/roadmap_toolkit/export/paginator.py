"""
Module: export.paginator

Purpose:
    Cut a tall rendered snapshot into page-sized slices.
    The image is scaled to the usable page width (aspect preserved) and
    split into horizontal bands that each fill one page's usable height.

Key Functions:
    - paginate_bitmap(): Main pagination function
    - slices_for(): Slices only, without placements

Algorithm:
    1. ratio = usable_width_pt / width_px
    2. img_height_pt = height_px * ratio
    3. If img_height_pt fits the usable page height -> one slice
    4. Otherwise slice_height_px = floor(usable_height_pt / ratio) and
       emit min(slice_height_px, remaining) rows per page until every
       source row is covered exactly once

Dependencies:
    - export.models: SourceBitmap, PageGeometry, Slice, PagePlacement
    - export.errors: GeometryError

Used By:
    - export.controller: PDF export pipeline
"""

from __future__ import annotations

import logging
import math
from typing import List

from .errors import GeometryError
from .models import ExportLayout, PageGeometry, PagePlacement, Slice, SourceBitmap

logger = logging.getLogger(__name__)


def paginate_bitmap(source: SourceBitmap, geometry: PageGeometry) -> ExportLayout:
    """
    Partition a source bitmap into per-page slices.

    Args:
        source: Pixel dimensions of the rendered snapshot
        geometry: Target page size and margin in points

    Returns:
        ExportLayout with one PagePlacement per page

    Raises:
        GeometryError: If a dimension is non-positive, margins leave no
            usable area, or a page holds less than one source row

    Example:
        >>> layout = paginate_bitmap(SourceBitmap(1000, 3000), PageGeometry(612, 792, 24))
        >>> [(s.source_offset_px, s.source_height_px) for s in layout.slices]
        [(0, 1319), (1319, 1319), (2638, 362)]
    """
    _validate(source, geometry)

    img_width_pt = geometry.usable_width_pt
    page_usable_height_pt = geometry.usable_height_pt
    ratio = img_width_pt / source.width_px
    img_height_pt = source.height_px * ratio

    if img_height_pt <= page_usable_height_pt:
        only = Slice(
            source_offset_px=0,
            source_height_px=source.height_px,
            dest_height_pt=img_height_pt,
        )
        logger.info(f"Paginated {source.width_px}x{source.height_px}px snapshot onto 1 page")
        return ExportLayout(
            source=source,
            geometry=geometry,
            placements=(_place(0, only, geometry, img_width_pt),),
            ratio=ratio,
            img_width_pt=img_width_pt,
            img_height_pt=img_height_pt,
        )

    slice_height_px = math.floor(page_usable_height_pt / ratio)
    if slice_height_px < 1:
        raise GeometryError(
            f"Page usable height {page_usable_height_pt}pt holds less than one source row "
            f"at {ratio:.4f}pt/px (image {source.width_px}px wide)",
            field="slice_height_px",
            value=slice_height_px,
        )

    placements: List[PagePlacement] = []
    offset = 0
    while offset < source.height_px:
        height = min(slice_height_px, source.height_px - offset)
        band = Slice(
            source_offset_px=offset,
            source_height_px=height,
            dest_height_pt=height * ratio,
        )
        placements.append(_place(len(placements), band, geometry, img_width_pt))
        logger.debug(f"Page {len(placements)}: rows {offset}-{offset + height} -> {band.dest_height_pt:.1f}pt")
        offset += height

    logger.info(
        f"Paginated {source.width_px}x{source.height_px}px snapshot onto {len(placements)} pages "
        f"({slice_height_px}px per page)"
    )

    return ExportLayout(
        source=source,
        geometry=geometry,
        placements=tuple(placements),
        ratio=ratio,
        img_width_pt=img_width_pt,
        img_height_pt=img_height_pt,
        slice_height_px=slice_height_px,
    )


def slices_for(source: SourceBitmap, geometry: PageGeometry) -> tuple[Slice, ...]:
    """Ordered slices covering ``source`` for ``geometry``."""
    return paginate_bitmap(source, geometry).slices


def _place(
    page_index: int,
    band: Slice,
    geometry: PageGeometry,
    img_width_pt: float,
) -> PagePlacement:
    """Position a slice at the top-left margin corner of its page."""
    return PagePlacement(
        page_index=page_index,
        slice=band,
        x_pt=geometry.margin_pt,
        y_pt=geometry.margin_pt,
        width_pt=img_width_pt,
        height_pt=band.dest_height_pt,
    )


def _validate(source: SourceBitmap, geometry: PageGeometry) -> None:
    """Reject dimensions that cannot be paginated."""
    for field, value in (
        ("width_px", source.width_px),
        ("height_px", source.height_px),
        ("page_width_pt", geometry.page_width_pt),
        ("page_height_pt", geometry.page_height_pt),
    ):
        if value <= 0:
            raise GeometryError(f"{field} must be positive: {value}", field=field, value=value)

    if geometry.margin_pt < 0:
        raise GeometryError(
            f"margin_pt must be non-negative: {geometry.margin_pt}",
            field="margin_pt",
            value=geometry.margin_pt,
        )
    if geometry.usable_width_pt <= 0:
        raise GeometryError(
            f"Margins exceed page width: {geometry.page_width_pt}pt - 2 x {geometry.margin_pt}pt",
            field="usable_width_pt",
            value=geometry.usable_width_pt,
        )
    if geometry.usable_height_pt <= 0:
        raise GeometryError(
            f"Margins exceed page height: {geometry.page_height_pt}pt - 2 x {geometry.margin_pt}pt",
            field="usable_height_pt",
            value=geometry.usable_height_pt,
        )
