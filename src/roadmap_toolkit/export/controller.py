"""
Module: export.controller

Purpose:
    Orchestrate snapshot export.
    Render → Paginate → Encode → Write (PDF)
    Render → Encode → Write (PNG)

Key Functions:
    - export_pdf(): Paginated PDF of the roadmap view
    - export_png(): Single PNG of the roadmap view
    - default_export_filename(): Dated default file names

Key Classes:
    - ExportResult: Paths and geometry of a finished export

Dependencies:
    - export.renderer: Snapshot rendering collaborator
    - export.paginator: Slice geometry
    - export.pdf_writer: Encoding collaborators

Used By:
    - cli: export-pdf / export-png commands
"""

from __future__ import annotations

import logging
import tempfile
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

from roadmap_toolkit.core.models import Roadmap
from roadmap_toolkit.settings.theme import get_theme

from .config import ExportConfig
from .errors import MissingDependencyError
from .models import ExportLayout, PageGeometry, SourceBitmap
from .paginator import paginate_bitmap
from .pdf_writer import PageEncoder, ReportLabPageEncoder, encode_png
from .renderer import RoadmapViewRenderer, SnapshotRenderer

logger = logging.getLogger(__name__)

RendererFactory = Callable[[Roadmap, ExportConfig], Optional[SnapshotRenderer]]
EncoderFactory = Callable[[Image.Image, PageGeometry], Optional[PageEncoder]]

_FILENAME_PATTERNS = {
    "pdf": "roadmap_{day}.pdf",
    "png": "roadmap_{day}.png",
    "json": "roadmap_data_{day}.json",
}


@dataclass(frozen=True)
class ExportResult:
    """
    Finished export (immutable).

    Attributes:
        path: Written file
        page_count: Pages in the document (1 for PNG)
        source: Dimensions of the rendered snapshot
        layout: Pagination layout (None for PNG)
        elapsed_s: Wall time of the export
    """
    path: Path
    page_count: int
    source: SourceBitmap
    layout: Optional[ExportLayout] = None
    elapsed_s: float = 0.0


def default_renderer_factory(roadmap: Roadmap, config: ExportConfig) -> SnapshotRenderer:
    """Pillow view renderer configured from ``config``."""
    return RoadmapViewRenderer(
        roadmap,
        theme=get_theme(config.theme),
        scale=config.scale,
        view_width_px=config.view_width_px,
    )


def default_encoder_factory(image: Image.Image, geometry: PageGeometry) -> PageEncoder:
    """ReportLab PDF encoder."""
    return ReportLabPageEncoder(image, geometry)


def export_pdf(
    roadmap: Roadmap,
    output_path: Path,
    config: Optional[ExportConfig] = None,
    *,
    renderer_factory: Optional[RendererFactory] = default_renderer_factory,
    encoder_factory: Optional[EncoderFactory] = default_encoder_factory,
) -> ExportResult:
    """
    Export the roadmap view as a paginated PDF.

    Pipeline:
    1. Check both collaborators are available
    2. Render the view to a snapshot bitmap
    3. Paginate the bitmap for the page geometry
    4. Encode one page per slice
    5. Write the document atomically

    Args:
        roadmap: Snapshot of the tree to export
        output_path: Destination .pdf file
        config: Export configuration (defaults to letter, 24pt margin)
        renderer_factory: Builds the rendering collaborator
        encoder_factory: Builds the encoding collaborator

    Returns:
        ExportResult with path and page count

    Raises:
        MissingDependencyError: If a collaborator is unavailable
        GeometryError: If the snapshot cannot be paginated
        ExportError: If encoding fails

    Example:
        >>> result = export_pdf(roadmap, Path("out/roadmap.pdf"))
        >>> result.page_count
        2
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()

    if renderer_factory is None:
        raise MissingDependencyError("renderer")
    if encoder_factory is None:
        raise MissingDependencyError("encoder")

    renderer = renderer_factory(roadmap, config)
    if renderer is None:
        raise MissingDependencyError("renderer")

    snapshot = renderer.render_snapshot()
    geometry = config.geometry

    encoder = encoder_factory(snapshot.image, geometry)
    if encoder is None:
        raise MissingDependencyError("encoder")

    layout = paginate_bitmap(snapshot.source, geometry)
    for placement in layout.placements:
        encoder.encode_page(placement.slice, placement.page_index)
    data = encoder.finalize_document()

    _write_atomic(output_path, data, suffix=".pdf")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Exported {layout.page_count} page PDF to {output_path} in {elapsed:.2f}s")

    return ExportResult(
        path=output_path,
        page_count=layout.page_count,
        source=snapshot.source,
        layout=layout,
        elapsed_s=elapsed,
    )


def export_png(
    roadmap: Roadmap,
    output_path: Path,
    config: Optional[ExportConfig] = None,
    *,
    renderer_factory: Optional[RendererFactory] = default_renderer_factory,
) -> ExportResult:
    """
    Export the roadmap view as a single PNG.

    Args:
        roadmap: Snapshot of the tree to export
        output_path: Destination .png file
        config: Export configuration (scale and theme are used)
        renderer_factory: Builds the rendering collaborator

    Returns:
        ExportResult with page_count=1

    Raises:
        MissingDependencyError: If the renderer is unavailable
    """
    config = config or ExportConfig()
    start_time = time.perf_counter()

    if renderer_factory is None:
        raise MissingDependencyError("renderer")
    renderer = renderer_factory(roadmap, config)
    if renderer is None:
        raise MissingDependencyError("renderer")

    snapshot = renderer.render_snapshot()
    _write_atomic(output_path, encode_png(snapshot.image), suffix=".png")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Exported PNG to {output_path} in {elapsed:.2f}s")

    return ExportResult(path=output_path, page_count=1, source=snapshot.source, elapsed_s=elapsed)


def default_export_filename(kind: str, today: Optional[date] = None) -> str:
    """
    Dated default file name for an export.

    Args:
        kind: "pdf", "png" or "json"
        today: Date to stamp (defaults to today)

    Returns:
        File name such as "roadmap_2026-01-31.pdf"

    Raises:
        ValueError: If kind is unknown
    """
    if kind not in _FILENAME_PATTERNS:
        raise ValueError(f"Unknown export kind {kind!r}")
    day = (today or date.today()).isoformat()
    return _FILENAME_PATTERNS[kind].format(day=day)


def _write_atomic(path: Path, data: bytes, *, suffix: str) -> None:
    """Write bytes via a temporary file in the same directory, then rename."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=suffix,
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    try:
        temp_path.write_bytes(data)
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
