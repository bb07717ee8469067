"""
Module: export.pdf_writer

Purpose:
    Encoding collaborators for export. Each slice of a snapshot becomes
    one PDF page, drawn at the top-left margin corner and scaled to the
    usable page width. PNG export encodes the whole snapshot.

Key Classes:
    - PageEncoder: Abstract page-by-page document encoder
    - ReportLabPageEncoder: PDF encoder built on a ReportLab canvas

Key Functions:
    - encode_png(): Encode a full snapshot as PNG bytes

Dependencies:
    - reportlab: PDF generation
    - PIL: Cropping slices, PNG encoding
    - export.models: Slice, PageGeometry

Used By:
    - export.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .errors import ExportError
from .models import PageGeometry, Slice

logger = logging.getLogger(__name__)


class PageEncoder(ABC):
    """Encoding collaborator: receives slices in page order, returns document bytes."""

    @abstractmethod
    def encode_page(self, slice: Slice, page_index: int) -> None:
        """
        Add one page holding ``slice``.

        Args:
            slice: Source rows to draw on the page
            page_index: Page number (0-indexed), strictly sequential
        """

    @abstractmethod
    def finalize_document(self) -> bytes:
        """
        Finish the document.

        Returns:
            Encoded document bytes
        """


class ReportLabPageEncoder(PageEncoder):
    """
    Write snapshot slices to a PDF with ReportLab.

    Attributes:
        image: Full snapshot the slices are cut from
        geometry: Page size and margin

    Example:
        >>> encoder = ReportLabPageEncoder(snapshot.image, config.geometry)
        >>> for i, s in enumerate(layout.slices):
        ...     encoder.encode_page(s, i)
        >>> pdf_bytes = encoder.finalize_document()
    """

    def __init__(self, image: Image.Image, geometry: PageGeometry) -> None:
        self.image = image
        self.geometry = geometry
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(geometry.page_width_pt, geometry.page_height_pt),
        )
        self._pages = 0
        self._finalized = False

    @property
    def page_count(self) -> int:
        """Pages encoded so far."""
        return self._pages

    def encode_page(self, slice: Slice, page_index: int) -> None:
        if self._finalized:
            raise ExportError("Document already finalized")
        if page_index != self._pages:
            raise ExportError(f"Pages must be encoded in order: expected {self._pages}, got {page_index}")
        if slice.source_end_px > self.image.height:
            raise ExportError(
                f"Slice rows {slice.source_offset_px}-{slice.source_end_px} exceed "
                f"snapshot height {self.image.height}px"
            )

        band = self.image.crop((0, slice.source_offset_px, self.image.width, slice.source_end_px))

        width_pt = self.geometry.usable_width_pt
        x_pt = self.geometry.margin_pt
        # ReportLab origin is bottom-left; the slice hangs from the top margin
        y_pt = self.geometry.page_height_pt - self.geometry.margin_pt - slice.dest_height_pt

        self._canvas.drawImage(
            _pil_to_reader(band),
            x_pt,
            y_pt,
            width=width_pt,
            height=slice.dest_height_pt,
        )
        self._canvas.showPage()
        self._pages += 1

        logger.debug(f"Encoded page {page_index + 1} ({slice.source_height_px}px -> {slice.dest_height_pt:.1f}pt)")

    def finalize_document(self) -> bytes:
        if self._finalized:
            raise ExportError("Document already finalized")
        if self._pages == 0:
            raise ExportError("Cannot finalize a document with no pages")
        self._canvas.save()
        self._finalized = True
        return self._buffer.getvalue()


def encode_png(image: Image.Image) -> bytes:
    """
    Encode a snapshot as PNG.

    Args:
        image: PIL Image

    Returns:
        PNG file bytes
    """
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
