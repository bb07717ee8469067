"""
Unit tests for the page encoders.

Uses pypdf to inspect generated PDFs.
"""

import io
import pytest
from PIL import Image
from pypdf import PdfReader

from roadmap_toolkit.export import ExportError, PageGeometry, Slice, SourceBitmap, paginate_bitmap
from roadmap_toolkit.export.pdf_writer import ReportLabPageEncoder, encode_png

LETTER = PageGeometry(612, 792, 24)
TOLERANCE_PT = 1.0


@pytest.fixture
def tall_image():
    """1000x3000 image with a band of colour per page-sized slice."""
    img = Image.new("RGB", (1000, 3000), color="white")
    img.paste((200, 30, 30), (0, 0, 1000, 1319))
    img.paste((30, 200, 30), (0, 1319, 1000, 2638))
    return img


def encode_all(image, geometry):
    layout = paginate_bitmap(SourceBitmap(image.width, image.height), geometry)
    encoder = ReportLabPageEncoder(image, geometry)
    for placement in layout.placements:
        encoder.encode_page(placement.slice, placement.page_index)
    return layout, encoder.finalize_document()


def test_encoder_writes_one_page_per_slice(tall_image):
    layout, data = encode_all(tall_image, LETTER)

    reader = PdfReader(io.BytesIO(data))
    assert len(reader.pages) == layout.page_count == 3


def test_encoder_page_size_matches_geometry(tall_image):
    _, data = encode_all(tall_image, LETTER)

    for page in PdfReader(io.BytesIO(data)).pages:
        assert abs(float(page.mediabox.width) - 612) < TOLERANCE_PT
        assert abs(float(page.mediabox.height) - 792) < TOLERANCE_PT


def test_encoder_a4_geometry():
    from reportlab.lib.pagesizes import A4

    geometry = PageGeometry(A4[0], A4[1], 24)
    _, data = encode_all(Image.new("RGB", (400, 300)), geometry)

    page = PdfReader(io.BytesIO(data)).pages[0]
    assert abs(float(page.mediabox.width) - 595.276) < TOLERANCE_PT
    assert abs(float(page.mediabox.height) - 841.89) < TOLERANCE_PT


def test_encoder_page_count_property(tall_image):
    encoder = ReportLabPageEncoder(tall_image, LETTER)
    encoder.encode_page(Slice(0, 1319, 743.9), 0)
    assert encoder.page_count == 1


def test_encoder_when_pages_out_of_order_then_raises(tall_image):
    encoder = ReportLabPageEncoder(tall_image, LETTER)
    with pytest.raises(ExportError, match="in order"):
        encoder.encode_page(Slice(0, 100, 56.4), 1)


def test_encoder_when_slice_exceeds_image_then_raises(tall_image):
    encoder = ReportLabPageEncoder(tall_image, LETTER)
    with pytest.raises(ExportError, match="exceed"):
        encoder.encode_page(Slice(2900, 200, 112.8), 0)


def test_finalize_when_no_pages_then_raises(tall_image):
    encoder = ReportLabPageEncoder(tall_image, LETTER)
    with pytest.raises(ExportError, match="no pages"):
        encoder.finalize_document()


def test_encoder_when_finalized_then_rejects_more_pages(tall_image):
    encoder = ReportLabPageEncoder(tall_image, LETTER)
    encoder.encode_page(Slice(0, 100, 56.4), 0)
    encoder.finalize_document()

    with pytest.raises(ExportError, match="finalized"):
        encoder.encode_page(Slice(100, 100, 56.4), 1)
    with pytest.raises(ExportError, match="finalized"):
        encoder.finalize_document()


def test_encode_png_roundtrip_dimensions():
    data = encode_png(Image.new("RGB", (120, 80), color="navy"))

    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    with Image.open(io.BytesIO(data)) as img:
        assert img.size == (120, 80)
