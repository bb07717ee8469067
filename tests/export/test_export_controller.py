"""
Integration tests for the export pipeline.
"""

import io
from datetime import date

import pytest
from PIL import Image
from pypdf import PdfReader

from roadmap_toolkit.export import (
    ExportConfig,
    ExportError,
    MissingDependencyError,
    default_export_filename,
    export_pdf,
    export_png,
)
from roadmap_toolkit.export.pdf_writer import PageEncoder, ReportLabPageEncoder
from roadmap_toolkit.export.renderer import Snapshot, SnapshotRenderer


class FixedRenderer(SnapshotRenderer):
    """Renderer returning a plain image of a given size."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.calls = 0

    def render_snapshot(self) -> Snapshot:
        self.calls += 1
        return Snapshot.from_image(Image.new("RGB", (self.width, self.height), "white"))


class FailingEncoder(PageEncoder):
    """Encoder that fails on the second page."""

    def __init__(self):
        self.pages = 0

    def encode_page(self, slice, page_index):
        if page_index == 1:
            raise ExportError("encoder failed")
        self.pages += 1

    def finalize_document(self) -> bytes:
        return b"%PDF-"


def test_export_pdf_multi_page(tmp_path):
    renderer = FixedRenderer(1000, 3000)
    output = tmp_path / "out" / "roadmap.pdf"

    result = export_pdf(None, output, renderer_factory=lambda roadmap, config: renderer)

    assert result.path == output
    assert result.page_count == 3
    assert result.layout.slice_height_px == 1319
    assert (result.source.width_px, result.source.height_px) == (1000, 3000)
    assert len(PdfReader(output).pages) == 3
    assert [p.name for p in output.parent.iterdir()] == ["roadmap.pdf"]


def test_export_pdf_default_renderer_tall_roadmap(tmp_path, tall_roadmap):
    """The real renderer produces a tall snapshot that spans several pages."""
    output = tmp_path / "tall.pdf"

    result = export_pdf(tall_roadmap, output, ExportConfig(page_size="a4"))

    assert result.page_count > 1
    reader = PdfReader(output)
    assert len(reader.pages) == result.page_count
    assert abs(float(reader.pages[0].mediabox.width) - 595.276) < 1.0
    assert sum(s.source_height_px for s in result.layout.slices) == result.source.height_px


def test_export_pdf_default_renderer_small_roadmap(tmp_path, sample_roadmap):
    result = export_pdf(sample_roadmap, tmp_path / "small.pdf")

    assert result.page_count == 1
    assert result.layout.is_single_page
    assert len(PdfReader(result.path).pages) == 1


def test_export_pdf_when_renderer_missing_then_raises_before_rendering(tmp_path, sample_roadmap):
    output = tmp_path / "x.pdf"

    with pytest.raises(MissingDependencyError) as exc_info:
        export_pdf(sample_roadmap, output, renderer_factory=None)

    assert exc_info.value.dependency == "renderer"
    assert not output.exists()


def test_export_pdf_when_encoder_missing_then_raises_before_rendering(tmp_path):
    renderer = FixedRenderer(100, 100)

    with pytest.raises(MissingDependencyError) as exc_info:
        export_pdf(None, tmp_path / "x.pdf",
                   renderer_factory=lambda r, c: renderer, encoder_factory=None)

    assert exc_info.value.dependency == "encoder"
    assert renderer.calls == 0


def test_export_pdf_when_factory_returns_none_then_missing_dependency(tmp_path, sample_roadmap):
    with pytest.raises(MissingDependencyError, match="encoder"):
        export_pdf(sample_roadmap, tmp_path / "x.pdf", encoder_factory=lambda image, geometry: None)


def test_export_pdf_when_encoding_fails_then_no_file(tmp_path):
    output = tmp_path / "x.pdf"

    with pytest.raises(ExportError, match="encoder failed"):
        export_pdf(
            None,
            output,
            renderer_factory=lambda r, c: FixedRenderer(1000, 3000),
            encoder_factory=lambda image, geometry: FailingEncoder(),
        )

    assert list(tmp_path.iterdir()) == []


def test_export_pdf_when_geometry_invalid_then_no_file(tmp_path):
    output = tmp_path / "x.pdf"
    config = ExportConfig(margin_pt=400)

    with pytest.raises(ExportError):
        export_pdf(None, output, config, renderer_factory=lambda r, c: FixedRenderer(100, 100))

    assert not output.exists()


def test_export_pdf_replaces_existing_file(tmp_path):
    output = tmp_path / "x.pdf"
    output.write_bytes(b"old")

    export_pdf(None, output, renderer_factory=lambda r, c: FixedRenderer(100, 100))

    assert output.read_bytes().startswith(b"%PDF")


def test_export_pdf_custom_encoder_receives_slices(tmp_path):
    seen = []

    class RecordingEncoder(ReportLabPageEncoder):
        def encode_page(self, slice, page_index):
            seen.append((page_index, slice.source_offset_px, slice.source_height_px))
            super().encode_page(slice, page_index)

    export_pdf(
        None,
        tmp_path / "x.pdf",
        renderer_factory=lambda r, c: FixedRenderer(1000, 3000),
        encoder_factory=RecordingEncoder,
    )

    assert seen == [(0, 0, 1319), (1, 1319, 1319), (2, 2638, 362)]


def test_export_png_writes_full_snapshot(tmp_path, sample_roadmap):
    output = tmp_path / "roadmap.png"

    result = export_png(sample_roadmap, output, ExportConfig(scale=1))

    assert result.page_count == 1
    assert result.layout is None
    with Image.open(output) as img:
        assert img.size == (900, result.source.height_px)


def test_export_png_when_renderer_missing_then_raises(tmp_path):
    with pytest.raises(MissingDependencyError):
        export_png(None, tmp_path / "x.png", renderer_factory=lambda r, c: None)
    assert not (tmp_path / "x.png").exists()


@pytest.mark.parametrize("kind,expected", [
    ("pdf", "roadmap_2026-01-31.pdf"),
    ("png", "roadmap_2026-01-31.png"),
    ("json", "roadmap_data_2026-01-31.json"),
])
def test_default_export_filename(kind, expected):
    assert default_export_filename(kind, date(2026, 1, 31)) == expected


def test_default_export_filename_when_unknown_kind_then_raises():
    with pytest.raises(ValueError, match="Unknown export kind"):
        default_export_filename("docx")


class TestExportConfig:
    """Tests for ExportConfig validation."""

    def test_defaults(self):
        config = ExportConfig()
        geometry = config.geometry

        assert (geometry.page_width_pt, geometry.page_height_pt, geometry.margin_pt) == (612, 792, 24)
        assert config.scale == 2
        assert config.theme == "azure"

    @pytest.mark.parametrize("kwargs,match", [
        ({"page_size": "legal"}, "page_size"),
        ({"scale": 0}, "scale"),
        ({"view_width_px": 0}, "view_width_px"),
    ])
    def test_invalid(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            ExportConfig(**kwargs)
