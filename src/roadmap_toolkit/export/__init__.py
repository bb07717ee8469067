"""
Module: export

Purpose:
    Raster export of the roadmap view.
    Renders a snapshot bitmap, slices it into page-sized bands and
    encodes the bands as PDF pages (or the whole snapshot as PNG).

Key Functions:
    - paginate_bitmap(): Slice geometry for a bitmap and a page
    - export_pdf(): Full PDF export pipeline
    - export_png(): Full PNG export pipeline

Key Classes:
    - ExportConfig: Page size, margin, scale, theme
    - SourceBitmap, PageGeometry, Slice, PagePlacement, ExportLayout
    - GeometryError, MissingDependencyError, ExportError

Dependencies:
    - PIL: Rendering and cropping
    - reportlab: PDF generation

Used By:
    - cli
"""

from .config import ExportConfig
from .errors import ExportError, GeometryError, MissingDependencyError
from .models import SourceBitmap, PageGeometry, Slice, PagePlacement, ExportLayout
from .paginator import paginate_bitmap, slices_for
from .controller import export_pdf, export_png, default_export_filename, ExportResult

__all__ = [
    # Config
    "ExportConfig",
    # Errors
    "ExportError",
    "GeometryError",
    "MissingDependencyError",
    # Models
    "SourceBitmap",
    "PageGeometry",
    "Slice",
    "PagePlacement",
    "ExportLayout",
    # Functions
    "paginate_bitmap",
    "slices_for",
    "export_pdf",
    "export_png",
    "default_export_filename",
    "ExportResult",
]
