"""Report generation: PDF layout and export."""

from .builder import ReportBuilder, select_photos, photo_caption
from .export import build_report

__all__ = [
    "ReportBuilder",
    "select_photos",
    "photo_caption",
    "build_report",
]
