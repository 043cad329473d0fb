"""I/O layer for report files, photos and job input."""

from .storage import ReportStorage, derive_file_name, clean_project_name
from .image_loader import load_photo, fit_within
from .json_handler import ReportJob, load_job, load_json

__all__ = [
    "ReportStorage",
    "derive_file_name",
    "clean_project_name",
    "load_photo",
    "fit_within",
    "ReportJob",
    "load_job",
    "load_json",
]
