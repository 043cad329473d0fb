"""Configuration management for the construction log reporter."""

from .settings import settings, Settings
from .constants import (
    REPORT_TITLE,
    REPORT_FOLDER_NAME,
    NO_PHOTOS_TEXT,
    IMAGE_FAILED_TEXT,
    SKYCON_LABELS,
)

__all__ = [
    "settings",
    "Settings",
    "REPORT_TITLE",
    "REPORT_FOLDER_NAME",
    "NO_PHOTOS_TEXT",
    "IMAGE_FAILED_TEXT",
    "SKYCON_LABELS",
]
