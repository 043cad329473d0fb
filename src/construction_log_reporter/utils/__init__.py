"""Utility modules for logging and exceptions."""

from .logger import setup_logging, get_logger
from .exceptions import (
    ProcessingError,
    ImageProcessingError,
    ReportGenerationError,
    StorageUnavailableError,
    InvalidInputError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "ProcessingError",
    "ImageProcessingError",
    "ReportGenerationError",
    "StorageUnavailableError",
    "InvalidInputError",
]
