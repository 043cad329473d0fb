"""Custom exception classes for error handling."""


class ProcessingError(Exception):
    """Base exception for all processing errors."""

    pass


class ImageProcessingError(ProcessingError):
    """Error loading or decoding a media image."""

    pass


class ReportGenerationError(ProcessingError):
    """Error during report generation."""

    pass


class StorageUnavailableError(ProcessingError):
    """No writable report directory could be resolved."""

    pass


class InvalidInputError(ProcessingError):
    """Invalid input data or parameters."""

    pass
