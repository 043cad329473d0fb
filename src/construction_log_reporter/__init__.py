"""Daily construction log PDF reports."""

__version__ = "0.1.0"
