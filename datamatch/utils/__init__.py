"""Utility functions and helpers."""

from .logger import get_logger, configure_logger, StructuredLogger
from .normalizers import clean_header, normalize_column_name, best_matching_column
from .converters import cell_to_text

__all__ = [
    "get_logger",
    "configure_logger",
    "StructuredLogger",
    "clean_header",
    "normalize_column_name",
    "best_matching_column",
    "cell_to_text",
]
