"""File readers and writers."""

from .file_reader import TabularFileReader, FormatError, discover_data_files
from .csv_writer import CsvExporter, ExportKind, ensure_utf8_bom, build_export_path

__all__ = [
    "TabularFileReader",
    "FormatError",
    "discover_data_files",
    "CsvExporter",
    "ExportKind",
    "ensure_utf8_bom",
    "build_export_path",
]
