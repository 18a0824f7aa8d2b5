"""
datamatch - compare CSV/Excel files on key fields and export mapped results.
"""

__version__ = "1.0.0"

from .core.table import Table, Record
from .core.comparator import DataComparator, ComparisonResult, build_composite_key, KEY_SEPARATOR
from .core.key_selector import ValidationError, parse_column_selection
from .core.mapping import FieldMapper, project_row
from .config.manager import ConfigManager, AppSettings
from .config.store import ConfigStore, SavedConfig
from .adapters.file_reader import TabularFileReader, FormatError, discover_data_files
from .adapters.csv_writer import CsvExporter, ExportKind, ensure_utf8_bom
from .utils.logger import get_logger

__all__ = [
    "Table",
    "Record",
    "DataComparator",
    "ComparisonResult",
    "build_composite_key",
    "KEY_SEPARATOR",
    "ValidationError",
    "parse_column_selection",
    "FieldMapper",
    "project_row",
    "ConfigManager",
    "AppSettings",
    "ConfigStore",
    "SavedConfig",
    "TabularFileReader",
    "FormatError",
    "discover_data_files",
    "CsvExporter",
    "ExportKind",
    "ensure_utf8_bom",
    "get_logger",
]
