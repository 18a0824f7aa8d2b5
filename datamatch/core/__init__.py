"""Table model, comparison engine and field mapping."""

from .table import Table, Record
from .comparator import DataComparator, ComparisonResult
from .key_selector import ValidationError, parse_column_selection, validate_key_columns
from .mapping import FieldMapper, FieldMapping, project_row

__all__ = [
    "Table",
    "Record",
    "DataComparator",
    "ComparisonResult",
    "ValidationError",
    "parse_column_selection",
    "validate_key_columns",
    "FieldMapper",
    "FieldMapping",
    "project_row",
]
