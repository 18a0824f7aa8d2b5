"""
Key column selection.
Single responsibility: turn user column numbers into validated key indices.
"""

from typing import List, Sequence

from .table import Table


class ValidationError(ValueError):
    """Raised when a column selection is out of range, malformed or mismatched."""
    pass


def parse_column_selection(text: str, column_count: int) -> List[int]:
    """
    Parse a comma-separated list of 1-based column numbers.

    Args:
        text: User input such as ``"2"`` or ``"1, 3"``
        column_count: Number of columns in the table

    Returns:
        0-based column indices in input order

    Raises:
        ValidationError: If the input is empty, not numeric or out of range
    """
    parts = [part.strip() for part in str(text).split(",")]
    if not any(parts):
        raise ValidationError("Please enter at least one column number")

    indices = []
    for part in parts:
        if not part:
            raise ValidationError(f"Empty entry in '{text}'. Use numbers separated by commas")
        try:
            number = int(part)
        except ValueError:
            raise ValidationError(f"'{part}' is not a column number")
        if not 1 <= number <= column_count:
            raise ValidationError(
                f"Column {number} is out of range. Enter numbers between 1 and {column_count}"
            )
        indices.append(number - 1)

    return indices


def to_column_numbers(indices: Sequence[int]) -> List[int]:
    """Convert 0-based indices to the 1-based numbers shown to users."""
    return [index + 1 for index in indices]


def to_column_indices(numbers: Sequence[int]) -> List[int]:
    """Convert 1-based column numbers to 0-based indices."""
    return [number - 1 for number in numbers]


def validate_key_columns(table_a: Table, key_cols_a: Sequence[int],
                         table_b: Table, key_cols_b: Sequence[int]) -> None:
    """
    Check that two key column lists can be paired.

    Args:
        table_a: Reference table
        key_cols_a: 0-based key indices into table A
        table_b: Extraction table
        key_cols_b: 0-based key indices into table B

    Raises:
        ValidationError: If the lists are empty, differ in length, or hold
            an index outside their table
    """
    if not key_cols_a or not key_cols_b:
        raise ValidationError("At least one key column is required on each side")

    if len(key_cols_a) != len(key_cols_b):
        raise ValidationError(
            f"File A has {len(key_cols_a)} key column(s) but File B has "
            f"{len(key_cols_b)}. Select the same number of columns on both sides"
        )

    for label, table, indices in (("File A", table_a, key_cols_a),
                                  ("File B", table_b, key_cols_b)):
        for index in indices:
            if not isinstance(index, int) or not 0 <= index < table.column_count:
                raise ValidationError(
                    f"{label} column index {index} is outside 0..{table.column_count - 1}"
                )
