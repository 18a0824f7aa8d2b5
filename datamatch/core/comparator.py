"""
Core data comparison logic.
Single responsibility: partition extraction rows by composite-key membership.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Set

from .key_selector import validate_key_columns
from .table import Record, Table
from ..utils.logger import get_logger


logger = get_logger()


# Values containing this character can collide; keys are not escaped.
KEY_SEPARATOR = "|"


def build_composite_key(row: Record, headers: Sequence[str],
                        key_indices: Sequence[int]) -> str:
    """
    Join the selected cells of a row into one comparable string.

    Args:
        row: Row keyed by header
        headers: Header list of the row's table
        key_indices: 0-based key column indices, in pairing order

    Returns:
        Key cells joined by KEY_SEPARATOR
    """
    return KEY_SEPARATOR.join(Table.cell(row, headers[index]) for index in key_indices)


@dataclass
class ComparisonResult:
    """Results from comparing an extraction table against a reference table."""

    matched_rows: List[Record] = field(default_factory=list)
    unmatched_rows: List[Record] = field(default_factory=list)
    key_columns_a: List[str] = field(default_factory=list)
    key_columns_b: List[str] = field(default_factory=list)
    reference_key_count: int = 0

    @property
    def total_rows(self) -> int:
        return len(self.matched_rows) + len(self.unmatched_rows)

    def summary(self) -> Dict[str, Any]:
        """
        Summarize the partition for reporting.

        Returns:
            Counts and match rate as a percentage of extraction rows
        """
        total = self.total_rows
        match_rate = round(100 * len(self.matched_rows) / total, 2) if total else 0.0
        return {
            "matched": len(self.matched_rows),
            "unmatched": len(self.unmatched_rows),
            "total": total,
            "reference_keys": self.reference_key_count,
            "match_rate": match_rate,
        }


class DataComparator:
    """
    Compare two tables on a positionally paired composite key.
    """

    def build_key_set(self, table: Table, key_indices: Sequence[int]) -> Set[str]:
        """
        Collect the composite keys of every row in a table.

        Duplicate keys collapse into one entry.

        Args:
            table: Table to index
            key_indices: 0-based key column indices

        Returns:
            Set of composite key strings
        """
        return {build_composite_key(row, table.headers, key_indices) for row in table.rows}

    def compare(self, table_a: Table, key_cols_a: Sequence[int],
                table_b: Table, key_cols_b: Sequence[int]) -> ComparisonResult:
        """
        Split table B's rows by whether their key occurs in table A.

        A row of B is matched iff its key built from ``key_cols_b`` equals the
        key of at least one row of A built from ``key_cols_a``. Both tables are
        scanned once; input order of B is kept in both partitions.

        Args:
            table_a: Reference table
            key_cols_a: 0-based key indices into table A
            table_b: Extraction table
            key_cols_b: 0-based key indices into table B, paired with key_cols_a

        Returns:
            ComparisonResult partitioning table B's rows

        Raises:
            ValidationError: If the key column lists cannot be paired
        """
        validate_key_columns(table_a, key_cols_a, table_b, key_cols_b)

        key_names_a = [table_a.headers[i] for i in key_cols_a]
        key_names_b = [table_b.headers[i] for i in key_cols_b]

        logger.info("comparator.compare.start",
                   reference_rows=len(table_a),
                   extraction_rows=len(table_b),
                   keys_a=key_names_a,
                   keys_b=key_names_b)

        reference_keys = self.build_key_set(table_a, key_cols_a)

        result = ComparisonResult(
            key_columns_a=key_names_a,
            key_columns_b=key_names_b,
            reference_key_count=len(reference_keys),
        )

        for row in table_b.rows:
            key = build_composite_key(row, table_b.headers, key_cols_b)
            if key in reference_keys:
                result.matched_rows.append(row)
            else:
                result.unmatched_rows.append(row)

        logger.info("comparator.compare.complete", **result.summary())

        return result
