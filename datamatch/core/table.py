"""
In-memory table model shared by the reader, comparator and exporter.
Single responsibility: hold headers and string rows with a total cell lookup.
"""

from dataclasses import dataclass, field
from typing import Dict, List

# A row keyed by header; every value is text.
Record = Dict[str, str]


@dataclass
class Table:
    """
    Ordered header list plus rows keyed by those headers.

    Every row carries every header; cells missing from the source are stored
    as an empty string. ``cell()`` applies the same default for headers a row
    does not carry, so callers never see a missing value.
    """

    headers: List[str]
    rows: List[Record] = field(default_factory=list)
    source: str = ""

    @classmethod
    def from_records(cls, headers: List[str], records: List[List[str]],
                     source: str = "") -> "Table":
        """
        Build a table from positional records, padding short ones.

        Args:
            headers: Column names in file order
            records: Positional cell values per row
            source: Where the table was read from

        Returns:
            Table with one row per record
        """
        rows = []
        for record in records:
            row = {}
            for index, header in enumerate(headers):
                row[header] = record[index] if index < len(record) else ""
            rows.append(row)
        return cls(headers=list(headers), rows=rows, source=source)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def __len__(self) -> int:
        return len(self.rows)

    @staticmethod
    def cell(row: Record, header: str) -> str:
        """Read a cell, defaulting to an empty string."""
        value = row.get(header)
        return "" if value is None else value

