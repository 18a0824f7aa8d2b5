"""
CSV export of comparison results.
Single responsibility: write mapped rows as UTF-8 CSV that spreadsheets open cleanly.
"""

import csv
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..core.mapping import FieldMapping, project_row
from ..core.table import Record
from ..utils.logger import get_logger


logger = get_logger()


UTF8_BOM = b"\xef\xbb\xbf"


class ExportKind(Enum):
    """Which extraction rows an export contains."""

    MATCHED = "matched"
    UNMATCHED = "unmatched"
    ALL = "all"

    @property
    def label(self) -> str:
        return {
            ExportKind.MATCHED: "Matched rows only",
            ExportKind.UNMATCHED: "Unmatched rows only",
            ExportKind.ALL: "All rows of File B (remapped)",
        }[self]


def ensure_utf8_bom(path: Path) -> bool:
    """
    Make a file start with the UTF-8 byte-order-mark.

    The mark is only prepended when it is not already there, so calling this
    repeatedly leaves the file unchanged after the first call.

    Args:
        path: File to check

    Returns:
        True if the mark was added
    """
    path = Path(path)
    content = path.read_bytes()

    if content.startswith(UTF8_BOM):
        return False

    path.write_bytes(UTF8_BOM + content)
    logger.debug("csv_writer.bom.added", file=str(path))
    return True


def build_export_path(output_dir: Path, kind: ExportKind,
                      prefix: str = "Export_result",
                      now: Optional[datetime] = None) -> Path:
    """
    Choose a timestamped file name that does not overwrite earlier exports.

    Args:
        output_dir: Directory for the export
        kind: Export kind, part of the file name
        prefix: File name prefix
        now: Timestamp to use (default: current time)

    Returns:
        Path such as ``Export_result-matched-2024-01-01T10-00-00.csv``
    """
    now = now or datetime.now()
    stem = f"{prefix}-{kind.value}-{now.strftime('%Y-%m-%dT%H-%M-%S')}"
    output_dir = Path(output_dir)

    candidate = output_dir / f"{stem}.csv"
    counter = 1
    while candidate.exists():
        candidate = output_dir / f"{stem}-{counter}.csv"
        counter += 1
    return candidate


class CsvExporter:
    """
    Writes extraction rows in the reference layout.
    """

    def export_rows(self, rows: Iterable[Record], mapping: FieldMapping,
                    output_headers: Sequence[str], destination: Path) -> int:
        """
        Project rows through the mapping and write them as CSV.

        Args:
            rows: Rows in extraction-table shape, written in order
            mapping: Reference header -> extraction header
            output_headers: Reference headers; output columns and their order
            destination: File to write

        Returns:
            Number of data rows written
        """
        destination = Path(destination)
        logger.info("csv_writer.export.start",
                   file=str(destination),
                   columns=len(output_headers))

        count = 0
        with open(destination, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=list(output_headers),
                quoting=csv.QUOTE_MINIMAL,
                lineterminator="\n",
            )
            writer.writeheader()
            for row in rows:
                writer.writerow(project_row(row, mapping, output_headers))
                count += 1

        ensure_utf8_bom(destination)

        logger.info("csv_writer.export.complete", file=str(destination), rows=count)
        return count
