"""
Tabular file reader.
Single responsibility: read CSV and Excel files into the shared Table model.
"""

import zipfile
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ..core.table import Table
from ..utils.converters import cell_to_text
from ..utils.logger import get_logger
from ..utils.normalizers import clean_header


logger = get_logger()


CSV_EXTENSIONS = {'.csv'}
EXCEL_EXTENSIONS = {'.xlsx', '.xls'}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS

# utf-8-sig first so a byte-order-mark never ends up in the first header
CSV_ENCODINGS = ['utf-8-sig', 'utf-8', 'cp1252', 'latin-1']


class FormatError(ValueError):
    """Raised when a file type is unsupported or its content is unusable."""
    pass


def discover_data_files(directory: Path, exclude: Optional[Path] = None) -> List[Path]:
    """
    List readable data files in a directory.

    Args:
        directory: Directory to scan
        exclude: File already chosen for the other side of the comparison

    Returns:
        Supported files sorted by name
    """
    directory = Path(directory)
    if not directory.exists():
        return []

    excluded_name = Path(exclude).name if exclude else None

    files = []
    for file_path in directory.iterdir():
        if not file_path.is_file():
            continue
        if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            continue
        if excluded_name and file_path.name == excluded_name:
            continue
        files.append(file_path)

    return sorted(files, key=lambda x: x.name)


def _headers_from_row(values: List[str]) -> List[str]:
    headers = []
    for index, value in enumerate(values):
        header = clean_header(value)
        headers.append(header if header else f"Unnamed: {index}")
    return headers


class TabularFileReader:
    """
    Reads CSV and Excel files into a Table.

    The first row is always the header. Every cell is text and short rows
    are padded with empty strings; cells beyond the header are dropped.
    """

    def read_csv(self, file_path: Path) -> Table:
        """
        Read CSV file with automatic encoding detection.

        Args:
            file_path: Path to CSV file

        Returns:
            Table with text cells

        Raises:
            FormatError: If the file is empty or cannot be parsed
        """
        logger.info("file_reader.csv.reading", file=str(file_path))

        df = None
        successful_encoding = None

        for encoding in CSV_ENCODINGS:
            options = dict(
                encoding=encoding,
                header=None,
                dtype=str,
                keep_default_na=False,
                engine="python",
            )
            try:
                # The header line fixes the width; cells past it are dropped
                width = len(pd.read_csv(file_path, nrows=1, **options).columns)
                df = pd.read_csv(
                    file_path,
                    on_bad_lines=lambda fields: fields[:width],
                    **options,
                )
                successful_encoding = encoding
                break
            except (UnicodeDecodeError, UnicodeError):
                continue
            except pd.errors.EmptyDataError:
                raise FormatError(f"{file_path.name}: file is empty")
            except pd.errors.ParserError as e:
                raise FormatError(f"{file_path.name}: could not parse CSV ({e})")

        if df is None:
            raise FormatError(f"{file_path.name}: unknown text encoding")

        df = df.fillna("")
        records = df.values.tolist()
        if not records:
            raise FormatError(f"{file_path.name}: file is empty")

        headers = _headers_from_row(records[0])
        table = Table.from_records(headers, records[1:], source=str(file_path))

        logger.info("file_reader.csv.loaded",
                   rows=len(table),
                   columns=table.column_count,
                   encoding=successful_encoding)

        return table

    def read_excel(self, file_path: Path) -> Table:
        """
        Read the first sheet of an Excel workbook.

        Args:
            file_path: Path to Excel file

        Returns:
            Table with text cells

        Raises:
            FormatError: If the sheet is empty or the workbook is unreadable
        """
        logger.info("file_reader.excel.reading", file=str(file_path), sheet=0)

        try:
            df = pd.read_excel(file_path, sheet_name=0, header=None, dtype=object)
        except (ValueError, KeyError, zipfile.BadZipFile) as e:
            raise FormatError(f"{file_path.name}: could not read workbook ({e})")

        # Fully blank rows carry no record
        df = df.dropna(how="all")
        if df.empty:
            raise FormatError(f"{file_path.name}: file is empty")

        records = [[cell_to_text(value) for value in row]
                   for row in df.itertuples(index=False, name=None)]

        headers = _headers_from_row(records[0])
        table = Table.from_records(headers, records[1:], source=str(file_path))

        logger.info("file_reader.excel.loaded",
                   rows=len(table),
                   columns=table.column_count)

        return table

    def read(self, file_path: Path) -> Table:
        """
        Read any supported file type.

        Args:
            file_path: Path to file

        Returns:
            Table

        Raises:
            FormatError: If file type is not supported
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(file_path)
        suffix = file_path.suffix.lower()

        if suffix not in SUPPORTED_EXTENSIONS:
            raise FormatError(f"Unsupported file format: {suffix or file_path.name}")

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if suffix in EXCEL_EXTENSIONS:
            return self.read_excel(file_path)
        return self.read_csv(file_path)
