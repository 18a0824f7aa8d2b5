"""
Interactive comparison wizard.
Single responsibility: drive file selection, comparison, mapping and export.
"""

import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..adapters.csv_writer import CsvExporter, ExportKind, build_export_path
from ..adapters.file_reader import FormatError, TabularFileReader, discover_data_files
from ..config.manager import AppSettings
from ..config.store import ConfigStore, SavedConfig
from ..core.comparator import ComparisonResult, DataComparator
from ..core.key_selector import (
    ValidationError,
    parse_column_selection,
    to_column_indices,
    to_column_numbers,
)
from ..core.mapping import FieldMapper, FieldMapping, describe_reuse_gaps
from ..core.table import Table
from ..utils.logger import get_logger
from .prompts import PromptCancelled


logger = get_logger()


FINISH_EXPORTS = "done"


@dataclass
class ComparisonSetup:
    """Key columns and mapping chosen for one run."""

    key_cols_a: List[int]
    key_cols_b: List[int]
    mapping: Optional[FieldMapping] = None
    reused: bool = False


class ComparisonWizard:
    """
    Step-by-step comparison of a reference file (A) against an extraction file (B).
    """

    def __init__(self, settings: AppSettings, prompts, reporter,
                 reader: Optional[TabularFileReader] = None,
                 comparator: Optional[DataComparator] = None,
                 mapper: Optional[FieldMapper] = None,
                 exporter: Optional[CsvExporter] = None,
                 store: Optional[ConfigStore] = None):
        """
        Initialize wizard.

        Args:
            settings: Directories and file names for this run
            prompts: PromptProvider answering the wizard's questions
            reporter: Console reporter for status output
            reader: File reader (default: TabularFileReader)
            comparator: Comparison engine (default: DataComparator)
            mapper: Field mapper (default: FieldMapper)
            exporter: CSV exporter (default: CsvExporter)
            store: Saved configuration store (default: settings.config_path)
        """
        self.settings = settings
        self.prompts = prompts
        self.reporter = reporter
        self.reader = reader or TabularFileReader()
        self.comparator = comparator or DataComparator()
        self.mapper = mapper or FieldMapper()
        self.exporter = exporter or CsvExporter()
        self.store = store or ConfigStore(settings.config_path)

    def run(self) -> bool:
        """
        Show the tool menu and run wizards until the user leaves.

        Returns:
            True if at least one comparison completed, False otherwise
        """
        self.reporter.section(
            "Data Comparison & Mapping Tool",
            "Compare and map data between CSV/Excel files",
        )

        try:
            action = self.prompts.select(
                "What would you like to do?",
                [("Start Data Comparison Wizard", "start"),
                 ("Exit to Main Menu", "exit")],
            )
        except PromptCancelled:
            return False

        if action == "exit":
            return False

        completed = False
        while True:
            if self.run_wizard():
                completed = True
            else:
                return completed

            try:
                next_action = self.prompts.select(
                    "What would you like to do next?",
                    [("Start New Comparison", "new"),
                     ("Return to Main Menu", "main")],
                )
            except PromptCancelled:
                return completed

            if next_action != "new":
                return completed

    def run_wizard(self) -> bool:
        """
        Run one comparison from file selection to export.

        Every failure is reported and logged here; nothing propagates to
        the menu that started the wizard.

        Returns:
            True if the comparison finished, False if it failed or was cancelled
        """
        try:
            self._run_steps()
            return True

        except PromptCancelled:
            self.reporter.warning("Comparison cancelled.")
            logger.info("wizard.cancelled")
            return False

        except FormatError as e:
            self.reporter.error(f"Unsupported or unreadable file: {e}")
            logger.error("wizard.format_error", error=str(e))
            return False

        except OSError as e:
            self.reporter.error(f"File error: {e}")
            logger.error("wizard.io_error", error=str(e))
            return False

        except Exception as e:
            self.reporter.error(f"Error in wizard: {e}")
            logger.error("wizard.failed",
                        error=str(e),
                        traceback=traceback.format_exc())
            return False

    def _run_steps(self):
        # Step 1-2: choose and read both files
        file_a = self.select_file("Select reference file (File A)")
        table_a = self.read_table(file_a)

        file_b = self.select_file("Select extraction file (File B)", exclude=file_a)
        table_b = self.read_table(file_b)

        # Step 3: key columns, from a saved configuration or typed in
        self.reporter.section("Data Comparison")
        self.reporter.show_columns("File A (Reference) columns:", table_a.headers)
        self.reporter.show_columns("File B (Extraction) columns:", table_b.headers)

        setup = self.offer_saved_config(table_a, table_b)
        if setup is None:
            key_cols_a, key_cols_b = self.collect_key_columns(table_a, table_b)
            setup = ComparisonSetup(key_cols_a=key_cols_a, key_cols_b=key_cols_b)

        result = self.compare(table_a, table_b, setup)

        # Step 4: field mapping
        self.reporter.section("Field Mapping", "Map File B fields to File A fields")
        if setup.mapping is None:
            setup.mapping = self.mapper.build(table_a.headers, table_b.headers, self.prompts)
        else:
            for gap in describe_reuse_gaps(setup.mapping, table_a.headers, table_b.headers):
                self.reporter.warning(f"Saved mapping: {gap}; exported cells will be empty")
            self.reporter.info("Using saved field mapping")

        # Step 5: exports
        self.reporter.section("Export Results")
        self.export_results(result, table_b, setup.mapping, table_a.headers)

        # Step 6: remember the setup for next time
        if not setup.reused:
            self.offer_save_config(setup)

    def select_file(self, message: str, exclude: Optional[Path] = None) -> Path:
        """
        Let user select a data file from the data directory.

        Args:
            message: Prompt text
            exclude: File already chosen for the other side

        Returns:
            Selected file path

        Raises:
            FileNotFoundError: If there is no candidate file
        """
        files = discover_data_files(self.settings.data_path, exclude=exclude)

        if not files:
            raise FileNotFoundError(
                f"No CSV or Excel files found in {self.settings.data_path.resolve()}"
            )

        choices = [(f"{file_path.name} ({self._get_file_size(file_path)})", file_path)
                   for file_path in files]
        selected = self.prompts.select(message, choices)

        logger.info("wizard.file_selected", file=str(selected))
        return selected

    def read_table(self, file_path: Path) -> Table:
        """Read a file with a loading indicator."""
        with self.reporter.task(f"Reading {Path(file_path).name}"):
            table = self.reader.read(file_path)
        self.reporter.success(
            f"Loaded {Path(file_path).name}: {len(table):,} rows, {table.column_count} columns"
        )
        return table

    def offer_saved_config(self, table_a: Table, table_b: Table) -> Optional[ComparisonSetup]:
        """
        Offer the saved configuration when it fits the current files.

        Args:
            table_a: Reference table
            table_b: Extraction table

        Returns:
            Setup from the saved configuration, or None to enter keys manually
        """
        saved = self.store.load()
        if saved is None:
            return None

        if not self.store.is_usable(saved, table_a, table_b):
            self.reporter.warning(
                "Saved configuration does not fit these files; enter the key columns manually."
            )
            logger.info("wizard.saved_config.unusable",
                       file_a_fields=saved.file_a_fields,
                       file_b_fields=saved.file_b_fields)
            return None

        self._show_saved_config(saved, table_a, table_b)
        if not self.prompts.confirm("Use this saved configuration?", default=True):
            return None

        return ComparisonSetup(
            key_cols_a=to_column_indices(saved.file_a_fields),
            key_cols_b=to_column_indices(saved.file_b_fields),
            mapping=dict(saved.field_mapping),
            reused=True,
        )

    def _show_saved_config(self, saved: SavedConfig, table_a: Table, table_b: Table):
        keys_a = ", ".join(table_a.headers[n - 1] for n in saved.file_a_fields)
        keys_b = ", ".join(table_b.headers[n - 1] for n in saved.file_b_fields)
        label = f" \"{saved.description}\"" if saved.description else ""

        self.reporter.info(f"Found saved configuration{label} from {saved.created_at}")
        self.reporter.info(f"  File A keys: {keys_a}")
        self.reporter.info(f"  File B keys: {keys_b}")
        self.reporter.info(f"  Mapped fields: {len(saved.field_mapping)}")

    def collect_key_columns(self, table_a: Table, table_b: Table) -> Tuple[List[int], List[int]]:
        """
        Ask for the key columns of both files.

        Invalid input is re-asked in place; File B must name as many columns
        as File A.

        Args:
            table_a: Reference table
            table_b: Extraction table

        Returns:
            0-based key indices for A and for B
        """
        answer_a = self.prompts.text(
            "Enter File A field numbers to compare (comma-separated, e.g., 1,2)",
            validate=lambda text: parse_column_selection(text, table_a.column_count),
        )
        key_cols_a = parse_column_selection(answer_a, table_a.column_count)

        def validate_b(text: str):
            indices = parse_column_selection(text, table_b.column_count)
            if len(indices) != len(key_cols_a):
                raise ValidationError(
                    f"Select exactly {len(key_cols_a)} column(s) to pair with File A"
                )
            return indices

        answer_b = self.prompts.text(
            f"Enter {len(key_cols_a)} File B field number(s) in matching order (e.g., 5,1)",
            validate=validate_b,
        )
        key_cols_b = parse_column_selection(answer_b, table_b.column_count)

        return key_cols_a, key_cols_b

    def compare(self, table_a: Table, table_b: Table, setup: ComparisonSetup) -> ComparisonResult:
        """Run the comparison and report its counts."""
        with self.reporter.task("Comparing records"):
            result = self.comparator.compare(table_a, setup.key_cols_a,
                                             table_b, setup.key_cols_b)

        pairs = ", ".join(f"{a} ↔ {b}" for a, b in zip(result.key_columns_a, result.key_columns_b))
        self.reporter.info(f"Matching on: {pairs}")
        self.reporter.show_summary(result.summary())
        self.reporter.success(
            f"Found {len(result.matched_rows)} matching rows out of {result.total_rows} total rows"
        )
        return result

    def export_results(self, result: ComparisonResult, table_b: Table,
                       mapping: FieldMapping, output_headers: List[str]) -> List[Path]:
        """
        Write exports until the user is done.

        Args:
            result: Comparison partition of File B
            table_b: Extraction table (for the all-rows export)
            mapping: File A header -> File B header
            output_headers: File A headers

        Returns:
            Paths written
        """
        rows_by_kind = {
            ExportKind.MATCHED: result.matched_rows,
            ExportKind.UNMATCHED: result.unmatched_rows,
            ExportKind.ALL: table_b.rows,
        }
        written = []

        while True:
            choices = [(f"{kind.label} ({len(rows):,} rows)", kind)
                       for kind, rows in rows_by_kind.items()]
            choices.append(("Finish exporting", FINISH_EXPORTS))

            default = FINISH_EXPORTS if written else ExportKind.MATCHED
            kind = self.prompts.select("What would you like to export?", choices, default=default)
            if kind == FINISH_EXPORTS:
                break

            self.settings.output_path.mkdir(parents=True, exist_ok=True)
            destination = build_export_path(self.settings.output_path, kind,
                                            prefix=self.settings.export_prefix)
            count = self.exporter.export_rows(rows_by_kind[kind], mapping,
                                              output_headers, destination)

            self.reporter.success(f"Successfully exported {count} rows to {destination.name}")
            self.reporter.info(f"File saved at: {destination.resolve()}")
            written.append(destination)

        return written

    def offer_save_config(self, setup: ComparisonSetup) -> Optional[SavedConfig]:
        """Ask whether to save the key columns and mapping for later runs."""
        if not self.prompts.confirm("Save this configuration for next time?", default=False):
            return None

        description = self.prompts.text("Description (optional)")
        saved = self.store.save(
            to_column_numbers(setup.key_cols_a),
            to_column_numbers(setup.key_cols_b),
            setup.mapping or {},
            description=description.strip() or None,
        )
        self.reporter.success(f"Configuration saved to {self.store.config_path}")
        return saved

    def _get_file_size(self, file_path: Path) -> str:
        """
        Get human-readable file size.

        Args:
            file_path: Path to file

        Returns:
            Formatted file size
        """
        try:
            size_bytes = file_path.stat().st_size
        except OSError:
            return "Unknown"

        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024**2:
            return f"{size_bytes/1024:.1f} KB"
        elif size_bytes < 1024**3:
            return f"{size_bytes/(1024**2):.1f} MB"
        else:
            return f"{size_bytes/(1024**3):.1f} GB"
