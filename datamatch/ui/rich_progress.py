"""
Rich terminal reporting.
Single responsibility: provide rich terminal UI for the comparison workflow.
"""

from contextlib import contextmanager
from typing import Any, Dict, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..utils.logger import get_logger


logger = get_logger()


class RichReporter:
    """
    Reporter drawing panels, column tables and spinners with Rich.
    """
    
    def __init__(self, verbose: bool = True, console: Optional[Console] = None):
        """
        Initialize Rich reporter.
        
        Args:
            verbose: Whether to show informational messages
            console: Console to draw on (default: new stdout console)
        """
        self.verbose = verbose
        self.console = console or Console()
        
    def section(self, title: str, subtitle: Optional[str] = None):
        """
        Show a section header panel.
        
        Args:
            title: Panel title
            subtitle: Optional second line
        """
        text = Text(title, justify="center", style="bold cyan")
        if subtitle:
            text.append(f"\n{subtitle}", style="yellow")
        
        self.console.print()
        self.console.print(Panel(text, box=box.DOUBLE, style="cyan"))
    
    def show_columns(self, title: str, headers: Sequence[str]):
        """
        Display columns with the numbers users type.
        
        Args:
            title: Table title
            headers: Column names
        """
        table = Table(title=title, box=box.ROUNDED, title_justify="left")
        table.add_column("#", style="cyan", justify="right", no_wrap=True)
        table.add_column("Column", style="white")
        
        for i, header in enumerate(headers, 1):
            table.add_row(str(i), escape(header))
        
        self.console.print(table)
    
    def show_summary(self, summary: Dict[str, Any]):
        """
        Display comparison results in a formatted table.
        
        Args:
            summary: ComparisonResult.summary() output
        """
        table = Table(title="Comparison Results", box=box.ROUNDED)
        
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", style="magenta", justify="right")
        
        table.add_row("Rows in File B", f"{summary['total']:,}")
        table.add_row("Distinct keys in File A", f"{summary['reference_keys']:,}")
        table.add_row("Matched rows", f"{summary['matched']:,}")
        table.add_row("Unmatched rows", f"{summary['unmatched']:,}")
        table.add_row("Match rate", f"{summary['match_rate']:.1f}%")
        
        self.console.print(table)
    
    def info(self, message: str):
        if self.verbose:
            self.console.print(f"[blue]ℹ[/blue] {escape(message)}", highlight=False)
    
    def success(self, message: str):
        self.console.print(f"[green]✓ {escape(message)}[/green]", highlight=False)
    
    def warning(self, message: str):
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]", highlight=False)
    
    def error(self, message: str):
        self.console.print(f"[bold red]✗ {escape(message)}[/bold red]", highlight=False)
    
    @contextmanager
    def task(self, task_name: str):
        """
        Show a spinner while a blocking step runs.
        
        Args:
            task_name: Description of the step
        """
        with self.console.status(f"[bold blue]{escape(task_name)}...", spinner="dots"):
            yield self
        logger.debug("rich_progress.task.completed", name=task_name)
