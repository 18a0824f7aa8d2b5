"""
Console reporting for the interactive workflow.
Single responsibility: provide user feedback during operations.
"""

import sys
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional, Sequence


class ConsoleReporter:
    """
    Plain-text reporter for terminals without Rich or for captured output.
    """
    
    def __init__(self, verbose: bool = True, stream=None):
        """
        Initialize reporter.
        
        Args:
            verbose: Whether to show informational messages
            stream: Output stream (default: stdout)
        """
        self.verbose = verbose
        self.stream = stream
    
    def _print(self, message: str = "", err: bool = False):
        stream = self.stream or (sys.stderr if err else sys.stdout)
        print(message, file=stream)
    
    def section(self, title: str, subtitle: Optional[str] = None):
        """
        Show a section header.
        
        Args:
            title: Section title
            subtitle: Optional second line
        """
        self._print("\n" + "=" * 60)
        self._print(title.upper().center(60).rstrip())
        if subtitle:
            self._print(subtitle.center(60).rstrip())
        self._print("=" * 60)
    
    def show_columns(self, title: str, headers: Sequence[str]):
        """
        List columns with the 1-based numbers users type.
        
        Args:
            title: Caption above the list
            headers: Column names
        """
        self._print(f"\n{title}")
        self._print("-" * 50)
        for i, header in enumerate(headers, 1):
            self._print(f"{i:3d}. {header}")
    
    def show_summary(self, summary: Dict[str, Any]):
        """
        Show comparison counts.
        
        Args:
            summary: ComparisonResult.summary() output
        """
        self._print("\n" + "-" * 50)
        self._print(f"Rows in File B:     {summary['total']:,}")
        self._print(f"Matched rows:       {summary['matched']:,}")
        self._print(f"Unmatched rows:     {summary['unmatched']:,}")
        self._print(f"Match rate:         {summary['match_rate']}%")
        self._print("-" * 50)
    
    def info(self, message: str):
        if self.verbose:
            self._print(f"[INFO] {message}")
    
    def success(self, message: str):
        self._print(f"✓ {message}")
    
    def warning(self, message: str):
        self._print(f"[WARNING] {message}", err=True)
    
    def error(self, message: str):
        self._print(f"[ERROR] {message}", err=True)
    
    @contextmanager
    def task(self, task_name: str):
        """
        Context manager around a blocking step.
        
        Args:
            task_name: Description of the step
            
        Example:
            with reporter.task("Reading data.csv"):
                table = reader.read(path)
        """
        start_time = time.time()
        if self.verbose:
            self._print(f"[START] {task_name}")
        yield self
        if self.verbose:
            self._print(f"[DONE] {task_name} - Time: {self._format_time(time.time() - start_time)}")
    
    def _format_time(self, seconds: float) -> str:
        """
        Format time duration.
        
        Args:
            seconds: Time in seconds
            
        Returns:
            Formatted time string
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            return f"{seconds / 60:.1f}m"
        else:
            return f"{seconds / 3600:.1f}h"


def get_reporter(use_rich: bool = True, verbose: bool = True) -> Any:
    """
    Get appropriate reporter.
    
    Args:
        use_rich: Whether to use Rich output
        verbose: Whether to show informational messages
        
    Returns:
        Reporter instance
    """
    if use_rich:
        from .rich_progress import RichReporter
        return RichReporter(verbose=verbose)
    return ConsoleReporter(verbose=verbose)
