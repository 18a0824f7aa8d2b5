"""
Structured logging utility.
Single responsibility: provide consistent logging across application.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import json


class StructuredLogger:
    """
    Structured logger for consistent application logging.

    Entries are echoed to stderr only when ``echo`` is enabled, so the
    interactive wizard is not interleaved with event lines. When a log file
    is configured every entry is appended to it as one JSON line.
    """
    
    def __init__(self, name: str = "datamatch", 
                 log_file: Optional[Path] = None,
                 echo: bool = False):
        """
        Initialize logger.
        
        Args:
            name: Logger name
            log_file: Optional file path for logging
            echo: Whether to print entries to stderr
        """
        self.name = name
        self.log_file = Path(log_file) if log_file else None
        self.echo = echo
        
    def _format_message(self, level: str, message: str, 
                       **kwargs) -> Dict[str, Any]:
        """
        Format log message with metadata.
        
        Args:
            level: Log level (INFO, DEBUG, ERROR, etc.)
            message: Log message
            **kwargs: Additional context fields
            
        Returns:
            Formatted log entry
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "logger": self.name,
            "message": message
        }
        
        if kwargs:
            entry["context"] = kwargs
            
        return entry
    
    def _output(self, entry: Dict[str, Any]):
        """
        Output log entry to console and optionally file.
        
        Args:
            entry: Log entry dictionary
        """
        if self.echo:
            timestamp = entry["timestamp"].split("T")[1][:8]
            print(f"[{timestamp}] {entry['level']:5} | {entry['message']}", file=sys.stderr)
            
            for key, value in entry.get("context", {}).items():
                print(f"  {key}={value}", file=sys.stderr)
        
        # File output - JSON for parsing
        if self.log_file:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str, ensure_ascii=False) + "\n")
    
    def info(self, message: str, **kwargs):
        """Log info message."""
        self._output(self._format_message("INFO", message, **kwargs))
    
    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._output(self._format_message("DEBUG", message, **kwargs))
    
    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._output(self._format_message("WARN", message, **kwargs))
    
    def error(self, message: str, **kwargs):
        """Log error message."""
        self._output(self._format_message("ERROR", message, **kwargs))
    
    def critical(self, message: str, **kwargs):
        """Log critical message."""
        self._output(self._format_message("CRITICAL", message, **kwargs))


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "datamatch") -> StructuredLogger:
    """
    Get or create logger instance.
    
    Args:
        name: Logger name
        
    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        _logger = StructuredLogger(name)
    return _logger


def configure_logger(log_file: Optional[Path] = None,
                     echo: bool = False) -> StructuredLogger:
    """
    Point the shared logger at a log file and set console echo.

    Modules keep the instance returned by ``get_logger()`` at import time,
    so the shared instance is reconfigured in place rather than replaced.
    """
    logger = get_logger()
    logger.log_file = Path(log_file) if log_file else None
    logger.echo = echo
    return logger
