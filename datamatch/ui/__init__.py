"""User interface: prompts, console reporting and the comparison wizard."""

from .progress import ConsoleReporter, get_reporter
from .prompts import ConsolePrompts, ScriptedPrompts, PromptCancelled
from .menu import ComparisonWizard

__all__ = [
    "ConsoleReporter",
    "get_reporter",
    "ConsolePrompts",
    "ScriptedPrompts",
    "PromptCancelled",
    "ComparisonWizard",
]
