"""Data comparison plugin."""

from ..config.manager import AppSettings
from ..ui.menu import ComparisonWizard


class DataComparisonPlugin:
    """
    Menu entry for the comparison wizard.
    """

    name = "Data Comparison & Mapping Tool"
    description = "Compare and map data between CSV/Excel files, find matching records and export results"
    commands = ("compare", "data-compare")

    def __init__(self, settings: AppSettings, prompts, reporter):
        self.settings = settings
        self.prompts = prompts
        self.reporter = reporter

    def execute(self, command: str) -> None:
        ComparisonWizard(self.settings, self.prompts, self.reporter).run()
