"""
Command line entry point.
Single responsibility: parse arguments, wire components and run the menu.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.manager import AppSettings, ConfigManager, DEFAULT_SETTINGS_FILE
from .plugins.base import PluginRegistry
from .plugins.builtin import HelpPlugin, PluginsPlugin, VersionPlugin
from .plugins.data_comparison import DataComparisonPlugin
from .ui.progress import get_reporter
from .ui.prompts import ConsolePrompts, PromptCancelled
from .utils.logger import configure_logger, get_logger


logger = get_logger()


EXIT_CHOICE = "exit"


def build_registry(settings: AppSettings, prompts, reporter) -> PluginRegistry:
    """
    Register the built-in plugins.

    Args:
        settings: Resolved application settings
        prompts: PromptProvider shared by interactive plugins
        reporter: Console reporter

    Returns:
        Registry in main menu order
    """
    registry = PluginRegistry(reporter)
    registry.register(DataComparisonPlugin(settings, prompts, reporter))
    registry.register(HelpPlugin(registry, reporter))
    registry.register(VersionPlugin(reporter))
    registry.register(PluginsPlugin(registry, reporter))
    return registry


def run_main_menu(registry: PluginRegistry, prompts, reporter) -> None:
    """
    Show the tool menu until the user exits.

    Args:
        registry: Registered plugins
        prompts: PromptProvider for the menu choice
        reporter: Console reporter
    """
    reporter.section(f"datamatch v{__version__}", "Data utilities for CSV and Excel files")

    while True:
        choices = [(plugin.name, plugin.name) for plugin in registry.all()]
        choices.append(("Exit", EXIT_CHOICE))

        try:
            selected = prompts.select("Select a tool to run:", choices)
        except PromptCancelled:
            selected = EXIT_CHOICE

        if selected == EXIT_CHOICE:
            reporter.success("Goodbye! Thanks for using datamatch.")
            return

        registry.run(registry.get(selected))

        try:
            prompts.text("\nPress Enter to return to main menu")
        except PromptCancelled:
            reporter.success("Goodbye! Thanks for using datamatch.")
            return


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="datamatch",
        description="Compare CSV/Excel files on key fields, map columns and export matches"
    )

    parser.add_argument(
        "command",
        nargs="?",
        help="Command to run directly, e.g. compare, help, version, plugins"
    )

    parser.add_argument(
        "--settings",
        default=DEFAULT_SETTINGS_FILE,
        help=f"Settings file (default: {DEFAULT_SETTINGS_FILE})"
    )

    parser.add_argument(
        "--data-dir",
        help="Directory holding the files to compare (default: current directory)"
    )

    parser.add_argument(
        "--output-dir",
        help="Directory for exported CSV files (default: current directory)"
    )

    parser.add_argument(
        "--log-file",
        help="Append structured JSON log lines to this file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=None,
        help="Echo log events to stderr"
    )

    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable Rich terminal output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"datamatch v{__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)

    overrides = {
        "data_dir": args.data_dir,
        "output_dir": args.output_dir,
        "log_file": args.log_file,
        "verbose": args.verbose,
        "use_rich": False if args.no_rich else None,
    }

    try:
        settings = ConfigManager(Path(args.settings)).load(overrides)
    except Exception as e:
        print(f"Error: could not load settings from {args.settings}: {e}", file=sys.stderr)
        return 1

    configure_logger(settings.log_file, echo=settings.verbose)
    reporter = get_reporter(settings.use_rich)
    prompts = ConsolePrompts()
    registry = build_registry(settings, prompts, reporter)

    logger.info("cli.starting", command=args.command, data_dir=settings.data_dir)

    try:
        if args.command:
            return 0 if registry.execute_command(args.command) else 1
        run_main_menu(registry, prompts, reporter)
        return 0
    except KeyboardInterrupt:
        reporter.success("Goodbye! Thanks for using datamatch.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
