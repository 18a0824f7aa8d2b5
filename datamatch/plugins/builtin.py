"""
Built-in informational plugins.
"""

import platform
import sys

from .. import __version__
from .base import PluginRegistry


class HelpPlugin:
    """Usage and command overview."""

    name = "Help"
    description = "Show help information and available commands"
    commands = ("help", "h", "?")

    def __init__(self, registry: PluginRegistry, reporter):
        self.registry = registry
        self.reporter = reporter

    def execute(self, command: str) -> None:
        self.reporter.section("datamatch Help")
        self.reporter.success("Basic usage")
        self.reporter.info("datamatch                 Show main menu")
        self.reporter.info("datamatch <command>       Execute a command")
        self.reporter.info("datamatch --no-rich ...   Plain text output")

        self.reporter.success("Available commands")
        for plugin in self.registry.all():
            commands = ", ".join(f"/{cmd}" for cmd in plugin.commands)
            self.reporter.info(f"{commands:<28} {plugin.description}")


class VersionPlugin:
    """Package and runtime versions."""

    name = "Version"
    description = "Show version information"
    commands = ("version", "v")

    def __init__(self, reporter):
        self.reporter = reporter

    def execute(self, command: str) -> None:
        self.reporter.section("Version Information")
        self.reporter.info(f"datamatch: {__version__}")
        self.reporter.info(f"Python: {platform.python_version()}")
        self.reporter.info(f"Platform: {sys.platform} ({platform.machine()})")


class PluginsPlugin:
    """Registered plugin listing."""

    name = "Plugins"
    description = "List all available plugins"
    commands = ("plugins", "p")

    def __init__(self, registry: PluginRegistry, reporter):
        self.registry = registry
        self.reporter = reporter

    def execute(self, command: str) -> None:
        self.reporter.section("Available Plugins")
        for plugin in self.registry.all():
            self.reporter.success(plugin.name)
            self.reporter.info(f"  {plugin.description}")
            self.reporter.info("  Commands: " + ", ".join(f"/{cmd}" for cmd in plugin.commands))
