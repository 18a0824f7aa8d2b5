"""
Plugin registry for the tool menu.
Single responsibility: register tools and dispatch commands to them.
"""

import traceback
from typing import Dict, List, Optional, Protocol, Sequence

from ..utils.logger import get_logger


logger = get_logger()


class Plugin(Protocol):
    """A tool reachable from the main menu or by command name."""

    name: str
    description: str
    commands: Sequence[str]

    def execute(self, command: str) -> None:
        ...


class PluginRegistry:
    """
    Plugins keyed by display name, in registration order.
    """

    def __init__(self, reporter=None):
        self.reporter = reporter
        self._plugins: Dict[str, Plugin] = {}

    def register(self, plugin: Plugin) -> None:
        """Register a plugin, replacing any plugin with the same name."""
        self._plugins[plugin.name] = plugin
        logger.debug("plugins.registered", name=plugin.name, commands=list(plugin.commands))

    def get(self, name: str) -> Optional[Plugin]:
        return self._plugins.get(name)

    def all(self) -> List[Plugin]:
        return list(self._plugins.values())

    def find_by_command(self, command: str) -> Optional[Plugin]:
        """
        Find the plugin handling a command.

        Args:
            command: Command name, with or without a leading '/'

        Returns:
            Matching plugin or None
        """
        command_name = command.strip().lower().lstrip("/")
        for plugin in self._plugins.values():
            if command_name in plugin.commands:
                return plugin
        return None

    def execute_command(self, command: str) -> bool:
        """
        Run the plugin handling a command.

        Plugin failures are reported and logged, never raised.

        Args:
            command: Command such as '/compare' or 'help'

        Returns:
            True if a plugin ran without raising
        """
        plugin = self.find_by_command(command)

        if plugin is None:
            self._report("error", f"Command '{command}' not found.")
            self._report("info", "Available commands: " + ", ".join(self.available_commands()))
            logger.warning("plugins.command_not_found", command=command)
            return False

        return self.run(plugin, command.strip().lower().lstrip("/"))

    def run(self, plugin: Plugin, command: str = "menu") -> bool:
        """Execute a plugin, reporting any failure."""
        logger.info("plugins.execute", name=plugin.name, command=command)
        try:
            plugin.execute(command)
            return True
        except Exception as e:
            self._report("error", f"Error executing {plugin.name}: {e}")
            logger.error("plugins.execute.failed",
                        name=plugin.name,
                        error=str(e),
                        traceback=traceback.format_exc())
            return False

    def available_commands(self) -> List[str]:
        return [f"/{cmd}" for plugin in self._plugins.values() for cmd in plugin.commands]

    def _report(self, level: str, message: str):
        if self.reporter is None:
            print(message)
        else:
            getattr(self.reporter, level)(message)
