"""Menu plugins."""

from .base import Plugin, PluginRegistry

__all__ = ["Plugin", "PluginRegistry"]
