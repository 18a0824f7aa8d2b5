"""Configuration management."""

from .manager import ConfigManager, AppSettings
from .store import ConfigStore, SavedConfig

__all__ = ["ConfigManager", "AppSettings", "ConfigStore", "SavedConfig"]
