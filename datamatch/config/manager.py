"""
Configuration management.
Single responsibility: load, validate, and save application settings.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict, fields

from .store import DEFAULT_CONFIG_FILE
from ..utils.logger import get_logger


logger = get_logger()


DEFAULT_SETTINGS_FILE = "datamatch.yaml"


@dataclass
class AppSettings:
    """Settings for one run of the tool."""

    data_dir: str = "."
    output_dir: str = "."
    config_file: str = DEFAULT_CONFIG_FILE
    export_prefix: str = "Export_result"
    log_file: Optional[str] = None
    verbose: bool = False
    use_rich: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.data_dir:
            raise ValueError("data_dir is required")
        if not self.config_file:
            raise ValueError("config_file is required")
        if not self.export_prefix:
            raise ValueError("export_prefix is required")
        for name in ("verbose", "use_rich"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false")

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def config_path(self) -> Path:
        """Saved comparison configuration, relative to the data directory."""
        path = Path(self.config_file)
        return path if path.is_absolute() else self.data_path / path


class ConfigManager:
    """
    Manage application settings.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to settings file
        """
        self.config_path = Path(config_path or DEFAULT_SETTINGS_FILE)
        self.config: Dict[str, Any] = {}
        self.settings = AppSettings()

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
        """
        Load settings from file; a missing file means defaults.

        Args:
            overrides: Values that win over the file (e.g. CLI flags);
                None values are ignored

        Returns:
            Resolved settings

        Raises:
            yaml.YAMLError: If the settings file is invalid YAML
            ValueError: If a setting is unknown or invalid
        """
        self.config = {}

        if self.config_path.exists():
            logger.info("config.loading", file=str(self.config_path))

            with open(self.config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ValueError(f"{self.config_path}: settings must be a mapping")
            self.config = loaded

        values = dict(self.config)
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value

        known = {f.name for f in fields(AppSettings)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        self.settings = AppSettings(**values)

        logger.info("config.loaded",
                   data_dir=self.settings.data_dir,
                   config_file=self.settings.config_file)

        return self.settings

    def save(self, path: Optional[Path] = None):
        """
        Save settings to file.

        Args:
            path: Output path (defaults to the path settings were loaded from)
        """
        output_path = Path(path or self.config_path)

        logger.info("config.saving", file=str(output_path))

        with open(output_path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(asdict(self.settings), f, default_flow_style=False, sort_keys=False)

        logger.info("config.saved", file=str(output_path))
