"""
Saved comparison configuration.
Single responsibility: persist key columns and field mapping between runs.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..core.table import Table
from ..utils.logger import get_logger


logger = get_logger()


DEFAULT_CONFIG_FILE = "comparison-config.json"


@dataclass
class SavedConfig:
    """Key columns (1-based) and field mapping from a previous run."""

    file_a_fields: List[int]
    file_b_fields: List[int]
    field_mapping: Dict[str, str]
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "fileAFields": list(self.file_a_fields),
            "fileBFields": list(self.file_b_fields),
            "fieldMapping": dict(self.field_mapping),
            "createdAt": self.created_at,
        }
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedConfig":
        """
        Build from the JSON document.

        Raises:
            ValueError: If a required key is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")

        file_a_fields = data.get("fileAFields")
        file_b_fields = data.get("fileBFields")
        field_mapping = data.get("fieldMapping")

        for name, value in (("fileAFields", file_a_fields), ("fileBFields", file_b_fields)):
            if not isinstance(value, list) or not all(
                    isinstance(v, int) and not isinstance(v, bool) for v in value):
                raise ValueError(f"{name} must be a list of column numbers")

        if not isinstance(field_mapping, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in field_mapping.items()):
            raise ValueError("fieldMapping must map column names to column names")

        description = data.get("description")
        return cls(
            file_a_fields=file_a_fields,
            file_b_fields=file_b_fields,
            field_mapping=field_mapping,
            created_at=str(data.get("createdAt", "")),
            description=str(description) if description is not None else None,
        )


class ConfigStore:
    """
    Reads and writes the saved configuration file.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize store.

        Args:
            config_path: Location of the JSON file
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_FILE)

    def save(self, file_a_fields: Sequence[int], file_b_fields: Sequence[int],
             field_mapping: Dict[str, str],
             description: Optional[str] = None) -> SavedConfig:
        """
        Write a configuration, replacing any previous one.

        Args:
            file_a_fields: 1-based key column numbers in File A
            file_b_fields: 1-based key column numbers in File B
            field_mapping: File A header -> File B header
            description: Optional note shown when the config is offered again

        Returns:
            The saved record
        """
        config = SavedConfig(
            file_a_fields=list(file_a_fields),
            file_b_fields=list(file_b_fields),
            field_mapping=dict(field_mapping),
            description=description or None,
        )

        logger.info("config_store.saving", file=str(self.config_path))

        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info("config_store.saved", file=str(self.config_path))
        return config

    def load(self) -> Optional[SavedConfig]:
        """
        Read the saved configuration.

        Returns:
            SavedConfig, or None when the file is missing or unusable
        """
        if not self.config_path.exists():
            return None

        try:
            with open(self.config_path, encoding="utf-8") as f:
                data = json.load(f)
            config = SavedConfig.from_dict(data)
        except (ValueError, UnicodeDecodeError, OSError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("config_store.invalid",
                          file=str(self.config_path),
                          error=str(e))
            return None

        logger.info("config_store.loaded",
                   file=str(self.config_path),
                   key_columns=len(config.file_a_fields))
        return config

    @staticmethod
    def is_usable(config: Optional[SavedConfig], table_a: Table, table_b: Table) -> bool:
        """
        Check a saved configuration against the current tables.

        Args:
            config: Loaded configuration, possibly None
            table_a: Current reference table
            table_b: Current extraction table

        Returns:
            True when the key columns pair up and exist in both tables
        """
        if config is None:
            return False

        if not config.file_a_fields or len(config.file_b_fields) != len(config.file_a_fields):
            return False

        in_range_a = all(1 <= n <= table_a.column_count for n in config.file_a_fields)
        in_range_b = all(1 <= n <= table_b.column_count for n in config.file_b_fields)
        return in_range_a and in_range_b
