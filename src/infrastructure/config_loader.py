"""YAML-backed table configuration loader."""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from ..domain.exceptions import ConfigurationError
from ..domain.interfaces import ConfigLoader

logger = logging.getLogger(__name__)

CONFIG_SUFFIXES = (".yml", ".yaml")
# Top-level sections that, when present, must themselves be mappings
MAPPING_SECTIONS = ("compaction", "candidates")


class YamlConfigLoader(ConfigLoader):
    """Loads per-table compaction settings from `<config_dir>/<table_id>.yml|.yaml`."""

    def __init__(self, config_dir: str = "config/tables") -> None:
        """Initialize YAML config loader.

        Args:
            config_dir: Directory holding one YAML file per table.
        """
        self._config_dir = Path(config_dir)

    def find_config_file(self, table_id: str) -> Path:
        """Locate the configuration file of a table, preferring .yml over .yaml.

        Raises:
            FileNotFoundError: If neither file exists.
        """
        for suffix in CONFIG_SUFFIXES:
            candidate = self._config_dir / f"{table_id}{suffix}"
            if candidate.is_file():
                return candidate
        raise FileNotFoundError(
            f"Configuration file not found for table: {table_id} (searched {self._config_dir})"
        )

    def load_table_config(self, table_id: str) -> Dict[str, Any]:
        """Load and shape-check configuration for a table.

        Args:
            table_id: Identifier of the table configuration to load.

        Returns:
            Table configuration; an empty file yields an empty dict.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            ConfigurationError: If the document or one of its sections is not a mapping.
        """
        config_file = self.find_config_file(table_id)
        with open(config_file, encoding="utf-8") as f:
            document = yaml.safe_load(f)

        if document is None:
            logger.warning("Configuration %s is empty; using defaults", config_file)
            return {}
        if not isinstance(document, Mapping):
            raise ConfigurationError(
                f"Configuration {config_file} must be a mapping, got {type(document).__name__}"
            )

        for section in MAPPING_SECTIONS:
            value = document.get(section)
            if value is not None and not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"Section '{section}' in {config_file} must be a mapping, "
                    f"got {type(value).__name__}"
                )

        logger.debug("Loaded configuration for table %s from %s", table_id, config_file)
        return dict(document)
