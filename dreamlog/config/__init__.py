"""Simple YAML configuration loader for Dreamlog."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "dreamlog.yaml"


class DreamlogConfig:
    """Dreamlog configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, looks for dreamlog.yaml
                        in current directory and parent directories.
        """
        if config_path is None:
            self.config_file = self._find_config_file()
        else:
            self.config_file = Path(config_path)

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    @staticmethod
    def _find_config_file() -> Path:
        """Search the current directory and its parents for dreamlog.yaml."""
        cwd = Path.cwd()
        for directory in [cwd, *cwd.parents]:
            candidate = directory / CONFIG_FILENAME
            if candidate.exists():
                return candidate
        return cwd / CONFIG_FILENAME

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ValueError(f"Failed to load configuration: {e}")

        if not config:
            raise ValueError("Configuration file is empty")
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        for section, key in (('storage', 'data_directory'),
                             ('logging', 'file_path'),
                             ('analysis', 'catalogue_path')):
            values = config.get(section)
            if not isinstance(values, dict) or not values.get(key):
                continue
            path = values[key]
            if not os.path.isabs(path):
                values[key] = str(config_dir / path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'capture.locale').

        Args:
            key_path: Dot-separated key path (e.g., 'storage.backend')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_data_directory(self) -> str:
        """Get data directory path."""
        data_dir = self.get('storage.data_directory', 'data')
        return str(Path(data_dir).absolute())

    def get_locale(self) -> str:
        """Get the speech capture locale."""
        return self.get('capture.locale', 'en-US')

    def get_tick_interval(self) -> float:
        """Get the duration timer interval in seconds."""
        interval = float(self.get('capture.tick_interval_seconds', 1.0))
        if interval <= 0:
            raise ValueError(f"capture.tick_interval_seconds must be positive, got {interval}")
        return interval

    def get_storage_backend(self) -> str:
        """Get the dream repository backend name ('memory' or 'file')."""
        backend = str(self.get('storage.backend', 'memory')).lower()
        if backend not in ('memory', 'file'):
            raise ValueError(f"Unknown storage backend: {backend}")
        return backend

    def get_catalogue_path(self) -> Optional[str]:
        """Get an override path for the analysis keyword catalogue, if any."""
        return self.get('analysis.catalogue_path')
