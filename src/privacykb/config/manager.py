"""Configuration loading and saving."""

import logging
import shutil
from typing import Any

import yaml

from privacykb.config.models import KnowledgeBaseConfig, LoggingConfig
from privacykb.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and saving."""

    CURRENT_VERSION = "1.0.0"

    def __init__(self, path_resolver: PathResolver | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_config_path()

    def load(self) -> KnowledgeBaseConfig:
        """Load and validate configuration.

        Returns:
            KnowledgeBaseConfig: Loaded and validated configuration
        """
        self._ensure_config_exists()
        raw_config = self._read_yaml()
        return self._create_config_object(raw_config)

    def save(self, config: KnowledgeBaseConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_yaml = yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def reload(self) -> KnowledgeBaseConfig:
        """Reload configuration from disk."""
        return self.load()

    def _ensure_config_exists(self) -> None:
        """Ensure config file exists, create it from defaults if needed."""
        if self.config_path.exists():
            return

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            defaults = KnowledgeBaseConfig(config_version=self.CURRENT_VERSION).model_dump()
            config_yaml = yaml.dump(defaults, default_flow_style=False, sort_keys=False)
            self.config_path.write_text(config_yaml)
        except PermissionError:
            # Read-only deployments run on defaults
            logger.warning("Could not write default configuration to %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary, empty when the file is absent
        """
        if not self.config_path.exists():
            return {}
        config_text = self.config_path.read_text()
        return yaml.safe_load(config_text) or {}

    def _create_config_object(self, raw_config: dict[str, Any]) -> KnowledgeBaseConfig:
        """Create KnowledgeBaseConfig object from dictionary.

        Args:
            raw_config: Configuration dictionary

        Returns:
            KnowledgeBaseConfig: Typed configuration object
        """
        if "logging" in raw_config and isinstance(raw_config["logging"], dict):
            raw_config["logging"] = LoggingConfig(**raw_config["logging"])

        expected_fields = set(KnowledgeBaseConfig.model_fields.keys())
        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Filtered out unexpected config fields: %s", unexpected_fields)

        return KnowledgeBaseConfig(**filtered_config)
