"""
Configuration management for the promo curator.
"""

import json
import os
from typing import Any, Dict, Optional

import yaml

from ..models.config import InvalidUrlPolicy, ValidatorConfig

DEFAULT_CONFIG_PATHS = [
    "config/promo_curator.yaml",
    "config/promo_curator.yml",
    "config/promo_curator.json",
    "promo_curator.yaml",
    "promo_curator.yml",
    "promo_curator.json",
]


class ConfigurationManager:
    """Loads and validates validator configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, the standard
                locations are searched and defaults are used when none exists.
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[ValidatorConfig] = None

    def _find_config_file(self) -> Optional[str]:
        for path in DEFAULT_CONFIG_PATHS:
            if os.path.exists(path):
                return path
        return None

    def load_config(self) -> ValidatorConfig:
        """
        Load configuration from file, or defaults when there is no file.

        Returns:
            Validated ValidatorConfig.

        Raises:
            ValueError: If the configuration is invalid or cannot be parsed.
            FileNotFoundError: If an explicit configuration path doesn't exist.
        """
        if self.config_path is None:
            config = ValidatorConfig()
            config.validate()
            self._config = config
            return config

        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self.config_path.endswith(".json"):
                    raw_config = json.load(f)
                else:
                    raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}") from e

        raw_config = self._expand_env_vars(raw_config or {})
        config = self._parse_config(raw_config)
        config.validate()

        self._config = config
        return config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand ``${VAR_NAME}`` values from the environment."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> ValidatorConfig:
        """Parse raw configuration dictionary into ValidatorConfig."""
        if not isinstance(raw_config, dict):
            raise ValueError("Configuration must be a mapping")

        catalog_data = self._get_section(raw_config, "catalog")
        validation_data = self._get_section(raw_config, "validation")
        logging_data = self._get_section(raw_config, "logging")

        policy = validation_data.get("invalid_url_policy", InvalidUrlPolicy.RAISE.value)
        try:
            invalid_url_policy = InvalidUrlPolicy(policy)
        except ValueError:
            valid = [p.value for p in InvalidUrlPolicy]
            raise ValueError(
                f"invalid_url_policy must be one of: {valid}"
            ) from None

        threshold = validation_data.get("title_similarity_threshold", 0.9)
        if isinstance(threshold, str):
            try:
                threshold = float(threshold)
            except ValueError:
                raise ValueError(
                    f"Title similarity threshold must be a number: {threshold!r}"
                ) from None

        return ValidatorConfig(
            catalog_path=self._resolve_catalog_path(catalog_data.get("path")),
            title_similarity_threshold=threshold,
            invalid_url_policy=invalid_url_policy,
            log_level=str(logging_data.get("level", "WARNING")).upper(),
            log_dir=logging_data.get("log_dir"),
        )

    def _get_section(self, raw_config: Dict[str, Any], section: str) -> Dict[str, Any]:
        section_data = raw_config.get(section)
        if section_data is None:
            return {}
        if not isinstance(section_data, dict):
            raise ValueError(f"'{section}' section must be a mapping")
        return section_data

    def _resolve_catalog_path(self, path: Optional[str]) -> Optional[str]:
        """Resolve a relative catalog path against the configuration file's directory."""
        if not isinstance(path, str) or not path.strip() or os.path.isabs(path):
            return path
        config_dir = os.path.dirname(os.path.abspath(self.config_path))
        return os.path.join(config_dir, path)

    def get_config(self) -> ValidatorConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config

    def get_config_template(self) -> Dict[str, Any]:
        """Return an example configuration structure."""
        return {
            "catalog": {"path": "data/promos.yaml"},
            "validation": {
                "title_similarity_threshold": 0.9,
                "invalid_url_policy": "raise",
            },
            "logging": {"level": "WARNING", "log_dir": None},
        }
