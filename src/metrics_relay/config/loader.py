"""
Configuration Loader - YAML and Environment Loading with Validation.

Loads configuration from YAML files, applies environment variable
overrides and validates the result using Pydantic models.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from metrics_relay.config.models import RelayConfig

ENV_PREFIX = "METRICS_RELAY_"

# Environment variable suffix -> (section, key)
ENV_OVERRIDES = {
    "USER": ("api", "user"),
    "TOKEN": ("api", "token"),
    "API_ENDPOINT": ("api", "endpoint"),
    "TIMEOUT": ("api", "timeout_seconds"),
    "SOURCE": ("tracker", "source"),
    "SOURCE_PIDS": ("tracker", "source_pids"),
    "PREFIX": ("tracker", "prefix"),
    "FLUSH_INTERVAL": ("tracker", "flush_interval_seconds"),
    "LOG_LEVEL": ("tracker", "log_level"),
    "LOG_TARGET": ("tracker", "log_target"),
}


class ConfigLoader:
    """Loads and validates configuration from YAML files and environment."""

    def __init__(
        self,
        base_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths
            environ: Environment to read overrides from (os.environ by default)
        """
        self._base_path = base_path or Path(".")
        self._environ = os.environ if environ is None else environ

    def load(self, config_path: Union[str, Path]) -> RelayConfig:
        """
        Load configuration from YAML file plus environment overrides.

        Args:
            config_path: Path to YAML config file

        Returns:
            Validated RelayConfig object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        path = self._resolve_path(config_path)
        config_dict = self._load_yaml(path)
        config_dict = self._merge_configs(config_dict, self._env_overrides())
        return RelayConfig.model_validate(config_dict)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> RelayConfig:
        """
        Load configuration from dictionary (no environment overrides).

        Args:
            config_dict: Configuration as dictionary

        Returns:
            Validated RelayConfig object
        """
        return RelayConfig.model_validate(config_dict)

    def load_from_env(self) -> RelayConfig:
        """Load configuration from environment variables only."""
        return RelayConfig.model_validate(self._env_overrides())

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve config path relative to base path."""
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_path / p

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _env_overrides(self) -> Dict[str, Any]:
        """Collect METRICS_RELAY_* variables into a nested config dict."""
        overrides: Dict[str, Dict[str, Any]] = {}
        for suffix, (section, key) in ENV_OVERRIDES.items():
            value = self._environ.get(ENV_PREFIX + suffix)
            if value is None or value == "":
                continue
            overrides.setdefault(section, {})[key] = value
        return overrides

    def _merge_configs(
        self,
        base: Dict[str, Any],
        overlay: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Deep merge overlay into base config."""
        result = dict(base)
        for key, value in overlay.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    base_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RelayConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to YAML config file; environment only when omitted
        base_path: Base path for resolving relative paths
        environ: Environment to read overrides from

    Returns:
        Validated RelayConfig object
    """
    loader = ConfigLoader(base_path=base_path, environ=environ)
    if config_path is None:
        return loader.load_from_env()
    return loader.load(config_path)
