"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of Metrics Relay:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - METRICS_RELAY_* environment variable overrides

Configuration Structure:
    - RelayConfig: Root configuration object (qualified_source)
    - ApiConfig: Endpoint, credentials, timeout
    - TrackerConfig: Source, prefix, flush interval, logging

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
"""

from metrics_relay.config.models import ApiConfig, RelayConfig, TrackerConfig
from metrics_relay.config.loader import ConfigLoader, load_config

__all__ = [
    "ApiConfig",
    "RelayConfig",
    "TrackerConfig",
    "ConfigLoader",
    "load_config",
]
