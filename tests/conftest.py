"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from metrics_relay.adapters.memory_client import InMemoryMetricsClient
from metrics_relay.adapters.memory_collector import InMemoryCollector
from metrics_relay.config.models import RelayConfig, TrackerConfig
from metrics_relay.tracking.tracker import Tracker


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def default_config() -> RelayConfig:
    """Configuration without source or prefix."""
    return RelayConfig()


@pytest.fixture
def sourced_config() -> RelayConfig:
    """Configuration with a process source."""
    return RelayConfig(tracker=TrackerConfig(source="web.1"))


@pytest.fixture
def collector() -> InMemoryCollector:
    """Create an empty collector."""
    return InMemoryCollector()


@pytest.fixture
def client() -> InMemoryMetricsClient:
    """Create a fake metrics service."""
    return InMemoryMetricsClient()


@pytest.fixture
def tracker(
    default_config: RelayConfig,
    client: InMemoryMetricsClient,
    collector: InMemoryCollector,
) -> Tracker:
    """Tracker wired to the fake service, no source, no prefix."""
    return Tracker(default_config, client, collector=collector)


@pytest.fixture
def sourced_tracker(
    sourced_config: RelayConfig,
    client: InMemoryMetricsClient,
) -> Tracker:
    """Tracker whose qualified source is web.1."""
    return Tracker(sourced_config, client)
