"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package. Following the
Hexagonal Architecture (Ports & Adapters) pattern.

Collectors:
    - InMemoryCollector: Lock-guarded accumulation window

Clients:
    - HttpMetricsClient: requests-based client for the remote service
    - InMemoryMetricsClient: Fake service for development/testing

Design Principles:
    - All clients implement the MetricsClient protocol
    - Easily swappable via Dependency Injection
"""

from metrics_relay.adapters.memory_collector import InMemoryCollector
from metrics_relay.adapters.memory_client import InMemoryMetricsClient
from metrics_relay.adapters.http_client import HttpMetricsClient

__all__ = [
    "InMemoryCollector",
    "InMemoryMetricsClient",
    "HttpMetricsClient",
]
