"""
Interfaces Layer - Abstract Protocols for Dependencies.

Protocols:
    - MetricsClient: Remote metrics service (submit, list, delete)

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - All methods have clear contracts in docstrings
"""

from metrics_relay.interfaces.metrics_client import (
    ClientError,
    MetricsClient,
    SubmitRejected,
)

__all__ = ["ClientError", "MetricsClient", "SubmitRejected"]
