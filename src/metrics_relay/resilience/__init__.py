"""
Resilience Package - Fault Tolerance around the Remote Service.

This package provides:
    - ErrorHandler: Circuit breaker for submits to a failing service

Design Principles:
    - Failures are contained to one window of metrics
    - Failed windows are discarded, never retried
    - Circuit breaker for persistent failures
"""

from metrics_relay.resilience.error_handler import (
    CircuitBreakerConfig,
    CircuitBreakerOpen,
    CircuitState,
    ErrorHandler,
)

__all__ = [
    "CircuitBreakerConfig",
    "CircuitBreakerOpen",
    "CircuitState",
    "ErrorHandler",
]
