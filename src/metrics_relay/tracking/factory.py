"""
Tracker Factory - Wiring from Configuration.

Builds a ready-to-use Tracker: logging configured from the tracker
settings, an HTTP client for the configured endpoint and a circuit
breaker around submits.
"""

from __future__ import annotations

import logging
from typing import Optional

from metrics_relay import configure_logging
from metrics_relay.adapters.http_client import HttpMetricsClient
from metrics_relay.config.loader import load_config
from metrics_relay.config.models import RelayConfig
from metrics_relay.interfaces.metrics_client import MetricsClient
from metrics_relay.resilience.error_handler import ErrorHandler
from metrics_relay.tracking.tracker import Tracker

logger = logging.getLogger(__name__)


def create_tracker(
    config: Optional[RelayConfig] = None,
    client: Optional[MetricsClient] = None,
    error_handler: Optional[ErrorHandler] = None,
    start_worker: bool = False,
    setup_logging: bool = True,
) -> Tracker:
    """
    Create a Tracker from configuration.

    Args:
        config: Relay configuration (loaded from the environment when omitted)
        client: Metrics client (HttpMetricsClient for config.api when omitted)
        error_handler: Circuit breaker (a default ErrorHandler when omitted)
        start_worker: Start periodic background flushing
        setup_logging: Install the log handler from config.tracker

    Returns:
        Configured Tracker
    """
    if config is None:
        config = load_config()

    if setup_logging:
        configure_logging(config.tracker.log_level, config.tracker.log_target)

    if client is None:
        if not config.api.has_credentials:
            logger.warning("No API credentials configured, submits will be rejected")
        client = HttpMetricsClient(config.api)

    tracker = Tracker(
        config,
        client,
        error_handler=error_handler if error_handler is not None else ErrorHandler(),
    )
    if start_worker:
        tracker.start_worker()
    return tracker
