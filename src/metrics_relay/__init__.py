"""
Metrics Relay - In-Process Metrics Aggregation and Delivery.

Application code reports counters, gauges and timings. The relay keeps
them in memory and a flush cycle ships one aggregated window at a time
to a remote metrics service. Instrumentation calls never perform
network I/O and never raise into the calling code.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability (collector, client)
    - Configuration-driven behavior via YAML and environment

Main Components:
    - domain: Entries, snapshots and per-call options
    - validation: Metric name and source rules
    - interfaces: Client protocol for the remote service
    - adapters: In-memory collector, HTTP and in-memory clients
    - tracking: Tracker facade, groups, payload builder, flush worker
    - resilience: Circuit breaker around submit
    - config: Configuration models and loaders

Example:
    >>> from metrics_relay import Tracker, load_config
    >>> from metrics_relay.adapters import HttpMetricsClient
    >>> config = load_config("config/relay.yaml")
    >>> tracker = Tracker(config, HttpMetricsClient(config.api))
    >>> tracker.increment("requests.total")
    >>> tracker.timing("request.time", 12.5)
    >>> snapshot = tracker.flush()

"""

import logging
import sys
from typing import Optional, Union

__version__ = "0.4.0"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Level names accepted in TrackerConfig.log_level
LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def configure_logging(
    level: Union[int, str] = logging.INFO,
    target: Optional[str] = None,
    format: str = LOG_FORMAT,
) -> logging.Handler:
    """
    Configure logging for Metrics Relay.

    Attaches a single handler to the package logger. Calling it again
    replaces the handler installed by the previous call.

    Args:
        level: Logging level or one of the LOG_LEVELS names
        target: "stderr" (default), "stdout" or a file path
        format: Log message format

    Returns:
        The installed handler

    Example:
        >>> import metrics_relay
        >>> metrics_relay.configure_logging("debug", "stdout")
    """
    if isinstance(level, str):
        level = LOG_LEVELS[level.lower()]

    if target is None or target == "stderr":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    elif target == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(format, datefmt="%Y-%m-%d %H:%M:%S"))

    package_logger = logging.getLogger("metrics_relay")
    for existing in list(package_logger.handlers):
        if getattr(existing, "_metrics_relay_handler", False):
            package_logger.removeHandler(existing)
            existing.close()
    handler._metrics_relay_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


from metrics_relay.config.loader import load_config  # noqa: E402
from metrics_relay.config.models import RelayConfig  # noqa: E402
from metrics_relay.domain.entities import Snapshot  # noqa: E402
from metrics_relay.tracking.tracker import Tracker  # noqa: E402
from metrics_relay.tracking.factory import create_tracker  # noqa: E402

__all__ = [
    "configure_logging",
    "create_tracker",
    "load_config",
    "RelayConfig",
    "Snapshot",
    "Tracker",
]
