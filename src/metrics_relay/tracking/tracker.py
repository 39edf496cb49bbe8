"""
Tracker - Public Instrumentation API and Flush Orchestration.

Instrumentation calls (increment, measure, timing) only touch the
collector's in-memory maps. flush() closes the window, serializes it
and hands it to the metrics client; whatever happens there stays
inside flush().
"""

from __future__ import annotations

import logging
import math
import os
import threading
import time
from contextlib import contextmanager
from numbers import Real
from typing import Any, Iterator, Optional, Tuple

from metrics_relay.adapters.memory_collector import InMemoryCollector
from metrics_relay.config.models import RelayConfig
from metrics_relay.domain.entities import Snapshot
from metrics_relay.domain.value_objects import MetricOptions, Payload, SubmitResult
from metrics_relay.interfaces.metrics_client import MetricsClient, SubmitRejected
from metrics_relay.resilience.error_handler import CircuitBreakerOpen, ErrorHandler
from metrics_relay.tracking.group import MetricGroup
from metrics_relay.tracking.payload import build_payload, payload_size
from metrics_relay.tracking.worker import FlushWorker
from metrics_relay.validation.name_validator import is_valid_name, is_valid_source

logger = logging.getLogger(__name__)

SUBMIT_CIRCUIT = "metrics_submit"


class Tracker:
    """Facade for instrumentation calls and periodic delivery."""

    def __init__(
        self,
        config: RelayConfig,
        client: MetricsClient,
        collector: Optional[InMemoryCollector] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        """
        Initialize tracker with all dependencies.

        Args:
            config: Relay configuration (source, prefix, flush interval)
            client: Remote metrics service
            collector: Accumulation window (a fresh one when omitted)
            error_handler: Circuit breaker around submit (optional)
        """
        self.config = config
        self.client = client
        self.collector = collector if collector is not None else InMemoryCollector()
        self.error_handler = error_handler

        self.flush_count = 0
        self.failed_flush_count = 0
        self.last_flush_succeeded: Optional[bool] = None

        self._flush_lock = threading.Lock()
        self._worker: Optional[FlushWorker] = None
        self._pid = os.getpid()

    @property
    def qualified_source(self) -> Optional[str]:
        return self.config.qualified_source

    # =========================================================================
    # Instrumentation
    # =========================================================================

    def increment(
        self,
        name: str,
        amount: float = 1,
        source: Optional[str] = None,
        options: Optional[MetricOptions] = None,
    ) -> None:
        """
        Add to a counter.

        Args:
            name: Metric name (prefix is applied)
            amount: Increment, defaults to 1
            source: Overrides the qualified source
            options: Per-call options; set fields win over the arguments
        """
        if options is not None:
            if options.amount is not None:
                amount = options.amount
            if options.source is not None:
                source = options.source

        amount = _as_number(amount)
        if amount is None or amount < 0:
            logger.warning(f"Ignoring increment of {name!r}: invalid amount")
            return

        key = self._accept(name, source)
        if key is not None:
            self.collector.increment_counter(key[0], key[1], amount)

    def measure(
        self,
        name: str,
        value: float,
        source: Optional[str] = None,
        options: Optional[MetricOptions] = None,
    ) -> None:
        """
        Record one sample for a gauge.

        Args:
            name: Metric name (prefix is applied)
            value: Sampled value
            source: Overrides the qualified source
            options: Per-call options (source)
        """
        if options is not None and options.source is not None:
            source = options.source

        value = _as_number(value)
        if value is None:
            logger.warning(f"Ignoring measure of {name!r}: invalid value")
            return

        key = self._accept(name, source)
        if key is not None:
            self.collector.record_sample(key[0], key[1], value)

    def timing(
        self,
        name: str,
        value_ms: float,
        source: Optional[str] = None,
        options: Optional[MetricOptions] = None,
    ) -> None:
        """Record a duration in milliseconds (same aggregation as measure)."""
        self.measure(name, value_ms, source=source, options=options)

    @contextmanager
    def time(self, name: str, source: Optional[str] = None) -> Iterator[None]:
        """Time the enclosed block and record it as a timing."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timing(name, (time.perf_counter() - start) * 1000.0, source=source)

    def group(self, prefix: str) -> MetricGroup:
        """Namespace for metrics sharing a name prefix."""
        return MetricGroup(self, prefix)

    def _accept(
        self, name: Any, source: Optional[str]
    ) -> Optional[Tuple[str, Optional[str]]]:
        """Qualify name and source; None when the call must be dropped."""
        if not isinstance(name, str):
            logger.debug(f"Dropping metric with non-string name {name!r}")
            return None

        prefix = self.config.tracker.prefix
        if prefix:
            name = f"{prefix}.{name}"
        if not is_valid_name(name):
            logger.debug(f"Dropping metric with invalid name {name!r}")
            return None

        if not source:
            source = self.qualified_source
        if source is not None and not is_valid_source(source):
            logger.debug(f"Dropping metric {name} with invalid source {source!r}")
            return None

        return name, source

    # =========================================================================
    # Flush
    # =========================================================================

    def flush(self) -> Snapshot:
        """
        Close the current window and deliver it.

        A failed delivery is logged and the window is dropped; the
        next flush only carries what accumulated after this one.

        Returns:
            Snapshot of the window that was closed
        """
        with self._flush_lock:
            self.flush_count += 1
            snapshot = Snapshot()
            try:
                snapshot = self.collector.snapshot_and_reset()
                source = self.qualified_source
                if source is not None and not is_valid_source(source):
                    source = None
                payload = build_payload(snapshot, source)
            except Exception:
                logger.exception("Unexpected error while closing metrics window")
                self._record_failure("window could not be serialized")
                return snapshot

            if payload_size(payload) == 0:
                logger.debug("Nothing to flush")
                return snapshot

            try:
                result = self._submit(payload)
            except CircuitBreakerOpen as e:
                self._record_failure(f"{e}; dropped {payload_size(payload)} metrics")
            except SubmitRejected as e:
                self._record_failure(f"submit rejected: {e.message}")
            except Exception:
                logger.exception("Unexpected error while submitting metrics")
                self._record_failure("unexpected client error")
            else:
                self.last_flush_succeeded = True
                logger.debug(
                    f"Flushed {payload_size(payload)} metrics "
                    f"(status {result.status_code})"
                )

            return snapshot

    def _submit(self, payload: Payload) -> SubmitResult:
        """Submit through the circuit breaker when one is configured."""

        def attempt() -> SubmitResult:
            result = self.client.submit(payload)
            if not result.ok:
                raise SubmitRejected(result.reason or "unknown error", result.status_code)
            return result

        if self.error_handler is None:
            return attempt()
        return self.error_handler.with_circuit_breaker(attempt, SUBMIT_CIRCUIT)

    def _record_failure(self, reason: str) -> None:
        self.failed_flush_count += 1
        self.last_flush_succeeded = False
        logger.error(f"Metrics flush failed, window discarded: {reason}")

    # =========================================================================
    # Background flushing
    # =========================================================================

    def start_worker(self) -> FlushWorker:
        """Start flushing every flush_interval_seconds in a daemon thread."""
        if self._worker is None or not self._worker.is_alive():
            self._worker = FlushWorker(
                self.flush, self.config.tracker.flush_interval_seconds
            )
            self._worker.start()
            logger.info(
                f"Flush worker started (pid {os.getpid()}, "
                f"every {self.config.tracker.flush_interval_seconds}s)"
            )
        return self._worker

    def stop_worker(self, flush: bool = True) -> None:
        """Stop the flush worker, flushing one last time by default."""
        if self._worker is not None:
            self._worker.stop()
            self._worker = None
        if flush:
            self.flush()

    def check_worker(self) -> None:
        """
        Restart the flush worker after a fork.

        Threads do not survive fork(), so a forked process would keep
        accumulating without ever flushing. The window inherited from
        the parent is dropped because the parent delivers it.
        """
        pid = os.getpid()
        if pid == self._pid:
            return
        self._pid = pid
        # Locks held by other parent threads at fork time are never released here
        self._flush_lock = threading.Lock()
        self.collector = InMemoryCollector()
        self._worker = None
        self.start_worker()


def _as_number(value: Any) -> Optional[float]:
    """Finite real numbers as float; None for bools, NaN, infinities and the rest."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value
