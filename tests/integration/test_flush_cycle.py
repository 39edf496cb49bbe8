"""
Integration Tests for the accumulate/flush cycle.

Tests cover:
    - Counters, measures and timings delivered to the metrics service
    - Prefix, custom sources and invalid input
    - Recovery after a rejected window
    - Concurrent instrumentation while flushing
"""

from __future__ import annotations

import threading
from typing import Any, Optional

import pytest

from metrics_relay.adapters.memory_client import InMemoryMetricsClient
from metrics_relay.config.models import RelayConfig, TrackerConfig
from metrics_relay.domain.value_objects import Payload
from metrics_relay.tracking.tracker import Tracker


def queued(payload: Payload, name: str, source: Optional[str] = None) -> Any:
    """Value of a payload entry: plain value, or the whole summary dict."""
    for section in ("counters", "gauges"):
        for entry in payload.get(section, []):
            if entry["name"] == name and entry.get("source") == source:
                return entry if "count" in entry else entry["value"]
    raise AssertionError(f"No queued entry with {name!r} found")


@pytest.fixture
def service() -> InMemoryMetricsClient:
    return InMemoryMetricsClient()


@pytest.fixture
def relay(service: InMemoryMetricsClient) -> Tracker:
    config = RelayConfig(tracker=TrackerConfig(source="web.1"))
    return Tracker(config, service)


def metric_names(service: InMemoryMetricsClient) -> set:
    return {m.name for m in service.list()}


class TestFlushCycle:
    """End-to-end flush scenarios."""

    def test_flush_counters(self, relay: Tracker, service: InMemoryMetricsClient) -> None:
        """
        SCENARIO: foo, bar by 2, foo again, foo on source baz by 3
        EXPECTED: foo=2, bar=2, foo@baz=3; metrics exist remotely
        """
        relay.increment("foo")
        relay.increment("bar", 2)
        relay.increment("foo")
        relay.increment("foo", source="baz", amount=3)

        relay.flush()
        payload = service.last_payload

        assert {"foo", "bar"} <= metric_names(service)
        assert payload["source"] == relay.qualified_source
        assert queued(payload, "foo") == 2
        assert queued(payload, "foo", source="baz") == 3
        assert queued(payload, "bar") == 2

    def test_flush_sends_measures_and_timings(
        self, relay: Tracker, service: InMemoryMetricsClient
    ) -> None:
        """
        SCENARIO: Two timings on one name, a measure, a timing on worker.3
        EXPECTED: Summary for the two-sample gauge, values for the others
        """
        relay.timing("request.time.total", 122.1)
        relay.measure("items_bought", 20)
        relay.timing("request.time.total", 81.3)
        relay.timing("jobs.queued", 5, source="worker.3")

        snapshot = relay.flush()
        payload = service.last_payload

        assert {"request.time.total", "items_bought"} <= metric_names(service)
        total = queued(payload, "request.time.total")
        assert total["count"] == 2
        assert total["sum"] == pytest.approx(203.4, abs=0.1)
        assert total["min"] == 81.3
        assert total["max"] == 122.1
        assert queued(payload, "items_bought") == pytest.approx(20, abs=0.1)
        assert queued(payload, "jobs.queued", source="worker.3") == pytest.approx(5)
        assert snapshot.gauge("items_bought", "web.1").count == 1
        assert snapshot.gauge("jobs.queued", "worker.3").sum == pytest.approx(5)

    def test_flush_purges_window(self, relay: Tracker) -> None:
        """
        SCENARIO: Counters and gauges, flush
        EXPECTED: Collector empty, next increment starts from zero
        """
        relay.increment("knightrider")
        relay.timing("request.time.total", 122.1)
        relay.measure("items_bought", 20)

        relay.flush()

        assert relay.collector.is_empty()
        assert relay.collector.counter_value("knightrider", "web.1") == 0
        relay.increment("knightrider")
        relay.measure("items_bought", 5)
        assert relay.collector.counter_value("knightrider", "web.1") == 1
        assert relay.collector.gauge("items_bought", "web.1").count == 1

    def test_flush_respects_prefix(
        self, relay: Tracker, service: InMemoryMetricsClient
    ) -> None:
        """
        SCENARIO: Prefix set on the running tracker's configuration
        EXPECTED: Names delivered as testyprefix.<name>
        """
        relay.config.tracker.prefix = "testyprefix"

        relay.timing("mytime", 221.1)
        relay.increment("mycount", 4)
        relay.flush()
        payload = service.last_payload

        assert {"testyprefix.mytime", "testyprefix.mycount"} <= metric_names(service)
        assert queued(payload, "testyprefix.mytime") == pytest.approx(221.1)
        assert queued(payload, "testyprefix.mycount") == 4

    def test_flush_recovers_from_failure(
        self, relay: Tracker, service: InMemoryMetricsClient
    ) -> None:
        """
        SCENARIO: foo exists as counter; a gauge foo is flushed, then gauge boo
        EXPECTED: First window rejected, second delivered
        """
        service.submit({"counters": [{"name": "foo", "value": 12}]})

        relay.measure("foo", 2.12)
        relay.flush()
        assert relay.last_flush_succeeded is False

        relay.measure("boo", 2.12)
        relay.flush()

        assert relay.last_flush_succeeded is True
        assert "boo" in metric_names(service)
        assert [g["name"] for g in service.last_payload["gauges"]] == ["boo"]

    def test_flush_handles_invalid_metric_names(
        self, relay: Tracker, service: InMemoryMetricsClient
    ) -> None:
        """
        SCENARIO: Valid foo next to fübar and fu/bar/baz
        EXPECTED: Only foo delivered
        """
        relay.increment("foo")
        relay.increment("fübar")
        relay.measure("fu/bar/baz", 12.1)

        relay.flush()
        payload = service.last_payload

        assert metric_names(service) == {"foo"}
        assert queued(payload, "foo") == 1
        assert "gauges" not in payload

    def test_flush_handles_invalid_sources(
        self, relay: Tracker, service: InMemoryMetricsClient
    ) -> None:
        """
        SCENARIO: foo on atreides next to sources glébnöst and b/l/ak/nok
        EXPECTED: Only foo@atreides delivered
        """
        relay.increment("foo", source="atreides")
        relay.increment("bar", source="glébnöst")
        relay.measure("baz", 2.25, source="b/l/ak/nok")

        relay.flush()
        payload = service.last_payload

        assert metric_names(service) == {"foo"}
        assert queued(payload, "foo", source="atreides") == 1


class TestConcurrentFlush:
    """Instrumentation racing with flushes."""

    def test_every_increment_delivered_once(self, service: InMemoryMetricsClient) -> None:
        """
        SCENARIO: 6 threads increment while flushes run repeatedly
        EXPECTED: Delivered counter values add up to the number of increments
        """
        # Arrange
        tracker = Tracker(RelayConfig(), service)
        threads_count = 6
        per_thread = 1500
        stop = threading.Event()

        def instrument() -> None:
            for i in range(per_thread):
                tracker.increment("requests")
                tracker.timing("request.time", float(i % 50))

        def flusher() -> None:
            while not stop.is_set():
                tracker.flush()

        workers = [threading.Thread(target=instrument) for _ in range(threads_count)]
        flushing = threading.Thread(target=flusher)

        # Act
        flushing.start()
        for t in workers:
            t.start()
        for t in workers:
            t.join()
        stop.set()
        flushing.join()
        tracker.flush()

        # Assert
        delivered = 0
        samples = 0
        for payload in service.submitted:
            for entry in payload.get("counters", []):
                delivered += entry["value"]
            for entry in payload.get("gauges", []):
                samples += entry.get("count", 1)
        assert delivered == threads_count * per_thread
        assert samples == threads_count * per_thread
        assert tracker.failed_flush_count == 0
