"""
In-Memory Collector.

Accumulates counters and gauge summaries for the current window and
rotates the window atomically at flush time.

Design Notes:
    - One Lock guards both maps; it is held for a dict update only
    - snapshot_and_reset swaps in fresh maps under the lock and builds
      the immutable Snapshot after releasing it
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional

from metrics_relay.domain.entities import (
    CounterEntry,
    GaugeEntry,
    MetricKey,
    Snapshot,
)


@dataclass
class GaugeAggregate:
    """Mutable running summary for one gauge within a window."""

    count: int
    sum: float
    min: float
    max: float

    @classmethod
    def seed(cls, value: float) -> "GaugeAggregate":
        return cls(count=1, sum=value, min=value, max=value)

    def add(self, value: float) -> None:
        self.count += 1
        self.sum += value
        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value


class InMemoryCollector:
    """Thread-safe store for one accumulation window."""

    def __init__(self) -> None:
        """Initialize an empty window."""
        self._counters: Dict[MetricKey, float] = {}
        self._gauges: Dict[MetricKey, GaugeAggregate] = {}
        self._lock = Lock()

    def increment_counter(
        self,
        name: str,
        source: Optional[str] = None,
        amount: float = 1,
    ) -> None:
        """Add amount to the counter, creating it if needed."""
        key = MetricKey(name, source)
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def record_sample(
        self,
        name: str,
        source: Optional[str],
        value: float,
    ) -> None:
        """Fold one sample into the gauge summary, creating it if needed."""
        key = MetricKey(name, source)
        with self._lock:
            aggregate = self._gauges.get(key)
            if aggregate is None:
                self._gauges[key] = GaugeAggregate.seed(value)
            else:
                aggregate.add(value)

    def snapshot_and_reset(self) -> Snapshot:
        """
        Close the current window and start an empty one.

        Returns:
            Snapshot of everything accumulated since the previous call
        """
        with self._lock:
            counters, self._counters = self._counters, {}
            gauges, self._gauges = self._gauges, {}
            taken_at = datetime.now(timezone.utc)

        # The swapped-out maps are no longer reachable by writers
        return Snapshot(
            counters=tuple(
                CounterEntry(name=key.name, source=key.source, value=value)
                for key, value in counters.items()
            ),
            gauges=tuple(
                GaugeEntry(
                    name=key.name,
                    source=key.source,
                    count=agg.count,
                    sum=agg.sum,
                    min=agg.min,
                    max=agg.max,
                )
                for key, agg in gauges.items()
            ),
            taken_at=taken_at,
        )

    def counter_value(self, name: str, source: Optional[str] = None) -> float:
        """Current counter value; absent counters read as 0."""
        with self._lock:
            return self._counters.get(MetricKey(name, source), 0)

    def gauge(self, name: str, source: Optional[str] = None) -> Optional[GaugeEntry]:
        """Copy of the current gauge summary, None if not sampled yet."""
        with self._lock:
            aggregate = self._gauges.get(MetricKey(name, source))
            if aggregate is None:
                return None
            return GaugeEntry(
                name=name,
                source=source,
                count=aggregate.count,
                sum=aggregate.sum,
                min=aggregate.min,
                max=aggregate.max,
            )

    def is_empty(self) -> bool:
        """Check whether the current window holds no entries."""
        with self._lock:
            return not self._counters and not self._gauges

    def __len__(self) -> int:
        with self._lock:
            return len(self._counters) + len(self._gauges)
