"""
Metric Groups - Shared Name Prefixes.

    db = tracker.group("db")
    db.increment("queries")        # -> "db.queries"
    db.group("pool").measure("size", 8)  # -> "db.pool.size"
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from metrics_relay.domain.value_objects import MetricOptions
    from metrics_relay.tracking.tracker import Tracker


class MetricGroup:
    """Forwards calls to a Tracker with a name prefix."""

    def __init__(self, tracker: Tracker, prefix: str) -> None:
        self.tracker = tracker
        self.prefix = prefix

    def _name(self, name: str) -> str:
        return f"{self.prefix}.{name}"

    def increment(
        self,
        name: str,
        amount: float = 1,
        source: Optional[str] = None,
        options: Optional[MetricOptions] = None,
    ) -> None:
        self.tracker.increment(self._name(name), amount, source=source, options=options)

    def measure(
        self,
        name: str,
        value: float,
        source: Optional[str] = None,
        options: Optional[MetricOptions] = None,
    ) -> None:
        self.tracker.measure(self._name(name), value, source=source, options=options)

    def timing(
        self,
        name: str,
        value_ms: float,
        source: Optional[str] = None,
        options: Optional[MetricOptions] = None,
    ) -> None:
        self.tracker.timing(self._name(name), value_ms, source=source, options=options)

    @contextmanager
    def time(self, name: str, source: Optional[str] = None) -> Iterator[None]:
        with self.tracker.time(self._name(name), source=source):
            yield

    def group(self, prefix: str) -> MetricGroup:
        return MetricGroup(self.tracker, self._name(prefix))
