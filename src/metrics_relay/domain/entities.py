"""
Core Domain Entities.

Counter and gauge entries as they leave the collector, and the Snapshot
that carries one accumulation window to the flush.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field


class MetricKey(NamedTuple):
    """Identity of an entry within one window."""

    name: str
    source: Optional[str] = None


class CounterEntry(BaseModel):
    """Accumulated counter value for one (name, source)."""

    name: str = Field(..., description="Fully prefixed metric name")
    source: Optional[str] = Field(default=None, description="Effective source")
    value: float = Field(..., description="Sum of increments in the window")

    model_config = {"frozen": True}

    @property
    def key(self) -> MetricKey:
        return MetricKey(self.name, self.source)


class GaugeEntry(BaseModel):
    """Statistical summary of the samples for one (name, source)."""

    name: str = Field(..., description="Fully prefixed metric name")
    source: Optional[str] = Field(default=None, description="Effective source")
    count: int = Field(..., ge=1)
    sum: float
    min: float
    max: float

    model_config = {"frozen": True}

    @property
    def key(self) -> MetricKey:
        return MetricKey(self.name, self.source)

    @property
    def mean(self) -> float:
        return self.sum / self.count


class Snapshot(BaseModel):
    """Immutable copy of one window, produced once per flush."""

    counters: Tuple[CounterEntry, ...] = ()
    gauges: Tuple[GaugeEntry, ...] = ()
    taken_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.counters and not self.gauges

    def counter(self, name: str, source: Optional[str] = None) -> Optional[float]:
        """Value of a counter in this window, None if it was never incremented."""
        for entry in self.counters:
            if entry.name == name and entry.source == source:
                return entry.value
        return None

    def gauge(self, name: str, source: Optional[str] = None) -> Optional[GaugeEntry]:
        """Gauge summary in this window, None if it was never sampled."""
        for entry in self.gauges:
            if entry.name == name and entry.source == source:
                return entry
        return None
