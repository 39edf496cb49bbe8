"""
Domain Layer - Entries, Snapshots and Options.

Entities:
    - MetricKey: (name, source) identity of an entry
    - CounterEntry: Accumulated counter value
    - GaugeEntry: count/sum/min/max summary of samples
    - Snapshot: Immutable copy of one accumulation window

Value Objects:
    - MetricOptions: Per-call source and amount overrides
    - SubmitResult: Outcome of a client submit
    - MetricDescriptor: A metric known to the remote service

Design Principles:
    - Immutable where possible (frozen pydantic models)
    - No infrastructure dependencies
"""

from metrics_relay.domain.entities import (
    CounterEntry,
    GaugeEntry,
    MetricKey,
    Snapshot,
)
from metrics_relay.domain.value_objects import (
    MetricDescriptor,
    MetricListing,
    MetricOptions,
    Payload,
    SubmitResult,
)

__all__ = [
    "CounterEntry",
    "GaugeEntry",
    "MetricKey",
    "Snapshot",
    "MetricDescriptor",
    "MetricListing",
    "MetricOptions",
    "Payload",
    "SubmitResult",
]
