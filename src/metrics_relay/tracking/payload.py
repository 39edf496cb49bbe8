"""
Payload Builder - Snapshot to Wire Format.

    {
      "source": "web.1",              # qualified source, when there is one
      "measure_time": 1700000000,
      "counters": [{"name": "foo", "value": 2}, ...],
      "gauges": [{"name": "m", "value": 20.0},
                 {"name": "t", "count": 2, "sum": 203.4, "min": 81.3, "max": 122.1}]
    }

Entries carry "source" only when it differs from the top-level source.
Entries whose accumulated value left the float range are not sent.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from metrics_relay.domain.entities import CounterEntry, GaugeEntry, Snapshot
from metrics_relay.domain.value_objects import Payload, PayloadEntry
from metrics_relay.validation.name_validator import is_valid_name, is_valid_source

logger = logging.getLogger(__name__)


def build_payload(snapshot: Snapshot, source: Optional[str] = None) -> Payload:
    """
    Serialize a Snapshot into the wire payload.

    Args:
        snapshot: Window to serialize
        source: Qualified source sent once at the top level

    Returns:
        Payload dict; empty sections are left out
    """
    payload: Payload = {"measure_time": int(snapshot.taken_at.timestamp())}
    if source:
        payload["source"] = source

    counters = [
        _counter_entry(entry, source)
        for entry in snapshot.counters
        if _is_sendable(entry.name, entry.source, entry.value)
    ]
    gauges = [
        _gauge_entry(entry, source)
        for entry in snapshot.gauges
        if _is_sendable(entry.name, entry.source, entry.sum)
    ]

    if counters:
        payload["counters"] = counters
    if gauges:
        payload["gauges"] = gauges
    return payload


def payload_size(payload: Payload) -> int:
    """Number of counter and gauge entries in a payload."""
    return len(payload.get("counters", [])) + len(payload.get("gauges", []))


def _counter_entry(entry: CounterEntry, default_source: Optional[str]) -> PayloadEntry:
    value = entry.value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    record: PayloadEntry = {"name": entry.name, "value": value}
    _attach_source(record, entry.source, default_source)
    return record


def _gauge_entry(entry: GaugeEntry, default_source: Optional[str]) -> PayloadEntry:
    record: PayloadEntry = {"name": entry.name}
    if entry.count == 1:
        record["value"] = entry.sum
    else:
        record.update(count=entry.count, sum=entry.sum, min=entry.min, max=entry.max)
    _attach_source(record, entry.source, default_source)
    return record


def _attach_source(
    record: PayloadEntry, source: Optional[str], default_source: Optional[str]
) -> None:
    if source and source != default_source:
        record["source"] = source


def _is_sendable(name: str, source: Optional[str], value: float) -> bool:
    if not is_valid_name(name):
        logger.warning(f"Not sending metric with invalid name {name!r}")
        return False
    if source is not None and not is_valid_source(source):
        logger.warning(f"Not sending metric {name} with invalid source {source!r}")
        return False
    if not math.isfinite(value):
        logger.warning(f"Not sending metric {name}: value overflowed")
        return False
    return True
