"""
In-Memory Metrics Client.

A fake remote service for development and testing. It behaves like
the real one where the tracker can tell the difference:
    - A metric name keeps the type it was first submitted with
    - A payload mixing in a type mismatch is rejected as a whole
    - Accepted metrics show up in list() and can be deleted
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from metrics_relay.domain.value_objects import (
    MetricDescriptor,
    Payload,
    SubmitResult,
)


class InMemoryMetricsClient:
    """Fake metrics service keeping everything in memory."""

    def __init__(self, fail_with: Optional[str] = None) -> None:
        """
        Initialize fake client.

        Args:
            fail_with: If set, every submit fails with this reason
        """
        self.fail_with = fail_with
        self.submitted: List[Payload] = []
        self.rejected: List[Payload] = []
        self._types: Dict[str, str] = {}
        self._lock = threading.Lock()

    def submit(self, payload: Payload) -> SubmitResult:
        """Accept the payload unless a name changes type."""
        with self._lock:
            if self.fail_with:
                self.rejected.append(payload)
                return SubmitResult.failure(self.fail_with, status_code=503)

            incoming: Dict[str, str] = {}
            for metric_type, section in (("counter", "counters"), ("gauge", "gauges")):
                for entry in payload.get(section, []):
                    incoming[entry["name"]] = metric_type

            conflicts = sorted(
                name
                for name, metric_type in incoming.items()
                if self._types.get(name, metric_type) != metric_type
            )
            if conflicts:
                self.rejected.append(payload)
                return SubmitResult.failure(
                    f"type mismatch for existing metrics: {', '.join(conflicts)}",
                    status_code=400,
                )

            self._types.update(incoming)
            self.submitted.append(payload)
            return SubmitResult.success(status_code=200)

    def list(self) -> List[MetricDescriptor]:
        """Descriptors of every metric accepted so far."""
        with self._lock:
            return [
                MetricDescriptor(name=name, type=metric_type)
                for name, metric_type in sorted(self._types.items())
            ]

    def delete(self, *names: str) -> None:
        """Forget the named metrics."""
        with self._lock:
            for name in names:
                self._types.pop(name, None)

    @property
    def last_payload(self) -> Optional[Payload]:
        with self._lock:
            return self.submitted[-1] if self.submitted else None
