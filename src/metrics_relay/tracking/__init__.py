"""
Tracking Package - Instrumentation API and Flush Orchestration.

    - Tracker: increment/measure/timing, flush, worker control
    - MetricGroup: Shared name prefixes
    - FlushWorker: Periodic background flushing
    - build_payload: Snapshot to wire payload
"""

from metrics_relay.tracking.group import MetricGroup
from metrics_relay.tracking.payload import build_payload
from metrics_relay.tracking.tracker import Tracker
from metrics_relay.tracking.worker import FlushWorker

__all__ = ["FlushWorker", "MetricGroup", "Tracker", "build_payload"]
