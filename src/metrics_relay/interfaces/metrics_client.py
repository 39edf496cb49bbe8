"""
Metrics Client Protocol.

Defines the abstract interface for the remote metrics service. The
tracker only ever calls submit(); list() and delete() exist for
maintenance tooling and tests.

The client is responsible for:
    - Transport and authentication
    - Bounding each network call with a timeout
    - Reporting submit failures as a failed SubmitResult

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - submit() never raises for transport or remote errors
    - list()/delete() raise ClientError, they are not on the flush path
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from metrics_relay.domain.value_objects import (
        MetricDescriptor,
        Payload,
        SubmitResult,
    )


class ClientError(Exception):
    """Raised when a maintenance call to the remote service fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SubmitRejected(ClientError):
    """Raised inside the flush path when a submit did not succeed."""


@runtime_checkable
class MetricsClient(Protocol):
    """Abstract interface for the remote metrics service."""

    def submit(self, payload: Payload) -> SubmitResult:
        """
        Deliver one window of metrics.

        Args:
            payload: Wire payload built from a Snapshot

        Returns:
            SubmitResult; ok is False on network, auth or remote rejection
        """
        ...

    def list(self) -> List[MetricDescriptor]:
        """
        List metrics known to the remote service.

        Returns:
            Descriptors of all existing metrics

        Raises:
            ClientError: If the service could not be queried
        """
        ...

    def delete(self, *names: str) -> None:
        """
        Remove named metrics from the remote service.

        Args:
            names: Metric names to delete

        Raises:
            ClientError: If the service rejected the request
        """
        ...
