"""
HTTP Metrics Client.

Talks to the remote metrics service's v1 REST API with HTTP basic auth:

    POST   /v1/metrics   submit one window (gauges, counters, source)
    GET    /v1/metrics   list metrics, paged with offset/length
    DELETE /v1/metrics   delete metrics by name ({"names": [...]})

Design Notes:
    - One requests.Session per client (connection reuse between flushes)
    - Every call bounded by ApiConfig.timeout_seconds
    - submit() reports failures as SubmitResult, list()/delete() raise
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from metrics_relay import __version__
from metrics_relay.config.models import ApiConfig
from metrics_relay.domain.value_objects import (
    MetricDescriptor,
    MetricListing,
    Payload,
    SubmitResult,
)
from metrics_relay.interfaces.metrics_client import ClientError

logger = logging.getLogger(__name__)

METRICS_PATH = "/v1/metrics"


class HttpMetricsClient:
    """requests-based client for the remote metrics service."""

    def __init__(
        self,
        config: ApiConfig,
        session: Optional[requests.Session] = None,
        page_size: int = 100,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            config: Endpoint, credentials and timeout
            session: Session to use (a new one when omitted)
            page_size: Metrics requested per page by list()
        """
        self.config = config
        self.page_size = page_size
        self._session = session or requests.Session()
        if config.user and config.token:
            self._session.auth = (config.user, config.token)
        self._session.headers.update(
            {"User-Agent": f"metrics-relay/{__version__}"}
        )

    @property
    def metrics_url(self) -> str:
        return self.config.endpoint.rstrip("/") + METRICS_PATH

    def submit(self, payload: Payload) -> SubmitResult:
        """POST one window; never raises for transport or remote errors."""
        try:
            response = self._session.post(
                self.metrics_url,
                json=payload,
                timeout=self.config.timeout_seconds,
            )
        except requests.Timeout:
            return SubmitResult.failure(
                f"timed out after {self.config.timeout_seconds}s"
            )
        except requests.RequestException as e:
            return SubmitResult.failure(f"request failed: {e}")

        if response.status_code >= 400:
            return SubmitResult.failure(
                _error_reason(response), status_code=response.status_code
            )

        logger.debug(f"Submitted metrics ({response.status_code})")
        return SubmitResult.success(status_code=response.status_code)

    def list(self) -> List[MetricDescriptor]:
        """Fetch all metric descriptors, following pagination."""
        descriptors: List[MetricDescriptor] = []
        offset = 0

        while True:
            page = self._fetch_page(offset)
            descriptors.extend(page.metrics)
            offset += len(page.metrics)
            if not page.metrics or offset >= page.found:
                break

        return descriptors

    def delete(self, *names: str) -> None:
        """Delete the named metrics."""
        if not names:
            return

        try:
            response = self._session.delete(
                self.metrics_url,
                json={"names": list(names)},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise ClientError(f"delete failed: {e}") from e

        if response.status_code >= 400:
            raise ClientError(_error_reason(response), response.status_code)

        logger.info(f"Deleted {len(names)} metrics")

    def _fetch_page(self, offset: int) -> MetricListing:
        """GET one page of metric descriptors."""
        try:
            response = self._session.get(
                self.metrics_url,
                params={"offset": offset, "length": self.page_size},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise ClientError(f"list failed: {e}") from e

        if response.status_code >= 400:
            raise ClientError(_error_reason(response), response.status_code)

        body: Dict[str, Any] = response.json()
        query = body.get("query", {})
        metrics = [
            MetricDescriptor(
                name=m["name"],
                type=m.get("type"),
                attributes=m.get("attributes") or {},
            )
            for m in body.get("metrics", [])
        ]
        return MetricListing(
            metrics=metrics,
            total=query.get("total", len(metrics)),
            found=query.get("found", len(metrics)),
        )

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()


def _error_reason(response: requests.Response) -> str:
    """Best-effort description of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("errors"):
        return f"HTTP {response.status_code}: {body['errors']}"
    text = (response.text or "").strip()
    return f"HTTP {response.status_code}: {text[:200]}" if text else f"HTTP {response.status_code}"
